import datetime

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_date_label(
    date: datetime.date | str, today: datetime.date | None = None
) -> str:
    """Return a short relative label for ``date`` as shown on trend charts.

    ``"Today"`` and ``"Yesterday"`` for the two most recent days, the weekday
    abbreviation for anything after the day one week ago, otherwise a
    ``"Mon D"`` style month/day label.
    """
    if isinstance(date, str):
        date = datetime.date.fromisoformat(date[:10])
    elif isinstance(date, datetime.datetime):
        date = date.date()
    if today is None:
        today = datetime.date.today()
    if date == today:
        return "Today"
    if date == today - datetime.timedelta(days=1):
        return "Yesterday"
    if date > today - datetime.timedelta(days=7):
        return WEEKDAYS[date.weekday()]
    return f"{MONTHS[date.month - 1]} {date.day}"
