class WeightConverter:
    """Express pound-based constants in the configured weight unit."""

    KG_TO_LB = 2.20462

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(lb / WeightConverter.KG_TO_LB, 2)

    @classmethod
    def to_unit(cls, lb: float, unit: str) -> float:
        """Express a pound value in ``unit`` ("lb" or "kg")."""
        if unit == "lb":
            return float(lb)
        if unit == "kg":
            return cls.lb_to_kg(lb)
        raise ValueError(f"unknown weight unit: {unit}")
