from typing import Literal

from pydantic import BaseModel, Field, ValidationError

class AnalyticsSettings(BaseModel):
    weight_unit: Literal["lb", "kg"] = "lb"
    min_weight: float = Field(45.0, ge=0)
    load_increment: float = Field(2.5, gt=0)
    rpe_tolerance: float = Field(1.0, ge=0)
    rpe_increase_factor: float = Field(1.05, gt=0)
    rpe_decrease_factor: float = Field(0.95, gt=0)
    low_recovery_threshold: float = Field(40, ge=0, le=100)
    high_recovery_threshold: float = Field(85, ge=0, le=100)
    low_recovery_factor: float = Field(0.95, gt=0)
    high_recovery_factor: float = Field(1.025, gt=0)
    trend_window: int = Field(10, gt=0)
    default_effort_factor: float = Field(0.5, ge=0)

def validate_settings(data: dict) -> AnalyticsSettings:
    try:
        return AnalyticsSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
