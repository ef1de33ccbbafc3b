from typing import Literal, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from algorithms import TrendAnalyzer


class SettingsSchema(BaseModel):
    weight_unit: Literal["kg", "lbs"] = "kg"
    week_start_day: int = 1
    default_body_weight: float = 70.0
    weight_increment: float = 2.5
    auto_progression_enabled: bool = False
    auto_progression_min_reps: Optional[int] = 8
    auto_progression_max_reps: Optional[int] = 12
    rolling_window: int = 7
    show_trendline: bool = True
    show_quotes: bool = True

    @field_validator("week_start_day")
    @classmethod
    def _week_day(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError("week_start_day must be between 0 (Sunday) and 6")
        return v

    @field_validator("default_body_weight", "weight_increment")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("rolling_window")
    @classmethod
    def _window(cls, v: int) -> int:
        if v not in TrendAnalyzer.SUPPORTED_WINDOWS:
            raise ValueError(
                f"rolling_window must be one of {TrendAnalyzer.SUPPORTED_WINDOWS}"
            )
        return v

    @model_validator(mode="after")
    def _rep_range(self) -> "SettingsSchema":
        lo, hi = self.auto_progression_min_reps, self.auto_progression_max_reps
        if lo is not None and hi is not None and lo > hi:
            raise ValueError("auto_progression_min_reps exceeds max_reps")
        return self


def validate_settings(data: dict) -> dict:
    """Return ``data`` merged over defaults, raising ValueError when invalid."""
    try:
        return SettingsSchema(**data).model_dump()
    except ValidationError as e:
        raise ValueError(str(e))
