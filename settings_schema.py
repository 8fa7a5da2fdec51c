from pydantic import BaseModel, Field, ValidationError, model_validator


class EngineSettings(BaseModel):
    bar_weight_kg: float = 20.0
    plates_kg: list[float] = Field(default_factory=lambda: [25, 20, 15, 10, 5, 2.5, 1.25])
    language: str = "en"
    hydration_start_hour: int = Field(7, ge=0, le=23)
    hydration_end_hour: int = Field(21, ge=0, le=23)
    quiet_start_hour: int = Field(22, ge=0, le=23)
    alert_limit: int = Field(3, ge=1)
    default_weight_kg: float = Field(75.0, gt=0)
    default_height_cm: float = Field(175.0, gt=0)
    default_age: int = Field(25, gt=0)

    @model_validator(mode="after")
    def _check_hours(self) -> "EngineSettings":
        if self.hydration_start_hour >= self.hydration_end_hour:
            raise ValueError("hydration_start_hour must be before hydration_end_hour")
        if any(p <= 0 for p in self.plates_kg):
            raise ValueError("plates_kg must be positive")
        return self


def validate_settings(data: dict) -> None:
    try:
        EngineSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
