# app/schemas/sleep_record_schema.py

from enum import Enum
from datetime import datetime
from typing import Optional

from pydantic import field_validator, model_validator

from app.schemas.base_schema import CamelModel
from app.utils.dates import to_local_naive


class SleepQuality(str, Enum):
    SLEPT_WELL = "slept well"
    AVERAGE = "average"
    POOR_SLEEP = "poor sleep"
    VERY_POOR = "very poor"


class SleepRecordCreate(CamelModel):
    child_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    is_active: bool = True
    quality: Optional[SleepQuality] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, value):
        return to_local_naive(value)

    @model_validator(mode="after")
    def check_end_after_start(self):
        if self.end_time is not None and self.start_time >= self.end_time:
            raise ValueError("End time must be after start time")
        return self


class SleepRecordUpdate(CamelModel):
    end_time: Optional[datetime] = None
    is_active: Optional[bool] = None
    quality: Optional[SleepQuality] = None

    @field_validator("end_time")
    @classmethod
    def normalize_time(cls, value):
        return to_local_naive(value)

    @field_validator("is_active", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class SleepRecordResponse(CamelModel):
    id: int
    child_id: int
    start_time: datetime
    end_time: Optional[datetime]
    is_active: bool
    quality: Optional[SleepQuality]
