from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, time

from salonbook.utils.time_utils import parse_hhmm


class HolidayCreateRequest(BaseModel):
    holiday_date: date
    holiday_reason: Optional[str] = Field(None, max_length=255)


class HolidayResponse(BaseModel):
    holiday_id: int
    vendor_id: int
    holiday_date: str
    holiday_reason: Optional[str] = None


class EarlyClosureRequest(BaseModel):
    closure_date: date
    early_close_time: time = Field(..., description="HH:MM, 24-hour")
    reason: Optional[str] = None

    @field_validator("early_close_time", mode="before")
    @classmethod
    def validate_early_close_time(cls, v):
        if isinstance(v, time):
            return v
        return parse_hhmm(v)


class EarlyClosureResponse(BaseModel):
    closure_id: int
    vendor_id: int
    closure_date: str
    early_close_time: str
    reason: Optional[str] = None
    created: bool
