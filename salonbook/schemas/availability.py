from pydantic import BaseModel
from typing import Optional, List


class SlotResponse(BaseModel):
    start_time: str
    end_time: str
    is_available: bool


class EarlyClosureInfo(BaseModel):
    closes_at: str
    reason: Optional[str] = None


class AvailabilityResponse(BaseModel):
    """Advisory slot listing for one vendor and date"""
    vendor_id: int
    date: str
    is_holiday: bool
    holiday_reason: Optional[str] = None
    early_closure: Optional[EarlyClosureInfo] = None
    slots: List[SlotResponse]
