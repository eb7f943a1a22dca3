# ============================================================================
# salonbook/api/v1/vendor_schedule.py
# Holiday and early-closure overrides
# ============================================================================
from datetime import date

from fastapi import APIRouter, Depends, Path, Response, status

from salonbook.api.dependencies import get_schedule_override_service
from salonbook.schemas.schedule import (
    EarlyClosureRequest,
    EarlyClosureResponse,
    HolidayCreateRequest,
    HolidayResponse,
)
from salonbook.services.vendor.schedule_override_service import ScheduleOverrideService

router = APIRouter(prefix="/vendors/{vendor_id}", tags=["vendor-schedule"])


@router.post("/holidays", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
def add_holiday(
        data: HolidayCreateRequest,
        vendor_id: int = Path(..., ge=1),
        service: ScheduleOverrideService = Depends(get_schedule_override_service)
):
    """Close the shop for a whole day"""
    holiday = service.add_holiday(vendor_id, data.holiday_date, data.holiday_reason)
    return HolidayResponse(**holiday.to_dict())


@router.delete("/holidays/{holiday_date}", status_code=status.HTTP_204_NO_CONTENT)
def remove_holiday(
        holiday_date: date,
        vendor_id: int = Path(..., ge=1),
        service: ScheduleOverrideService = Depends(get_schedule_override_service)
):
    service.remove_holiday(vendor_id, holiday_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/early-closures", response_model=EarlyClosureResponse)
def set_early_closure(
        data: EarlyClosureRequest,
        response: Response,
        vendor_id: int = Path(..., ge=1),
        service: ScheduleOverrideService = Depends(get_schedule_override_service)
):
    """
    Set or update the early closing time for a date.
    Responds 201 when the closure is new and 200 when it replaced an existing one.
    """
    closure, created = service.set_early_closure(
        vendor_id, data.closure_date, data.early_close_time, data.reason
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return EarlyClosureResponse(**closure.to_dict(), created=created)


@router.delete("/early-closures/{closure_date}", status_code=status.HTTP_204_NO_CONTENT)
def remove_early_closure(
        closure_date: date,
        vendor_id: int = Path(..., ge=1),
        service: ScheduleOverrideService = Depends(get_schedule_override_service)
):
    service.remove_early_closure(vendor_id, closure_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
