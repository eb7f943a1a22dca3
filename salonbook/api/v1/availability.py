# ============================================================================
# salonbook/api/v1/availability.py
# Slot listing - thin HTTP layer over AvailabilityService
# ============================================================================
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from salonbook.api.dependencies import get_availability_service
from salonbook.schemas.availability import AvailabilityResponse
from salonbook.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/vendors", tags=["availability"])


@router.get("/{vendor_id}/slots", response_model=AvailabilityResponse)
def get_vendor_slots(
        vendor_id: int = Path(..., ge=1, description="The vendor ID"),
        day: date = Query(..., alias="date", description="Date to list slots for (YYYY-MM-DD)"),
        service: AvailabilityService = Depends(get_availability_service)
):
    """
    List the vendor's 30-minute slots for a date with availability flags.
    The listing is advisory; booking re-checks capacity.
    """
    if day < date.today():
        raise HTTPException(status_code=400, detail="Date cannot be in the past")

    result = service.get_available_slots(vendor_id, day)
    return AvailabilityResponse(vendor_id=vendor_id, date=day.isoformat(), **result)
