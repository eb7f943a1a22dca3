"""
API v1 router setup
"""
from fastapi import APIRouter

from salonbook.api.v1 import availability, bookings, vendor_schedule
from salonbook.config.settings import get_settings
from salonbook.models.booking import PaymentMethod

api_v1_router = APIRouter()

# ============================================================================
# SLOT AVAILABILITY
# ============================================================================
api_v1_router.include_router(availability.router)

# ============================================================================
# BOOKINGS
# ============================================================================
api_v1_router.include_router(bookings.router)

# ============================================================================
# VENDOR SCHEDULE OVERRIDES
# ============================================================================
api_v1_router.include_router(vendor_schedule.router)


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """API information"""
    return {
        "version": "1.0",
        "slot_duration_minutes": get_settings().SLOT_DURATION_MINUTES,
        "payment_methods": [m.value for m in PaymentMethod],
        "formats": {"time": "HH:MM", "date": "YYYY-MM-DD"},
    }
