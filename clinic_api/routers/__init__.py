"""API routers."""

from clinic_api.routers.billing import router as billing_router
from clinic_api.routers.calendar import router as calendar_router
from clinic_api.routers.scheduling import router as scheduling_router

__all__ = [
    "billing_router",
    "calendar_router",
    "scheduling_router",
]
