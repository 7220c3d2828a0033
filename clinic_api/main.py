"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic_api.core.config import settings
from clinic_api.core.errors import SchedulingError
from clinic_api.core.structured_logging import build_log_context, configure_logging
from clinic_api.routers import billing_router, calendar_router, scheduling_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Clinic Scheduling API",
    description="Appointment availability, conflict and occupancy engine",
    version=settings.VERSION,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    """Engine errors that escape a router become 422s."""
    logger.info(
        f"Unhandled scheduling error: {exc}",
        extra=build_log_context(route=request.url.path),
    )
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ============================================================================
# Routers
# ============================================================================

app.include_router(scheduling_router, prefix="/scheduling", tags=["scheduling"])
app.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
app.include_router(billing_router, prefix="/billing", tags=["billing"])


@app.get("/health", tags=["health"])
def health():
    """Health check endpoint."""
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
