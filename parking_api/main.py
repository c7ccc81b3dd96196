# parking_api/main.py
"""
FastAPI application entry point.
Includes request timing middleware, domain/validation/global error handlers, and all routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from parking_api.routers import admin, auth, bookings, health, parking_slots, vehicle_entries, vehicles
from parking_api.database import create_tables
from parking_api.exceptions import ParkingError
from parking_api.config import settings
from parking_api.utils.logger import get_logger
import time

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"📧 Mail delivery {'enabled' if settings.MAIL_ENABLED else 'disabled (logged only)'}")
    logger.info("📖 API docs at /docs")
    yield
    logger.info("🛑 Shutting down...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Parking slots, bookings, walk-in entries and the admin console.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── CORS (the SPA is served from another origin) ───────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to the frontend origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(ParkingError)
async def parking_error_handler(request: Request, exc: ParkingError):
    logger.info(f"{request.method} {request.url.path} → {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
prefix = settings.API_PREFIX
app.include_router(auth.router,            prefix=prefix, tags=["🔑 Auth"])
app.include_router(vehicles.router,        prefix=prefix, tags=["🚗 Vehicles"])
app.include_router(parking_slots.router,   prefix=prefix, tags=["🅿️  Parking Slots"])
app.include_router(bookings.router,        prefix=prefix, tags=["📅 Bookings"])
app.include_router(vehicle_entries.router, prefix=prefix, tags=["🚧 Entry/Exit"])
app.include_router(admin.router,           prefix=prefix, tags=["🛠️  Admin"])
app.include_router(health.router,          prefix=prefix, tags=["💚 Health"])
