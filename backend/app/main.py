"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import Base, engine
from app.errors import SlotSwapperError
from app.logging_setup import configure_logging

# Import routers
from app.routers import users, events, swaps

# Import all models so Base.metadata knows about them
from app.models.user import User                    # noqa: F401
from app.models.event import Event                  # noqa: F401
from app.models.swap_request import SwapRequest     # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # SQLite dev mode; other databases are migrated with Alembic
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    logger.info("SlotSwapper API started")
    yield
    logger.info("SlotSwapper API shutting down")


app = FastAPI(
    title="SlotSwapper",
    description="Mark calendar slots as swappable and trade them one-for-one with other users",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SlotSwapperError)
async def slotswapper_error_handler(request: Request, exc: SlotSwapperError):
    """Render domain errors as structured JSON with their status class."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors: 400 instead of FastAPI's 422."""
    logger.warning("Validation error for %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors()), "error": "ValidationError"},
    )


# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(swaps.router, prefix="/api", tags=["Swaps"])


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
