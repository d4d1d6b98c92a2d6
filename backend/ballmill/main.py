from contextlib import asynccontextmanager

from ballmill import __version__
from ballmill.core.logging import configure_logging, get_logger
from ballmill.core.middleware import RequestLoggingMiddleware
from ballmill.core.rate_limit import limiter
from ballmill.core.settings import settings
from ballmill.routers import api_router, calc, design
from ballmill.services.design_sessions import reset_sessions
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

# Configure structured logging at module load
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.
    Handles startup and shutdown events.
    """
    logger.info(
        "application_starting",
        environment=settings.environment,
        generation_step_delay_s=settings.generation_step_delay_s,
    )

    yield  # Application is running

    reset_sessions()
    logger.info("application_shutdown")


app = FastAPI(title="Ball Mill Design Backend", version=__version__, lifespan=lifespan)

# ============================================================================
# CORS Middleware Configuration
# ============================================================================
ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Accept", "Origin"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

# ============================================================================
# Rate Limiting Middleware (SlowAPI)
# ============================================================================
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ============================================================================
# Request Logging Middleware (must be added after other middleware)
# ============================================================================
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "service": "ballmill-backend"}


app.include_router(api_router, prefix="/api")
app.include_router(calc.router)
app.include_router(design.router)
