# Rate limiting for the ball mill API (slowapi, keyed by client IP)

from ballmill.core.settings import settings
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

RATE_LIMITS = {
    # Engine and generator calls
    "calc_operations": settings.calc_rate_limit,
    "design_operations": settings.calc_rate_limit,
}

__all__ = ["limiter", "RATE_LIMITS"]
