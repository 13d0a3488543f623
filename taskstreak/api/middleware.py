"""Rate limiting and CORS for the tracker API"""
import logging
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

# Per-client-IP limiter shared by every rate-limited route
limiter = Limiter(key_func=get_remote_address)


def clean_origins(origins: Iterable[str]) -> list[str]:
    """Strip whitespace and drop empty entries from a CORS origin list"""
    return [origin.strip() for origin in origins if origin.strip()]


def setup_cors(app: FastAPI, origins: Iterable[str]) -> list[str]:
    """
    Allow browser clients from the given origins

    Args:
        app: Application to configure
        origins: Allowed origins, e.g. ["http://localhost:3000"]

    Returns:
        The origins actually installed
    """
    allowed = clean_origins(origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    logger.info(f"CORS enabled for {len(allowed)} origin(s): {allowed}")
    return allowed


def setup_rate_limiting(app: FastAPI, rate_limit: str) -> None:
    """Attach the shared limiter and its 429 handler; rate_limit is only logged"""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    logger.info(f"Rate limit per client IP: {rate_limit}")
