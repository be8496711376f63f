# Shared-secret gate for calls coming from the trusted upstream worker.

from fastapi import Request
from typing import Optional
import structlog
from app.core.config import settings
from app.core.errors import AuthorizationError

logger = structlog.get_logger(__name__)

def secret_matches(provided: Optional[str], expected: Optional[str]) -> bool:
    """
    Exact string comparison of the presented secret against the configured one.
    An unset expected secret matches nothing, so a misconfigured deployment
    rejects every call instead of admitting anonymous ones.
    """
    if not expected or provided is None:
        return False
    return provided == expected

async def require_worker_secret(request: Request) -> None:
    """
    Route dependency: rejects the request with 403 before the body is
    looked at or the store is touched.
    """
    provided = request.headers.get(settings.SECRET_HEADER)
    if not secret_matches(provided, settings.WORKER_SECRET):
        # Never log the presented value itself.
        logger.warning(
            "worker_secret_rejected",
            client_ip=get_client_ip(request),
            header_present=provided is not None,
        )
        raise AuthorizationError()

def get_client_ip(request: Request) -> str:
    """
    Extracts the client's IP address from the request.
    Assumes a standard proxy setup where the client IP is the first hop
    in the 'x-forwarded-for' header.
    """
    x_forwarded_for = request.headers.get("x-forwarded-for")
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()

    # Fallback to direct client host
    return request.client.host if request.client else "unknown_ip"
