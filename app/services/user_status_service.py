from typing import Any, Mapping, Optional, Protocol

import structlog

from app.core.errors import DependencyError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_SUBSCRIPTION_STATUS = "Free"

# --- Contracts ---

class DocumentStore(Protocol):
    """Keyed point read against the user record store."""
    async def get_user_document(self, uid: str) -> Optional[Mapping[str, Any]]:
        """Return the document's fields, or None when no document exists. Raises on read failure."""
        ...


def resolve_subscription_status(data: Mapping[str, Any]) -> Any:
    """
    Projects `subscriptionStatus` out of a user document.
    Any falsy value (missing, None, "", 0, False) yields the default.
    """
    return data.get("subscriptionStatus") or DEFAULT_SUBSCRIPTION_STATUS


# --- Service ---

class UserStatusService:
    """
    Resolves a user's subscription status with exactly one store read per call.
    Holds no per-request state; a single instance serves concurrent requests.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def get_subscription_status(self, uid: Optional[str]) -> Any:
        if not uid:
            raise ValidationError()

        try:
            data = await self.store.get_user_document(uid)
        except Exception as e:
            logger.exception("user_document_read_failed", uid=uid, error=str(e))
            raise DependencyError() from e

        if data is None:
            logger.info("user_document_not_found", uid=uid)
            raise NotFoundError()

        return resolve_subscription_status(data)
