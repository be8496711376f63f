# app/services/firestore_store.py
"""Async Firestore adapter behind the DocumentStore contract.
The Firebase app and its client are built once at startup from the service
account settings and then shared read-only by every request.
"""
from typing import Any, Dict, Mapping, Optional

import firebase_admin
import structlog
from firebase_admin import credentials, firestore_async

from app.core.config import Settings

logger = structlog.get_logger(__name__)

FIREBASE_APP_NAME = "subscription-relay"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def normalize_private_key(raw: Optional[str]) -> str:
    """Env files usually carry the PEM with literal \\n sequences; turn them back into newlines."""
    return (raw or "").replace("\\n", "\n")


def build_credentials(settings: Settings) -> Dict[str, Any]:
    """Service account info in the shape google-auth expects."""
    return {
        "type": "service_account",
        "project_id": settings.FIREBASE_PROJECT_ID,
        "client_email": settings.FIREBASE_CLIENT_EMAIL,
        "private_key": normalize_private_key(settings.FIREBASE_PRIVATE_KEY),
        "token_uri": TOKEN_URI,
    }


class FirestoreStore:
    def __init__(self, client, collection: str = "users"):
        self._client = client
        self.collection = collection

    async def get_user_document(self, uid: str) -> Optional[Mapping[str, Any]]:
        snapshot = await self._client.collection(self.collection).document(uid).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}


def create_firestore_store(settings: Settings) -> FirestoreStore:
    """
    Initializes (or reuses) the named Firebase app and returns a store over
    its async Firestore client.

    Raises:
        ValueError: If the service account credentials are malformed.
    """
    try:
        app = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        cert = credentials.Certificate(build_credentials(settings))
        app = firebase_admin.initialize_app(
            cert,
            options={"projectId": settings.FIREBASE_PROJECT_ID},
            name=FIREBASE_APP_NAME,
        )
    logger.info(
        "firestore_client_ready",
        project_id=settings.FIREBASE_PROJECT_ID,
        collection=settings.USERS_COLLECTION,
    )
    return FirestoreStore(firestore_async.client(app=app), collection=settings.USERS_COLLECTION)
