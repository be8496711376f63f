# Environment-driven settings for the subscription status relay.
# Every value is read from the process environment (or a local .env file).

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Subscription Status Relay"
    VERSION: str = "0.1.0"
    BRIEF_DESCRIPTION: str = "Authenticated relay that returns a user's subscription status from Firestore."

    # --- Runtime ---
    ENV: str = Field("development", description="Application environment (e.g., production, development)")
    PORT: int = Field(8080, description="Port the HTTP server listens on")
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    # --- Access Gate ---
    WORKER_SECRET: Optional[str] = Field(None, description="Shared secret expected from the trusted upstream worker")
    SECRET_HEADER: str = Field("X-Secret-Key", description="Request header carrying the shared secret")

    # --- Firestore service account ---
    FIREBASE_PROJECT_ID: Optional[str] = Field(None, description="Firebase / GCP project id")
    FIREBASE_CLIENT_EMAIL: Optional[str] = Field(None, description="Service account client email")
    FIREBASE_PRIVATE_KEY: Optional[str] = Field(None, description="Service account private key (PEM, \\n escapes allowed)")
    USERS_COLLECTION: str = Field("users", description="Collection holding one document per uid")

    # --- CORS ---
    CORS_ALLOW_ORIGINS: List[str] = Field(["*"], description="Origins allowed to call the API from a browser")

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
