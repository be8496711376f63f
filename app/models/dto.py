# Request/response models for the /getUserData endpoint.

from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

# --- API Request Models ---

class GetUserDataRequest(BaseModel):
    """Request body for POST /getUserData."""
    uid: Optional[str] = Field(None, description="User identifier to look up.")

# --- Public Data Transfer Objects (DTOs) ---

class UserDataResponse(BaseModel):
    """Successful lookup envelope."""
    status: Literal["success"] = "success"
    subscriptionStatus: Any = Field(..., description="The stored subscription status, 'Free' when unset or falsy.")

# --- Error Response Model ---

class ErrorResponse(BaseModel):
    """Standardized error envelope."""
    status: Literal["error"] = "error"
    message: str = Field(..., description="A human-readable explanation, never internal detail.")
