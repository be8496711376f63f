# app/api/routes.py
# POST /getUserData: shared-secret gate -> uid validation -> single Firestore read.

from fastapi import APIRouter, Request, Depends
from pydantic import ValidationError as PydanticValidationError
import structlog
from structlog.contextvars import bind_contextvars

# Local imports
from app.core.errors import DependencyError, ValidationError
from app.models.dto import (
    GetUserDataRequest,
    UserDataResponse,
    ErrorResponse,
)
from app.utils.security import require_worker_secret
from app.services.user_status_service import UserStatusService

router = APIRouter()
logger = structlog.get_logger(__name__)

# ----------------------------------------------------------------------
# Dependencies
# ----------------------------------------------------------------------
def get_user_status_service(request: Request) -> UserStatusService:
    """Return the process-wide service built at startup."""
    service = getattr(request.app.state, "user_status_service", None)
    if service is None:
        logger.error("user_status_service_unavailable")
        raise DependencyError()
    return service

async def get_user_data_request(request: Request) -> GetUserDataRequest:
    """
    Parses the JSON body by hand so the secret check always runs first.
    Anything that is not an object with a string uid is treated as a missing uid.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    try:
        data = GetUserDataRequest.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError()
    if not data.uid:
        raise ValidationError()
    # Every event logged for the rest of this lookup carries the uid.
    bind_contextvars(uid=data.uid)
    return data

# ----------------------------------------------------------------------
# User Data Endpoint
# ----------------------------------------------------------------------
@router.post(
    "/getUserData",
    response_model=UserDataResponse,
    dependencies=[Depends(require_worker_secret)],
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_user_data(
    data: GetUserDataRequest = Depends(get_user_data_request),
    service: UserStatusService = Depends(get_user_status_service),
):
    """Return the subscription status stored for `uid`."""
    subscription_status = await service.get_subscription_status(data.uid)
    return UserDataResponse(subscriptionStatus=subscription_status)
