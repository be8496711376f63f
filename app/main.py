# Application entrypoint: wiring, error envelopes and the server runner.

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uuid
import structlog

# Local imports
from app.core.config import settings
from app.core.errors import RelayError
from app.api.routes import router as api_router
from app.logging import configure_logging
from app.middleware.logging import LoggingMiddleware, REQUEST_ID_HEADER
from app.models.dto import ErrorResponse
from app.services.firestore_store import create_firestore_store
from app.services.user_status_service import UserStatusService

configure_logging()
logger = structlog.get_logger(__name__)

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("application_startup", version=settings.VERSION, env=settings.ENV)
    if not settings.WORKER_SECRET:
        logger.warning("worker_secret_not_configured")
    try:
        app.state.user_status_service = UserStatusService(create_firestore_store(settings))
    except Exception as e:
        # Keep serving: lookups answer 500 until the credentials are fixed.
        logger.exception("firestore_init_failed", error=str(e))
        app.state.user_status_service = None

    yield

    logger.info("application_shutdown")

# --- FastAPI Application Initialization ---
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.BRIEF_DESCRIPTION,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
)

# --- Middleware ---
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Routes ---
app.include_router(api_router)

# --- Exception Handlers ---
@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump(),
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    # Runs outside LoggingMiddleware: reuse its request id, or mint one.
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    logger.error("unhandled_exception", request_id=request_id, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message="Internal Server Error").model_dump(),
        headers={REQUEST_ID_HEADER: request_id},
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("server_starting", port=settings.PORT)
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_config=None)
