"""FastAPI main application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import luma, newsletter, reports, social_media
from app.config import settings
from app.core.errors import AlreadySubscribedError, AppError, NotFoundError, ValidationError, error_details
from app.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Builder Vancouver", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reports.router, prefix="/api", tags=["reports"])
app.include_router(newsletter.router, prefix="/api/newsletter", tags=["newsletter"])
app.include_router(luma.router, prefix="/api/luma", tags=["luma"])
app.include_router(social_media.router, prefix="/api/social-media", tags=["social-media"])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation error", "details": error_details(exc.errors())},
    )


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": str(exc), "details": exc.details},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "error": "Not found", "message": str(exc)},
    )


@app.exception_handler(AlreadySubscribedError)
async def already_subscribed_handler(request: Request, exc: AlreadySubscribedError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"success": False, "error": "This email is already subscribed to the newsletter"},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """ConfigurationError, UpstreamError, StorageError and anything else from the core."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.__class__.__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": str(exc)},
    )


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
