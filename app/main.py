from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.config import settings
from app.exceptions import SignedUrlError
from app.models.schemas import ErrorResponse
from app.routers import signed_url_router, health_router
from app.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events for the application"""
    logger.info(f"Starting photo gallery service (storage backend: {settings.storage_backend})")
    if settings.google_cloud_cdn_endpoint:
        logger.info(f"Signed URLs will be served from {settings.google_cloud_cdn_endpoint}")

    yield  # Run application

    logger.info("Photo gallery service stopped")

app = FastAPI(title="Photo Gallery Signed URL Service", lifespan=lifespan)


@app.exception_handler(SignedUrlError)
async def signed_url_exception_handler(request: Request, exc: SignedUrlError) -> JSONResponse:
    """Render any issuance failure as {error, details?} with the stage's status code"""
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


app.include_router(signed_url_router.router, prefix="/api", tags=["Signed URL"])
app.include_router(health_router.router, prefix="/health", tags=["Health"])
