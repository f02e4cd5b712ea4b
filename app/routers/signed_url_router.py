import asyncio
import traceback
from typing import Optional

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.exceptions import SignedUrlError, UnexpectedError
from app.models.schemas import ErrorResponse, SignedUrlResponse
from app.services.signed_url_service import SignedUrlService
from app.utils.logger import logger

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/signed-url", response_model=SignedUrlResponse, responses=_ERROR_RESPONSES)
async def get_signed_url(
    directory: Optional[str] = None,
    filename: Optional[str] = None,
    original: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    """
    Issue a short-lived signed URL for one gallery image.
    `original=true` selects the full-resolution copy, anything else the optimized one.
    """
    try:
        service = SignedUrlService(settings)
        # SDK calls block, keep them off the event loop
        signed_url = await asyncio.to_thread(
            service.issue, directory, filename, original == "true"
        )
        return SignedUrlResponse(signedUrl=signed_url)

    except SignedUrlError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error in signed URL route: {str(e)}")
        raise UnexpectedError(
            f"Unexpected error: {str(e) or type(e).__name__}",
            details=traceback.format_exc(),
        )
