from fastapi import APIRouter, Depends, HTTPException
from app.config import Settings, get_settings
from app.exceptions import ConfigurationMissingError
from app.services.signed_url_service import check_configuration
from app.utils.logger import logger

router = APIRouter()

@router.get("/live")
async def liveness_check():
    logger.debug("Liveness check passed")
    return {"status": "alive"}

@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    # Only the configuration is checked; the bucket is contacted per request
    try:
        check_configuration(settings)
    except ConfigurationMissingError as e:
        logger.error(f"Readiness failed: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)

    logger.debug("Configuration complete")
    return {"status": "ready"}
