from fastapi import APIRouter, Depends
from datetime import datetime

from zeo_api.core.config import settings
from zeo_api.core.json_store import JsonStore, get_store

router = APIRouter()


@router.get("/api/health")
async def health_check(store: JsonStore = Depends(get_store)):
    """Health check with the number of records loaded per collection."""
    return {
        "success": True,
        "status": "ok",
        "message": "API is running",
        "timestamp": datetime.now().isoformat(),
        "database": "JSON Files",
        "environment": settings.environment,
        "version": settings.version,
        "dataLoaded": store.counts()
    }
