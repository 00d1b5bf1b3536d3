# app/api/routers/health.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_polygon_cache
from app.services.polygon_cache import PolygonCache

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health", summary="Health check")
async def health_check(
    db: AsyncSession = Depends(get_db_session),
    cache: PolygonCache = Depends(get_polygon_cache),
):
    try:
        result = await db.execute(text("SELECT 1"))
        db_ok = bool(result.scalar())
    except (DBAPIError, OSError):
        logger.exception("Health check: database unreachable")
        db_ok = False
    return {"db_ok": db_ok, "cache_ok": await cache.ping()}
