"""
Заполняет БД примерами полигонов и прогревает кэш.

Запуск:
    python -m app.seed
"""
import asyncio
import logging

from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.redis import close_redis, redis_client
from app.db.session import AsyncSessionLocal, async_engine
from app.exceptions import AppException
from app.schemas.polygon import PolygonCreate
from app.services import polygon as polygon_service
from app.services.polygon_cache import PolygonCache, refill

logger = logging.getLogger(__name__)

SEED_SESSION_ID = "00000000-0000-0000-0000-000000000000"

SAMPLE_POLYGONS = [
    PolygonCreate(
        name="Polygon 1",
        coordinates=[
            (-73.935242, 40.73061),
            (-73.935242, 40.74061),
            (-73.925242, 40.74061),
        ],
        sessionId=SEED_SESSION_ID,
    ),
    PolygonCreate(
        name="Polygon 2",
        coordinates=[
            (-73.935242, 40.73061),
            (-73.935242, 40.74061),
            (-73.925242, 40.74061),
            (-73.925242, 40.73061),
        ],
        sessionId=SEED_SESSION_ID,
    ),
]


async def seed_database() -> None:
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        for data in SAMPLE_POLYGONS:
            await polygon_service.create_polygon(db, data)
        await refill(db, PolygonCache(redis_client))
    logger.info("Database seeded and cache set")


async def main() -> None:
    setup_logging()
    try:
        await seed_database()
    except AppException:
        logger.exception("Error seeding database")
        raise
    finally:
        await close_redis()
        await async_engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
