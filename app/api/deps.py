# app/api/deps.py

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.redis import redis_client
from app.db.session import AsyncSessionLocal
from app.services.polygon_cache import PolygonCache


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI, возвращающая асинхронную сессию SQLAlchemy.
    Сессия автоматически открывается при входе в контекст и закрывается по выходу.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_polygon_cache() -> PolygonCache:
    """Кэш списка полигонов поверх общего клиента Redis."""
    return PolygonCache(redis_client)
