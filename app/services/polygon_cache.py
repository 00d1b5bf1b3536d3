"""
Cache-aside для списка полигонов.

В Redis хранится один глобальный ключ со снимком всего списка (JSON, TTL).
БД является источником истины; кэш только ускоряет чтение и может быть устаревшим
или недоступным. Ошибки Redis никогда не меняют ответ клиенту.

Конкурентные записи не упорядочены: каждая мутация пишет свой снимок,
выигрывает последняя запись. Попадание в кэш означает «не старше TTL»,
а не «самое свежее состояние».
"""
import asyncio
import logging
from typing import Sequence

import pydantic
import redis.asyncio as redis
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.exceptions import TransientCacheError, TransientStoreError
from app.schemas.polygon import PolygonOut
from app.services import polygon as polygon_service

logger = logging.getLogger(__name__)

_snapshot_adapter = pydantic.TypeAdapter(list[PolygonOut])


class PolygonCache:
    """Снимок полного списка полигонов под одним ключом Redis."""

    def __init__(
        self,
        client: redis.Redis,
        key: str | None = None,
        ttl: int | None = None,
        timeout: float | None = None,
    ):
        self.client = client
        self.key = key or settings.CACHE_KEY
        self.ttl = ttl or settings.CACHE_TTL_SECONDS
        self.timeout = timeout or settings.CACHE_TIMEOUT_SECONDS

    async def _call(self, aw, operation: str):
        try:
            return await asyncio.wait_for(aw, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise TransientCacheError(f"cache {operation} timed out") from e
        except (RedisError, OSError) as e:
            raise TransientCacheError(f"cache {operation} failed: {e}") from e

    async def get(self) -> list[PolygonOut] | None:
        """Возвращает снимок или None, если ключа нет (или истёк TTL)."""
        raw = await self._call(self.client.get(self.key), "get")
        if raw is None:
            return None
        try:
            return _snapshot_adapter.validate_json(raw)
        except pydantic.ValidationError as e:
            raise TransientCacheError("cache snapshot is corrupted") from e

    async def set(self, polygons: Sequence[PolygonOut]) -> None:
        payload = _snapshot_adapter.dump_json(list(polygons), by_alias=True)
        await self._call(self.client.set(self.key, payload, ex=self.ttl), "set")

    async def ping(self) -> bool:
        try:
            return bool(await self._call(self.client.ping(), "ping"))
        except TransientCacheError:
            return False


async def _store_snapshot(db: AsyncSession) -> list[PolygonOut]:
    polygons = await polygon_service.list_polygons(db)
    return [PolygonOut.model_validate(p) for p in polygons]


async def read_through(db: AsyncSession, cache: PolygonCache) -> list[PolygonOut]:
    """
    Чтение списка: сначала кэш, при промахе или ошибке читаем БД,
    затем попытка записать свежий снимок в кэш.
    Ошибки БД пробрасываются вызывающему.
    """
    try:
        cached = await cache.get()
    except TransientCacheError as e:
        logger.warning(f"Cache read failed, falling back to store: {e}")
        cached = None
    if cached is not None:
        logger.debug(f"Cache hit: {len(cached)} polygons")
        return cached

    polygons = await _store_snapshot(db)
    try:
        await cache.set(polygons)
    except TransientCacheError as e:
        logger.warning(f"Cache fill after miss failed: {e}")
    return polygons


async def refill(db: AsyncSession, cache: PolygonCache) -> None:
    """
    Перезаписывает снимок после успешной мутации.
    Мутация уже зафиксирована в БД, поэтому любые ошибки здесь
    только логируются.
    """
    try:
        polygons = await _store_snapshot(db)
        await cache.set(polygons)
    except TransientCacheError as e:
        logger.warning(f"Cache refill failed: {e}")
    except TransientStoreError as e:
        logger.warning(f"Cache refill skipped, store listing failed: {e}")
