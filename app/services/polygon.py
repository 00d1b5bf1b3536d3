import asyncio
import logging
from typing import Awaitable, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.models.polygon import Polygon
from app.exceptions import NotFoundError, TransientStoreError, ValidationError
from app.schemas.polygon import PolygonCreate, PolygonUpdate, Vertex

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Диапазон столбца INTEGER (SERIAL); id вне него никогда не выдавался
MAX_POLYGON_ID = 2**31 - 1


def is_valid_polygon(coordinates: Sequence[Vertex]) -> bool:
    """
    Полигон валиден, если у него больше двух вершин.
    Самопересечения, диапазоны координат и замкнутость контура не проверяются.
    """
    return len(coordinates) > 2


def validate_polygon(name: str, coordinates: Sequence[Vertex]) -> None:
    if not name or not is_valid_polygon(coordinates):
        raise ValidationError("Invalid polygon data")


async def _bounded(aw: Awaitable[T], operation: str, timeout: float | None = None) -> T:
    """
    Выполняет операцию с БД с ограничением по времени.
    Таймаут и ошибки соединения превращаются в TransientStoreError.
    """
    if timeout is None:
        timeout = settings.STORE_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(aw, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Store operation '{operation}' timed out after {timeout}s")
        raise TransientStoreError(f"{operation} timed out") from e
    except (DBAPIError, OSError) as e:
        logger.exception(f"Store operation '{operation}' failed")
        raise TransientStoreError(f"{operation} failed: {e}") from e


async def _get_polygon(db: AsyncSession, polygon_id: int) -> Polygon | None:
    if not 1 <= polygon_id <= MAX_POLYGON_ID:
        return None
    result = await db.execute(select(Polygon).where(Polygon.id == polygon_id))
    return result.scalars().first()


async def _list(db: AsyncSession) -> list[Polygon]:
    result = await db.execute(select(Polygon).order_by(Polygon.id))
    return list(result.scalars().all())


async def _create(db: AsyncSession, data: PolygonCreate) -> Polygon:
    polygon = Polygon(
        name=data.name,
        coordinates=[list(point) for point in data.coordinates],
        session_id=data.session_id,
    )
    db.add(polygon)
    await db.commit()
    return polygon


async def _update(db: AsyncSession, polygon_id: int, data: PolygonUpdate) -> Polygon:
    polygon = await _get_polygon(db, polygon_id)
    if not polygon:
        raise NotFoundError(f"Polygon id={polygon_id} not found")
    polygon.name = data.name
    polygon.coordinates = [list(point) for point in data.coordinates]
    await db.commit()
    return polygon


async def _delete(db: AsyncSession, polygon_id: int) -> None:
    polygon = await _get_polygon(db, polygon_id)
    if not polygon:
        raise NotFoundError(f"Polygon id={polygon_id} not found")
    await db.delete(polygon)
    await db.commit()


async def _mutate(db: AsyncSession, aw: Awaitable[T], operation: str) -> T:
    """
    Мутация: одна транзакция, один commit. При сбое или таймауте
    незафиксированные изменения сессии откатываются.
    """
    try:
        return await _bounded(aw, operation)
    except TransientStoreError:
        try:
            await db.rollback()
        except (DBAPIError, OSError):
            logger.exception(f"Rollback after failed '{operation}' failed")
        raise


async def list_polygons(db: AsyncSession) -> list[Polygon]:
    """Все полигоны всех сессий в порядке создания."""
    return await _bounded(_list(db), "list")


async def create_polygon(db: AsyncSession, data: PolygonCreate) -> Polygon:
    validate_polygon(data.name, data.coordinates)
    polygon = await _mutate(db, _create(db, data), "create")
    logger.info(f"Polygon id={polygon.id} created (session={polygon.session_id})")
    return polygon


async def update_polygon(db: AsyncSession, polygon_id: int, data: PolygonUpdate) -> Polygon:
    validate_polygon(data.name, data.coordinates)
    polygon = await _mutate(db, _update(db, polygon_id, data), "update")
    logger.info(f"Polygon id={polygon_id} updated")
    return polygon


async def delete_polygon(db: AsyncSession, polygon_id: int) -> None:
    await _mutate(db, _delete(db, polygon_id), "delete")
    logger.info(f"Polygon id={polygon_id} deleted")
