from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import get_db_session, get_polygon_cache
from app.core.config import settings
from app.exceptions import NotFoundError, TransientStoreError, ValidationError
from app.schemas.polygon import MessageOut, PolygonCreate, PolygonOut, PolygonUpdate
from app.services import polygon as polygon_service
from app.services.polygon_cache import PolygonCache, read_through, refill
from typing import List

router = APIRouter(prefix=f"{settings.API_PREFIX}/polygons", tags=["Polygon"])

INVALID_POLYGON = "Invalid polygon data"
POLYGON_NOT_FOUND = "Polygon not found"
INTERNAL_ERROR = "Internal Server Error"

@router.get(
    "",
    response_model=List[PolygonOut],
    summary="Получить список полигонов",
    description="Возвращает все полигоны всех сессий. Фильтрация по сессии выполняется на клиенте."
)
async def list_polygons(
    db: AsyncSession = Depends(get_db_session),
    cache: PolygonCache = Depends(get_polygon_cache),
):
    try:
        return await read_through(db, cache)
    except TransientStoreError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

@router.post(
    "",
    response_model=PolygonOut,
    status_code=status.HTTP_201_CREATED,
    summary="Создать полигон",
    description="Сохраняет новый полигон под токеном сессии клиента."
)
async def create_polygon(
    data: PolygonCreate,
    db: AsyncSession = Depends(get_db_session),
    cache: PolygonCache = Depends(get_polygon_cache),
):
    try:
        polygon = await polygon_service.create_polygon(db, data)
    except ValidationError:
        raise HTTPException(status_code=400, detail=INVALID_POLYGON)
    except TransientStoreError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    await refill(db, cache)
    return polygon

@router.put(
    "/{polygon_id}",
    response_model=PolygonOut,
    summary="Обновить полигон",
    description="Меняет имя и координаты полигона. Токен сессии не меняется."
)
async def update_polygon(
    polygon_id: int,
    data: PolygonUpdate,
    db: AsyncSession = Depends(get_db_session),
    cache: PolygonCache = Depends(get_polygon_cache),
):
    try:
        polygon = await polygon_service.update_polygon(db, polygon_id, data)
    except ValidationError:
        raise HTTPException(status_code=400, detail=INVALID_POLYGON)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=POLYGON_NOT_FOUND)
    except TransientStoreError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    await refill(db, cache)
    return polygon

@router.delete(
    "/{polygon_id}",
    response_model=MessageOut,
    summary="Удалить полигон",
    description="Удаляет полигон по его ID без возможности восстановления."
)
async def delete_polygon(
    polygon_id: int,
    db: AsyncSession = Depends(get_db_session),
    cache: PolygonCache = Depends(get_polygon_cache),
):
    try:
        await polygon_service.delete_polygon(db, polygon_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=POLYGON_NOT_FOUND)
    except TransientStoreError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    await refill(db, cache)
    return {"message": "Polygon deleted successfully"}
