import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.redis import close_redis
from app.db.session import async_engine

from app.api.routers.health import router as health_router
from app.api.routers.polygon import router as polygon_router, INVALID_POLYGON

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
)

# CORS: клиент карты открывается с другого origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Ошибки в теле запроса: невалидный полигон (400); ошибки пути: стандартный 422
    if any(tuple(err.get("loc", ()))[:1] == ("body",) for err in exc.errors()):
        return JSONResponse(status_code=400, content={"detail": INVALID_POLYGON})
    return await request_validation_exception_handler(request, exc)

@app.on_event("startup")
async def on_startup():
    setup_logging()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV})")

@app.on_event("shutdown")
async def on_shutdown():
    await close_redis()
    await async_engine.dispose()
    logger.info(f"{settings.APP_NAME} stopped")

# Подключаем роутеры
app.include_router(health_router, tags=["health"])
app.include_router(polygon_router, tags=["polygon"])
