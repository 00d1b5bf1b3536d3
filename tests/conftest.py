import asyncio
import os

# Настройки читаются при импорте app.*, поэтому окружение задаём заранее
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_DIR", "")

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db_session, get_polygon_cache
from app.db.base import Base
from app.main import app
from app.services.polygon_cache import PolygonCache


class BrokenRedis:
    """Redis, до которого нельзя достучаться."""

    async def get(self, key):
        raise RedisConnectionError("redis is down")

    async def set(self, key, value, ex=None):
        raise RedisConnectionError("redis is down")

    async def ping(self):
        raise RedisConnectionError("redis is down")


class SlowRedis:
    """Redis, который отвечает дольше любого разумного таймаута."""

    async def get(self, key):
        await asyncio.sleep(5)

    async def set(self, key, value, ex=None):
        await asyncio.sleep(5)

    async def ping(self):
        await asyncio.sleep(5)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def redis_client():
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def cache(redis_client):
    return PolygonCache(redis_client, key="polygons", ttl=3600, timeout=0.5)


@pytest.fixture
def broken_cache():
    return PolygonCache(BrokenRedis(), key="polygons", ttl=3600, timeout=0.5)


@pytest.fixture
def slow_cache():
    return PolygonCache(SlowRedis(), key="polygons", ttl=3600, timeout=0.05)


@pytest.fixture
def use_cache():
    """Подменяет кэш, которым пользуются роутеры."""
    def _use(cache: PolygonCache) -> None:
        app.dependency_overrides[get_polygon_cache] = lambda: cache
    return _use


@pytest.fixture
async def client(session_factory, cache, use_cache):
    async def _get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_db_session
    use_cache(cache)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def triangle():
    return [[-73.935242, 40.73061], [-73.935242, 40.74061], [-73.925242, 40.74061]]


@pytest.fixture
def square():
    return [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]
