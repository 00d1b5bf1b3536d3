import redis.asyncio as redis

from app.core.config import settings

# Один клиент (пул соединений) на процесс; подключение ленивое
redis_client: redis.Redis = redis.from_url(
    settings.REDIS_URL,
    decode_responses=True,
    socket_timeout=settings.CACHE_TIMEOUT_SECONDS,
    socket_connect_timeout=settings.CACHE_TIMEOUT_SECONDS,
)


async def close_redis() -> None:
    await redis_client.aclose()
