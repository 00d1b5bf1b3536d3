"""Точка входа: запускает API через Uvicorn.

Адрес и порт берутся из настроек (HOST, PORT).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from app.core.config import settings


async def main() -> None:
    config = Config(
        app="app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
