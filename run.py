"""Entry point for serving the Body Binding API.

Host and port are read from the environment variables ``HOST`` and
``PORT``; defaults are ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from body_binding_api.app.main import app


async def main() -> None:
    """Serve the application with Uvicorn."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
