"""HTTP and HTTPS listeners.

The service runs two listeners in one event loop: plaintext HTTP bound to
loopback for local callers, and HTTPS for everyone else.
"""

import asyncio
from typing import Any

import uvicorn

from area_geocoder.core.config import Settings
from area_geocoder.core.logging import get_logger

logger = get_logger()

APP_PATH = "area_geocoder.main:app"


def build_server_configs(config: Settings, app: Any = APP_PATH) -> list[uvicorn.Config]:
    """Build one uvicorn config per enabled listener.

    Args:
        config: Application settings
        app: ASGI application or import string

    Returns:
        Listener configs, HTTP first
    """
    configs: list[uvicorn.Config] = []

    if config.HTTP_ENABLED:
        configs.append(
            uvicorn.Config(
                app,
                host=config.HTTP_HOST,
                port=config.HTTP_PORT,
                log_config=None,
                proxy_headers=False,
            )
        )

    if config.HTTPS_ENABLED:
        if config.TLS_CERTFILE and config.TLS_KEYFILE:
            configs.append(
                uvicorn.Config(
                    app,
                    host=config.HTTPS_HOST,
                    port=config.HTTPS_PORT,
                    ssl_certfile=config.TLS_CERTFILE,
                    ssl_keyfile=config.TLS_KEYFILE,
                    log_config=None,
                    proxy_headers=False,
                )
            )
        else:
            logger.warning(
                "https_listener_disabled",
                reason="TLS_CERTFILE and TLS_KEYFILE must both be set",
            )

    return configs


async def serve(config: Settings, app: Any = APP_PATH) -> None:
    """Run all enabled listeners until they exit.

    Raises:
        RuntimeError: If no listener is enabled
    """
    configs = build_server_configs(config, app)
    if not configs:
        raise RuntimeError("No listener enabled; enable HTTP or configure TLS")

    servers = [uvicorn.Server(server_config) for server_config in configs]
    for server_config in configs:
        logger.info(
            "listener_starting",
            host=server_config.host,
            port=server_config.port,
            tls=server_config.is_ssl,
        )

    async def serve_one(server: uvicorn.Server) -> None:
        # Signal handlers end up on one server only; stop the rest with it
        try:
            await server.serve()
        finally:
            for other in servers:
                other.should_exit = True

    await asyncio.gather(*(serve_one(server) for server in servers))


def run(config: Settings) -> None:
    """Blocking entry point for the listeners."""
    asyncio.run(serve(config))
