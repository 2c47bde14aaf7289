"""Run the combined HTTP + Socket.IO server with uvicorn."""

from __future__ import annotations

import uvicorn

from tshirt_sizing_backend.app.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tshirt_sizing_backend.app.main:asgi_app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
