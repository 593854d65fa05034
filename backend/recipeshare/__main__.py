"""
Run the RecipeShare API server: `python -m recipeshare` (or `recipeshare`).

Exits 0 after a clean shutdown and 1 when the server failed to start or the
connection pool could not be closed.
"""

import sys

import uvicorn

from recipeshare.config import settings
from recipeshare.main import app


def main() -> None:
    config = uvicorn.Config(
        app,
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    server = uvicorn.Server(config)
    server.run()

    failed = not server.started or app.state.shutdown_failed
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
