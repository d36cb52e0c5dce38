"""Entry point for the API server."""

import structlog
import uvicorn

from content_api.app import create_app
from content_api.config import Settings
from content_api.logging import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m content_api."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.json_logs)

    app = create_app(settings)
    logger.info("api_serving", host=settings.host, port=settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "warning",
        access_log=False,
    )


if __name__ == "__main__":
    main()
