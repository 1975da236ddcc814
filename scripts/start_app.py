#!/usr/bin/env python3
"""Start the API server with Logfire and logging configured first."""

import sys
import logfire
import uvicorn

from mailgate.config import Settings
from mailgate.util.logging import setup_logging
from mailgate.util.observability import configure_logfire


def main() -> int:
    """Start the application and report startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting FastAPI application", port=settings.port)

        uvicorn.run(
            "mailgate.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
