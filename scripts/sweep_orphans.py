#!/usr/bin/env python3
"""Delete OAuth identities that never got bound to an account.

Meant to run on a schedule (cron, a k8s CronJob, ...).
"""

import asyncio
import sys

import logfire

from mailgate.application.usecase.oauth import SweepOrphansUseCase
from mailgate.config import Settings
from mailgate.util.di.container import create_container
from mailgate.util.logging import setup_logging
from mailgate.util.observability import configure_logfire


async def sweep() -> int:
    """Run one sweep in its own request scope (one transaction)."""
    container = create_container(with_fastapi=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(SweepOrphansUseCase)
            response = await use_case.execute()
        return response.removed
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("sweep_orphans"):
        try:
            removed = asyncio.run(sweep())
        except Exception as e:
            logfire.error(
                "Orphan sweep failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Orphan sweep finished", removed=removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
