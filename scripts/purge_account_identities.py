#!/usr/bin/env python3
"""Delete the OAuth identities of accounts removed from the account store.

Usage:
    python scripts/purge_account_identities.py 12 57 301
"""

import argparse
import asyncio
import sys

import logfire

from mailgate.application.usecase.oauth import PurgeAccountIdentitiesUseCase
from mailgate.application.usecase.oauth.purge_account_identities import (
    PurgeAccountIdentitiesRequest,
)
from mailgate.config import Settings
from mailgate.util.di.container import create_container
from mailgate.util.logging import setup_logging
from mailgate.util.observability import configure_logfire


async def purge(user_ids: list[int]) -> int:
    """Run the purge in its own request scope (one transaction)."""
    container = create_container(with_fastapi=False)
    try:
        async with container() as request_container:
            use_case = await request_container.get(PurgeAccountIdentitiesUseCase)
            response = await use_case.execute(
                PurgeAccountIdentitiesRequest(user_ids=user_ids)
            )
        return response.removed
    finally:
        await container.close()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Delete OAuth identities bound to deleted accounts"
    )
    parser.add_argument("user_ids", nargs="+", type=int, help="Deleted account IDs")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("purge_account_identities", account_count=len(args.user_ids)):
        try:
            removed = asyncio.run(purge(args.user_ids))
        except Exception as e:
            logfire.error(
                "Account identity purge failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Account identity purge finished", removed=removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
