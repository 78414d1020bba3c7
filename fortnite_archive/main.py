"""Main entry point for the Fortnite data archive.

Takes no arguments; all settings come from the environment. Exits 0 when
the run completes (even if some resources were unavailable), 1 on an
unhandled failure and 130 when interrupted.
"""

import asyncio
import sys

import structlog

from fortnite_archive.models import ArchiveConfig, RunSummary
from fortnite_archive.services.archive import ArchiveRunner
from fortnite_archive.services.config import ConfigurationService
from fortnite_archive.services.errors import ConfigurationError, get_error_service
from fortnite_archive.services.http_client import ApiClientService
from fortnite_archive.services.logging import setup_logging

log = structlog.stdlib.get_logger()


async def run_archive(config: ArchiveConfig) -> RunSummary:
    """Run one archive pass with a client scoped to the run."""
    async with ApiClientService(config) as api_client:
        runner = ArchiveRunner(config, api_client)
        return await runner.run()


def main() -> None:
    """Main entry point for the application."""
    try:
        config = ConfigurationService().load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        for error in e.errors:
            print(f"  • {error}", file=sys.stderr)
        sys.exit(1)

    _ = setup_logging(log_level=config.log_level, log_dir=config.log_dir)

    log.info(
        "Starting Fortnite data archive",
        output_dir=str(config.output_dir),
        base_url=config.base_url,
        request_delay=config.request_delay,
        seasons=f"{config.first_season}-{config.last_season}",
    )

    try:
        summary = asyncio.run(run_archive(config))
        log.info("Archive run complete", total=summary.total, unavailable=summary.unavailable)
        exit_code = 0

    except KeyboardInterrupt:
        log.info("Archive run interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    except Exception as e:
        error_service = get_error_service()
        friendly = error_service.handle_error(e, operation="run", component="main")
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {error_service.create_user_message(friendly)}", file=sys.stderr)
        exit_code = 1

    log.info("Archive exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
