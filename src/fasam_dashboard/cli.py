"""CLI entry point: load config, take over the terminal, run the dashboard."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console

from .config import load_settings
from .dashboard import Dashboard
from .exceptions import ConfigError, FatalIOError
from .log_setup import setup_logger
from .models import utc_now
from .modules import AlarmStats, LogStore
from .ui import KeyboardInput, RichRenderer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Fire and Security Alarm Monitoring dashboard. "
            "Keys: q quit, t trigger alarm, r reset alarm."
        ),
    )
    return parser.parse_args(argv)


def main() -> int:
    """Run the dashboard until the operator quits."""
    parse_args()
    logger = setup_logger()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level_no)

    exit_code = 0
    try:
        keyboard = KeyboardInput()
        renderer = RichRenderer(console=Console())
        clock = utc_now
        dashboard = Dashboard(
            renderer=renderer,
            input_source=keyboard,
            tick_rate=settings.tick_rate_seconds,
            fallback_wait=settings.fallback_wait_seconds,
            title=settings.title,
            clock=clock,
            alarms=AlarmStats(clock=clock, seed_max_alarms=settings.seed_max_alarms),
            logs=LogStore(clock=clock, max_entries=settings.log_max_entries),
            logger=logger,
        )
        with keyboard, renderer:
            dashboard.attach_logger(logger)
            try:
                logger.debug("Effective configuration: %s", settings.safe_summary())
                exit_code = dashboard.run()
            finally:
                dashboard.detach_logger()
    except FatalIOError as exc:
        exit_code = 3
        logger.error("Terminal failure: %s", exc)
    except KeyboardInterrupt:
        exit_code = 130
        logger.error("Interrupted.")
    except Exception as exc:  # pragma: no cover - last-resort report at the process boundary
        exit_code = 99
        logger.exception("Unexpected failure: %s", exc)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
