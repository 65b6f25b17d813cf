# src/afazo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the task-list view, then runs the console
connector on an asyncio loop until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_view
from ..config import get_settings
from ..connectors.console_connector import ConsoleVisibility, run_console_loop
from ..connectors.console_render import ConsoleStyleSink
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (store=%s)...", settings.app_name, settings.api_url)

    visibility = ConsoleVisibility()
    style = ConsoleStyleSink()
    view = create_view(settings=settings, visibility=visibility, style=style)

    try:
        asyncio.run(run_console_loop(view, visibility, style))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
