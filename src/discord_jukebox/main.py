#!/usr/bin/env python3
"""Entry point for Discord Jukebox.

Startup order: settings, logging, token check, container, bot. The process
exit code is 0 for a clean or interrupted shutdown and 1 for anything else.
"""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from discord_jukebox.config.settings import Settings

EXIT_OK = 0
EXIT_FAILURE = 1

LOGGING_CONFIG_FILE = Path(__file__).resolve().parents[2] / "logging_config.json"
_FALLBACK_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _read_logging_config(path: Path) -> dict[str, Any] | None:
    """Return the parsed dictConfig mapping, or None when it is absent or unreadable."""
    try:
        with open(path) as fp:
            loaded = json.load(fp)
    except (FileNotFoundError, json.JSONDecodeError):
        return None
    return loaded if isinstance(loaded, dict) else None


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging from the shipped JSON file, falling back to basicConfig."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    config = _read_logging_config(LOGGING_CONFIG_FILE)
    if config is not None:
        try:
            logging.config.dictConfig(config)
        except ValueError:
            config = None

    if config is None:
        logging.basicConfig(level=level, format=_FALLBACK_FORMAT, datefmt="%H:%M:%S")
        logging.getLogger(__name__).warning(
            "Logging config %s unusable, using basic logging", LOGGING_CONFIG_FILE
        )

    logging.getLogger().setLevel(level)


def _run_jukebox(settings: Settings, token: str) -> int:
    from discord_jukebox.config.container import create_container
    from discord_jukebox.infrastructure.discord.bot import create_bot

    logger = logging.getLogger(__name__)
    bot = create_bot(create_container(settings), settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return EXIT_OK
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return EXIT_FAILURE

    logger.info(LogTemplates.BOT_STOPPED)
    return EXIT_OK


def main() -> int:
    from discord_jukebox.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    token = settings.discord.token.get_secret_value()
    if not token:
        logging.getLogger(__name__).error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return EXIT_FAILURE

    logging.getLogger(__name__).info(
        LogTemplates.BOT_STARTING.format(environment=settings.environment)
    )
    return _run_jukebox(settings, token)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
