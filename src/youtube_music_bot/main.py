#!/usr/bin/env python3
"""Main entry point for the YouTube music bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path

from pydantic import ValidationError

from youtube_music_bot.domain.shared.messages import LogTemplates

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.warning("Could not load %s, using basic logging config", _LOGGING_CONFIG_PATH)

    logging.getLogger().setLevel(resolved_level)


def main() -> int:
    from youtube_music_bot.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logging.getLogger(__name__).error(LogTemplates.CONFIG_VALIDATION_FAILED, e)
        return 1

    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    missing = settings.missing_required()
    if missing:
        logger.error(LogTemplates.CONFIG_INVALID, ", ".join(missing))
        return 1

    logger.info(LogTemplates.BOT_STARTING, settings.environment)

    from youtube_music_bot.config.container import Container
    from youtube_music_bot.infrastructure.discord.bot import create_bot

    container = Container(settings=settings)
    bot = create_bot(container, settings)

    try:
        bot.run_with_graceful_shutdown(settings.discord.token.get_secret_value())
        logger.info(LogTemplates.BOT_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1


def invite() -> int:
    """Print the OAuth2 URL that adds the bot to a server."""
    from youtube_music_bot.config.settings import get_settings
    from youtube_music_bot.infrastructure.discord.invite import build_invite_url

    setup_logging()
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.getLogger(__name__).error(LogTemplates.CONFIG_VALIDATION_FAILED, e)
        return 1

    application_id = settings.discord.application_id
    if application_id is None:
        logging.getLogger(__name__).error(LogTemplates.INVITE_MISSING_APPLICATION_ID)
        return 1

    print(build_invite_url(application_id))
    return 0


def invite_cli() -> None:
    sys.exit(invite())


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
