"""infected-core — engine entry helpers: version, logging and draw sources."""

import logging
from importlib.metadata import version, PackageNotFoundError

from infected.infra.config import Settings, settings
from infected.modules.dice.source import RandomSource

logger = logging.getLogger("infected-core")

try:
    __version__ = version("infected-core")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: Settings | None = None) -> None:
    """Configure the ``infected-core`` logger tree from settings."""
    config = config or settings
    level = logging.DEBUG if config.app_debug else config.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)


def new_source(config: Settings | None = None) -> RandomSource:
    """Draw source for one play session, seeded when ``random_seed`` is set."""
    config = config or settings
    if config.random_seed is not None:
        logger.info("Using fixed random seed %d", config.random_seed)
    return RandomSource(config.random_seed)


def health() -> dict:
    return {"status": "ok", "engine": "infected-core", "version": __version__}
