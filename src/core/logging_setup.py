"""Logging setup. The engine only ever calls `logging.getLogger(__name__)`; applications call `configure_logging()`."""

import logging

from src.core.config import EngineConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: EngineConfig | None = None) -> None:
    config = config or EngineConfig()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    logging.getLogger("src").setLevel(config.log_level)
