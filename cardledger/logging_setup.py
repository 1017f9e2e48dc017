import logging

from cardledger.config import Settings, settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: Settings = settings) -> None:
    """Configure root logging for a process hosting the ledger."""
    level = logging.DEBUG if config.debug else config.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
