"""Process-wide logging setup."""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the running process.

    Safe to call more than once: basicConfig is a no-op when handlers already
    exist, so only the level is updated on later calls.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
