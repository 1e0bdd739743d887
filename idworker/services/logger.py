# logging_config.py
import logging

from idworker.core.config import settings


def setup_logger():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler()],
    )

    idworker_logger = logging.getLogger("idworker")
    idworker_logger.setLevel(settings.LOG_LEVEL.upper())

    return idworker_logger
