import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        level = "INFO"
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
    )
