from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = (level or os.getenv("DUOS_LOG_LEVEL", "INFO")).strip().upper()
    numeric_level = getattr(logging, resolved, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.INFO))
