# Licensed under the Apache License, Version 2.0
import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "BLAMERANK_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure root logging once; an explicit level wins over the environment."""
    name = (level_name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = getattr(logging, name, logging.INFO)
    # stderr only; stdout carries rendered reports.
    logging.basicConfig(level=level, format=LOG_FORMAT)
