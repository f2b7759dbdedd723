import logging
import sys
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "partnerin", level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Return a logger writing pipe-separated records to stdout and, optionally, a file.

    Handlers are attached on the first call only; later calls return the same logger untouched.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def resolve_log_level(cfg: Dict[str, Any]) -> int:
    level = (cfg.get("logging") or {}).get("level", "INFO")
    return getattr(logging, str(level).upper(), logging.INFO)


def logger_from_config(cfg: Dict[str, Any], name: str = "partnerin") -> logging.Logger:
    """Build the run logger from the ``logging`` section (``level``, ``file``)."""
    log_cfg = cfg.get("logging") or {}
    return get_logger(name=name, level=resolve_log_level(cfg), log_file=log_cfg.get("file"))
