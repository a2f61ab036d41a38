"""Logging setup shared by every dexarb module."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

logger = logging.getLogger('dexarb')
logger.setLevel(logging.INFO)

# Human readable output on stdout; the optional file gets JSON records
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(logging.Formatter(
    '%(asctime)s - %(levelname)s - %(message)s'
))
logger.addHandler(console_handler)
logger.propagate = False

_file_handler: Optional[RotatingFileHandler] = None

def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """Apply the CLI log level and attach a rotating JSON log file if asked.

    Calling it again replaces the previous log file rather than adding one.
    """
    global _file_handler
    logger.setLevel(level)
    console_handler.setLevel(level)

    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        json_handler = RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        json_handler.setLevel(logging.DEBUG)
        json_handler.setFormatter(jsonlogger.JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s'
        ))
        logger.addHandler(json_handler)
        _file_handler = json_handler

    return logger
