"""Logging setup for the application and command-line tools."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "kotoba",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return the named logger.
    
    Safe to call more than once: handlers are only attached the first time.
    
    Args:
        name: Logger name (module loggers under ``kotoba.`` propagate to it)
        level: Logging level or its name ("DEBUG", "INFO", ...)
        log_file: Optional path for a rotating log file
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    
    if getattr(logger, "_kotoba_configured", False):
        return logger
    
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)
    
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    logger._kotoba_configured = True
    return logger
