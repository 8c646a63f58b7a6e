"""
logging_config.py

Global logger configuration - import 'logger' directly from this module.
Nothing is written to disk until configure_logging() asks for a log file.
"""
import logging
import os
from datetime import datetime
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Create and export a global logger
logger = logging.getLogger("poker_equity")


def configure_logging(level: str = "INFO", log_dir: Optional[str] = "logs", log_to_file: bool = True) -> Optional[str]:
    """
    Attach handlers to the root logger. Returns the log file path when one
    was created.
    """
    handlers = [logging.StreamHandler()]
    log_filename = None
    if log_to_file and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filename = os.path.join(log_dir, f"poker_equity_{timestamp}.log")
        handlers.append(logging.FileHandler(log_filename, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return log_filename


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
