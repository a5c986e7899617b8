"""
Logging bootstrap. The TUI owns the terminal, so records only go to a file.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config import ChatConfig

# loggers of this application's packages, plus captured warnings
LOGGER_NAMES = ('app', 'core', 'models', 'widgets', 'py.warnings')

_configured_path: Optional[str] = None


def default_log_path() -> Path:
    state_home = os.environ.get('XDG_STATE_HOME') or os.path.expanduser('~/.local/state')
    return Path(state_home) / 'streamchat' / 'streamchat.log'


def configure(config: ChatConfig) -> str:
    """Attach a rotating file handler to the application loggers. Idempotent."""
    global _configured_path
    if _configured_path is not None:
        return _configured_path

    path = Path(config.log_file) if config.log_file else default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    handler = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding='utf-8')
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S",
    ))
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        logger.addHandler(handler)

    logging.captureWarnings(True)
    _configured_path = str(path)
    return _configured_path
