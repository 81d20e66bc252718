"""Mini README: Logging setup shared by the CLI, the web service and the library.

Structure:
    * configure_root_logger - attach the stream handler once; later calls only
      change the level.
    * get_logger - module logger factory (``LOGGER = get_logger(__name__)``).

Conventions:
    Store mutations log at INFO, projection internals at DEBUG and recovered
    failures (unreadable blobs, AI outages, failed autosaves) at WARNING.
    Chatty third-party loggers used by the AI client are held at WARNING.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
QUIET_LIBRARIES = ("LiteLLM", "litellm", "httpx", "httpcore")

_handler: Optional[logging.Handler] = None


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Install the fund tracker handler on first use and apply ``level``."""

    global _handler
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if _handler is not None:
        return

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(_handler)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger, installing the shared handler if needed."""

    if _handler is None:
        configure_root_logger()
    return logging.getLogger(name)
