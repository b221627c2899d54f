"""Root logging setup shared by the API server and the Streamlit frontend."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from core.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# urllib3 logs every dataset fetch at DEBUG.
QUIET_LOGGERS = ("urllib3",)


def configure_logging(level: int | None = None, log_path: Path | None = None) -> None:
    """Attach a stdout handler (and an optional file handler) to the root logger.

    `level` defaults to `LOG_LEVEL` from the settings. Streamlit re-runs the
    script on every interaction; when the root logger already has handlers only
    its level is updated.
    """
    if level is None:
        level = get_settings().log_level

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
