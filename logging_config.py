"""Logging setup for the component compiler backend."""
import logging
from pathlib import Path

import config

_configured = False


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the root logger.

    Safe to call more than once; handlers are only added the first time.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(level or config.LOG_LEVEL)
    if _configured:
        return root

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter("%(asctime)s [%(name)s] %(message)s"))
    root.addHandler(sh)

    if config.LOG_DIR:
        log_dir = Path(config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "compiler.log", encoding="utf-8")
        fh.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
        ))
        root.addHandler(fh)

    _configured = True
    return root
