"""Logging setup for the command line entry point.

Installs a stdout handler and, when a log file is given, a UTF-8 file
handler on the root logger. Calling it twice does not duplicate handlers.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    log_path = None
    if log_file is not None and log_file.strip() != "":
        log_path = Path(log_file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)

    has_file = False
    has_stream = False
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if log_path is not None and Path(getattr(handler, "baseFilename", "")) == log_path:
                has_file = True
        elif isinstance(handler, logging.StreamHandler) and getattr(handler, "stream", None) in {sys.stdout, sys.stderr}:
            has_stream = True
    if log_path is not None and not has_file:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    if not has_stream:
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)
