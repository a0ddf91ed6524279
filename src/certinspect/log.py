"""
Logging setup for the command line tool. The library itself only emits records.
"""
from __future__ import annotations

import logging

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING, fmt: str = _DEFAULT_FMT) -> None:
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    # StreamHandler defaults to stderr, keeping stdout for the JSON payload
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter(fmt))
    root.addHandler(ch)
