from __future__ import annotations

import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """Log to stderr; stdout is reserved for emitted records."""
    root = logging.getLogger()
    if root.handlers:
        return  # prevent duplicate handlers (e.g., under uvicorn or pytest)

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.addHandler(handler)
