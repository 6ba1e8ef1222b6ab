"""Emulator log file access and CLI logging setup."""

import logging
import sys
from collections import deque
from pathlib import Path

DEFAULT_LOG_LINES = 20
logger = logging.getLogger(__name__)


def configure(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def ensure(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def tail(path: Path, limit: int = DEFAULT_LOG_LINES) -> list[str]:
    if limit <= 0 or not path.exists():
        return []
    with path.open(errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=limit)]


def clear(path: Path) -> bool:
    if not path.exists():
        return False
    path.write_text("")
    logger.debug("cleared log file %s", path)
    return True
