"""Persisted emulator status: ~/.functions-emulator/status.yaml

Single reads and writes are serialized by an advisory lock and land atomically,
but a command that reads, spawns and then writes is not: two CLI invocations
racing on start/stop/kill leave whichever record was written last.
"""

import fcntl
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml

from functions.lib import paths

_mem: dict[str, Any] | None = None
_mem_mtime: float = 0.0


def _state_path() -> Path:
    return paths.home() / "status.yaml"


def _lock_path() -> Path:
    return paths.home() / ".status.lock"


@contextmanager
def _locked():
    lock = _lock_path()
    lock.parent.mkdir(parents=True, exist_ok=True)
    with lock.open("w") as f:
        fcntl.flock(f, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(f, fcntl.LOCK_UN)


def _load() -> dict[str, Any]:
    global _mem, _mem_mtime
    p = _state_path()
    if not p.exists():
        _mem = {}
        _mem_mtime = 0.0
        return _mem
    try:
        mtime = p.stat().st_mtime
    except OSError:
        if _mem is not None:
            return _mem
        _mem = {}
        return _mem
    if _mem is not None and mtime == _mem_mtime:
        return _mem
    try:
        loaded = yaml.safe_load(p.read_text())
        _mem = loaded if isinstance(loaded, dict) else {}
        _mem_mtime = mtime
    except (yaml.YAMLError, OSError):
        if _mem is None:
            _mem = {}
    return _mem or {}


def _save(data: dict[str, Any]) -> None:
    global _mem, _mem_mtime
    p = _state_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, prefix=".status.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(yaml.safe_dump(data, default_flow_style=False))
        os.replace(tmp, p)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    _mem = data
    try:
        _mem_mtime = p.stat().st_mtime
    except OSError:
        _mem_mtime = 0.0


def exists() -> bool:
    return _state_path().exists()


def get(key: str, default: Any = None) -> Any:
    with _locked():
        return _load().get(key, default)


def all() -> dict[str, Any]:
    with _locked():
        return dict(_load())


def set(key: str, value: Any) -> None:
    with _locked():
        data = dict(_load())
        data[key] = value
        _save(data)


def replace(data: dict[str, Any]) -> None:
    with _locked():
        _save(dict(data))


def clear() -> None:
    with _locked():
        _state_path().unlink(missing_ok=True)
        reset_cache()


def reset_cache() -> None:
    global _mem, _mem_mtime
    _mem = None
    _mem_mtime = 0.0
