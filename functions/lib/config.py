import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from functions.lib import paths

_cache: "Config | None" = None
_cache_mtime: float = 0.0


def _default_project_id() -> str | None:
    return os.environ.get("GCLOUD_PROJECT")


@dataclass
class Config:
    host: str = "localhost"
    port: int = 8010
    timeout: float = 3.0
    poll_interval: float = 0.5
    project_id: str | None = field(default_factory=_default_project_id)
    debug_port: int | None = None
    log_file_name: str = "emulator.log"
    verbose: bool = False
    use_mocks: bool = False
    runtime: str = "node"
    server: str = "."
    server_cwd: str | None = None

    @property
    def log_file(self) -> Path:
        return paths.logs_dir() / self.log_file_name


def _config_path() -> Path:
    return paths.home() / "config.yaml"


def _from_dict(data: dict[str, Any]) -> Config:
    known = {f.name for f in fields(Config)}
    return Config(**{k: v for k, v in data.items() if k in known})


def load() -> Config:
    global _cache, _cache_mtime
    p = _config_path()
    if not p.exists():
        return Config()
    try:
        mtime = p.stat().st_mtime
    except OSError:
        return Config()
    if _cache is not None and mtime == _cache_mtime:
        return _cache
    data: dict[str, Any] = yaml.safe_load(p.read_text()) or {}
    _cache = _from_dict(data)
    _cache_mtime = mtime
    return _cache


def save(cfg: Config) -> None:
    global _cache, _cache_mtime
    p = _config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(yaml.safe_dump(asdict(cfg), default_flow_style=False))
    _cache = cfg
    try:
        _cache_mtime = p.stat().st_mtime
    except OSError:
        _cache_mtime = 0.0


def reset_cache() -> None:
    global _cache, _cache_mtime
    _cache = None
    _cache_mtime = 0.0
