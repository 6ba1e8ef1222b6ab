import os
from pathlib import Path


def _env_override(env_var: str) -> Path | None:
    if value := os.environ.get(env_var):
        return Path(value)
    return None


def home() -> Path:
    return _env_override("FUNCTIONS_EMULATOR_HOME") or Path.home() / ".functions-emulator"


def logs_dir() -> Path:
    return _env_override("FUNCTIONS_EMULATOR_LOGS_DIR") or home() / "logs"


def resolve_module(path: str) -> str:
    return str(Path(path).expanduser().resolve())
