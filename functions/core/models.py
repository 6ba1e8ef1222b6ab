import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from functions.core.errors import ValidationError
from functions.core.types import HttpMethod, State

# REQUEST BODIES


@dataclass(frozen=True)
class Empty:
    def payload(self) -> Any:
        return None


@dataclass(frozen=True)
class Json:
    value: Any

    def payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class RawString:
    text: str

    def payload(self) -> Any:
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON payload: {e}") from e


RequestBody = Empty | Json | RawString


def body_from(data: Any) -> RequestBody:
    if data is None:
        return Empty()
    if isinstance(data, str):
        return RawString(data)
    return Json(data)


@dataclass
class ActionRequest:
    url: str
    method: HttpMethod = "GET"
    params: dict[str, str] | None = None
    body: RequestBody = field(default_factory=Empty)
    timeout: float | None = None
    raw: bool = False


# EMULATOR


@dataclass
class StatusRecord:
    pid: int
    host: str
    port: int
    log_file: str
    project_id: str | None = None
    debug: bool = False
    debug_port: int | None = None
    inspect: bool = False
    started_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StatusRecord":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("pid", "port"):
            if key in values:
                values[key] = int(values[key])
        return cls(**values)


@dataclass
class Status:
    state: State
    metadata: dict[str, Any] | None = None
    error: Exception | None = None

    @property
    def running(self) -> bool:
        return self.state == State.RUNNING
