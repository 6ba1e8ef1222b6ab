from enum import Enum
from typing import Literal

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class FunctionType(str, Enum):
    HTTP = "H"
    BACKGROUND = "B"

    @property
    def label(self) -> str:
        return self.name


class State(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
