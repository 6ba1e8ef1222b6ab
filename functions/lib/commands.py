import logging
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from functions.core.errors import EmulatorError, NotRunningError, ValidationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _wrap_handler(usage: str, f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return f(*args, **kwargs)
        except (ValidationError, NotRunningError) as e:
            sys.stderr.write(f"{e}\n")
            sys.exit(1)
        except EmulatorError as e:
            logger.error(f"{usage}: {e}")
            sys.stderr.write(f"{e}\n")
            sys.exit(1)

    return wrapper


def emulator_cmd(usage: str):

    def decorator(f: F) -> F:
        return _wrap_handler(usage, f)  # type: ignore[return-value]

    return decorator


def echo(msg: str = "", err: bool = False) -> None:
    stream = sys.stderr if err else sys.stdout
    stream.write(msg + "\n")
