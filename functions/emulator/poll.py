import logging
import socket
import time
from collections.abc import Callable

from functions.core.errors import PollTimeout, StartTimeoutError, StopTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5
CONNECT_TIMEOUT = 1.0


def check_connection(host: str, port: int, timeout: float = CONNECT_TIMEOUT) -> None:
    """Open and immediately close a TCP connection; raises OSError when nothing listens."""
    with socket.create_connection((host, port), timeout=timeout):
        pass


def probe(host: str, port: int, timeout: float = CONNECT_TIMEOUT) -> bool:
    try:
        check_connection(host, port, timeout)
    except OSError:
        return False
    return True


def await_condition(
    condition: Callable[[], bool],
    timeout: float,
    interval: float = DEFAULT_INTERVAL,
) -> None:
    """Poll `condition` at a fixed interval until it holds or `timeout` seconds pass.

    The condition is always evaluated at least once. Sleeps never run past the
    deadline, so a slow condition cannot stretch the overall wait.
    """
    deadline = time.monotonic() + timeout
    attempts = 0
    while True:
        attempts += 1
        if condition():
            logger.debug("condition met after %d attempt(s)", attempts)
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise PollTimeout(f"Condition not met within {timeout:g}s", timeout)
        time.sleep(min(interval, remaining))


def wait_for_start(
    host: str, port: int, timeout: float, interval: float = DEFAULT_INTERVAL
) -> None:
    try:
        await_condition(lambda: probe(host, port), timeout, interval)
    except PollTimeout as e:
        raise StartTimeoutError("Timeout waiting for emulator start", e.timeout) from e


def wait_for_stop(
    host: str, port: int, timeout: float, interval: float = DEFAULT_INTERVAL
) -> None:
    try:
        await_condition(lambda: not probe(host, port), timeout, interval)
    except PollTimeout as e:
        raise StopTimeoutError("Timeout waiting for emulator stop", e.timeout) from e
