import contextlib
import logging
import os
import re
import signal
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import Any

from functions.core.errors import SpawnError

logger = logging.getLogger(__name__)

INSPECT_MIN_MAJOR = 6
_VERSION_RE = re.compile(r"(\d+)\.\d+")


def _popen_kwargs() -> dict[str, Any]:
    if os.name == "posix":
        return {"start_new_session": True}
    if os.name == "nt":
        creationflags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
        if isinstance(creationflags, int):
            return {"creationflags": creationflags}
    return {}


def spawn_detached(
    argv: list[str],
    *,
    env: dict[str, str],
    log_path: Path,
    cwd: str | None = None,
) -> int:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a") as log_fd:
        try:
            child = subprocess.Popen(  # noqa: S603
                argv,
                cwd=cwd,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=log_fd,
                stderr=log_fd,
                **_popen_kwargs(),
            )
        except OSError as e:
            raise SpawnError(f"Failed to launch {argv[0]}: {e}") from e
    logger.debug("spawned pid=%d argv=%s", child.pid, argv)
    return child.pid


def terminate(pid: int) -> bool:
    if pid <= 0:
        return False
    if os.name == "posix":
        with contextlib.suppress(OSError):
            os.killpg(pid, signal.SIGTERM)
            return True
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError as e:
        logger.debug("signal to pid %d not delivered: %s", pid, e)
        return False
    return True


@lru_cache(maxsize=8)
def runtime_major(runtime: str) -> int | None:
    try:
        result = subprocess.run(  # noqa: S603
            [runtime, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("could not read %s version: %s", runtime, e)
        return None
    match = _VERSION_RE.search(result.stdout or result.stderr or "")
    return int(match.group(1)) if match else None


def supports_inspect(runtime: str) -> bool:
    major = runtime_major(runtime)
    return major is not None and major >= INSPECT_MIN_MAJOR


def build_argv(
    runtime: str,
    server: str,
    *,
    host: str,
    port: int,
    project_id: str | None,
    timeout: float,
    log_file: Path,
    verbose: bool = False,
    use_mocks: bool = False,
    debug: bool = False,
    debug_port: int | None = None,
    inspect: bool = False,
) -> list[str]:
    argv = [runtime]
    if inspect:
        argv.append("--inspect")
    elif debug:
        argv.append(f"--debug={debug_port}" if debug_port else "--debug")
    argv += [
        server,
        "--host",
        host,
        "--port",
        str(port),
        "--timeout",
        str(int(timeout * 1000)),
        "--log-file",
        str(log_file),
    ]
    if project_id:
        argv += ["--project-id", project_id]
    if verbose:
        argv.append("--verbose")
    if use_mocks:
        argv.append("--use-mocks")
    return argv


def build_env(*, debug: bool, inspect: bool) -> dict[str, str]:
    env = dict(os.environ)
    env["DEBUG"] = "true" if debug else "false"
    env["INSPECT"] = "true" if inspect else "false"
    return env
