import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx

from functions.core.errors import StopTimeoutError, TransportError, ValidationError
from functions.core.models import ActionRequest, Status, StatusRecord, body_from
from functions.core.types import FunctionType, State
from functions.lib import config, logs, paths, state

from . import http, poll, process

logger = logging.getLogger(__name__)

STOP_REQUEST_TIMEOUT = 5.0
ENV_REQUEST_TIMEOUT = 2.0


def record() -> StatusRecord | None:
    data = state.all()
    if not data:
        return None
    try:
        return StatusRecord.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning("ignoring unreadable status record: %s", e)
        return None


def _target() -> tuple[str, int]:
    if rec := record():
        return rec.host, rec.port
    cfg = config.load()
    return cfg.host, cfg.port


def root_url() -> str:
    host, port = _target()
    return f"http://{host}:{port}"


def functions_url() -> str:
    return f"{root_url()}/function/"


def _log_path() -> Path:
    if (rec := record()) and rec.log_file:
        return Path(rec.log_file)
    return config.load().log_file


# LIFECYCLE


def start(
    *,
    host: str | None = None,
    port: int | None = None,
    project_id: str | None = None,
    debug: bool = False,
    debug_port: int | None = None,
    inspect: bool = False,
    timeout: float | None = None,
    log_file: str | Path | None = None,
) -> StatusRecord:
    cfg = config.load()
    host = host or cfg.host
    port = port or cfg.port
    project_id = project_id or cfg.project_id
    debug_port = debug_port or cfg.debug_port
    timeout = cfg.timeout if timeout is None else timeout
    log_path = logs.ensure(Path(log_file) if log_file else cfg.log_file)

    if inspect and not process.supports_inspect(cfg.runtime):
        logger.warning(
            "--inspect requires %s %d+, starting without it",
            cfg.runtime,
            process.INSPECT_MIN_MAJOR,
        )
        inspect = False
    if inspect:
        debug = False

    argv = process.build_argv(
        cfg.runtime,
        cfg.server,
        host=host,
        port=port,
        project_id=project_id,
        timeout=timeout,
        log_file=log_path,
        verbose=cfg.verbose,
        use_mocks=cfg.use_mocks,
        debug=debug,
        debug_port=debug_port,
        inspect=inspect,
    )
    pid = process.spawn_detached(
        argv,
        env=process.build_env(debug=debug, inspect=inspect),
        log_path=log_path,
        cwd=cfg.server_cwd,
    )

    rec = StatusRecord(
        pid=pid,
        host=host,
        port=port,
        log_file=str(log_path),
        project_id=project_id,
        debug=debug,
        debug_port=debug_port,
        inspect=inspect,
        started_at=datetime.now(UTC).isoformat(),
    )
    state.replace(rec.to_dict())
    logger.info("emulator pid=%d starting on %s:%d", pid, host, port)

    poll.wait_for_start(host, port, timeout, cfg.poll_interval)
    return rec


def stop() -> bool:
    """Ask the emulator to shut down, then kill it whether or not it complied.

    Returns True when the shutdown was confirmed before the forced kill.
    """
    cfg = config.load()
    host, port = _target()
    graceful = True
    try:
        http.dispatch(
            ActionRequest(url=root_url(), method="DELETE", timeout=STOP_REQUEST_TIMEOUT)
        )
        poll.wait_for_stop(host, port, cfg.timeout, cfg.poll_interval)
    except TransportError as e:
        graceful = not poll.probe(host, port)
        logger.info("stop request failed (%s), already stopped: %s", e, graceful)
    except StopTimeoutError as e:
        graceful = False
        logger.warning("%s, killing pid", e)
    kill()
    return graceful


def kill() -> bool:
    rec = record()
    try:
        return process.terminate(rec.pid) if rec else False
    finally:
        state.clear()


def restart() -> StatusRecord:
    rec = record()
    stop()
    if rec is None:
        return start()
    return start(
        host=rec.host,
        port=rec.port,
        project_id=rec.project_id,
        debug=rec.debug,
        debug_port=rec.debug_port,
        inspect=rec.inspect,
        log_file=rec.log_file,
    )


def status() -> Status:
    host, port = _target()
    try:
        poll.check_connection(host, port)
    except OSError as e:
        return Status(state=State.STOPPED, error=e)
    return Status(state=State.RUNNING, metadata=get_current_environment())


# FUNCTIONS


def clear() -> Any:
    return http.dispatch(ActionRequest(url=functions_url(), method="DELETE"))


def prune() -> Any:
    return http.dispatch(ActionRequest(url=functions_url(), method="PATCH"))


def deploy(
    module_path: str,
    entry_point: str,
    type: str | FunctionType = FunctionType.BACKGROUND,
) -> Any:
    try:
        function_type = FunctionType(type)
    except ValueError as e:
        raise ValidationError(f"Unknown function type '{type}', expected H or B") from e
    return http.dispatch(
        ActionRequest(
            url=f"{functions_url()}{entry_point}",
            method="POST",
            params={"path": paths.resolve_module(module_path), "type": function_type.value},
        )
    )


def undeploy(name: str) -> Any:
    return http.dispatch(ActionRequest(url=f"{functions_url()}{name}", method="DELETE"))


def list_functions() -> dict[str, Any]:
    return http.dispatch(functions_url()) or {}


def describe(name: str) -> Any:
    return http.dispatch(f"{functions_url()}{name}")


def call(name: str, data: Any = None) -> httpx.Response:
    return http.dispatch(
        ActionRequest(
            url=f"{root_url()}/{name}",
            method="POST",
            body=body_from({} if data is None else data),
            raw=True,
        )
    )


def get_current_environment() -> Any:
    return http.dispatch(
        ActionRequest(url=f"{root_url()}/", params={"env": "true"}, timeout=ENV_REQUEST_TIMEOUT)
    )


# LOGS


def read_logs(limit: int = logs.DEFAULT_LOG_LINES) -> list[str]:
    return logs.tail(_log_path(), limit)


def clear_logs() -> bool:
    return logs.clear(_log_path())
