import argparse
import json
from typing import Any

from rich.console import Console

from functions.core.errors import NotRunningError
from functions.core.types import FunctionType
from functions.emulator import controller
from functions.lib import config
from functions.lib.commands import echo, emulator_cmd
from functions.lib.display import (
    APP_NAME,
    DEFAULT_DEBUG_PORT,
    ansi,
    describe_table,
    functions_table,
    status_line,
)

console = Console()


def _require_running() -> None:
    if not controller.status().running:
        raise NotRunningError(
            f'{APP_NAME}is not running. Use "functions start" to start the emulator'
        )


def _announce(word: str) -> None:
    echo(f"{APP_NAME}{word}")


def _print_functions(json_output: bool = False) -> None:
    body = controller.list_functions()
    if json_output:
        echo(json.dumps(body, indent=2))
    else:
        console.print(functions_table(body))


def _running_port() -> int:
    rec = controller.record()
    return rec.port if rec else config.load().port


@emulator_cmd("start")
def start(args: argparse.Namespace) -> None:
    if controller.status().running:
        echo(f"{APP_NAME}{ansi.cyan('already running')} on port {_running_port()}")
        return

    cfg = config.load()
    port = args.port or cfg.port
    echo(f"Starting {APP_NAME}on port {port}...")
    rec = controller.start(
        host=args.host,
        port=args.port,
        project_id=args.project_id,
        debug=args.debug,
        inspect=args.inspect,
        timeout=args.timeout,
    )
    if rec.inspect:
        echo(f"Starting in inspect mode. Check {rec.log_file} for details on how to connect")
    elif rec.debug:
        debug_port = rec.debug_port or DEFAULT_DEBUG_PORT
        echo(f"Starting in debug mode. Debugger listening on port {debug_port}")
    _announce(ansi.green("STARTED"))
    _print_functions()


@emulator_cmd("stop")
def stop(args: argparse.Namespace) -> None:
    graceful = controller.stop()
    suffix = "" if graceful else ansi.gray(" (forced)")
    _announce(ansi.red("STOPPED") + suffix)


@emulator_cmd("restart")
def restart(args: argparse.Namespace) -> None:
    controller.restart()
    _announce(ansi.green("RESTARTED"))
    _print_functions()


@emulator_cmd("kill")
def kill(args: argparse.Namespace) -> None:
    controller.kill()
    _announce(ansi.red("KILLED"))


@emulator_cmd("status")
def status(args: argparse.Namespace) -> None:
    st = controller.status()
    rec = controller.record()
    if args.json_output:
        payload: dict[str, Any] = {"state": st.state.value}
        if st.running:
            payload["metadata"] = st.metadata
        else:
            payload["error"] = str(st.error)
        if rec:
            payload["pid"] = rec.pid
        echo(json.dumps(payload, indent=2))
        return
    debug_port = rec.debug_port if rec else None
    echo(status_line(st, _running_port(), debug_port))


@emulator_cmd("clear")
def clear(args: argparse.Namespace) -> None:
    _require_running()
    controller.clear()
    _announce(ansi.green("CLEARED"))
    _print_functions()


@emulator_cmd("prune")
def prune(args: argparse.Namespace) -> None:
    _require_running()
    count = controller.prune()
    _announce(ansi.green(f"PRUNED {count} functions"))
    _print_functions()


@emulator_cmd("deploy")
def deploy(args: argparse.Namespace) -> None:
    _require_running()
    kind = FunctionType.HTTP if args.trigger_http else FunctionType.BACKGROUND
    controller.deploy(args.module, args.name, kind)
    echo(f"Function {args.name} deployed.")


@emulator_cmd("undeploy")
def undeploy(args: argparse.Namespace) -> None:
    _require_running()
    controller.undeploy(args.name)
    echo(f"Function {args.name} deleted.")


@emulator_cmd("list")
def list_cmd(args: argparse.Namespace) -> None:
    _require_running()
    _print_functions(args.json_output)


@emulator_cmd("describe")
def describe(args: argparse.Namespace) -> None:
    _require_running()
    body = controller.describe(args.name)
    if args.json_output or not isinstance(body, dict):
        echo(json.dumps(body, indent=2))
    else:
        console.print(describe_table(body))


@emulator_cmd("call")
def call(args: argparse.Namespace) -> None:
    _require_running()
    response = controller.call(args.name, args.data)
    echo(response.text)


@emulator_cmd("logs")
def logs(args: argparse.Namespace) -> None:
    if args.action == "clear":
        controller.clear_logs()
        _announce(ansi.green("LOGS CLEARED"))
        return
    for line in controller.read_logs(args.limit):
        echo(line)
