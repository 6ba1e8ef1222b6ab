"""Argparse entrypoint for the functions emulator CLI."""

import argparse
import sys

from functions.lib import logs
from functions.lib.display import ansi


def _json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j", "--json", action="store_true", dest="json_output", help="output as JSON"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="functions",
        description="Control a local functions emulator.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    subs = parser.add_subparsers(dest="command", help="Command to run")

    # lifecycle
    start_p = subs.add_parser("start", help="start the emulator")
    start_p.add_argument("-p", "--project-id", help="cloud project id")
    start_p.add_argument("-d", "--debug", action="store_true", help="start in debug mode")
    start_p.add_argument(
        "-i", "--inspect", action="store_true", help="pass --inspect to the runtime"
    )
    start_p.add_argument("--host", help="host to bind")
    start_p.add_argument("--port", type=int, help="port to bind")
    start_p.add_argument("--timeout", type=float, help="seconds to wait for startup")

    subs.add_parser("stop", help="stop the emulator")
    subs.add_parser("restart", help="restart the emulator")
    subs.add_parser("kill", help="force kill the emulator process")

    status_p = subs.add_parser("status", help="report emulator status")
    _json_flag(status_p)

    # functions
    subs.add_parser("clear", help="undeploy all functions")
    subs.add_parser("prune", help="remove functions whose module no longer exists")

    deploy_p = subs.add_parser("deploy", help="deploy a function")
    deploy_p.add_argument("module", help="path to the module exporting the function")
    deploy_p.add_argument("name", help="exported function name")
    deploy_p.add_argument("--trigger-http", action="store_true", help="deploy as an HTTP function")

    undeploy_p = subs.add_parser("undeploy", aliases=["delete"], help="undeploy a function")
    undeploy_p.add_argument("name", help="function name")

    list_p = subs.add_parser("list", help="list deployed functions")
    _json_flag(list_p)

    describe_p = subs.add_parser("describe", help="describe a deployed function")
    describe_p.add_argument("name", help="function name")
    _json_flag(describe_p)

    call_p = subs.add_parser("call", help="invoke a deployed function")
    call_p.add_argument("name", help="function name")
    call_p.add_argument("-d", "--data", help="JSON payload")

    logs_p = subs.add_parser("logs", help="read or clear emulator logs")
    logs_p.add_argument("action", nargs="?", choices=["read", "clear"], default="read")
    logs_p.add_argument(
        "-l", "--limit", type=int, default=logs.DEFAULT_LOG_LINES, help="lines to show"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    logs.configure(args.verbose)
    if not sys.stdout.isatty():
        ansi.use(ansi.PLAIN)

    from functions.emulator import cli  # noqa: PLC0415

    handlers = {
        "start": cli.start,
        "stop": cli.stop,
        "restart": cli.restart,
        "kill": cli.kill,
        "status": cli.status,
        "clear": cli.clear,
        "prune": cli.prune,
        "deploy": cli.deploy,
        "undeploy": cli.undeploy,
        "delete": cli.undeploy,
        "list": cli.list_cmd,
        "describe": cli.describe,
        "call": cli.call,
        "logs": cli.logs,
    }

    handler = handlers.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
