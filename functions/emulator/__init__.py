"""Emulator lifecycle: spawn, poll, relay HTTP actions, tear down."""

from functions.emulator import cli, controller, http, poll, process
from functions.emulator.controller import (
    call,
    clear,
    clear_logs,
    deploy,
    describe,
    get_current_environment,
    kill,
    list_functions,
    prune,
    read_logs,
    record,
    restart,
    start,
    status,
    stop,
    undeploy,
)

__all__ = [
    "call",
    "clear",
    "clear_logs",
    "cli",
    "controller",
    "deploy",
    "describe",
    "get_current_environment",
    "http",
    "kill",
    "list_functions",
    "poll",
    "process",
    "prune",
    "read_logs",
    "record",
    "restart",
    "start",
    "status",
    "stop",
    "undeploy",
]
