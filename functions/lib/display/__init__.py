from pathlib import Path
from typing import Any

from rich.table import Table

from functions.core.models import Status
from functions.core.types import FunctionType

from . import ansi

APP_NAME = "Functions Emulator "
DEFAULT_DEBUG_PORT = 5858
DEFAULT_INSPECT_PORT = 9229


def truthy(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == "true")


def type_label(value: str | None) -> str:
    try:
        return FunctionType(value).label
    except ValueError:
        return value or "-"


def functions_table(body: dict[str, Any] | None) -> Table:
    table = Table("Name", "Type", "Path", header_style="cyan")
    for name, meta in (body or {}).items():
        meta = meta or {}
        path = str(meta.get("path") or "")
        style = None if path and Path(path).exists() else "red"
        table.add_row(name, type_label(meta.get("type")), path, style=style)
    if not body:
        table.add_row(
            "No functions deployed ¯\\_(ツ)_/¯.  Run 'functions deploy' to deploy a function",
            style="bright_black",
        )
    return table


def describe_table(body: dict[str, Any]) -> Table:
    table = Table("Property", "Value", header_style="cyan")
    table.add_row("Name", str(body.get("name", "")))
    table.add_row("Type", type_label(body.get("type")))
    table.add_row("Path", str(body.get("path", "")))
    if url := body.get("url"):
        table.add_row("Url", str(url))
    return table


def status_line(status: Status, port: int, debug_port: int | None = None) -> str:
    if not status.running:
        return f"{APP_NAME}is {ansi.red('STOPPED')}"
    line = f"{APP_NAME}is {ansi.green('RUNNING')} on port {port}"
    env = status.metadata or {}
    if truthy(env.get("inspect")):
        mode, default_port = "INSPECT", DEFAULT_INSPECT_PORT
    elif truthy(env.get("debug")):
        mode, default_port = "DEBUG", DEFAULT_DEBUG_PORT
    else:
        return line
    return f"{line}, with {ansi.yellow(mode)} enabled on port {debug_port or default_port}"
