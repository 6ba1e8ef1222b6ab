import re
from dataclasses import dataclass

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Theme:
    red: str = "\033[38;5;203m"
    green: str = "\033[38;5;114m"
    yellow: str = "\033[38;5;221m"
    cyan: str = "\033[38;5;117m"
    gray: str = "\033[38;5;245m"
    reset: str = "\033[0m"


DEFAULT = Theme()
PLAIN = Theme(**{name: "" for name in Theme.__dataclass_fields__})
_active: Theme = DEFAULT


def use(theme: Theme) -> None:
    global _active
    _active = theme


def strip(text: str) -> str:
    return _ANSI_RE.sub("", text)


def red(text: str) -> str:
    return f"{_active.red}{text}{_active.reset}"


def green(text: str) -> str:
    return f"{_active.green}{text}{_active.reset}"


def yellow(text: str) -> str:
    return f"{_active.yellow}{text}{_active.reset}"


def cyan(text: str) -> str:
    return f"{_active.cyan}{text}{_active.reset}"


def gray(text: str) -> str:
    return f"{_active.gray}{text}{_active.reset}"
