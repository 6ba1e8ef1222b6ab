from pathlib import Path

from rich.console import Console

from functions.core.models import Status
from functions.core.types import State
from functions.lib.display import (
    ansi,
    describe_table,
    functions_table,
    status_line,
    truthy,
    type_label,
)


def _render(table) -> str:
    console = Console(width=120, record=True)
    console.print(table)
    return console.export_text()


def test_truthy_accepts_string_flags():
    assert truthy(True)
    assert truthy("true")
    assert truthy("TRUE")
    assert not truthy("false")
    assert not truthy(None)


def test_type_label():
    assert type_label("B") == "BACKGROUND"
    assert type_label("H") == "HTTP"
    assert type_label("BACKGROUND") == "BACKGROUND"
    assert type_label(None) == "-"


class TestStatusLine:
    def test_stopped(self):
        line = status_line(Status(state=State.STOPPED, error=OSError("refused")), 8010)
        assert line == "Functions Emulator is STOPPED"

    def test_running_plain(self):
        line = status_line(Status(state=State.RUNNING, metadata={}), 8010)
        assert line == "Functions Emulator is RUNNING on port 8010"

    def test_running_debug_uses_default_port(self):
        st = Status(state=State.RUNNING, metadata={"debug": "true", "inspect": "false"})
        assert status_line(st, 8010).endswith("with DEBUG enabled on port 5858")

    def test_running_inspect_with_custom_port(self):
        st = Status(state=State.RUNNING, metadata={"debug": True, "inspect": True})
        assert status_line(st, 8010, 9230).endswith("with INSPECT enabled on port 9230")

    def test_colors_applied_with_default_theme(self):
        ansi.use(ansi.DEFAULT)
        line = status_line(Status(state=State.STOPPED), 8010)

        assert line != ansi.strip(line)
        assert ansi.strip(line) == "Functions Emulator is STOPPED"


class TestTables:
    def test_functions_table_lists_entries(self, tmp_path: Path):
        body = {
            "hello": {"type": "B", "path": str(tmp_path)},
            "web": {"type": "HTTP", "path": "/gone"},
        }

        text = _render(functions_table(body))

        assert "hello" in text
        assert "BACKGROUND" in text
        assert "web" in text
        assert "HTTP" in text

    def test_functions_table_empty_hint(self):
        assert "No functions deployed" in _render(functions_table({}))

    def test_describe_table(self):
        text = _render(describe_table({"name": "hello", "type": "B", "path": "/srv/mod"}))

        assert "hello" in text
        assert "BACKGROUND" in text
        assert "/srv/mod" in text
        assert "Url" not in text
