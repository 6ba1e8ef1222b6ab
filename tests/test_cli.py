import json
from pathlib import Path

import pytest

from functions.core.models import Status
from functions.core.types import FunctionType, State
from functions.emulator import controller
from functions.lib import config, state
from functions.main import main


@pytest.fixture
def stopped(closed_port: int) -> int:
    config.save(config.Config(host="127.0.0.1", port=closed_port))
    return closed_port


@pytest.fixture
def running(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        controller, "status", lambda: Status(state=State.RUNNING, metadata={"port": 8010})
    )


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 0
    assert "usage: functions" in capsys.readouterr().out


def test_status_stopped(stopped, capsys):
    main(["status"])

    assert capsys.readouterr().out.strip() == "Functions Emulator is STOPPED"


def test_status_json_includes_pid(running, capsys):
    state.replace({"pid": 4242, "host": "localhost", "port": 8010, "log_file": "x"})

    main(["status", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"state": "running", "metadata": {"port": 8010}, "pid": 4242}


def test_commands_need_running_server(stopped, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["list"])

    assert exc.value.code == 1
    assert 'Use "functions start"' in capsys.readouterr().err


def test_kill_without_server(capsys):
    main(["kill"])

    assert capsys.readouterr().out.strip() == "Functions Emulator KILLED"


def test_start_when_already_running(running, monkeypatch, capsys):
    monkeypatch.setattr(controller, "start", lambda **kw: pytest.fail("should not spawn"))
    state.replace({"pid": 4242, "host": "localhost", "port": 8010, "log_file": "x"})

    main(["start", "--port", "9000"])

    out = capsys.readouterr().out
    assert "already running on port 8010" in out


def test_deploy_http_trigger(running, monkeypatch, capsys):
    deployed = []
    monkeypatch.setattr(controller, "deploy", lambda *args: deployed.append(args))

    main(["deploy", "./mod", "web", "--trigger-http"])

    assert deployed == [("./mod", "web", FunctionType.HTTP)]
    assert "Function web deployed." in capsys.readouterr().out


def test_delete_alias(running, monkeypatch, capsys):
    removed = []
    monkeypatch.setattr(controller, "undeploy", removed.append)

    main(["delete", "hello"])

    assert removed == ["hello"]
    assert "Function hello deleted." in capsys.readouterr().out


def test_invalid_payload_reports_error(running, monkeypatch, capsys):
    state.replace({"pid": 1, "host": "127.0.0.1", "port": 1, "log_file": "x"})

    with pytest.raises(SystemExit) as exc:
        main(["call", "hello", "--data", "{nope"])

    assert exc.value.code == 1
    assert "Invalid JSON payload" in capsys.readouterr().err


def test_logs_read_and_clear(tmp_path: Path, capsys):
    log_file = tmp_path / "emulator.log"
    log_file.write_text("a\nb\nc\n")
    state.replace({"pid": 1, "host": "localhost", "port": 8010, "log_file": str(log_file)})

    main(["logs", "--limit", "2"])
    assert capsys.readouterr().out.splitlines() == ["b", "c"]

    main(["logs", "clear"])
    assert "LOGS CLEARED" in capsys.readouterr().out
    assert log_file.read_text() == ""
