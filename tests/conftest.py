import socket
import sys
from pathlib import Path

import pytest

from functions.emulator import controller, process
from functions.lib import config, state
from functions.lib.display import ansi

TESTS_ROOT = Path(__file__).resolve().parent
FAKE_SERVER = TESTS_ROOT / "fake_server.py"


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture(autouse=True)
def emulator_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    home = tmp_path / "home"
    monkeypatch.setenv("FUNCTIONS_EMULATOR_HOME", str(home))
    monkeypatch.delenv("FUNCTIONS_EMULATOR_LOGS_DIR", raising=False)
    monkeypatch.delenv("GCLOUD_PROJECT", raising=False)
    config.reset_cache()
    state.reset_cache()
    process.runtime_major.cache_clear()
    ansi.use(ansi.PLAIN)
    yield home
    config.reset_cache()
    state.reset_cache()
    ansi.use(ansi.DEFAULT)


@pytest.fixture
def closed_port() -> int:
    return free_port()


@pytest.fixture
def listening_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen(128)
        yield s.getsockname()[1]


@pytest.fixture
def emulator_config(emulator_home: Path) -> config.Config:
    cfg = config.Config(
        host="127.0.0.1",
        port=free_port(),
        timeout=10.0,
        poll_interval=0.1,
        runtime=sys.executable,
        server=str(FAKE_SERVER),
    )
    config.save(cfg)
    return cfg


@pytest.fixture
def emulator(emulator_config: config.Config):
    controller.start()
    yield emulator_config
    controller.kill()
