import copy
import os
import subprocess
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from zjump.config.data import DEFAULT_CONFIG
from zjump.launcher.api import Theme


class StubAPI:
    """Plugin API double recording theme subscriptions."""

    def __init__(self, theme=Theme.DARK):
        self.theme = theme
        self.callbacks = {}
        self.disconnected = []
        self._next_id = 1

    def get_current_theme(self):
        return self.theme

    def connect_theme_changed(self, callback):
        handler_id = self._next_id
        self._next_id += 1
        self.callbacks[handler_id] = callback
        return handler_id

    def disconnect_theme_changed(self, handler_id):
        self.disconnected.append(handler_id)
        del self.callbacks[handler_id]

    def change_theme(self, new_theme):
        old_theme, self.theme = self.theme, new_theme
        for callback in list(self.callbacks.values()):
            callback(old_theme, new_theme)


class FakeZoxide:
    """Stands in for subprocess.run, answering zoxide commands."""

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.raises = None

    def respond(self, command, returncode=0, stdout="", stderr=""):
        self.responses[command] = (returncode, stdout, stderr)

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        if self.raises is not None:
            raise self.raises
        returncode, stdout, stderr = self.responses.get(args[1], (0, "", ""))
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)

    def commands(self):
        return [call[1:] for call in self.calls]


@pytest.fixture
def config(tmp_path):
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["zoxide_binary"] = "zoxide.exe"
    config["file_manager"] = "xdg-open"
    config["clipboard_commands"] = [["wl-copy"]]
    return config


@pytest.fixture
def zoxide_bin(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    executable = bin_dir / "zoxide.exe"
    executable.write_text("")
    monkeypatch.setenv("PATH", str(bin_dir))
    return str(executable)


@pytest.fixture
def stub_api():
    return StubAPI()


@pytest.fixture
def fake_zoxide(monkeypatch):
    fake = FakeZoxide()
    monkeypatch.setattr("zjump.launcher.plugins.zoxide.subprocess.run", fake)
    return fake


@pytest.fixture
def api_factory():
    return StubAPI
