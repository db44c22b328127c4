import os, sys

import pytest

# Ensure project root in path (server.py lives there)
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from locsync.config import SyncConfig


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code
        self.encoding = None


class FakeSession:
    """Records calls; answers from `responses` keyed by URL substring."""

    def __init__(self, responses=None, default=None):
        self.responses = responses or {}
        self.default = default if default is not None else FakeResponse("")
        self.calls = []

    def _answer(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        for needle, res in self.responses.items():
            if needle in url:
                if isinstance(res, Exception):
                    raise res
                return res
        return self.default

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No ambient LOCSYNC_* variables or data/config.json leak into tests."""
    for name in list(os.environ):
        if name.startswith("LOCSYNC_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("locsync.config.DEFAULT_CONFIG_PATH", str(tmp_path / "no-config.json"))


@pytest.fixture
def make_config(tmp_path):
    def _make(**kwargs):
        values = {
            "base_url": "https://l10n.example.com",
            "pid": "PID168",
            "group": "LG725",
            "version": "2.0",
            "languages": ("de",),
            "output_path": str(tmp_path / "out"),
        }
        values.update(kwargs)
        return SyncConfig(**values)
    return _make
