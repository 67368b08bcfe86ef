"""Shared fixtures for launcher tests."""

import pytest

from horsevpn.config import ConfigManager, LauncherConfig
from horsevpn.connection import ConnectionResult


class FakeConnector:
    """Connector double that replays queued results."""

    def __init__(self, *results, profile_name="horsevpn", may_prompt=False):
        self.results = list(results) or [ConnectionResult.ok()]
        self.profile_name = profile_name
        self.may_prompt = may_prompt
        self.calls = 0

    def connect(self):
        self.calls += 1
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


class FakeGuard:
    """Privilege guard double."""

    def __init__(self, proceed=True, error=None):
        self.proceed = proceed
        self.error = error
        self.calls = []

    def is_elevated(self):
        return self.proceed

    def ensure(self, argv, already_relaunched=False):
        self.calls.append((list(argv), already_relaunched))
        if self.error is not None:
            raise self.error
        return self.proceed


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep HORSEVPN_* settings from the developer's shell out of the tests."""
    for env_name in ConfigManager.ENVIRONMENT_KEYS.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture
def config():
    """Default launcher configuration."""
    return LauncherConfig(**ConfigManager.DEFAULT_CONFIG)
