"""End-to-end tests for the command line flow with platform services mocked."""

import io
import sys

import pytest

from conftest import FakeConnector, FakeGuard
from horsevpn import cli, utils
from horsevpn.app import Launcher
from horsevpn.connection import ConnectionResult, get_connector
from horsevpn.exceptions import ElevationError, ProfileNotFoundError
from horsevpn.networkmanager import NetworkManagerService
from horsevpn.privilege import ELEVATED_FLAG
from horsevpn.ras import RasDialer


@pytest.fixture
def services(monkeypatch):
    """Install a fake guard and connector behind cli.main."""
    installed = {"guard": FakeGuard(), "connector": FakeConnector()}
    monkeypatch.setattr(cli, "get_privilege_guard", lambda verbose=False: installed["guard"])
    monkeypatch.setattr(cli, "get_connector", lambda config: installed["connector"])
    return installed


def lines(text):
    return [line for line in text.splitlines() if line.strip()]


class TestMain:
    """Test cases for cli.main."""

    def test_no_arguments_is_usage_error(self, services, capsys):
        assert cli.main([]) == 1

        captured = capsys.readouterr()
        assert len(lines(captured.err)) == 1
        assert "Usage: horsevpn <route>" in captured.err
        assert captured.out == ""
        assert services["connector"].calls == 0

    def test_extra_arguments_is_usage_error(self, services, capsys):
        assert cli.main(["wss://a", "wss://b"]) == 1
        assert "Usage" in capsys.readouterr().err

    def test_success(self, services, capsys):
        assert cli.main(["wss://horse.example:443/ws"]) == 0

        captured = capsys.readouterr()
        assert len(lines(captured.out)) == 1
        assert "VPN connected" in captured.out
        assert captured.err == ""
        assert services["connector"].calls == 1

    def test_connect_failure_reports_code(self, services, capsys):
        services["connector"] = FakeConnector(ConnectionResult.failed(691, "Access denied"))

        assert cli.main(["wss://horse.example"]) == 1

        captured = capsys.readouterr()
        assert len(lines(captured.err)) == 1
        assert "Failed to connect VPN: 691" in captured.err
        assert "Access denied" in captured.err
        assert captured.out == ""

    def test_profile_not_found(self, services, capsys):
        services["connector"] = FakeConnector(ProfileNotFoundError("HorseVPN"))

        assert cli.main(["wss://horse.example"]) == 1

        captured = capsys.readouterr()
        assert "VPN connection 'HorseVPN' not found or invalid" in captured.err
        assert captured.out == ""

    def test_relaunch_exits_zero_without_connecting(self, services, capsys):
        services["guard"] = FakeGuard(proceed=False)

        assert cli.main(["wss://horse.example"]) == 0

        assert services["connector"].calls == 0
        assert services["guard"].calls == [(["wss://horse.example"], False)]
        assert capsys.readouterr().out == ""

    def test_elevation_failure(self, services, capsys):
        services["guard"] = FakeGuard(error=ElevationError("Failed to elevate privileges (code 5)"))

        assert cli.main(["wss://horse.example"]) == 1

        assert services["connector"].calls == 0
        assert "Failed to elevate privileges" in capsys.readouterr().err

    def test_elevated_flag_reaches_guard(self, services):
        cli.main(["wss://horse.example", ELEVATED_FLAG])
        assert services["guard"].calls[0][1] is True

    def test_route_without_scheme_still_connects(self, services, capsys):
        assert cli.main(["horse.example"]) == 0
        assert "VPN connected" in capsys.readouterr().out

    def test_second_run_reports_platform_outcome(self, services, capsys):
        """Test that repeating a route after connecting does not crash."""
        services["connector"] = FakeConnector(ConnectionResult.ok(), ConnectionResult.failed(4, "already active"))

        assert cli.main(["wss://horse.example"]) == 0
        assert cli.main(["wss://horse.example"]) == 1
        assert "4" in capsys.readouterr().err

    def test_verbose_output(self, services, capsys):
        assert cli.main(["-v", "wss://horse.example:443"]) == 0
        assert "Route host: horse.example" in capsys.readouterr().out

    def test_os_error_from_connector(self, services, capsys):
        services["connector"] = FakeConnector(OSError("rasapi32 not available"))

        assert cli.main(["wss://horse.example"]) == 1
        assert "rasapi32 not available" in capsys.readouterr().err


class TestLauncher:
    """Test cases for Launcher used directly."""

    def test_returns_exit_codes(self, config, capsys):
        launcher = Launcher(config, FakeGuard(), FakeConnector())
        assert launcher.run("wss://horse", ["wss://horse"]) == 0
        assert "VPN connected" in capsys.readouterr().out


class TestGetConnector:
    """Test cases for platform connector selection."""

    def test_windows(self, config):
        connector = get_connector(config, platform="win32")
        assert isinstance(connector, RasDialer)
        assert connector.profile_name == "HorseVPN"

    def test_linux(self, config):
        connector = get_connector(config, platform="linux")
        assert isinstance(connector, NetworkManagerService)
        assert connector.profile_name == "horsevpn"


class TerminalOutput(io.StringIO):
    """StringIO that reports itself as an interactive terminal."""

    def isatty(self):
        return True


class RecordingSpinner:
    """yaspin stand-in that records how it was finished."""

    instances = []

    def __init__(self, *args, **kwargs):
        self.events = []
        RecordingSpinner.instances.append(self)

    def start(self):
        self.events.append("start")

    def stop(self):
        self.events.append("stop")

    def ok(self, text):
        self.events.append("ok")
        sys.stdout.write(f"{text} spinner\n")

    def fail(self, text):
        self.events.append("fail")
        sys.stdout.write(f"{text} spinner\n")


class TestTerminalOutput:
    """Test cases for stdout when it is an interactive terminal."""

    @pytest.fixture
    def terminal(self, monkeypatch):
        RecordingSpinner.instances = []
        monkeypatch.setattr(utils, "yaspin", RecordingSpinner)
        output = TerminalOutput()
        monkeypatch.setattr(sys, "stdout", output)
        return output

    def test_success_prints_one_line(self, config, terminal):
        launcher = Launcher(config, FakeGuard(), FakeConnector(profile_name="HorseVPN"))

        assert launcher.run("wss://horse", ["wss://horse"]) == 0

        assert len(lines(terminal.getvalue())) == 1
        assert "VPN connected" in terminal.getvalue()
        assert RecordingSpinner.instances[0].events == ["start", "stop"]

    def test_failure_leaves_stdout_empty(self, config, terminal, monkeypatch):
        errors = io.StringIO()
        monkeypatch.setattr(sys, "stderr", errors)
        connector = FakeConnector(ConnectionResult.failed(691, "denied"), profile_name="HorseVPN")
        launcher = Launcher(config, FakeGuard(), connector)

        assert launcher.run("wss://horse", ["wss://horse"]) == 1

        assert terminal.getvalue() == ""
        assert RecordingSpinner.instances[0].events == ["start", "stop"]
        assert len(lines(errors.getvalue())) == 1
        assert "691" in errors.getvalue()
