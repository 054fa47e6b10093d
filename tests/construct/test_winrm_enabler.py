"""Tests for WinRMEnabler and the guest powershell helper."""

import pytest

from stembuild.construct.codec import decode_powershell_command
from stembuild.construct.guest import POWERSHELL, run_encoded_powershell
from stembuild.construct.winrm_enabler import ENABLE_WINRM_SCRIPT, WinRMEnabler
from stembuild.errors import GuestProcessError, WinRMEnableError


# ── run_encoded_powershell ─────────────────────────────────────────


def test_run_encoded_powershell_starts_then_waits(fakes):
    run_encoded_powershell(fakes.client, "vm", "user", "pass", "Get-Date")

    assert fakes.log.names() == ["start", "wait_for_exit"]
    [(vm, user, password, command, flag, encoded)] = fakes.log.args_for("start")
    assert (vm, user, password, command, flag) == ("vm", "user", "pass", POWERSHELL, "-EncodedCommand")
    assert decode_powershell_command(encoded) == "Get-Date"
    assert fakes.log.args_for("wait_for_exit") == [("vm", "user", "pass", "5555")]


def test_run_encoded_powershell_non_zero_exit(fakes):
    fakes.client.exit_code = 3

    with pytest.raises(GuestProcessError, match="WinRM process on guest VM exited with code 3") as exc_info:
        run_encoded_powershell(fakes.client, "vm", "user", "pass", "exit 3")

    assert exc_info.value.exit_code == 3


# ── WinRMEnabler ───────────────────────────────────────────────────


def test_enable_runs_script_in_guest(fakes):
    WinRMEnabler(fakes.client, "fakeVmPath", "fakeUser", "fakePass").enable()

    [start_args] = fakes.log.args_for("start")
    assert start_args[:3] == ("fakeVmPath", "fakeUser", "fakePass")
    script = decode_powershell_command(start_args[-1])
    assert script == ENABLE_WINRM_SCRIPT
    assert "Enable-PSRemoting" in script
    assert "Restart-Service -Name WinRM" in script


def test_enable_start_failure(fakes):
    fakes.client.start_error = RuntimeError("guest operations unavailable")

    with pytest.raises(WinRMEnableError) as exc_info:
        WinRMEnabler(fakes.client, "vm", "user", "pass").enable()

    assert str(exc_info.value) == "failed to enable WinRM: guest operations unavailable"
    assert fakes.log.count("wait_for_exit") == 0


def test_enable_non_zero_exit(fakes):
    fakes.client.exit_code = 1

    with pytest.raises(WinRMEnableError) as exc_info:
        WinRMEnabler(fakes.client, "vm", "user", "pass").enable()

    assert str(exc_info.value) == "failed to enable WinRM: WinRM process on guest VM exited with code 1"
