"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys
from types import SimpleNamespace

import pytest
import yaml


PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the stembuild CLI as a subprocess."""

    def _run(*args, cwd=None, env=None):
        full_env = os.environ.copy()
        for key in list(full_env):
            if key.startswith("STEMBUILD_"):
                del full_env[key]
        full_env["PYTHONPATH"] = project_root + os.pathsep + full_env.get("PYTHONPATH", "")
        full_env.update(env or {})
        result = subprocess.run(
            [sys.executable, "-m", "stembuild.stembuild", *args],
            capture_output=True,
            text=True,
            cwd=cwd or project_root,
            env=full_env,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


@pytest.fixture
def make_construct_config(tmp_path):
    """Return a factory that writes a temporary construct config.yaml."""

    def _make(**overrides):
        config = {
            "vm_ip": "10.0.0.5",
            "vm_username": "Administrator",
            "vm_password": "guest-secret",
            "vcenter_url": "vcenter.example.com",
            "vcenter_username": "admin@vsphere.local",
            "vcenter_password": "vcenter-secret",
            "vm_inventory_path": "/dc/vm/folder/windows-2019",
        }
        config.update(overrides)
        config_path = tmp_path / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(config, f)
        return str(config_path)

    return _make


# ── Construct fakes ─────────────────────────────────────────────────


class CallLog:
    """Ordered record of every call made to the construct fakes."""

    def __init__(self):
        self.calls = []

    def record(self, name, *args):
        self.calls.append((name, args))

    def names(self):
        return [name for name, _ in self.calls]

    def args_for(self, name):
        return [args for n, args in self.calls if n == name]

    def count(self, name):
        return len(self.args_for(name))


class FakeIaasClient:
    def __init__(self, log):
        self.log = log
        self.make_directory_error = None
        self.upload_errors = {}  # call index -> exception
        self.start_error = None
        self.start_pid = "5555"
        self.wait_for_exit_error = None
        self.exit_code = 0
        self.power_states = []  # bool or exception per call

    def make_directory(self, vm_inventory_path, path, username, password):
        self.log.record("make_directory", vm_inventory_path, path, username, password)
        if self.make_directory_error:
            raise self.make_directory_error

    def upload_artifact(self, vm_inventory_path, artifact, destination, username, password):
        index = self.log.count("upload_artifact")
        self.log.record("upload_artifact", vm_inventory_path, artifact, destination, username, password)
        if index in self.upload_errors:
            raise self.upload_errors[index]

    def start(self, vm_inventory_path, username, password, command, *args):
        self.log.record("start", vm_inventory_path, username, password, command, *args)
        if self.start_error:
            raise self.start_error
        return self.start_pid

    def wait_for_exit(self, vm_inventory_path, username, password, pid):
        self.log.record("wait_for_exit", vm_inventory_path, username, password, pid)
        if self.wait_for_exit_error:
            raise self.wait_for_exit_error
        return self.exit_code

    def is_powered_off(self, vm_inventory_path):
        self.log.record("is_powered_off", vm_inventory_path)
        state = self.power_states.pop(0) if self.power_states else True
        if isinstance(state, Exception):
            raise state
        return state


class FakeRemoteManager:
    def __init__(self, log):
        self.log = log
        self.extract_error = None
        self.execute_error = None

    def can_reach_vm(self):
        self.log.record("can_reach_vm")

    def can_login_vm(self):
        self.log.record("can_login_vm")

    def extract_archive(self, source, destination):
        self.log.record("extract_archive", source, destination)
        if self.extract_error:
            raise self.extract_error

    def execute_command(self, command):
        self.log.record("execute_command", command)
        if self.execute_error:
            raise self.execute_error
        return 0


class FakeWinRMEnabler:
    def __init__(self, log):
        self.log = log
        self.error = None

    def enable(self):
        self.log.record("enable_winrm")
        if self.error:
            raise self.error


class FakeVMConnectionValidator:
    def __init__(self, log):
        self.log = log
        self.error = None

    def validate(self):
        self.log.record("validate_connection")
        if self.error:
            raise self.error


class FakeVersionGetter:
    def __init__(self, version="dev"):
        self.version = version

    def get_version(self):
        return self.version


class FakeMessenger:
    """Records each progress event into the shared log, prefixed with 'msg.'."""

    def __init__(self, log):
        self.log = log

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def _event(*args):
            self.log.record(f"msg.{name}", *args)

        return _event


class FakePoller:
    """Runs the condition without sleeping and records each interval given."""

    def __init__(self, log):
        self.log = log
        self.error = None

    def poll(self, interval, condition):
        self.log.record("poll", interval)
        if self.error:
            raise self.error
        while not condition():
            pass


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def fakes(call_log):
    """All construct collaborators as recording fakes sharing one call log."""

    return SimpleNamespace(
        log=call_log,
        client=FakeIaasClient(call_log),
        remote_manager=FakeRemoteManager(call_log),
        winrm_enabler=FakeWinRMEnabler(call_log),
        validator=FakeVMConnectionValidator(call_log),
        messenger=FakeMessenger(call_log),
        poller=FakePoller(call_log),
        version_getter=FakeVersionGetter(),
    )
