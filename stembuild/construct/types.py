"""Capabilities the construct orchestrator is assembled from.

Each protocol covers one responsibility so tests can pass small fakes in
place of govc- or WinRM-backed implementations.
"""

from typing import Callable, Protocol


class IaasClient(Protocol):
    """Guest file, process and power operations on the hypervisor."""

    def make_directory(self, vm_inventory_path: str, path: str, username: str, password: str) -> None: ...

    def upload_artifact(
        self, vm_inventory_path: str, artifact: str, destination: str, username: str, password: str
    ) -> None: ...

    def start(self, vm_inventory_path: str, username: str, password: str, command: str, *args: str) -> str: ...

    def wait_for_exit(self, vm_inventory_path: str, username: str, password: str, pid: str) -> int: ...

    def is_powered_off(self, vm_inventory_path: str) -> bool: ...


class RemoteManager(Protocol):
    """Command execution on the guest over WinRM."""

    def can_reach_vm(self) -> None: ...

    def can_login_vm(self) -> None: ...

    def execute_command(self, command: str) -> int: ...

    def extract_archive(self, source: str, destination: str) -> None: ...


class WinRMEnabler(Protocol):
    def enable(self) -> None: ...


class VMConnectionValidator(Protocol):
    def validate(self) -> None: ...


class VersionGetter(Protocol):
    def get_version(self) -> str: ...


class Poller(Protocol):
    def poll(self, interval: float, condition: Callable[[], bool]) -> None: ...


class ConstructMessenger(Protocol):
    """Progress notifications, emitted synchronously at phase boundaries."""

    def create_provision_dir_started(self) -> None: ...

    def create_provision_dir_succeeded(self) -> None: ...

    def upload_artifacts_started(self) -> None: ...

    def upload_artifacts_succeeded(self) -> None: ...

    def upload_file_started(self, artifact: str) -> None: ...

    def upload_file_succeeded(self) -> None: ...

    def enable_winrm_started(self) -> None: ...

    def enable_winrm_succeeded(self) -> None: ...

    def validate_vm_connection_started(self) -> None: ...

    def validate_vm_connection_succeeded(self) -> None: ...

    def extract_artifacts_started(self) -> None: ...

    def extract_artifacts_succeeded(self) -> None: ...

    def log_out_users_started(self) -> None: ...

    def log_out_users_succeeded(self) -> None: ...

    def execute_script_started(self) -> None: ...

    def execute_script_succeeded(self) -> None: ...

    def winrm_disconnected_for_reboot(self) -> None: ...

    def restart_in_progress(self) -> None: ...

    def shutdown_completed(self) -> None: ...
