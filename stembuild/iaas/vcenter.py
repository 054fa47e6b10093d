"""vCenter client: guest operations and power state via the govc CLI.

vCenter and guest credentials are passed to govc through its environment
variables (GOVC_URL, GOVC_USERNAME, GOVC_PASSWORD, GOVC_GUEST_LOGIN) so they
never appear in argv or in logged command lines.
"""

import json
import logging

from stembuild.errors import IaasCliError
from stembuild.iaas.shell import run_shell_cmd

logger = logging.getLogger(__name__)

GOVC = "govc"
POWERED_OFF = "poweredOff"

# ── Command builders ───────────────────────────────────────────────


def _govc_mkdir_cmd(vm_inventory_path, path):
    return [GOVC, "guest.mkdir", f"-vm.ipath={vm_inventory_path}", "-p", path]


def _govc_upload_cmd(vm_inventory_path, artifact, destination):
    return [GOVC, "guest.upload", "-f", f"-vm.ipath={vm_inventory_path}", artifact, destination]


def _govc_start_cmd(vm_inventory_path, command, args):
    return [GOVC, "guest.start", f"-vm.ipath={vm_inventory_path}", command, *args]


def _govc_ps_cmd(vm_inventory_path, pid):
    # -X blocks until the process has exited
    return [GOVC, "guest.ps", f"-vm.ipath={vm_inventory_path}", f"-p={pid}", "-X", "-json"]


def _govc_vm_info_cmd(vm_inventory_path):
    return [GOVC, "vm.info", f"-vm.ipath={vm_inventory_path}", "-json"]


def _govc_find_cmd(vm_inventory_path):
    return [GOVC, "find", "-maxdepth=0", vm_inventory_path]


def _govc_about_cmd():
    return [GOVC, "about"]


# ── JSON helpers ───────────────────────────────────────────────────


def _field(data, name):
    """Read a govc JSON field; newer govc releases emit lowerCamelCase keys."""
    if name in data:
        return data[name]
    return data.get(name[0].lower() + name[1:])


def parse_exit_code(stdout, pid):
    """Extract the exit code of *pid* from `govc guest.ps -json` output."""
    try:
        processes = _field(json.loads(stdout), "ProcessInfo") or []
    except (json.JSONDecodeError, AttributeError):
        raise IaasCliError(f"vcenter_client - failed to parse process info for pid {pid}")
    for process in processes:
        if str(_field(process, "Pid")) == str(pid):
            exit_code = _field(process, "ExitCode")
            if exit_code is None:
                break
            return int(exit_code)
    raise IaasCliError(f"vcenter_client - failed to get exit code for process {pid}")


def parse_power_state(stdout):
    """Extract the power state string from `govc vm.info -json` output."""
    try:
        vms = _field(json.loads(stdout), "VirtualMachines") or []
        return _field(_field(vms[0], "Runtime"), "PowerState")
    except (json.JSONDecodeError, AttributeError, IndexError, TypeError):
        raise IaasCliError("vcenter_client - failed to parse vm info")


# ── Client ─────────────────────────────────────────────────────────


class VCenterClient:
    def __init__(self, url, username, password, ca_cert_file=None, runner=run_shell_cmd):
        self.url = url
        self.username = username
        self.password = password
        self.ca_cert_file = ca_cert_file
        self._runner = runner

    def _env(self, with_credentials=True, guest_login=None):
        env = {"GOVC_URL": self.url}
        if with_credentials:
            env["GOVC_USERNAME"] = self.username
            env["GOVC_PASSWORD"] = self.password
        if self.ca_cert_file:
            env["GOVC_TLS_CA_CERTS"] = self.ca_cert_file
        else:
            env["GOVC_INSECURE"] = "1"
        if guest_login:
            env["GOVC_GUEST_LOGIN"] = f"{guest_login[0]}:{guest_login[1]}"
        return env

    def _run(self, command, error_message, with_credentials=True, guest_login=None):
        rc, stdout, stderr = self._runner(command, env=self._env(with_credentials, guest_login))
        if rc != 0:
            detail = stderr.strip()
            raise IaasCliError(f"{error_message}: {detail}" if detail else error_message)
        return stdout

    # guest operations

    def make_directory(self, vm_inventory_path, path, username, password):
        self._run(
            _govc_mkdir_cmd(vm_inventory_path, path),
            f"vcenter_client - directory `{path}` could not be created",
            guest_login=(username, password),
        )

    def upload_artifact(self, vm_inventory_path, artifact, destination, username, password):
        self._run(
            _govc_upload_cmd(vm_inventory_path, artifact, destination),
            f"vcenter_client - {artifact} could not be uploaded",
            guest_login=(username, password),
        )

    def start(self, vm_inventory_path, username, password, command, *args):
        stdout = self._run(
            _govc_start_cmd(vm_inventory_path, command, args),
            f"vcenter_client - failed to run '{command}'",
            guest_login=(username, password),
        )
        pid = stdout.strip()
        if not pid:
            raise IaasCliError(f"vcenter_client - no pid returned when starting '{command}'")
        return pid

    def wait_for_exit(self, vm_inventory_path, username, password, pid):
        stdout = self._run(
            _govc_ps_cmd(vm_inventory_path, pid),
            f"vcenter_client - failed to get exit code for process {pid}",
            guest_login=(username, password),
        )
        return parse_exit_code(stdout, pid)

    # inventory operations

    def is_powered_off(self, vm_inventory_path):
        stdout = self._run(_govc_vm_info_cmd(vm_inventory_path), "vcenter_client - failed to get vm info")
        return parse_power_state(stdout) == POWERED_OFF

    def validate_url(self):
        self._run(_govc_about_cmd(), f"vcenter_client - invalid url: {self.url}", with_credentials=False)

    def validate_credentials(self):
        self._run(_govc_about_cmd(), "vcenter_client - invalid credentials")

    def find_vm(self, vm_inventory_path):
        stdout = self._run(_govc_find_cmd(vm_inventory_path), f"vcenter_client - unable to find VM: {vm_inventory_path}")
        if not stdout.strip():
            raise IaasCliError(f"vcenter_client - unable to find VM: {vm_inventory_path}")
