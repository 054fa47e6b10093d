"""Run PowerShell inside the guest through the hypervisor's guest operations."""

import logging

from stembuild.construct.codec import encode_powershell_command
from stembuild.errors import GuestProcessError

logger = logging.getLogger(__name__)

POWERSHELL = "C:\\Windows\\System32\\WindowsPowerShell\\V1.0\\powershell.exe"


def run_encoded_powershell(client, vm_inventory_path, username, password, script):
    """Start *script* in the guest and block until it exits.

    The pid returned by start() is only used for the single wait_for_exit()
    call that follows it.

    Raises:
        GuestProcessError: the process exited with a non-zero code.
        Exception: whatever the client raises for start/wait failures.
    """
    encoded = encode_powershell_command(script)
    logger.debug(f"Starting guest powershell: {script}")

    pid = client.start(vm_inventory_path, username, password, POWERSHELL, "-EncodedCommand", encoded)
    exit_code = client.wait_for_exit(vm_inventory_path, username, password, pid)
    logger.debug(f"Guest process {pid} exited with code {exit_code}")

    if exit_code != 0:
        raise GuestProcessError(exit_code)
