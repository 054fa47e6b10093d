"""WinRM remote manager: run commands and extract archives on the guest."""

import logging
import socket

import requests
import winrm
from winrm.exceptions import InvalidCredentialsError, WinRMError, WinRMTransportError

from stembuild.errors import PowershellExecutionError

logger = logging.getLogger(__name__)

WINRM_PORT = 5985
POWERSHELL_EXECUTION_ERROR = "powershell encountered an issue"

_TRANSPORT_ERRORS = (
    InvalidCredentialsError,
    WinRMTransportError,
    WinRMError,
    requests.exceptions.RequestException,
)


def default_session_factory(host, username, password, port=WINRM_PORT, transport="ntlm"):
    """Open a pywinrm session to the guest's HTTP listener."""
    return winrm.Session(
        f"http://{host}:{port}/wsman",
        auth=(username, password),
        transport=transport,
        server_cert_validation="ignore",
        operation_timeout_sec=60,
        read_timeout_sec=70,
    )


def _decode(payload):
    if not payload:
        return ""
    return payload.decode("utf-8", errors="replace").strip()


class WinRMRemoteManager:
    def __init__(self, host, username, password, session_factory=default_session_factory):
        self.host = host
        self.username = username
        self.password = password
        self._session_factory = session_factory

    def can_reach_vm(self, timeout=10):
        """Open and close a TCP connection to the WinRM listener."""
        try:
            with socket.create_connection((self.host, WINRM_PORT), timeout=timeout):
                pass
        except OSError as e:
            raise PowershellExecutionError(f"host {self.host} is unreachable on port {WINRM_PORT}: {e}")

    def can_login_vm(self):
        self.execute_command("echo index")

    def execute_command(self, command):
        """Run *command* on the guest and return its exit code.

        Raises:
            PowershellExecutionError: on transport failures or a non-zero exit code.
        """
        logger.debug(f"Executing on {self.host}: {command}")
        try:
            session = self._session_factory(self.host, self.username, self.password)
            response = session.run_cmd(command)
        except _TRANSPORT_ERRORS as e:
            raise PowershellExecutionError(f"{POWERSHELL_EXECUTION_ERROR}: {e}") from e

        stdout = _decode(response.std_out)
        if stdout:
            logger.debug(stdout)

        if response.status_code != 0:
            stderr = _decode(response.std_err)
            message = f"{POWERSHELL_EXECUTION_ERROR}: exit code {response.status_code}"
            if stderr:
                message = f"{message}: {stderr}"
            raise PowershellExecutionError(message, exit_code=response.status_code)
        return response.status_code

    def extract_archive(self, source, destination):
        command = (
            f"powershell.exe \"Expand-Archive -LiteralPath '{source}' "
            f"-DestinationPath '{destination}' -Force\""
        )
        self.execute_command(command)
