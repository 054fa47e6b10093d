"""Enable WinRM on a guest that is only reachable through guest operations."""

import logging

from stembuild.construct.guest import run_encoded_powershell
from stembuild.errors import WinRMEnableError

logger = logging.getLogger(__name__)

ENABLE_WINRM_SCRIPT = "\n".join(
    [
        "$ErrorActionPreference = 'Stop'",
        "Enable-PSRemoting -SkipNetworkProfileCheck -Force",
        "Set-Item -Path WSMan:\\localhost\\Service\\Auth\\Basic -Value $true",
        "Set-Item -Path WSMan:\\localhost\\Service\\AllowUnencrypted -Value $true",
        "Set-Item -Path WSMan:\\localhost\\MaxTimeoutms -Value 7200000",
        "Set-Item -Path WSMan:\\localhost\\Shell\\MaxMemoryPerShellMB -Value 0",
        "Get-NetFirewallRule -Name 'WINRM-HTTP-In-TCP*' | Set-NetFirewallRule -Enabled True -Profile Any",
        "Restart-Service -Name WinRM",
    ]
)


class WinRMEnabler:
    def __init__(self, client, vm_inventory_path, username, password):
        self.client = client
        self.vm_inventory_path = vm_inventory_path
        self.username = username
        self.password = password

    def enable(self):
        logger.debug(f"Enabling WinRM on {self.vm_inventory_path}")
        try:
            run_encoded_powershell(
                self.client, self.vm_inventory_path, self.username, self.password, ENABLE_WINRM_SCRIPT
            )
        except Exception as e:
            raise WinRMEnableError(f"failed to enable WinRM: {e}") from e
