"""Construct orchestration: stage, configure and sysprep a Windows guest VM.

prepare_vm() runs each phase strictly in order. The first failure propagates
to the caller and nothing after it runs, including the phase's "succeeded"
notification.
"""

import logging

from stembuild.construct.guest import run_encoded_powershell
from stembuild.construct.types import (
    ConstructMessenger,
    IaasClient,
    Poller,
    RemoteManager,
    VersionGetter,
    VMConnectionValidator,
    WinRMEnabler,
)
from stembuild.errors import LogoutError

logger = logging.getLogger(__name__)

PROVISION_DIR = "C:\\provision\\"
STEMCELL_AUTOMATION_NAME = "StemcellAutomation.zip"
STEMCELL_AUTOMATION_DEST = PROVISION_DIR + STEMCELL_AUTOMATION_NAME
LGPO_NAME = "LGPO.zip"
LGPO_DEST = PROVISION_DIR + LGPO_NAME
STEMCELL_AUTOMATION_SCRIPT = PROVISION_DIR + "Setup.ps1"
LOGOFF_COMMAND = "$(Get-WmiObject win32_operatingsystem).Win32Shutdown(0)"
SHUTDOWN_POLL_INTERVAL = 60  # seconds

# (label shown to the user, local source, guest destination), uploaded in order
ARTIFACTS = [
    ("LGPO", f"./{LGPO_NAME}", LGPO_DEST),
    ("stemcell preparation artifacts", f"./{STEMCELL_AUTOMATION_NAME}", STEMCELL_AUTOMATION_DEST),
]


class VMConstruct:
    """Prepares one guest VM for export as a stemcell.

    All collaborators are injected as the protocols in stembuild.construct.types.
    """

    def __init__(
        self,
        remote_manager: RemoteManager,
        client: IaasClient,
        vm_inventory_path: str,
        vm_username: str,
        vm_password: str,
        winrm_enabler: WinRMEnabler,
        vm_connection_validator: VMConnectionValidator,
        messenger: ConstructMessenger,
        poller: Poller,
        version_getter: VersionGetter,
    ):
        self.remote_manager = remote_manager
        self.client = client
        self.vm_inventory_path = vm_inventory_path
        self.vm_username = vm_username
        self.vm_password = vm_password
        self.winrm_enabler = winrm_enabler
        self.vm_connection_validator = vm_connection_validator
        self.messenger = messenger
        self.poller = poller
        self.version_getter = version_getter

    def prepare_vm(self):
        stembuild_version = self.version_getter.get_version()
        logger.debug(f"Preparing {self.vm_inventory_path} with stembuild {stembuild_version}")

        self._create_provision_directory()

        self.messenger.upload_artifacts_started()
        self._upload_artifacts()
        self.messenger.upload_artifacts_succeeded()

        self.messenger.enable_winrm_started()
        self.winrm_enabler.enable()
        self.messenger.enable_winrm_succeeded()

        self.messenger.validate_vm_connection_started()
        self.vm_connection_validator.validate()
        self.messenger.validate_vm_connection_succeeded()

        self.messenger.extract_artifacts_started()
        self.remote_manager.extract_archive(STEMCELL_AUTOMATION_DEST, PROVISION_DIR)
        self.messenger.extract_artifacts_succeeded()

        self.messenger.log_out_users_started()
        self._log_out_users()
        self.messenger.log_out_users_succeeded()

        self.messenger.execute_script_started()
        self._execute_setup_script(stembuild_version)
        self.messenger.execute_script_succeeded()
        self.messenger.winrm_disconnected_for_reboot()

        self._wait_for_shutdown(SHUTDOWN_POLL_INTERVAL)

    def _create_provision_directory(self):
        self.messenger.create_provision_dir_started()
        self.client.make_directory(self.vm_inventory_path, PROVISION_DIR, self.vm_username, self.vm_password)
        self.messenger.create_provision_dir_succeeded()

    def _upload_artifacts(self):
        for label, source, destination in ARTIFACTS:
            self.messenger.upload_file_started(label)
            logger.debug(f"Uploading {source} -> {destination}")
            self.client.upload_artifact(
                self.vm_inventory_path, source, destination, self.vm_username, self.vm_password
            )
            self.messenger.upload_file_succeeded()

    def _log_out_users(self):
        try:
            run_encoded_powershell(
                self.client, self.vm_inventory_path, self.vm_username, self.vm_password, LOGOFF_COMMAND
            )
        except Exception as e:
            raise LogoutError(f"failed to log out remote user: {e}") from e

    def _execute_setup_script(self, stembuild_version):
        command = f"powershell.exe {STEMCELL_AUTOMATION_SCRIPT} -Version {stembuild_version}"
        self.remote_manager.execute_command(command)

    def _wait_for_shutdown(self, interval):
        def is_powered_off():
            powered_off = self.client.is_powered_off(self.vm_inventory_path)
            if not powered_off:
                self.messenger.restart_in_progress()
            return powered_off

        self.poller.poll(interval, is_powered_off)
        self.messenger.shutdown_completed()
