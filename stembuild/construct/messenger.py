"""Human-readable construct progress written to a text stream.

Paired started/succeeded messages are written without a newline in between
so each phase reads as a single line, e.g.
``Extracting artifacts...succeeded.``
"""

import sys


class Messenger:
    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout

    def _write(self, text):
        self.out.write(text)
        self.out.flush()

    def create_provision_dir_started(self):
        self._write("\nCreating provision dir on target VM...")

    def create_provision_dir_succeeded(self):
        self._write("succeeded.\n")

    def upload_artifacts_started(self):
        self._write(
            "\nTransferring ~20 MB to the Windows VM. "
            "Depending on your connection, the transfer may take 15-45 minutes\n"
        )

    def upload_artifacts_succeeded(self):
        self._write("\nAll files have been uploaded.\n")

    def upload_file_started(self, artifact):
        self._write(f"\tUploading {artifact} to target VM...")

    def upload_file_succeeded(self):
        self._write("succeeded.\n")

    def enable_winrm_started(self):
        self._write("\nAttempting to enable WinRM on the guest vm...")

    def enable_winrm_succeeded(self):
        self._write("WinRm enabled on the guest VM\n")

    def validate_vm_connection_started(self):
        self._write("\nValidating connection to vm...")

    def validate_vm_connection_succeeded(self):
        self._write("succeeded.\n")

    def extract_artifacts_started(self):
        self._write("\nExtracting artifacts...")

    def extract_artifacts_succeeded(self):
        self._write("succeeded.\n")

    def log_out_users_started(self):
        self._write("\nAttempting to logout any remote users...")

    def log_out_users_succeeded(self):
        self._write("Logged out remote users\n")

    def execute_script_started(self):
        self._write("\nExecuting setup script...\n")

    def execute_script_succeeded(self):
        self._write("\nFinished executing setup script.\n")

    def winrm_disconnected_for_reboot(self):
        self._write("\nWinRM has been disconnected so the VM can reboot. Waiting for the VM to shut down...\n")

    def restart_in_progress(self):
        self._write("\tStill preparing VM...\n")

    def shutdown_completed(self):
        self._write("\nVM has now been shutdown. Run 'stembuild package' to finish building the stemcell.\n")
