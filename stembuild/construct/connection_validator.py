"""Check the guest is reachable and accepts our credentials over WinRM."""

import logging

from stembuild.errors import ConnectionValidationError

logger = logging.getLogger(__name__)


class VMConnectionValidator:
    def __init__(self, remote_manager):
        self.remote_manager = remote_manager

    def validate(self):
        try:
            self.remote_manager.can_reach_vm()
        except Exception as e:
            raise ConnectionValidationError(f"cannot complete connection to VM: {e}") from e
        logger.debug("WinRM port is reachable")

        try:
            self.remote_manager.can_login_vm()
        except Exception as e:
            raise ConnectionValidationError(f"cannot log in to VM: {e}") from e
        logger.debug("WinRM login succeeded")
