"""Exception types raised while constructing a stemcell VM."""


class StembuildError(RuntimeError):
    """Base exception for stembuild failures."""


class ConfigError(StembuildError):
    """Raised when construct parameters are missing or invalid."""


class IaasCliError(StembuildError):
    """Raised when a govc invocation exits non-zero."""


class PowershellExecutionError(StembuildError):
    """Raised when a command run over WinRM fails or exits non-zero."""

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        self.exit_code = exit_code


class GuestProcessError(StembuildError):
    """Raised when a process started in the guest exits non-zero."""

    def __init__(self, exit_code):
        super().__init__(f"WinRM process on guest VM exited with code {exit_code}")
        self.exit_code = exit_code


class WinRMEnableError(StembuildError):
    """Raised when WinRM could not be enabled on the guest."""


class ConnectionValidationError(StembuildError):
    """Raised when the guest cannot be reached or logged into over WinRM."""


class LogoutError(StembuildError):
    """Raised when interactive users could not be logged out of the guest."""
