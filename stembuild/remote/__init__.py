"""Remote access to the guest over WinRM."""

from stembuild.remote.winrm import WinRMRemoteManager

__all__ = [
    "WinRMRemoteManager",
]
