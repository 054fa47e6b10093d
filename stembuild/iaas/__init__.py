"""Hypervisor access: shell helper and the govc-backed vCenter client."""

from stembuild.iaas.shell import run_shell_cmd
from stembuild.iaas.vcenter import VCenterClient

__all__ = [
    "run_shell_cmd",
    "VCenterClient",
]
