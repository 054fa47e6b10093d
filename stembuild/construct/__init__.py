"""Construct library: guest preparation orchestrator and its helpers."""

from stembuild.construct.codec import decode_powershell_command, encode_powershell_command
from stembuild.construct.config import (
    ConstructConfig,
    load_config,
    resolve_config,
    validate_artifacts,
    validate_config,
)
from stembuild.construct.connection_validator import VMConnectionValidator
from stembuild.construct.messenger import Messenger
from stembuild.construct.orchestrate import VMConstruct
from stembuild.construct.poller import Poller
from stembuild.construct.winrm_enabler import WinRMEnabler

__all__ = [
    "encode_powershell_command",
    "decode_powershell_command",
    "ConstructConfig",
    "load_config",
    "resolve_config",
    "validate_artifacts",
    "validate_config",
    "VMConnectionValidator",
    "Messenger",
    "VMConstruct",
    "Poller",
    "WinRMEnabler",
]
