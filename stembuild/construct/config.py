"""Construct parameters: loading, precedence and validation."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from stembuild.construct.orchestrate import LGPO_NAME, STEMCELL_AUTOMATION_NAME
from stembuild.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "STEMBUILD_"

REQUIRED_FIELDS = [
    "vm_ip",
    "vm_username",
    "vm_password",
    "vcenter_url",
    "vcenter_username",
    "vcenter_password",
    "vm_inventory_path",
]


@dataclass
class ConstructConfig:
    """Everything `stembuild construct` needs to reach the guest and vCenter."""

    vm_ip: str = ""
    vm_username: str = ""
    vm_password: str = ""
    vcenter_url: str = ""
    vcenter_username: str = ""
    vcenter_password: str = ""
    vm_inventory_path: str = ""
    vcenter_ca_certs: str | None = None


def load_config(config_path: str) -> dict:
    """Load construct parameters from a YAML mapping."""
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file '{config_path}' not found.")
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML config: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping.")

    known = {f.name for f in fields(ConstructConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in '{config_path}': {', '.join(unknown)}")
    return data


def resolve_config(args, environ=None) -> ConstructConfig:
    """Merge CLI flags over STEMBUILD_* environment variables over the YAML file.

    Args:
        args: argparse namespace; attributes named after ConstructConfig fields,
            plus an optional ``config`` path.
        environ: mapping used instead of os.environ (tests).
    """
    environ = os.environ if environ is None else environ

    values = {}
    config_path = getattr(args, "config", None)
    if config_path:
        values.update(load_config(config_path))

    for f in fields(ConstructConfig):
        env_value = environ.get(ENV_PREFIX + f.name.upper())
        if env_value:
            values[f.name] = env_value
        flag_value = getattr(args, f.name, None)
        if flag_value:
            values[f.name] = flag_value

    return ConstructConfig(**values)


def validate_config(config: ConstructConfig) -> None:
    """Raise ConfigError naming every required parameter that is empty."""
    missing = [name for name in REQUIRED_FIELDS if not getattr(config, name)]
    if missing:
        flags = ", ".join("--" + name.replace("_", "-") for name in missing)
        raise ConfigError(f"missing required parameters: {flags}")

    if config.vcenter_ca_certs and not os.path.isfile(config.vcenter_ca_certs):
        raise ConfigError(f"cannot read the vCenter CA certificate file: {config.vcenter_ca_certs}")


def validate_artifacts(directory: str = ".") -> None:
    """Both upload artifacts must sit in the working directory."""
    for name in (LGPO_NAME, STEMCELL_AUTOMATION_NAME):
        if not os.path.isfile(os.path.join(directory, name)):
            raise ConfigError(f"Could not find {name} in the current directory")
    logger.debug(f"Found {LGPO_NAME} and {STEMCELL_AUTOMATION_NAME} in {os.path.abspath(directory)}")
