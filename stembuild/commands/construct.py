"""Construct command: prepare a vCenter Windows VM for stemcell packaging."""

import logging
import sys

from stembuild.construct.config import resolve_config, validate_artifacts, validate_config
from stembuild.construct.connection_validator import VMConnectionValidator
from stembuild.construct.messenger import Messenger
from stembuild.construct.orchestrate import VMConstruct
from stembuild.construct.poller import Poller
from stembuild.construct.winrm_enabler import WinRMEnabler
from stembuild.errors import ConfigError, IaasCliError, StembuildError
from stembuild.iaas.vcenter import VCenterClient
from stembuild.redact import register_secret
from stembuild.remote.winrm import WinRMRemoteManager
from stembuild.version import VersionGetter

logger = logging.getLogger(__name__)

INVALID_VM_PATH_MESSAGE = (
    "VM path is invalid\n"
    "Please make sure to format your inventory path correctly using the 'vm' keyword. "
    "Example: /my-datacenter/vm/my-folder/my-vm-name"
)


def validate_vcenter(client, config):
    """Check the vCenter URL, credentials and VM path before touching the guest."""
    try:
        client.validate_url()
    except IaasCliError as e:
        raise ConfigError("please provide a valid vCenter URL") from e

    try:
        client.validate_credentials()
    except IaasCliError as e:
        raise ConfigError(f"please provide valid credentials for {config.vcenter_url}") from e

    try:
        client.find_vm(config.vm_inventory_path)
    except IaasCliError as e:
        raise ConfigError(INVALID_VM_PATH_MESSAGE) from e


def build_vm_construct(config, client, out=None):
    """Wire the concrete govc and WinRM collaborators into a VMConstruct."""
    remote_manager = WinRMRemoteManager(config.vm_ip, config.vm_username, config.vm_password)
    return VMConstruct(
        remote_manager=remote_manager,
        client=client,
        vm_inventory_path=config.vm_inventory_path,
        vm_username=config.vm_username,
        vm_password=config.vm_password,
        winrm_enabler=WinRMEnabler(client, config.vm_inventory_path, config.vm_username, config.vm_password),
        vm_connection_validator=VMConnectionValidator(remote_manager),
        messenger=Messenger(out),
        poller=Poller(),
        version_getter=VersionGetter(),
    )


def handle_construct(args):
    """Handle the construct command."""
    try:
        config = resolve_config(args)
        register_secret(config.vm_password)
        register_secret(config.vcenter_password)

        validate_config(config)
        validate_artifacts()

        client = VCenterClient(
            config.vcenter_url,
            config.vcenter_username,
            config.vcenter_password,
            ca_cert_file=config.vcenter_ca_certs,
        )
        validate_vcenter(client, config)

        build_vm_construct(config, client).prepare_vm()
    except StembuildError as e:
        logger.error(str(e))
        sys.exit(1)


def register_construct_command(subparsers):
    """Register the construct subcommand."""
    parser = subparsers.add_parser(
        "construct",
        help="Transfer automation artifacts to a vCenter VM and prepare it for packaging",
    )
    parser.add_argument("--vm-ip", default=None, help="IP of the guest VM (default: $STEMBUILD_VM_IP)")
    parser.add_argument("--vm-username", default=None, help="Guest administrator username")
    parser.add_argument("--vm-password", default=None, help="Guest administrator password")
    parser.add_argument("--vcenter-url", default=None, help="vCenter URL")
    parser.add_argument("--vcenter-username", default=None, help="vCenter username")
    parser.add_argument("--vcenter-password", default=None, help="vCenter password")
    parser.add_argument(
        "--vm-inventory-path",
        default=None,
        help="vCenter inventory path of the VM, e.g. /my-datacenter/vm/my-folder/my-vm-name",
    )
    parser.add_argument("--vcenter-ca-certs", default=None, help="Path to a file of trusted vCenter CA certificates")
    parser.add_argument("--config", default=None, help="YAML file providing any of the parameters above")
    parser.set_defaults(func=handle_construct)
