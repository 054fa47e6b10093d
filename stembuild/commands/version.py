"""Version command."""

import logging

from stembuild.version import VersionGetter

logger = logging.getLogger(__name__)


def handle_version(args):
    logger.info(f"stembuild version {VersionGetter().get_version()}")


def register_version_command(subparsers):
    """Register the version subcommand."""
    parser = subparsers.add_parser("version", help="Show the stembuild version")
    parser.set_defaults(func=handle_version)
