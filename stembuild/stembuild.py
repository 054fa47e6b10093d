#!/usr/bin/env python3
"""Stemcell build tools: CLI entrypoint."""

import argparse

from stembuild.commands.construct import register_construct_command
from stembuild.commands.version import register_version_command
from stembuild.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(description="Build BOSH Windows stemcells from vCenter VMs")
    parser.add_argument("--verbose", action="store_true", help="Log every govc and WinRM command")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_construct_command(subparsers)
    register_version_command(subparsers)

    args = parser.parse_args()
    setup_cli_logging(verbose=args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
