"""CLI logging setup: simple %(message)s format for standalone commands."""

import logging
import sys

from stembuild.redact import SecretRedactingFilter


def setup_cli_logging(verbose=False):
    """Configure root logger with plain message format for CLI commands.

    Log output goes to stderr so it never interleaves with the construct
    progress messages on stdout. --verbose lowers the level to DEBUG, which
    includes every govc and WinRM command issued.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(SecretRedactingFilter())
    root.addHandler(handler)
