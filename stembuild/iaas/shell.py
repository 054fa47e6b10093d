"""Shell command execution helper."""

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def run_shell_cmd(command, env=None, timeout=None):
    """Run a command and return (returncode, stdout, stderr).

    Args:
        command: list of command arguments
        env: extra environment variables layered over os.environ
        timeout: maximum seconds to wait, None to wait forever

    Returns:
        (returncode, stdout, stderr) tuple
    """
    full_env = None
    if env:
        full_env = os.environ.copy()
        full_env.update(env)

    logger.debug(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(command, capture_output=True, text=True, env=full_env, timeout=timeout)
        return result.returncode, result.stdout, result.stderr
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {' '.join(command)}")
        return 1, "", f"timed out after {timeout}s"
    except FileNotFoundError:
        logger.error(f"Error: '{command[0]}' not found. Is it installed and on PATH?")
        return 1, "", f"'{command[0]}' not found"
