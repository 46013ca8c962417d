"""Subprocess execution service for trustlinker."""

import shlex
import subprocess
from typing import List, Optional

from trustlinker.errors import TrustLinkerError


class CommandRunner:
    """Runs external commands synchronously and reports their exit code."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(self, cmd: List[str], timeout: Optional[float] = None) -> int:
        cmd_str = shlex.join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            result = subprocess.run(cmd, text=True, timeout=effective_timeout)
        except FileNotFoundError as exc:
            raise TrustLinkerError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise TrustLinkerError(
                f"Command timed out after {effective_timeout}s: {cmd_str}"
            ) from exc
        except Exception as exc:
            raise TrustLinkerError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if result.returncode != 0:
            self.logger.debug("Command exited with %s: %s", result.returncode, cmd_str)

        return result.returncode
