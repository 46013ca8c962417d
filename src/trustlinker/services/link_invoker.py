"""Builds and runs the external command that sets one trusted remote."""

import shlex
from typing import List, Optional, Sequence, Union

from trustlinker.constants import (
    DEFAULT_LINK_SUBCOMMAND,
    DEFAULT_TOOL,
    LAUNCH_FAILURE_EXIT_CODE,
)
from trustlinker.errors import ConfigurationError, TrustLinkerError
from trustlinker.models import InvocationResult, LinkTask


class LinkInvoker:
    """Translates a LinkTask into one command invocation.

    The runner only needs a ``run(cmd, timeout=None) -> int`` method, so tests
    can swap in a fake that returns scripted exit codes.
    """

    def __init__(
        self,
        runner,
        logger,
        tool: Union[str, Sequence[str]] = DEFAULT_TOOL,
        link_subcommand: str = DEFAULT_LINK_SUBCOMMAND,
        timeout: Optional[float] = None,
    ):
        self.runner = runner
        self.logger = logger
        if isinstance(tool, str):
            try:
                tool = shlex.split(tool)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid tool command line {tool!r}: {exc}") from exc
        self.tool = [str(part) for part in tool]
        if not self.tool:
            raise ConfigurationError("The tool command line must not be empty.")
        self.link_subcommand = link_subcommand
        self.timeout = timeout

    def build_command(self, task: LinkTask) -> List[str]:
        cmd = self.tool + [
            "--network",
            task.source_network,
            self.link_subcommand,
            "--target-network",
            task.target_network,
        ]
        if task.contract:
            cmd += ["--contract", task.contract]
        else:
            cmd += [
                "--local-contract",
                task.local_contract,
                "--remote-contract",
                task.remote_contract,
            ]
        return cmd

    def establish_link(self, task: LinkTask) -> InvocationResult:
        cmd = self.build_command(task)
        try:
            exit_code = self.runner.run(cmd, timeout=self.timeout)
        except TrustLinkerError as exc:
            self.logger.error("Could not run link command for %s: %s", task.pair, exc)
            return InvocationResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, error=str(exc))
        except Exception as exc:
            self.logger.exception("Unexpected error while linking %s", task.pair)
            return InvocationResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, error=str(exc))

        return InvocationResult(exit_code=exit_code)
