import logging
import shlex
from typing import Optional

from rich.console import Console

from .constants import (
    DEFAULT_LINK_SUBCOMMAND,
    DEFAULT_SOURCE_INDEX,
    DEFAULT_TOOL,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
)
from .errors import (
    InvalidRequestError,
    LinkFailureError,
    SourceResolutionError,
    TrustLinkerError,
)
from .errors_catalog import actionable_error
from .models import (
    STATUS_INVALID_REQUEST,
    STATUS_LINK_FAILED,
    STATUS_SOURCE_RESOLUTION_FAILED,
    STATUS_SUCCESS,
    LinkTask,
    NetworkSet,
    PropagationRequest,
    PropagationResult,
)
from .services.command_runner import CommandRunner
from .services.link_invoker import LinkInvoker
from .services.network_registry import NetworkRegistry

console = Console()
logger = logging.getLogger("trustlinker")


class TrustPropagator:
    """Sets trusted remotes from one source network to every other network.

    Links are established one at a time in registry order. The run stops at
    the first failed link, since a broken link usually means a bad address or
    an unreachable endpoint that every later link would hit as well.
    """

    def __init__(
        self,
        registry: Optional[NetworkRegistry] = None,
        invoker: Optional[LinkInvoker] = None,
        source_index: int = DEFAULT_SOURCE_INDEX,
        source_network: Optional[str] = None,
        tool: str = DEFAULT_TOOL,
        link_subcommand: str = DEFAULT_LINK_SUBCOMMAND,
        command_timeout: Optional[float] = None,
        dry_run: bool = False,
    ):
        self.registry = registry or NetworkRegistry()
        self.invoker = invoker or LinkInvoker(
            runner=CommandRunner(logger=logger),
            logger=logger,
            tool=tool,
            link_subcommand=link_subcommand,
            timeout=command_timeout,
        )
        self.source_index = source_index
        self.source_network = source_network
        self.dry_run = dry_run

    def resolve_source(self, network_set: NetworkSet) -> str:
        if self.source_network is not None:
            if self.source_network not in network_set:
                raise SourceResolutionError(
                    actionable_error(
                        "source_not_in_set",
                        network=self.source_network,
                        mode=network_set.mode,
                        networks=", ".join(network_set),
                    )
                )
            return self.source_network

        # Negative indexes are rejected instead of counting from the end.
        if not 0 <= self.source_index < len(network_set):
            raise SourceResolutionError(
                actionable_error(
                    "source_index_out_of_range",
                    index=self.source_index,
                    mode=network_set.mode,
                    size=len(network_set),
                    last_index=len(network_set) - 1,
                )
            )
        return network_set.networks[self.source_index]

    def propagate(self, request: PropagationRequest) -> PropagationResult:
        try:
            request.validate()
        except InvalidRequestError as exc:
            logger.error(str(exc))
            return PropagationResult(status=STATUS_INVALID_REQUEST, message=str(exc))

        network_set = self.registry.select(request.mode)

        try:
            source = self.resolve_source(network_set)
        except SourceResolutionError as exc:
            logger.error(str(exc))
            return PropagationResult(status=STATUS_SOURCE_RESOLUTION_FAILED, message=str(exc))

        logger.info(
            "Propagating trusted remotes from %s across %s %s networks.",
            source,
            len(network_set),
            network_set.mode,
        )

        attempted = 0
        planned = 0
        last_result = None

        for target in network_set:
            if target == source:
                continue

            task = LinkTask.from_request(request, source, target)
            command = shlex.join(self.invoker.build_command(task))
            logger.info("setTrustRemote between %s to %s", source, target)
            logger.info("   Command: %s", command)
            planned += 1

            if self.dry_run:
                continue

            attempted += 1
            last_result = self.invoker.establish_link(task)
            if not last_result.succeeded:
                message = actionable_error(
                    "link_failed",
                    source=source,
                    target=target,
                    exit_code=last_result.exit_code,
                )
                if last_result.error:
                    message = f"{message} ({last_result.error})"
                logger.error(message)
                return PropagationResult(
                    status=STATUS_LINK_FAILED,
                    attempted=attempted,
                    planned=planned,
                    source_network=source,
                    failed_task=task,
                    last_result=last_result,
                    message=message,
                )

        return PropagationResult(
            status=STATUS_SUCCESS,
            attempted=attempted,
            planned=planned,
            source_network=source,
            last_result=last_result,
        )

    def run(self, request: PropagationRequest) -> int:
        try:
            result = self.propagate(request)
            result.raise_for_status()
        except KeyboardInterrupt:
            console.print("[bold red]Propagation cancelled by user.[/bold red]")
            logger.info("Propagation cancelled by user")
            return EXIT_FAILURE
        except InvalidRequestError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            return EXIT_USAGE_ERROR
        except LinkFailureError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            console.print(
                f"[dim]Stopped at {exc.task.pair} after {result.attempted - 1} "
                f"successful link(s).[/dim]"
            )
            return EXIT_FAILURE
        except TrustLinkerError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            return EXIT_FAILURE

        if self.dry_run:
            console.print(
                f"[yellow]Dry run: {result.planned} link(s) planned from "
                f"{result.source_network}, none executed.[/yellow]"
            )
        else:
            console.print(
                f"[green]Trusted remotes set from {result.source_network} "
                f"to {result.attempted} network(s).[/green]"
            )
        return EXIT_SUCCESS
