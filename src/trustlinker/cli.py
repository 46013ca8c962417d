import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_LINK_SUBCOMMAND, DEFAULT_SOURCE_INDEX, DEFAULT_TOOL, PRODUCTION_MODE
from .core import TrustPropagator, TrustLinkerError
from .models import PropagationRequest
from .services.config_loader import ConfigLoader
from .services.network_registry import NetworkRegistry


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _optional_str(value):
    if value is None:
        return None
    return str(value)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--task",
    required=False,
    help="Network set to use: `test` for testnets, anything else for production.",
)
@click.option("--contract", required=False, help="Contract name shared by both ends of every link.")
@click.option(
    "--local-contract",
    required=False,
    help="Contract name on the source network (use with --remote-contract).",
)
@click.option(
    "--remote-contract",
    required=False,
    help="Contract name on the target networks (use with --local-contract).",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .trustlinker.yml if present.",
)
@click.option(
    "--source-index",
    required=False,
    type=int,
    default=None,
    help=f"Position of the source network in the network set (default: {DEFAULT_SOURCE_INDEX}).",
)
@click.option(
    "--source-network",
    required=False,
    help="Source network name. Takes precedence over --source-index.",
)
@click.option(
    "--tool",
    required=False,
    help=f"Command line of the tool that sets one trusted remote (default: {DEFAULT_TOOL}).",
)
@click.option(
    "--link-subcommand",
    required=False,
    help=f"Tool subcommand that sets one trusted remote (default: {DEFAULT_LINK_SUBCOMMAND}).",
)
@click.option(
    "--command-timeout",
    required=False,
    type=float,
    default=None,
    help="Timeout in seconds for each link command. No timeout by default.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Print the link commands without running them.",
)
def main(
    task,
    contract,
    local_contract,
    remote_contract,
    config,
    source_index,
    source_network,
    tool,
    link_subcommand,
    command_timeout,
    verbose,
    log_file,
    dry_run,
):
    """Set trusted remotes from one source network to every other network."""
    logger = logging.getLogger("trustlinker")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), ".trustlinker.yml")
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except TrustLinkerError as exc:
        raise click.ClickException(str(exc)) from exc

    task = str(_resolve_option(task, config_values, "task", default=PRODUCTION_MODE))
    contract = _optional_str(_resolve_option(contract, config_values, "contract"))
    local_contract = _optional_str(_resolve_option(local_contract, config_values, "local_contract"))
    remote_contract = _optional_str(
        _resolve_option(remote_contract, config_values, "remote_contract")
    )
    source_index = int(
        _resolve_option(source_index, config_values, "source_index", default=DEFAULT_SOURCE_INDEX)
    )
    source_network = _optional_str(_resolve_option(source_network, config_values, "source_network"))
    tool = _resolve_option(tool, config_values, "tool", default=DEFAULT_TOOL)
    if not isinstance(tool, list):
        tool = str(tool)
    link_subcommand = str(
        _resolve_option(
            link_subcommand, config_values, "link_subcommand", default=DEFAULT_LINK_SUBCOMMAND
        )
    )
    command_timeout = _resolve_option(command_timeout, config_values, "command_timeout")
    if command_timeout is not None:
        command_timeout = float(command_timeout)
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    dry_run = bool(_resolve_option(dry_run, config_values, "dry_run", default=False))

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        registry = NetworkRegistry(
            test_networks=config_values.get("test_networks"),
            networks=config_values.get("networks"),
        )
        propagator = TrustPropagator(
            registry=registry,
            source_index=source_index,
            source_network=source_network,
            tool=tool,
            link_subcommand=link_subcommand,
            command_timeout=command_timeout,
            dry_run=dry_run,
        )
    except TrustLinkerError as exc:
        raise click.ClickException(str(exc)) from exc

    request = PropagationRequest(
        mode=task,
        contract=contract,
        local_contract=local_contract,
        remote_contract=remote_contract,
    )
    raise SystemExit(propagator.run(request))


if __name__ == "__main__":
    main()
