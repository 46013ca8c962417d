"""Actionable error catalog for trustlinker."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "invalid_request": {
        "what": "Must pass in contract name OR pass in both localContract name and remoteContract name.",
        "next": "Use `--contract NAME`, or `--local-contract NAME --remote-contract NAME`, but not both.",
    },
    "source_index_out_of_range": {
        "what": "Source index {index} is out of range for the {mode} network set ({size} networks).",
        "next": "Choose a `--source-index` between 0 and {last_index}, or use `--source-network`.",
    },
    "source_not_in_set": {
        "what": "Source network '{network}' is not part of the {mode} network set.",
        "next": "Pick one of: {networks}.",
    },
    "link_failed": {
        "what": "Setting trusted remote from {source} to {target} failed (exit code {exit_code}).",
        "next": "Check the contract deployment and RPC endpoint for {target}, then re-run the propagation.",
    },
    "empty_network_set": {
        "what": "The {mode} network set is empty.",
        "next": "Declare at least one network for this mode in the configuration file.",
    },
    "duplicate_networks": {
        "what": "The {mode} network set lists duplicate networks: {duplicates}.",
        "next": "Remove the repeated entries from the configuration file.",
    },
}


def actionable_error(code: str, **kwargs) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
