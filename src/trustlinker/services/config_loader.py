"""Configuration loader for trustlinker."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from trustlinker.errors import ConfigurationError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "task",
        "contract",
        "local_contract",
        "remote_contract",
        "source_index",
        "source_network",
        "tool",
        "link_subcommand",
        "command_timeout",
        "networks",
        "test_networks",
        "verbose",
        "log_file",
        "dry_run",
    }

    LIST_KEYS = ("networks", "test_networks")

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ConfigurationError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ConfigurationError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise ConfigurationError(f"Unknown configuration keys: {unknown_list}")

        for key in self.LIST_KEYS:
            if key in parsed and not isinstance(parsed[key], list):
                raise ConfigurationError(f"Configuration key '{key}' must be a list of network names.")

        return parsed
