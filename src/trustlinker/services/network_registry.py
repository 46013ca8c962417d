"""Network registry service: validated network sets per execution mode."""

from typing import Iterable, Optional

from trustlinker.constants import CHAINS, PRODUCTION_MODE, TEST_CHAINS, TEST_MODE
from trustlinker.errors import ConfigurationError
from trustlinker.errors_catalog import actionable_error
from trustlinker.models import NetworkSet


def build_network_set(mode: str, networks: Iterable[str]) -> NetworkSet:
    items = tuple(str(network) for network in networks)
    if not items:
        raise ConfigurationError(actionable_error("empty_network_set", mode=mode))

    seen = set()
    duplicates = []
    for network in items:
        if network in seen and network not in duplicates:
            duplicates.append(network)
        seen.add(network)
    if duplicates:
        raise ConfigurationError(
            actionable_error("duplicate_networks", mode=mode, duplicates=", ".join(duplicates))
        )

    return NetworkSet(mode=mode, networks=items)


class NetworkRegistry:
    """Holds the test and production network sets."""

    def __init__(
        self,
        test_networks: Optional[Iterable[str]] = None,
        networks: Optional[Iterable[str]] = None,
    ):
        self.test_set = build_network_set(
            TEST_MODE, TEST_CHAINS if test_networks is None else test_networks
        )
        self.production_set = build_network_set(
            PRODUCTION_MODE, CHAINS if networks is None else networks
        )

    def select(self, mode: str) -> NetworkSet:
        if mode == TEST_MODE:
            return self.test_set
        return self.production_set
