"""Shared domain models for trustlinker."""

from dataclasses import dataclass
from typing import Optional, Tuple

from trustlinker.errors import (
    InvalidRequestError,
    LinkFailureError,
    SourceResolutionError,
)
from trustlinker.errors_catalog import actionable_error

STATUS_SUCCESS = "success"
STATUS_INVALID_REQUEST = "invalid_request"
STATUS_SOURCE_RESOLUTION_FAILED = "source_resolution_failed"
STATUS_LINK_FAILED = "link_failed"


@dataclass(frozen=True)
class NetworkSet:
    """Ordered, immutable list of network identifiers for one execution mode."""

    mode: str
    networks: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.networks)

    def __iter__(self):
        return iter(self.networks)

    def __contains__(self, network) -> bool:
        return network in self.networks


@dataclass(frozen=True)
class PropagationRequest:
    """Caller input for one propagation run."""

    mode: str
    contract: Optional[str] = None
    local_contract: Optional[str] = None
    remote_contract: Optional[str] = None

    def validate(self):
        has_pair_part = bool(self.local_contract) or bool(self.remote_contract)
        if self.contract:
            if has_pair_part:
                raise InvalidRequestError(actionable_error("invalid_request"))
            return
        if not (self.local_contract and self.remote_contract):
            raise InvalidRequestError(actionable_error("invalid_request"))


@dataclass(frozen=True)
class LinkTask:
    """A single source -> target trust link to establish."""

    source_network: str
    target_network: str
    contract: Optional[str] = None
    local_contract: Optional[str] = None
    remote_contract: Optional[str] = None

    def __post_init__(self):
        if self.source_network == self.target_network:
            raise ValueError(
                f"A link needs two distinct networks, got {self.source_network!r} twice."
            )
        if not self.contract and not (self.local_contract and self.remote_contract):
            raise ValueError("A link needs a contract name or a local/remote contract pair.")

    @classmethod
    def from_request(cls, request: PropagationRequest, source: str, target: str) -> "LinkTask":
        if request.contract:
            return cls(source_network=source, target_network=target, contract=str(request.contract))
        return cls(
            source_network=source,
            target_network=target,
            local_contract=str(request.local_contract),
            remote_contract=str(request.remote_contract),
        )

    @property
    def pair(self) -> str:
        return f"{self.source_network} -> {self.target_network}"


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of one external link command."""

    exit_code: int
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class PropagationResult:
    """Overall outcome of a propagation run."""

    status: str
    attempted: int = 0
    planned: int = 0
    source_network: Optional[str] = None
    failed_task: Optional[LinkTask] = None
    last_result: Optional[InvocationResult] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS

    def raise_for_status(self):
        """Raise the matching TrustLinkerError when the run did not succeed."""
        if self.status == STATUS_INVALID_REQUEST:
            raise InvalidRequestError(self.message)
        if self.status == STATUS_SOURCE_RESOLUTION_FAILED:
            raise SourceResolutionError(self.message)
        if self.status == STATUS_LINK_FAILED:
            raise LinkFailureError(self.message, task=self.failed_task, result=self.last_result)
