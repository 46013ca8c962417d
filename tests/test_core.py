import pytest

from trustlinker.constants import EXIT_FAILURE, EXIT_SUCCESS, EXIT_USAGE_ERROR
from trustlinker.core import TrustPropagator
from trustlinker.models import (
    STATUS_INVALID_REQUEST,
    STATUS_LINK_FAILED,
    STATUS_SOURCE_RESOLUTION_FAILED,
    STATUS_SUCCESS,
    InvocationResult,
    PropagationRequest,
)
from trustlinker.services.link_invoker import LinkInvoker
from trustlinker.services.network_registry import NetworkRegistry


class DummyLogger:
    def error(self, *_args, **_kwargs):
        return None

    def exception(self, *_args, **_kwargs):
        return None


class ScriptedInvoker:
    """Records link tasks and answers with scripted exit codes per target."""

    def __init__(self, exit_codes=None):
        self.exit_codes = exit_codes or {}
        self.builder = LinkInvoker(runner=None, logger=DummyLogger(), tool="hardhat")
        self.tasks = []

    def build_command(self, task):
        return self.builder.build_command(task)

    def establish_link(self, task):
        self.tasks.append(task)
        return InvocationResult(exit_code=self.exit_codes.get(task.target_network, 0))

    @property
    def pairs(self):
        return [(task.source_network, task.target_network, task.contract) for task in self.tasks]


def build_propagator(networks, invoker, **kwargs):
    registry = NetworkRegistry(test_networks=["t0", "t1", "t2"], networks=networks)
    return TrustPropagator(registry=registry, invoker=invoker, **kwargs)


def test_links_source_to_every_other_network_in_registry_order():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C", "D"], invoker, source_index=3)

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_SUCCESS
    assert result.succeeded is True
    assert result.attempted == 3
    assert result.source_network == "D"
    assert invoker.pairs == [("D", "A", "X"), ("D", "B", "X"), ("D", "C", "X")]


def test_first_failure_halts_propagation():
    invoker = ScriptedInvoker(exit_codes={"B": 1})
    propagator = build_propagator(["A", "B", "C", "D"], invoker, source_index=3)

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_LINK_FAILED
    assert invoker.pairs == [("D", "A", "X"), ("D", "B", "X")]
    assert result.attempted == 2
    assert (result.failed_task.source_network, result.failed_task.target_network) == ("D", "B")
    assert result.last_result.exit_code == 1
    assert "from D to B failed" in result.message


def test_single_network_set_is_a_successful_no_op():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["solo"], invoker, source_index=0)

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_SUCCESS
    assert result.attempted == 0
    assert invoker.tasks == []


def test_source_is_never_linked_to_itself():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C"], invoker, source_index=1)

    propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert [task.target_network for task in invoker.tasks] == ["A", "C"]
    assert all(task.source_network == "B" for task in invoker.tasks)


@pytest.mark.parametrize(
    "request_kwargs",
    [
        {},
        {"local_contract": "L"},
        {"remote_contract": "R"},
        {"contract": "X", "local_contract": "L", "remote_contract": "R"},
        {"contract": "X", "remote_contract": "R"},
    ],
)
def test_invalid_contract_names_perform_no_invocation(request_kwargs):
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C", "D"], invoker)

    result = propagator.propagate(PropagationRequest(mode="production", **request_kwargs))

    assert result.status == STATUS_INVALID_REQUEST
    assert invoker.tasks == []
    assert "Suggested action" in result.message


def test_local_and_remote_contract_pair_is_passed_through():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B"], invoker, source_index=0)

    result = propagator.propagate(
        PropagationRequest(mode="production", local_contract="ProxyOFT", remote_contract="OFT")
    )

    assert result.succeeded is True
    task = invoker.tasks[0]
    assert task.contract is None
    assert (task.local_contract, task.remote_contract) == ("ProxyOFT", "OFT")


def test_test_mode_selects_test_networks():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C", "D"], invoker, source_index=0)

    propagator.propagate(PropagationRequest(mode="test", contract="X"))

    assert [task.target_network for task in invoker.tasks] == ["t1", "t2"]


@pytest.mark.parametrize("source_index", [3, 7, -1])
def test_source_index_out_of_range_attempts_no_links(source_index):
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C"], invoker, source_index=source_index)

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_SOURCE_RESOLUTION_FAILED
    assert invoker.tasks == []
    assert "out of range" in result.message


def test_source_network_takes_precedence_over_index():
    invoker = ScriptedInvoker()
    propagator = build_propagator(
        ["A", "B", "C", "D"], invoker, source_index=3, source_network="B"
    )

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.source_network == "B"
    assert [task.target_network for task in invoker.tasks] == ["A", "C", "D"]


def test_unknown_source_network_attempts_no_links():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B"], invoker, source_network="Z")

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_SOURCE_RESOLUTION_FAILED
    assert invoker.tasks == []


def test_dry_run_plans_links_without_invoking():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B", "C", "D"], invoker, source_index=3, dry_run=True)

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.succeeded is True
    assert result.planned == 3
    assert result.attempted == 0
    assert invoker.tasks == []


def test_progress_lines_name_the_pair_and_command(caplog):
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B"], invoker, source_index=1)

    with caplog.at_level("INFO", logger="trustlinker"):
        propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert "setTrustRemote between B to A" in caplog.text
    assert (
        "Command: hardhat --network B setTrustedRemote --target-network A --contract X"
        in caplog.text
    )


def test_run_maps_results_to_exit_codes():
    ok = build_propagator(["A", "B"], ScriptedInvoker(), source_index=0)
    failing = build_propagator(["A", "B"], ScriptedInvoker(exit_codes={"B": 2}), source_index=0)

    assert ok.run(PropagationRequest(mode="production", contract="X")) == EXIT_SUCCESS
    assert failing.run(PropagationRequest(mode="production", contract="X")) == EXIT_FAILURE
    assert ok.run(PropagationRequest(mode="production")) == EXIT_USAGE_ERROR


def test_default_invoker_treats_missing_tool_as_link_failure():
    registry = NetworkRegistry(networks=["A", "B", "C"])
    propagator = TrustPropagator(
        registry=registry,
        source_index=0,
        tool="trustlinker-tool-that-does-not-exist",
    )

    result = propagator.propagate(PropagationRequest(mode="production", contract="X"))

    assert result.status == STATUS_LINK_FAILED
    assert result.attempted == 1
    assert result.failed_task.target_network == "B"
    assert "Required command not found" in result.last_result.error


def test_progress_line_quotes_arguments_like_the_command_that_runs(caplog):
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B"], invoker, source_index=0)

    with caplog.at_level("INFO", logger="trustlinker"):
        propagator.propagate(PropagationRequest(mode="production", contract="My Token"))

    assert "--target-network B --contract 'My Token'" in caplog.text


def test_numeric_contract_name_is_passed_as_text():
    invoker = ScriptedInvoker()
    propagator = build_propagator(["A", "B"], invoker, source_index=0)

    result = propagator.propagate(PropagationRequest(mode="production", contract=2024))

    assert result.succeeded is True
    assert invoker.tasks[0].contract == "2024"


def test_run_returns_failure_when_source_cannot_be_resolved():
    propagator = build_propagator(["A", "B"], ScriptedInvoker(), source_index=5)

    assert propagator.run(PropagationRequest(mode="production", contract="X")) == EXIT_FAILURE


def test_run_reports_failed_pair(capsys):
    propagator = build_propagator(
        ["A", "B", "C"], ScriptedInvoker(exit_codes={"C": 1}), source_index=0
    )

    exit_code = propagator.run(PropagationRequest(mode="production", contract="X"))

    assert exit_code == EXIT_FAILURE
    assert "Stopped at A -> C after 1 successful link(s)." in capsys.readouterr().out
