# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Shared fixtures for unit tests.

Provides an in-memory execution backend: ``FakeBackend`` records what it was
asked to compile and build, and ``FakeRunner`` applies the test filter to a
canned result set the way a real runner does.
"""

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from sol_test.core.types import FuzzCase, TestVerdict
from sol_test.discovery.test_filter import TestFilter
from sol_test.execution.backend import BuildConfig, EnvOptions, RunnerBuilder
from sol_test.execution.traces import CallTrace, ContractArtifact

COUNTER_TEST_ADDRESS = "0xb4c79dab8f259c7aee6e5b2aa729821864227e84"
COUNTER_ADDRESS = "0xce71065d4017f316ec606fe4422e11eb2c47c246"


class FakeRunner:
    """Runner returning canned verdicts for the tests accepted by the filter."""

    def __init__(
        self,
        results: Mapping[str, Mapping[str, TestVerdict]],
        known_contracts: Mapping[str, ContractArtifact] | None = None,
    ) -> None:
        self.results = results
        self.known_contracts = known_contracts or {}
        self.filters: list[TestFilter] = []

    def test(self, test_filter: TestFilter) -> dict[str, dict[str, TestVerdict]]:
        self.filters.append(test_filter)
        selected = {}
        for contract_name, tests in self.results.items():
            if not test_filter.matches_contract(contract_name):
                continue
            matching = {
                name: result
                for name, result in tests.items()
                if test_filter.matches_test(name)
            }
            if matching:
                selected[contract_name] = matching
        return selected


class FakeBackend:
    """Backend handing out a prepared runner."""

    def __init__(self, runner: FakeRunner) -> None:
        self.runner = runner
        self.compiled: list[BuildConfig] = []
        self.created: list[tuple[RunnerBuilder, Any, EnvOptions]] = []

    def compile(self, build_config: BuildConfig) -> dict[str, str]:
        self.compiled.append(build_config)
        return {"root": str(build_config.root)}

    def create_runner(
        self, builder: RunnerBuilder, project: Any, env_options: EnvOptions
    ) -> FakeRunner:
        self.created.append((builder, project, env_options))
        return self.runner


@pytest.fixture
def known_contracts() -> dict[str, ContractArtifact]:
    """Artifacts of a small counter project."""
    return {
        "CounterTest": ContractArtifact(
            name="CounterTest",
            functions={
                "0a9254e4": "setUp()",
                "0xd09de08a": "testIncrement()",
            },
        ),
        "Counter": ContractArtifact(
            name="Counter",
            runtime_code="0x6080604052",
            functions={"d09de08a": "increment()"},
        ),
    }


@pytest.fixture
def counter_traces() -> list[CallTrace]:
    """Setup call deploying Counter, followed by the test call."""
    setup = CallTrace(
        address=COUNTER_TEST_ADDRESS,
        data="0x0a9254e4",
        gas_cost=52000,
        children=[
            CallTrace(
                address=COUNTER_ADDRESS,
                output="0x6080604052",
                gas_cost=43000,
                created=True,
            )
        ],
    )
    test_call = CallTrace(
        address=COUNTER_TEST_ADDRESS,
        data="0xd09de08a",
        gas_cost=28334,
        children=[
            CallTrace(address=COUNTER_ADDRESS, data="0xd09de08a", gas_cost=22418)
        ],
    )
    return [setup, test_call]


@pytest.fixture
def mixed_results() -> dict[str, dict[str, TestVerdict]]:
    """Two contracts with passing, failing and fuzz tests."""
    return {
        "VaultTest": {
            "testWithdraw()": TestVerdict.standard(
                False, 31000, reason="Insufficient balance"
            ),
            "testDeposit()": TestVerdict.standard(True, 45000),
        },
        "CounterTest": {
            "testIncrement()": TestVerdict.standard(True, 28334),
            "testFuzzSet(uint256)": TestVerdict.fuzz(
                True, [FuzzCase("0x01", 100), FuzzCase("0x02", 300)]
            ),
        },
    }


@pytest.fixture
def fake_runner(mixed_results: dict[str, dict[str, TestVerdict]]) -> FakeRunner:
    return FakeRunner(mixed_results)


@pytest.fixture
def fake_backend(fake_runner: FakeRunner) -> FakeBackend:
    return FakeBackend(fake_runner)


@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    """Factory for backends running a custom result set."""

    def _make(
        results: Mapping[str, Mapping[str, TestVerdict]],
        known_contracts: Mapping[str, ContractArtifact] | None = None,
    ) -> FakeBackend:
        return FakeBackend(FakeRunner(results, known_contracts))

    return _make
