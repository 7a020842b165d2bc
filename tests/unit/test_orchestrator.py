# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Unit tests for TestOrchestrator.

The orchestrator is exercised against the in-memory FakeBackend; the
collected output lines stand in for the terminal.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from sol_test.core.constants import EIP170_CONTRACT_SIZE_LIMIT
from sol_test.core.errors import SetupError, TestsFailedError
from sol_test.core.types import TestVerdict
from sol_test.discovery.test_filter import TestFilter
from sol_test.execution.backend import BuildConfig, EnvOptions, FuzzConfig
from sol_test.orchestrator import TestOrchestrator
from sol_test.utils.terminal import terminal


def _orchestrator(
    backend: Any,
    lines: list[str],
    test_filter: TestFilter | None = None,
    **kwargs,
) -> TestOrchestrator:
    return TestOrchestrator(
        backend=backend,
        build_config=kwargs.pop("build_config", BuildConfig(root=Path("/project"))),
        env_options=kwargs.pop(
            "env_options", EnvOptions(initial_balance=1000, sender="0xabc")
        ),
        test_filter=test_filter or TestFilter(),
        echo=lines.append,
        **kwargs,
    )


class TestBuildRunner:
    """Tests for compiling and configuring the runner."""

    def test_compiles_project(self, fake_backend: Any) -> None:
        """The build configuration is handed to the backend."""
        build_config = BuildConfig(root=Path("/project"), compiler_version="0.8.17")

        _orchestrator(fake_backend, [], build_config=build_config).build_runner()

        assert fake_backend.compiled == [build_config]

    def test_runner_builder_settings(self, fake_backend: Any) -> None:
        """Sender, balance and fuzzer settings reach the runner builder."""
        fuzzer = FuzzConfig(runs=10, seed=7)
        env_options = EnvOptions(initial_balance=1000, sender="0xabc", verbosity=3)

        _orchestrator(
            fake_backend, [], env_options=env_options, fuzzer=fuzzer
        ).build_runner()

        builder, project, created_env = fake_backend.created[0]
        assert builder.sender == "0xabc"
        assert builder.initial_balance == 1000
        assert builder.fuzzer == fuzzer
        assert project == {"root": "/project"}
        assert created_env == env_options

    def test_contract_size_limit_lifted(self, fake_backend: Any) -> None:
        """Test contracts may exceed the deployed code size limit."""
        _orchestrator(fake_backend, []).build_runner()

        evm_cfg = fake_backend.created[0][0].evm_cfg
        assert evm_cfg.create_contract_limit is None
        assert evm_cfg.evm_version == "london"
        assert EIP170_CONTRACT_SIZE_LIMIT == 24576

    def test_default_fuzzer(self, fake_backend: Any) -> None:
        """Without explicit settings the default fuzzer configuration is used."""
        _orchestrator(fake_backend, []).build_runner()

        assert fake_backend.created[0][0].fuzzer == FuzzConfig()

    def test_setup_error_propagates(self, fake_backend: Any) -> None:
        """Backend failures are not wrapped or swallowed."""

        def failing_compile(build_config: BuildConfig) -> None:
            raise SetupError("compilation failed")

        fake_backend.compile = failing_compile  # type: ignore[method-assign]

        with pytest.raises(SetupError, match="compilation failed"):
            _orchestrator(fake_backend, []).run_tests()

    def test_unexpected_error_propagates(self, fake_backend: Any) -> None:
        """Errors outside the sol-test hierarchy propagate unchanged."""

        def failing_create(*args: object) -> None:
            raise RuntimeError("boom")

        fake_backend.create_runner = failing_create  # type: ignore[method-assign]

        with pytest.raises(RuntimeError, match="boom"):
            _orchestrator(fake_backend, []).run_tests()


class TestRunTests:
    """Tests for running and reporting."""

    def test_filter_passed_to_runner(self, fake_backend: Any) -> None:
        """The configured filter is used for test selection."""
        test_filter = TestFilter(contract_pattern="Vault")

        outcome = _orchestrator(fake_backend, [], test_filter).run_tests()

        assert fake_backend.runner.filters == [test_filter]
        assert list(outcome.results) == ["VaultTest"]

    def test_reports_human_readable(self, fake_backend: Any) -> None:
        """The human readable report is written through the echo sink."""
        lines: list[str] = []

        _orchestrator(fake_backend, lines).run_tests()

        plain = [terminal.strip_ansi(line) for line in lines]
        assert plain[0] == "Running 2 tests for CounterTest"
        assert "Running 2 tests for VaultTest" in plain

    def test_reports_json(self, fake_backend: Any) -> None:
        """JSON mode writes a single document."""
        lines: list[str] = []

        outcome = _orchestrator(fake_backend, lines, json_output=True).run_tests()

        assert len(lines) == 1
        assert json.loads(lines[0]) == outcome.to_dict()

    def test_failures_do_not_raise_from_run(self, fake_backend: Any) -> None:
        """Failing tests are reported; the caller decides via ensure_ok()."""
        outcome = _orchestrator(fake_backend, []).run_tests()

        assert [name for name, _ in outcome.failures()] == ["testWithdraw()"]
        with pytest.raises(TestsFailedError):
            outcome.ensure_ok()

    def test_allow_failure_applied_to_outcome(self, fake_backend: Any) -> None:
        """allow_failure is carried into the outcome."""
        outcome = _orchestrator(fake_backend, [], allow_failure=True).run_tests()

        assert outcome.allow_failure is True
        outcome.ensure_ok()

    def test_traces_use_runner_contracts(
        self,
        make_backend: Callable[..., Any],
        known_contracts: dict,
        counter_traces: list,
    ) -> None:
        """Traces are resolved against the runner's known contracts."""
        backend = make_backend(
            {
                "CounterTest": {
                    "testIncrement()": TestVerdict.standard(
                        False,
                        28334,
                        traces=counter_traces,
                        identified_contracts={counter_traces[0].address: "CounterTest"},
                    )
                }
            },
            known_contracts,
        )
        lines: list[str] = []

        _orchestrator(
            backend,
            lines,
            env_options=EnvOptions(initial_balance=0, sender="0xabc", verbosity=3),
        ).run_tests()

        assert "  [28334] CounterTest::testIncrement()" in lines
        assert "    ├─ [22418] Counter::increment()" in lines
