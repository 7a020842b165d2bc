# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Orchestrates a test run: build the runner, run selected tests, report."""

import logging

import typer

from sol_test.core.types import TestOutcome
from sol_test.discovery.test_filter import TestFilter
from sol_test.execution.backend import (
    BuildConfig,
    ContractRunner,
    EnvOptions,
    EvmConfig,
    ExecutionBackend,
    FuzzConfig,
    RunnerBuilder,
)
from sol_test.execution.traces import default_environment
from sol_test.reporting.reporter import Echo, report

logger = logging.getLogger(__name__)


class TestOrchestrator:
    """Lightweight coordinator between the execution backend and reporting.

    Compilation and execution are delegated to the backend. Errors raised
    while compiling or building the runner propagate unchanged.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        backend: ExecutionBackend,
        build_config: BuildConfig,
        env_options: EnvOptions,
        test_filter: TestFilter,
        json_output: bool = False,
        allow_failure: bool = False,
        fuzzer: FuzzConfig | None = None,
        echo: Echo = typer.echo,
    ):
        """Initialize the orchestrator.

        Args:
            backend: Execution backend compiling and running the project.
            build_config: Project location and compiler settings.
            env_options: Execution environment options and verbosity tier.
            test_filter: Selects the contracts and tests to run.
            json_output: Report as JSON instead of human readable text.
            allow_failure: Failing tests do not fail the run.
            fuzzer: Fuzzer settings, defaults if None.
            echo: Output sink for the report.
        """
        self.backend = backend
        self.build_config = build_config
        self.env_options = env_options
        self.test_filter = test_filter
        self.json_output = json_output
        self.allow_failure = allow_failure
        self.fuzzer = fuzzer or FuzzConfig()
        self.echo = echo

    def build_runner(self) -> ContractRunner:
        """Compile the project and create a runner for it."""
        project = self.backend.compile(self.build_config)

        evm_cfg = EvmConfig.for_version(self.build_config.evm_version).uncapped()
        builder = RunnerBuilder(
            fuzzer=self.fuzzer,
            initial_balance=self.env_options.initial_balance,
            sender=self.env_options.sender,
            evm_cfg=evm_cfg,
        )
        return builder.build(self.backend, project, self.env_options)

    def run_tests(self) -> TestOutcome:
        """Run all selected tests and report them.

        Returns:
            The outcome of the run. Callers decide the exit status with
            ``TestOutcome.ensure_ok()``.
        """
        runner = self.build_runner()

        logger.info("Running tests with %r", self.test_filter)
        results = runner.test(self.test_filter)

        outcome = TestOutcome(results, allow_failure=self.allow_failure)
        logger.info(
            "Finished %d tests in %d contracts", len(outcome), len(outcome.results)
        )

        report(
            outcome,
            json_output=self.json_output,
            verbosity=self.env_options.verbosity,
            known_contracts=runner.known_contracts,
            env=default_environment(),
            echo=self.echo,
        )
        return outcome
