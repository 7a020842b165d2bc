# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Rendering of a TestOutcome to stdout.

Two formats are supported:

    - JSON: the whole outcome as one document on a single line.
    - Human readable: one block per contract, one status line per test,
      followed by logs and traces depending on the verbosity tier.

Example of the human readable format at verbosity 2::

    Running 2 tests for CounterTest
    [PASS] testIncrement() (gas: 28334)
    Logs:
      count is 1

    [FAIL. Reason: Assertion violated] testSetNumber(uint256) (runs: 3, μ: 1, ~: 1)
"""

import json
import logging
from collections.abc import Callable, Mapping

import typer

from sol_test.core.types import TestOutcome, TestVerdict
from sol_test.execution.traces import (
    ContractArtifact,
    ExecutionEnvironment,
    default_environment,
)
from sol_test.reporting.plan import TraceDepth, plan_rendering
from sol_test.reporting.status import format_status

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class JsonReporter:
    """Writes the complete outcome as a single JSON line."""

    def __init__(self, echo: Echo = typer.echo) -> None:
        self.echo = echo

    def report(self, outcome: TestOutcome) -> None:
        self.echo(json.dumps(outcome.to_dict()))


class HumanReporter:
    """Writes per-test lines, logs and traces, gated by verbosity.

    Attributes:
        verbosity: Verbosity tier.
        known_contracts: Compiled artifact registry used to name trace calls.
        env: Execution environment used to label well-known addresses.
    """

    def __init__(
        self,
        verbosity: int = 0,
        known_contracts: Mapping[str, ContractArtifact] | None = None,
        env: ExecutionEnvironment | None = None,
        echo: Echo = typer.echo,
    ) -> None:
        self.verbosity = verbosity
        self.known_contracts = known_contracts or {}
        self.env = env or default_environment()
        self.echo = echo

    def report(self, outcome: TestOutcome) -> None:
        for i, (contract_name, tests) in enumerate(outcome.results.items()):
            if i > 0:
                self.echo("")
            if tests:
                term = "tests" if len(tests) > 1 else "test"
                self.echo(f"Running {len(tests)} {term} for {contract_name}")

            for name, result in tests.items():
                self.report_test(name, result)

    def report_test(self, name: str, result: TestVerdict) -> None:
        """Write the status line and diagnostic sections of one test."""
        self.echo(f"{format_status(result)} {name} {result.kind.gas_used()}")

        plan = plan_rendering(
            self.verbosity,
            result.success,
            has_logs=bool(result.logs),
            has_trace=result.has_traces,
            trace_empty=not result.traces,
        )

        if plan.show_logs:
            self.echo("Logs:")
            for log in result.logs:
                self.echo(f"  {log}")

        if plan.blank_before_traces:
            self.echo("")

        if plan.traces is not TraceDepth.NONE and result.traces is not None:
            # names identified while printing must not leak into other tests
            identified = dict(result.identified_contracts or {})
            traces = result.traces
            if plan.traces is TraceDepth.LAST:
                traces = traces[-1:]
            self.echo("Traces:")
            for trace in traces:
                for line in trace.pretty_print(
                    0, self.known_contracts, identified, self.env, "  "
                ):
                    self.echo(line)

        if plan.trailing_blank:
            self.echo("")


def report(
    outcome: TestOutcome,
    json_output: bool = False,
    verbosity: int = 0,
    known_contracts: Mapping[str, ContractArtifact] | None = None,
    env: ExecutionEnvironment | None = None,
    echo: Echo = typer.echo,
) -> None:
    """Render an outcome in the selected format."""
    if json_output:
        logger.debug("Writing JSON report for %d tests", len(outcome))
        JsonReporter(echo=echo).report(outcome)
    else:
        HumanReporter(
            verbosity=verbosity, known_contracts=known_contracts, env=env, echo=echo
        ).report(outcome)
