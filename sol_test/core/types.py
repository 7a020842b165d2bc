# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core result types for sol-test.

A run produces one ``TestVerdict`` per executed test. The verdicts of a run
are bundled into a ``TestOutcome`` keyed by contract name and test name,
which is the only input to reporting and to the final pass/fail decision.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sol_test.core.errors import TestsFailedError
from sol_test.execution.traces import CallTrace


@dataclass(frozen=True)
class CounterExample:
    """Concrete input that made a fuzz test fail.

    Attributes:
        calldata: ABI-encoded calldata as a 0x-prefixed hex string.
        args: Decoded arguments, already rendered as strings.
    """

    calldata: str
    args: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"calldata={self.calldata}, args=[{', '.join(self.args)}]"

    def to_dict(self) -> dict[str, Any]:
        return {"calldata": self.calldata, "args": list(self.args)}


@dataclass(frozen=True)
class FuzzCase:
    """A single fuzz run: the calldata used and the gas it consumed."""

    calldata: str
    gas: int


@dataclass(frozen=True)
class KindGas:
    """Gas figures for display, derived from a test kind."""

    gas: int | None = None
    runs: int | None = None
    mean: int | None = None
    median: int | None = None

    @property
    def is_fuzz(self) -> bool:
        return self.runs is not None

    def __str__(self) -> str:
        if self.is_fuzz:
            return f"(runs: {self.runs}, μ: {self.mean}, ~: {self.median})"
        return f"(gas: {self.gas})"


@dataclass(frozen=True)
class StandardKind:
    """A test executed exactly once."""

    gas: int

    def gas_used(self) -> KindGas:
        return KindGas(gas=self.gas)

    def to_dict(self) -> dict[str, Any]:
        return {"Standard": self.gas}


@dataclass(frozen=True)
class FuzzKind:
    """A test executed once per randomized input."""

    cases: list[FuzzCase] = field(default_factory=list)

    @property
    def mean_gas(self) -> int:
        if not self.cases:
            return 0
        return sum(case.gas for case in self.cases) // len(self.cases)

    @property
    def median_gas(self) -> int:
        if not self.cases:
            return 0
        gas = sorted(case.gas for case in self.cases)
        return gas[len(gas) // 2]

    def gas_used(self) -> KindGas:
        return KindGas(
            runs=len(self.cases), mean=self.mean_gas, median=self.median_gas
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Fuzz": {
                "cases": [
                    {"calldata": case.calldata, "gas": case.gas}
                    for case in self.cases
                ]
            }
        }


TestKind = StandardKind | FuzzKind


@dataclass(frozen=True)
class TestVerdict:
    """Result of executing a single test once.

    Attributes:
        success: Whether the test passed.
        gas_used: Gas consumed by the test call.
        kind: Execution kind, the source of the gas figures shown to users.
        logs: Decoded log lines emitted during the test, in order.
        reason: Human-readable failure reason, if any.
        counterexample: Failing input of a fuzz test, if any.
        traces: Recorded call traces (setup calls first, the test call last).
        identified_contracts: Address to contract name mapping for the traces.

    ``traces`` and ``identified_contracts`` are either both set or both None.
    For a standard kind ``gas_used`` equals ``kind.gas``.
    """

    __test__ = False  # not a pytest test class

    success: bool
    gas_used: int
    kind: TestKind
    logs: list[str] = field(default_factory=list)
    reason: str | None = None
    counterexample: CounterExample | str | None = None
    traces: list[CallTrace] | None = None
    identified_contracts: dict[str, str] | None = None

    def __post_init__(self) -> None:
        if (self.traces is None) != (self.identified_contracts is None):
            raise ValueError(
                "traces and identified_contracts must be provided together"
            )
        if isinstance(self.kind, StandardKind) and self.kind.gas != self.gas_used:
            raise ValueError(
                f"gas_used {self.gas_used} does not match kind gas {self.kind.gas}"
            )

    @classmethod
    def standard(cls, success: bool, gas: int, **kwargs: Any) -> "TestVerdict":
        """Create a verdict for a single execution, gas taken from one source."""
        return cls(success=success, gas_used=gas, kind=StandardKind(gas), **kwargs)

    @classmethod
    def fuzz(
        cls, success: bool, cases: list[FuzzCase], **kwargs: Any
    ) -> "TestVerdict":
        """Create a verdict for a fuzz run, reporting the median gas."""
        kind = FuzzKind(list(cases))
        return cls(success=success, gas_used=kind.median_gas, kind=kind, **kwargs)

    @property
    def has_traces(self) -> bool:
        """True when both traces and identified contracts were recorded."""
        return self.traces is not None and self.identified_contracts is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize every field, for structured output."""
        counterexample: Any = self.counterexample
        if isinstance(counterexample, CounterExample):
            counterexample = counterexample.to_dict()
        return {
            "success": self.success,
            "reason": self.reason,
            "gas_used": self.gas_used,
            "counterexample": counterexample,
            "logs": list(self.logs),
            "kind": self.kind.to_dict(),
            "traces": (
                [trace.to_dict() for trace in self.traces]
                if self.traces is not None
                else None
            ),
            "identified_contracts": (
                dict(self.identified_contracts)
                if self.identified_contracts is not None
                else None
            ),
        }


@dataclass(frozen=True)
class Test:
    """A flattened (signature, verdict) pair."""

    __test__ = False  # not a pytest test class

    signature: str
    result: TestVerdict

    @property
    def gas_used(self) -> int:
        return self.result.gas_used


Results = Mapping[str, Mapping[str, TestVerdict]]


@dataclass(frozen=True)
class TestOutcome:
    """Bundled results of all tests of a run.

    Holds ``contract name -> (test name -> TestVerdict)`` with both levels
    sorted by key and read-only, plus the allow-failure policy the run was
    started with. Instances are built once, after all tests completed, and
    never change.

    Attributes:
        results: Verdicts per contract and test name.
        allow_failure: If True, failing tests never fail the run.
    """

    __test__ = False  # not a pytest test class

    results: Results
    allow_failure: bool = False

    def __post_init__(self) -> None:
        ordered = MappingProxyType(
            {
                contract: MappingProxyType(
                    {name: tests[name] for name in sorted(tests)}
                )
                for contract, tests in sorted(self.results.items())
            }
        )
        object.__setattr__(self, "results", ordered)

    def tests(self) -> Iterator[tuple[str, TestVerdict]]:
        """All tests and their names, flattened across contracts."""
        for tests in self.results.values():
            yield from tests.items()

    def successes(self) -> Iterator[tuple[str, TestVerdict]]:
        """All succeeding tests and their names."""
        return ((name, result) for name, result in self.tests() if result.success)

    def failures(self) -> Iterator[tuple[str, TestVerdict]]:
        """All failing tests and their names."""
        return (
            (name, result) for name, result in self.tests() if not result.success
        )

    def into_tests(self) -> Iterator[Test]:
        """All tests as ``Test`` records."""
        for name, result in self.tests():
            yield Test(signature=name, result=result)

    def ensure_ok(self) -> None:
        """Raise if any test failed and failures are not allowed.

        Raises:
            TestsFailedError: With the failing and succeeding test counts.
        """
        if self.allow_failure:
            return
        failed = sum(1 for _ in self.failures())
        if failed > 0:
            raise TestsFailedError(failed, sum(1 for _ in self.successes()))

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Structured document: contract -> test -> verdict fields."""
        return {
            contract: {name: result.to_dict() for name, result in tests.items()}
            for contract, tests in self.results.items()
        }

    def __len__(self) -> int:
        return sum(len(tests) for tests in self.results.values())
