# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Status tags of the per-test report line."""

from dataclasses import dataclass

from sol_test.core.types import CounterExample, TestVerdict
from sol_test.utils.terminal import terminal


@dataclass(frozen=True)
class NoDetail:
    """Failure without reason or counterexample."""


@dataclass(frozen=True)
class ReasonOnly:
    reason: str


@dataclass(frozen=True)
class CounterexampleOnly:
    counterexample: CounterExample | str


@dataclass(frozen=True)
class Both:
    reason: str
    counterexample: CounterExample | str


FailureDetail = NoDetail | ReasonOnly | CounterexampleOnly | Both


def failure_detail(
    reason: str | None, counterexample: CounterExample | str | None
) -> FailureDetail:
    """Pick the variant describing what is known about a failure."""
    if reason is not None and counterexample is not None:
        return Both(reason, counterexample)
    if counterexample is not None:
        return CounterexampleOnly(counterexample)
    if reason is not None:
        return ReasonOnly(reason)
    return NoDetail()


def failure_text(detail: FailureDetail) -> str:
    """Status text of a failure, e.g. ``FAIL. Reason: revert``."""
    match detail:
        case Both(reason, counterexample):
            return f"FAIL. Reason: {reason}. Counterexample: {counterexample}"
        case CounterexampleOnly(counterexample):
            return f"FAIL. Counterexample: {counterexample}"
        case ReasonOnly(reason):
            return f"FAIL. Reason: {reason}"
        case NoDetail():
            return "FAIL"
    raise TypeError(f"Unknown failure detail: {detail!r}")


def status_text(verdict: TestVerdict) -> str:
    """Uncolored status text, e.g. ``PASS`` or ``FAIL. Reason: revert``."""
    if verdict.success:
        return "PASS"
    return failure_text(failure_detail(verdict.reason, verdict.counterexample))


def format_status(verdict: TestVerdict) -> str:
    """Bracketed status tag, green on success and red on failure."""
    tag = f"[{status_text(verdict)}]"
    return terminal.success(tag) if verdict.success else terminal.error(tag)
