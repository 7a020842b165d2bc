# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Decides which diagnostic sections are printed for a test.

Verbosity tiers:
    0-1: status line only
    2:   + logs
    3:   + all traces of failing tests
    4:   + last trace of passing tests (the test call, without setup)
    5+:  + all traces of every test

``plan_rendering`` is a pure function; ``HumanReporter`` executes the plan.
"""

from dataclasses import dataclass
from enum import Enum

from sol_test.core.constants import (
    VERBOSITY_ALL_TRACES,
    VERBOSITY_FAILURE_TRACES,
    VERBOSITY_LOGS,
)


class TraceDepth(str, Enum):
    """How much of a test's traces to print."""

    NONE = "none"
    LAST = "last"
    ALL = "all"


@dataclass(frozen=True)
class RenderPlan:
    """Sections to print after a test's status line.

    Attributes:
        show_logs: Print the "Logs:" section.
        traces: Which traces to print under "Traces:".
        blank_before_traces: Separate logs and traces with a blank line.
        trailing_blank: Print a blank line after the test's output block.
    """

    show_logs: bool = False
    traces: TraceDepth = TraceDepth.NONE
    blank_before_traces: bool = False
    trailing_blank: bool = False


def plan_rendering(
    tier: int,
    success: bool,
    has_logs: bool,
    has_trace: bool,
    trace_empty: bool = False,
) -> RenderPlan:
    """Compute the render plan for one test.

    Args:
        tier: Verbosity tier.
        success: Whether the test passed.
        has_logs: Whether the test emitted any logs.
        has_trace: Whether traces and identified contracts were recorded.
        trace_empty: Whether the recorded trace list is empty.

    Returns:
        The sections to print.
    """
    show_logs = tier >= VERBOSITY_LOGS and has_logs

    traces = TraceDepth.NONE
    blank_before_traces = False
    wants_traces = (not success and tier == VERBOSITY_FAILURE_TRACES) or (
        tier > VERBOSITY_FAILURE_TRACES
    )
    if tier >= VERBOSITY_FAILURE_TRACES and has_trace and wants_traces:
        blank_before_traces = has_logs
        if tier > VERBOSITY_ALL_TRACES or not success:
            traces = TraceDepth.ALL
        elif not trace_empty:
            traces = TraceDepth.LAST

    return RenderPlan(
        show_logs=show_logs,
        traces=traces,
        blank_before_traces=blank_before_traces,
        trailing_blank=show_logs or traces is not TraceDepth.NONE,
    )
