# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Reporting of test outcomes."""

from sol_test.reporting.plan import RenderPlan, TraceDepth, plan_rendering
from sol_test.reporting.reporter import HumanReporter, JsonReporter, report
from sol_test.reporting.status import (
    FailureDetail,
    failure_detail,
    format_status,
    status_text,
)

__all__ = [
    "FailureDetail",
    "HumanReporter",
    "JsonReporter",
    "RenderPlan",
    "TraceDepth",
    "failure_detail",
    "format_status",
    "plan_rendering",
    "report",
    "status_text",
]
