# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core components shared across the sol-test framework."""

from sol_test.core.errors import (
    ConfigurationError,
    SetupError,
    SolTestError,
    TestsFailedError,
)
from sol_test.core.types import (
    CounterExample,
    FuzzCase,
    FuzzKind,
    KindGas,
    StandardKind,
    Test,
    TestOutcome,
    TestVerdict,
)

__all__ = [
    # Errors
    "SolTestError",
    "ConfigurationError",
    "SetupError",
    "TestsFailedError",
    # Types
    "CounterExample",
    "FuzzCase",
    "FuzzKind",
    "KindGas",
    "StandardKind",
    "Test",
    "TestOutcome",
    "TestVerdict",
]
