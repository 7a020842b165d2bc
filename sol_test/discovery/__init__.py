# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Test selection for sol-test."""

from sol_test.discovery.test_filter import (
    NamePredicate,
    TestFilter,
    compile_pattern,
    validate_exclusive,
)

__all__ = ["NamePredicate", "TestFilter", "compile_pattern", "validate_exclusive"]
