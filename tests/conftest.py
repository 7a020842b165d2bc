# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def clear_sol_test_environment() -> None:
    """Clear SOL_TEST_* variables so the caller's shell cannot change CLI defaults."""
    for key in [key for key in os.environ if key.startswith("SOL_TEST_")]:
        del os.environ[key]
