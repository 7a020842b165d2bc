# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt
from collections.abc import Iterator
from typing import Any
from unittest.mock import Mock, patch

import pytest


@pytest.fixture
def patched_load_backend(fake_backend: Any) -> Iterator[Mock]:
    """Make the CLI resolve any --backend value to the in-memory backend."""
    with patch(
        "sol_test.cli.main.load_backend", return_value=fake_backend
    ) as mock_load:
        yield mock_load
