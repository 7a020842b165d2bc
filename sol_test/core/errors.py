# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Exception hierarchy for sol-test.

Test failures are ordinary results, not exceptions. Only the allow-failure
policy in ``TestOutcome.ensure_ok()`` turns them into ``TestsFailedError``.
"""


class SolTestError(Exception):
    """Base class for all sol-test errors."""


class ConfigurationError(SolTestError):
    """Conflicting or malformed configuration detected before a run starts."""


class SetupError(SolTestError):
    """Project compilation or runner construction failed.

    Raised by execution backends. The orchestrator propagates it unchanged.
    """


class TestsFailedError(SolTestError):
    """One or more tests failed while failures are not allowed.

    Attributes:
        failed: Number of failing tests.
        succeeded: Number of succeeding tests.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, failed: int, succeeded: int) -> None:
        self.failed = failed
        self.succeeded = succeeded
        super().__init__(
            f"Encountered a total of {failed} failing tests, "
            f"{succeeded} tests succeeded"
        )
