# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Configuration and protocols for the external execution backend.

sol-test never compiles or executes contracts itself. A backend compiles the
project, builds a runner from a ``RunnerBuilder`` and runs the selected tests,
returning ``contract -> (test name -> TestVerdict)``.
"""

import importlib
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Protocol

from sol_test.core.constants import (
    DEFAULT_EVM_VERSION,
    DEFAULT_FUZZ_MAX_GLOBAL_REJECTS,
    DEFAULT_FUZZ_RUNS,
    DEFAULT_INITIAL_BALANCE,
    DEFAULT_SENDER,
    EIP170_CONTRACT_SIZE_LIMIT,
)
from sol_test.core.errors import ConfigurationError
from sol_test.core.types import TestVerdict
from sol_test.discovery.test_filter import TestFilter
from sol_test.execution.traces import ContractArtifact

logger = logging.getLogger(__name__)

EVM_VERSIONS = (
    "homestead",
    "tangerineWhistle",
    "spuriousDragon",
    "byzantium",
    "constantinople",
    "petersburg",
    "istanbul",
    "berlin",
    "london",
)


@dataclass(frozen=True)
class BuildConfig:
    """Where the project lives and how to compile it."""

    root: Path = field(default_factory=Path.cwd)
    contracts: Path | None = None
    out: Path | None = None
    evm_version: str = DEFAULT_EVM_VERSION
    compiler_version: str | None = None

    @property
    def contracts_dir(self) -> Path:
        return self.contracts or self.root / "src"

    @property
    def out_dir(self) -> Path:
        return self.out or self.root / "out"


@dataclass(frozen=True)
class EnvOptions:
    """Execution environment options shared by all tests of a run."""

    initial_balance: int = DEFAULT_INITIAL_BALANCE
    sender: str = DEFAULT_SENDER
    verbosity: int = 0


@dataclass(frozen=True)
class FuzzConfig:
    """Settings for the randomized input generator."""

    runs: int = DEFAULT_FUZZ_RUNS
    failure_persistence: str | None = None
    seed: int | None = None
    max_global_rejects: int = DEFAULT_FUZZ_MAX_GLOBAL_REJECTS


@dataclass(frozen=True)
class EvmConfig:
    """EVM configuration for one hard fork.

    Attributes:
        evm_version: Hard fork name.
        create_contract_limit: Maximum deployed code size in bytes, or None
            for no limit.
    """

    evm_version: str = DEFAULT_EVM_VERSION
    create_contract_limit: int | None = EIP170_CONTRACT_SIZE_LIMIT

    @classmethod
    def for_version(cls, evm_version: str) -> "EvmConfig":
        """Return the configuration for an EVM version.

        Raises:
            ConfigurationError: If the version is unknown.
        """
        if evm_version not in EVM_VERSIONS:
            raise ConfigurationError(
                f"Unknown EVM version '{evm_version}'. "
                f"Supported versions: {', '.join(EVM_VERSIONS)}"
            )
        if EVM_VERSIONS.index(evm_version) < EVM_VERSIONS.index("spuriousDragon"):
            # EIP-170 introduced the size limit
            return cls(evm_version=evm_version, create_contract_limit=None)
        return cls(evm_version=evm_version)

    def uncapped(self) -> "EvmConfig":
        """Return a copy without contract size limit."""
        return replace(self, create_contract_limit=None)


class ContractRunner(Protocol):
    """A runner able to execute the test functions of a compiled project."""

    known_contracts: Mapping[str, ContractArtifact]

    def test(
        self, test_filter: TestFilter
    ) -> Mapping[str, Mapping[str, TestVerdict]]: ...


class ExecutionBackend(Protocol):
    """Compiles projects and creates runners."""

    def compile(self, build_config: BuildConfig) -> Any: ...

    def create_runner(
        self, builder: "RunnerBuilder", project: Any, env_options: EnvOptions
    ) -> ContractRunner: ...


@dataclass(frozen=True)
class RunnerBuilder:
    """Everything a backend needs to create a runner, besides the project."""

    fuzzer: FuzzConfig = field(default_factory=FuzzConfig)
    initial_balance: int = DEFAULT_INITIAL_BALANCE
    sender: str = DEFAULT_SENDER
    evm_cfg: EvmConfig = field(default_factory=EvmConfig)

    def build(
        self, backend: ExecutionBackend, project: Any, env_options: EnvOptions
    ) -> ContractRunner:
        logger.debug("Creating runner with %s", self)
        return backend.create_runner(self, project, env_options)


def load_backend(path: str) -> ExecutionBackend:
    """Import and instantiate a backend from ``module:attribute``.

    The attribute may be a backend instance or a zero-argument factory
    (e.g. the backend class).

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            f"Invalid backend '{path}', expected 'module:attribute'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import backend module '{module_name}': {e}"
        ) from e

    try:
        target = getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(
            f"Backend module '{module_name}' has no attribute '{attribute}'"
        ) from e

    backend = target() if callable(target) else target
    logger.debug("Loaded execution backend %s", path)
    return backend
