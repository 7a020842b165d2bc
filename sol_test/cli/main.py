# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

import logging
from pathlib import Path
from typing import Optional

import errorhandler
import typer
from typing_extensions import Annotated

import sol_test
from sol_test.core.constants import (
    DEFAULT_EVM_VERSION,
    DEFAULT_FUZZ_RUNS,
    DEFAULT_INITIAL_BALANCE,
    DEFAULT_SENDER,
    ENV_ALLOW_FAILURE,
    ENV_BACKEND,
    ENV_FUZZ_RUNS,
    ENV_LOG_LEVEL,
    EXIT_FAILURE,
    EXIT_SUCCESS,
)
from sol_test.core.errors import ConfigurationError, SolTestError
from sol_test.discovery.test_filter import (
    TestFilter,
    compile_pattern,
    validate_exclusive,
)
from sol_test.execution.backend import (
    BuildConfig,
    EnvOptions,
    EvmConfig,
    FuzzConfig,
    load_backend,
)
from sol_test.orchestrator import TestOrchestrator
from sol_test.utils.logging import VerbosityLevel, configure_logging
from sol_test.utils.terminal import terminal

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sol-test, version {sol_test.__version__}")
        raise typer.Exit()


def regex_callback(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        compile_pattern(value)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from e
    return value


def integer_callback(value: str) -> str:
    try:
        number = int(value, 0)
    except ValueError as e:
        raise typer.BadParameter(
            f"'{value}' is not a decimal or hex integer"
        ) from e
    if number < 0:
        raise typer.BadParameter(f"'{value}' must not be negative")
    return value


def evm_version_callback(value: str) -> str:
    try:
        EvmConfig.for_version(value)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from e
    return value


LogLevel = Annotated[
    VerbosityLevel,
    typer.Option(
        "--log-level",
        help="Log level.",
        envvar=ENV_LOG_LEVEL,
        is_eager=True,
    ),
]


Verbose = Annotated[
    int,
    typer.Option(
        "-v",
        "--verbose",
        count=True,
        help="Verbosity of the test report. Pass multiple times for more detail: "
        "-vv logs, -vvv traces of failing tests, -vvvv traces of all tests, "
        "-vvvvv setup traces of all tests.",
    ),
]


Match = Annotated[
    Optional[str],
    typer.Option(
        "-m",
        "--match",
        callback=regex_callback,
        help="Only run test methods matching regex "
        "(deprecated, see --match-test, --match-contract).",
    ),
]


MatchTest = Annotated[
    Optional[str],
    typer.Option(
        "--match-test",
        callback=regex_callback,
        help="Only run test methods matching regex.",
    ),
]


NoMatchTest = Annotated[
    Optional[str],
    typer.Option(
        "--no-match-test",
        callback=regex_callback,
        help="Only run test methods not matching regex.",
    ),
]


MatchContract = Annotated[
    Optional[str],
    typer.Option(
        "--match-contract",
        callback=regex_callback,
        help="Only run test methods in contracts matching regex.",
    ),
]


NoMatchContract = Annotated[
    Optional[str],
    typer.Option(
        "--no-match-contract",
        callback=regex_callback,
        help="Only run test methods in contracts not matching regex.",
    ),
]


Json = Annotated[
    bool,
    typer.Option(
        "-j",
        "--json",
        help="Print the test results in JSON format.",
    ),
]


AllowFailure = Annotated[
    bool,
    typer.Option(
        "--allow-failure",
        help="Exit with code 0 even if tests fail.",
        envvar=ENV_ALLOW_FAILURE,
    ),
]


Backend = Annotated[
    str,
    typer.Option(
        "--backend",
        help="Execution backend as 'module:attribute'.",
        envvar=ENV_BACKEND,
    ),
]


Root = Annotated[
    Path,
    typer.Option(
        "--root",
        exists=True,
        dir_okay=True,
        file_okay=False,
        help="Project root directory.",
    ),
]


Contracts = Annotated[
    Optional[Path],
    typer.Option(
        "--contracts",
        dir_okay=True,
        file_okay=False,
        help="Contracts source directory. Defaults to <root>/src.",
    ),
]


Out = Annotated[
    Optional[Path],
    typer.Option(
        "--out",
        dir_okay=True,
        file_okay=False,
        help="Artifact output directory. Defaults to <root>/out.",
    ),
]


EvmVersion = Annotated[
    str,
    typer.Option(
        "--evm-version",
        callback=evm_version_callback,
        help="EVM version (hard fork) to execute tests with.",
    ),
]


CompilerVersion = Annotated[
    Optional[str],
    typer.Option(
        "--compiler-version",
        help="Compiler version to build the project with.",
    ),
]


InitialBalance = Annotated[
    str,
    typer.Option(
        "--initial-balance",
        callback=integer_callback,
        help="Initial balance of the test contract, in wei.",
    ),
]


Sender = Annotated[
    str,
    typer.Option(
        "--sender",
        help="Address the tests are executed from.",
    ),
]


FuzzRuns = Annotated[
    int,
    typer.Option(
        "--fuzz-runs",
        help="Number of randomized inputs per fuzz test.",
        envvar=ENV_FUZZ_RUNS,
        min=1,
    ),
]


FuzzSeed = Annotated[
    Optional[int],
    typer.Option(
        "--fuzz-seed",
        help="Seed for the fuzzer, for reproducible runs.",
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


@app.command()
def main(
    backend: Backend,
    match: Match = None,
    match_test: MatchTest = None,
    no_match_test: NoMatchTest = None,
    match_contract: MatchContract = None,
    no_match_contract: NoMatchContract = None,
    json_output: Json = False,
    allow_failure: AllowFailure = False,
    verbose: Verbose = 0,
    root: Root = Path("."),
    contracts: Contracts = None,
    out: Out = None,
    evm_version: EvmVersion = DEFAULT_EVM_VERSION,
    compiler_version: CompilerVersion = None,
    initial_balance: InitialBalance = hex(DEFAULT_INITIAL_BALANCE),
    sender: Sender = DEFAULT_SENDER,
    fuzz_runs: FuzzRuns = DEFAULT_FUZZ_RUNS,
    fuzz_seed: FuzzSeed = None,
    log_level: LogLevel = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """Run the tests of a smart contract project and report the results."""
    configure_logging(log_level, error_handler)

    try:
        validate_exclusive(
            match, match_test, no_match_test, match_contract, no_match_contract
        )
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="'--match'") from e

    if match is not None:
        typer.echo(
            terminal.warning(
                "WARNING: --match is deprecated, use --match-test and "
                "--match-contract instead."
            ),
            err=True,
        )

    try:
        execution_backend = load_backend(backend)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="'--backend'") from e

    orchestrator = TestOrchestrator(
        backend=execution_backend,
        build_config=BuildConfig(
            root=root,
            contracts=contracts,
            out=out,
            evm_version=evm_version,
            compiler_version=compiler_version,
        ),
        env_options=EnvOptions(
            initial_balance=int(initial_balance, 0),
            sender=sender,
            verbosity=verbose,
        ),
        test_filter=TestFilter(
            pattern=match,
            test_pattern=match_test,
            test_pattern_inverse=no_match_test,
            contract_pattern=match_contract,
            contract_pattern_inverse=no_match_contract,
        ),
        json_output=json_output,
        allow_failure=allow_failure,
        fuzzer=FuzzConfig(runs=fuzz_runs, seed=fuzz_seed),
    )

    try:
        outcome = orchestrator.run_tests()
        outcome.ensure_ok()
    except SolTestError as e:
        logger.error(str(e))
    exit()


def exit() -> None:
    if error_handler.fired:
        raise typer.Exit(EXIT_FAILURE)
    else:
        raise typer.Exit(EXIT_SUCCESS)
