# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core constants shared across the sol-test framework."""

# Execution environment defaults
DEFAULT_SENDER = "0x00a329c0648769A73afAc7F9381E08FB43dBEA72"
DEFAULT_INITIAL_BALANCE = 0xFFFFFFFFFFFFFFFFFFFFFFFF
DEFAULT_EVM_VERSION = "london"
EIP170_CONTRACT_SIZE_LIMIT = 24576  # bytes

# Fuzzer defaults
DEFAULT_FUZZ_RUNS = 256
DEFAULT_FUZZ_MAX_GLOBAL_REJECTS = 65536

# Verbosity tiers for human-readable output
VERBOSITY_LOGS = 2  # print logs
VERBOSITY_FAILURE_TRACES = 3  # print traces of failing tests
VERBOSITY_ALL_TRACES = 4  # print traces of all tests, last call only for passing ones
VERBOSITY_SETUP_TRACES = 5  # print traces of all tests, including setup calls

# Environment variables
ENV_ALLOW_FAILURE = "SOL_TEST_ALLOW_FAILURE"
ENV_BACKEND = "SOL_TEST_BACKEND"
ENV_LOG_LEVEL = "SOL_TEST_LOG_LEVEL"
ENV_FUZZ_RUNS = "SOL_TEST_FUZZ_RUNS"

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
