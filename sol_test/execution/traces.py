# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Call traces recorded by the execution backend and their text rendering.

Rendered traces look like::

    [24661] CounterTest::testIncrement()
      ├─ [22418] Counter::increment()
      │   └─ ← ()
      └─ ← ()

Contract names are resolved from the per-test ``identified_contracts``
mapping. Contracts created during the trace are identified on the fly by
comparing their deployed code with the compiled artifacts, and the mapping
is updated in place, so callers must pass a copy that belongs to one test.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

CHEATCODE_ADDRESS = "0x7109709ECfa91a80626fF3989D68f67F5b1DD12D"
CONSOLE_ADDRESS = "0x000000000000000000636F6e736F6c652e6c6f67"

BRANCH = "├─ "
PIPE = "│   "
RETURN = "└─ ← "


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as known to the execution backend.

    Attributes:
        name: Contract name.
        runtime_code: Deployed bytecode as hex.
        functions: 4-byte selector (hex, with or without 0x) -> signature.
    """

    name: str
    runtime_code: str = ""
    functions: Mapping[str, str] = field(default_factory=dict)

    def signature(self, selector: str) -> str | None:
        """Look up a function signature by selector."""
        wanted = _strip_hex(selector)
        for candidate, signature in self.functions.items():
            if _strip_hex(candidate) == wanted:
                return signature
        return None


@dataclass
class ExecutionEnvironment:
    """Read-only execution context used to label well-known addresses."""

    labels: dict[str, str] = field(default_factory=dict)

    def label(self, address: str) -> str | None:
        return _lookup(self.labels, address)


def default_environment() -> ExecutionEnvironment:
    """Return the default execution environment context."""
    return ExecutionEnvironment(
        labels={CHEATCODE_ADDRESS: "VM", CONSOLE_ADDRESS: "console"}
    )


@dataclass
class CallTrace:
    """A single call (or contract creation) and the calls it made.

    Attributes:
        address: Callee address, or the created contract's address.
        data: Calldata (or init code for creations) as hex.
        output: Return data as hex, the deployed code for creations, or the
            revert reason for failed calls.
        success: Whether the call succeeded.
        gas_cost: Gas consumed by the call.
        created: True if the call created a contract.
        value: Wei sent with the call.
        logs: Decoded events emitted directly by this call.
        children: Nested calls in execution order.
    """

    address: str
    data: str = ""
    output: str = ""
    success: bool = True
    gas_cost: int = 0
    created: bool = False
    value: int = 0
    logs: list[str] = field(default_factory=list)
    children: list[CallTrace] = field(default_factory=list)

    def identify(
        self,
        known_contracts: Mapping[str, ContractArtifact],
        identified_contracts: MutableMapping[str, str],
    ) -> None:
        """Record names of contracts created in this trace."""
        if self.created and _lookup(identified_contracts, self.address) is None:
            code = _strip_hex(self.output)
            for name, artifact in known_contracts.items():
                if code and _strip_hex(artifact.runtime_code) == code:
                    identified_contracts[self.address] = name
                    break
        for child in self.children:
            child.identify(known_contracts, identified_contracts)

    def pretty_print(
        self,
        depth: int,
        known_contracts: Mapping[str, ContractArtifact],
        identified_contracts: MutableMapping[str, str],
        env: ExecutionEnvironment,
        indent: str = "  ",
    ) -> list[str]:
        """Render this trace as text lines.

        Args:
            depth: Nesting level of this trace; each level adds ``indent``.
            known_contracts: Compiled artifact registry of the backend.
            identified_contracts: Address to name mapping, updated in place.
            env: Execution environment used for well-known address labels.
            indent: Indentation unit.

        Returns:
            Rendered lines without trailing newlines.
        """
        self.identify(known_contracts, identified_contracts)
        prefix = indent * (depth + 1)
        return self._render(
            prefix, prefix + "  ", known_contracts, identified_contracts, env
        )

    def _render(
        self,
        first: str,
        rest: str,
        known_contracts: Mapping[str, ContractArtifact],
        identified_contracts: Mapping[str, str],
        env: ExecutionEnvironment,
    ) -> list[str]:
        description = self._describe(known_contracts, identified_contracts, env)
        lines = [f"{first}{description}"]
        for child in self.children:
            lines.extend(
                child._render(
                    rest + BRANCH,
                    rest + PIPE,
                    known_contracts,
                    identified_contracts,
                    env,
                )
            )
        for log in self.logs:
            lines.append(f"{rest}{BRANCH}emit {log}")
        lines.append(f"{rest}{RETURN}{self._describe_return()}")
        return lines

    def _describe(
        self,
        known_contracts: Mapping[str, ContractArtifact],
        identified_contracts: Mapping[str, str],
        env: ExecutionEnvironment,
    ) -> str:
        name = _lookup(identified_contracts, self.address) or env.label(self.address)
        if self.created:
            return f"[{self.gas_cost}] → new {name or '<Unknown>'}@{self.address}"

        call = self._describe_call(known_contracts.get(name) if name else None)
        value = f"{{value: {self.value}}}" if self.value else ""
        return f"[{self.gas_cost}] {name or self.address}::{call}{value}"

    def _describe_call(self, artifact: ContractArtifact | None) -> str:
        data = _strip_hex(self.data)
        if not data:
            return "fallback()"
        selector, args = data[:8], data[8:]
        signature = artifact.signature(selector) if artifact else None
        if signature is None:
            return f"0x{data}"
        return f"{signature} 0x{args}" if args else signature

    def _describe_return(self) -> str:
        if not self.success:
            return self.output or "Revert"
        if self.created:
            return f"{len(_strip_hex(self.output)) // 2} bytes of code"
        return self.output or "()"

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "data": self.data,
            "output": self.output,
            "success": self.success,
            "gas_cost": self.gas_cost,
            "created": self.created,
            "value": self.value,
            "logs": list(self.logs),
            "children": [child.to_dict() for child in self.children],
        }


def _strip_hex(value: str) -> str:
    value = value.lower()
    return value[2:] if value.startswith("0x") else value


def _lookup(mapping: Mapping[str, str], address: str) -> str | None:
    """Case-insensitive address lookup."""
    if address in mapping:
        return mapping[address]
    wanted = address.lower()
    for candidate, value in mapping.items():
        if candidate.lower() == wanted:
            return value
    return None
