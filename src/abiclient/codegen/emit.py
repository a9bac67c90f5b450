"""Emitting client definitions from contract abis."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Sequence

from abiclient.abi import AbiEntry, entries_by_name, parse_abi, select_functions
from abiclient.errors import ConfigurationError

from .classify import MethodKind
from .format import avoid_python_keywords
from .signature import SignaturePlan, plan_signature

# Names a generated method must not shadow on the client class
_CLIENT_ATTRIBUTES = frozenset(
    {"abi", "can_transact", "contract_address", "chain_id", "connection", "definition", "contract_name", "output_types"}
)


@dataclass(frozen=True)
class MethodDefinition:
    """One generated method, bound to a single execution path."""

    entry: AbiEntry
    plan: SignaturePlan
    python_name: str

    @property
    def name(self) -> str:
        """The function name in the abi."""
        return self.entry.name

    @property
    def kind(self) -> MethodKind:
        """Query or mutation, fixed when the method is emitted."""
        return self.plan.kind


@dataclass(frozen=True)
class ClientDefinition:
    """The methods of a generated contract client."""

    contract_name: str
    methods: tuple[MethodDefinition, ...]
    abi: list[dict[str, Any]] = field(repr=False)
    """The selected functions together with the events and errors of the contract."""
    _methods_by_name: dict[str, MethodDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_methods_by_name", {method.name: method for method in self.methods})

    @property
    def client_name(self) -> str:
        """The class name of the client."""
        return f"{self.contract_name}Client"

    @property
    def queries(self) -> tuple[MethodDefinition, ...]:
        """The query methods."""
        return tuple(method for method in self.methods if method.kind is MethodKind.QUERY)

    @property
    def mutations(self) -> tuple[MethodDefinition, ...]:
        """The mutation methods."""
        return tuple(method for method in self.methods if method.kind is MethodKind.MUTATION)

    def get_method(self, function_name: str) -> MethodDefinition:
        """Look up a method by its abi function name.

        Arguments
        ---------
        function_name: str
            The name of the function in the abi.

        Returns
        -------
        MethodDefinition
            The method emitted for the function.
        """
        try:
            return self._methods_by_name[function_name]
        except KeyError as exc:
            raise ConfigurationError(
                f"{self.client_name} has no method {function_name}. Available: {sorted(self._methods_by_name)}"
            ) from exc

    def find_python_method(self, python_name: str) -> MethodDefinition | None:
        """Look up a method by its python name, if there is one."""
        for method in self.methods:
            if method.python_name == python_name:
                return method
        return None


def emit_client_definition(
    contract_name: str, entries: Sequence[AbiEntry], abi: Sequence[dict[str, Any]] | None = None
) -> ClientDefinition:
    """Emit the definition of a client for the selected functions of a contract.

    Arguments
    ---------
    contract_name: str
        The name of the contract, i.e. 'BuilderNFT'.
    entries: Sequence[AbiEntry]
        The selected functions. One entry per function name.
    abi: Sequence[dict[str, Any]] | None, optional
        The full abi the entries came from. Its events and errors are kept in the definition.

    Returns
    -------
    ClientDefinition
        One method per selected function.
    """
    if not contract_name.isidentifier():
        raise ConfigurationError(f"Contract name {contract_name!r} is not a valid identifier.")
    entries_by_name(entries)
    methods = tuple(
        MethodDefinition(
            entry=entry,
            plan=plan_signature(entry),
            python_name=avoid_python_keywords(entry.name, _CLIENT_ATTRIBUTES),
        )
        for entry in entries
    )
    other_items = [copy.deepcopy(item) for item in abi or [] if item.get("type") in ("event", "error")]
    return ClientDefinition(
        contract_name=contract_name,
        methods=methods,
        abi=[copy.deepcopy(entry.raw) for entry in entries] + other_items,
    )


def build_client_definition(
    contract_name: str, abi_document: Any, selected_indices: Sequence[int] | None = None
) -> ClientDefinition:
    """Parse, validate and select an abi document, then emit its client definition.

    Arguments
    ---------
    contract_name: str
        The name of the contract.
    abi_document: Any
        The decoded abi json. Must be a list of abi items.
    selected_indices: Sequence[int] | None, optional
        Zero-based positions of the functions to include. Defaults to every function.

    Returns
    -------
    ClientDefinition
        The client definition.
    """
    interface = parse_abi(abi_document)
    entries = select_functions(interface, selected_indices)
    return emit_client_definition(contract_name, entries, interface.abi)
