"""The validated model of a contract ABI."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import collapse_if_tuple

from abiclient.errors import ConfigurationError

REQUIRED_FUNCTION_KEYS = ("name", "inputs", "outputs", "stateMutability")


class Mutability(Enum):
    r"""Declared state mutability of a contract function."""

    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"


@dataclass(frozen=True)
class AbiParam:
    """An input or output of a contract function."""

    name: str
    """The declared name. Empty when the abi leaves it out."""
    type: str
    """The declared solidity type, i.e. 'uint256' or 'tuple[]'."""
    canonical_type: str
    """The type used for encoding, with tuples collapsed, i.e. '(uint256,address)[]'."""


@dataclass(frozen=True)
class AbiEntry:
    """One exposed contract function."""

    name: str
    inputs: tuple[AbiParam, ...]
    outputs: tuple[AbiParam, ...]
    mutability: Mutability
    raw: dict[str, Any] = field(compare=False, repr=False)

    @property
    def input_types(self) -> tuple[str, ...]:
        """The canonical input types, in order."""
        return tuple(param.canonical_type for param in self.inputs)

    @property
    def output_types(self) -> tuple[str, ...]:
        """The canonical output types, in order."""
        return tuple(param.canonical_type for param in self.outputs)

    @property
    def signature(self) -> str:
        """The canonical function signature, i.e. 'mint(address,uint256,uint256)'."""
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        """The 4 byte function selector."""
        return function_signature_to_4byte_selector(self.signature)


@dataclass(frozen=True)
class ContractInterface:
    """The functions of a contract abi, plus the raw abi items they came from."""

    entries: tuple[AbiEntry, ...]
    abi: list[dict[str, Any]] = field(repr=False)
    function_indices: tuple[int, ...] = field(repr=False)
    """For each entry, its position in the raw abi."""

    @property
    def events(self) -> list[dict[str, Any]]:
        """The raw event items."""
        return [item for item in self.abi if item.get("type") == "event"]

    @property
    def errors(self) -> list[dict[str, Any]]:
        """The raw custom error items."""
        return [item for item in self.abi if item.get("type") == "error"]


def is_abi_function(item: dict[str, Any]) -> bool:
    """Whether the abi item describes a function.

    Solidity treats items without a type as functions.
    """
    return item.get("type", "function") == "function"


def _parse_param(param: Any, location: str) -> AbiParam:
    if not isinstance(param, dict) or not isinstance(param.get("type"), str):
        raise ConfigurationError(f"{location} must be an object with a string 'type'.")
    name = param.get("name") or ""
    if not isinstance(name, str) or (name and not name.isidentifier()):
        raise ConfigurationError(f"{location} has an invalid name {name!r}.")
    if param["type"].startswith("tuple") and not isinstance(param.get("components"), list):
        raise ConfigurationError(f"{location} is a tuple without components.")
    return AbiParam(name=name, type=param["type"], canonical_type=collapse_if_tuple(param))


def parse_abi_entry(item: Any, index: int = 0) -> AbiEntry:
    """Validate a raw abi function item and build its AbiEntry.

    Arguments
    ---------
    item: Any
        The raw function item.
    index: int, optional
        The position of the item in its abi, used in error messages.

    Returns
    -------
    AbiEntry
        The validated entry.
    """
    if not isinstance(item, dict):
        raise ConfigurationError(f"ABI item {index} must be an object, got {type(item).__name__}.")
    missing_keys = [key for key in REQUIRED_FUNCTION_KEYS if key not in item]
    if missing_keys:
        raise ConfigurationError(f"ABI function {index} is missing required fields {missing_keys}.")
    name = item["name"]
    if not isinstance(name, str) or not name.isidentifier():
        raise ConfigurationError(f"ABI function {index} has an invalid name {name!r}.")
    try:
        mutability = Mutability(item["stateMutability"])
    except ValueError as exc:
        raise ConfigurationError(
            f"ABI function {name} has unknown stateMutability {item['stateMutability']!r}."
        ) from exc
    for key in ("inputs", "outputs"):
        if not isinstance(item[key], list):
            raise ConfigurationError(f"ABI function {name} field '{key}' must be a list.")
    return AbiEntry(
        name=name,
        inputs=tuple(_parse_param(param, f"{name} input {i}") for i, param in enumerate(item["inputs"])),
        outputs=tuple(_parse_param(param, f"{name} output {i}") for i, param in enumerate(item["outputs"])),
        mutability=mutability,
        raw=copy.deepcopy(item),
    )


def parse_abi(document: Any) -> ContractInterface:
    """Validate an abi document and build its ContractInterface.

    Arguments
    ---------
    document: Any
        The decoded abi json. Must be a list of abi items.

    Returns
    -------
    ContractInterface
        The function entries and raw items of the abi.
    """
    if not isinstance(document, list):
        raise ConfigurationError(f"Invalid ABI format. Expected an array, got {type(document).__name__}.")
    entries: list[AbiEntry] = []
    function_indices: list[int] = []
    for index, item in enumerate(document):
        if not isinstance(item, dict):
            raise ConfigurationError(f"ABI item {index} must be an object, got {type(item).__name__}.")
        if is_abi_function(item):
            entries.append(parse_abi_entry(item, index))
            function_indices.append(index)
    return ContractInterface(
        entries=tuple(entries),
        abi=copy.deepcopy(document),
        function_indices=tuple(function_indices),
    )


def has_unnamed_inputs(entry: AbiEntry) -> bool:
    """Whether any input of the function was declared without a name."""
    return any(not param.name for param in entry.inputs)


def entries_by_name(entries: Sequence[AbiEntry]) -> dict[str, AbiEntry]:
    """Index entries by function name, rejecting overloads.

    Arguments
    ---------
    entries: Sequence[AbiEntry]
        The entries to index.

    Returns
    -------
    dict[str, AbiEntry]
        The entries keyed by name.
    """
    by_name: dict[str, AbiEntry] = {}
    for entry in entries:
        if entry.name in by_name:
            raise ConfigurationError(
                f"Function {entry.name} is overloaded ({by_name[entry.name].signature} and {entry.signature}); "
                "overloaded functions are not supported."
            )
        by_name[entry.name] = entry
    return by_name
