"""Utilities to help with Solidity types."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

# 'uint' and 'int' are aliases for their 256 bit versions
_INTEGER_PATTERN = re.compile(r"u?int([0-9]{1,3})?")


class PrimitiveType(Enum):
    r"""The python representation of an abi value crossing into or out of a client."""

    ADDRESS = "address"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TEXT = "text"
    OPAQUE = "opaque"

    @property
    def python_type(self) -> Any:
        """The python type values are represented as."""
        return _PYTHON_TYPES[self]

    @property
    def annotation(self) -> str:
        """The annotation used for this type in generated source."""
        return _ANNOTATIONS[self]


_PYTHON_TYPES: dict[PrimitiveType, Any] = {
    PrimitiveType.ADDRESS: str,
    PrimitiveType.INTEGER: int,
    PrimitiveType.BOOLEAN: bool,
    PrimitiveType.TEXT: str,
    PrimitiveType.OPAQUE: Any,
}

_ANNOTATIONS: dict[PrimitiveType, str] = {
    PrimitiveType.ADDRESS: "str",
    PrimitiveType.INTEGER: "int",
    PrimitiveType.BOOLEAN: "bool",
    PrimitiveType.TEXT: "str",
    PrimitiveType.OPAQUE: "Any",
}


def solidity_to_primitive_type(solidity_type: str) -> PrimitiveType:
    """Returns the primitive type for the given solidity type.

    Arrays, tuples, bytes and fixed point types are not specialized; they map to
    PrimitiveType.OPAQUE and are passed through unmodified.

    Arguments
    ---------
    solidity_type: str
        A solidity variable type string, i.e. 'uint8'...'uint256', 'bool', 'address',
        'bytes2'...'bytes32' etc.

    Returns
    -------
    PrimitiveType
        The primitive type that values of this solidity type are represented as.
    """
    if solidity_type == "address":
        return PrimitiveType.ADDRESS
    if _INTEGER_PATTERN.fullmatch(solidity_type):
        return PrimitiveType.INTEGER
    if solidity_type == "bool":
        return PrimitiveType.BOOLEAN
    if solidity_type == "string":
        return PrimitiveType.TEXT
    return PrimitiveType.OPAQUE


def solidity_to_python_type(solidity_type: str) -> str:
    """Returns the stringified python type for the given solidity type.

    Arguments
    ---------
    solidity_type: str
        A solidity variable type string.

    Returns
    -------
    str
        A python type annotation string, i.e. 'int', 'bool', 'str', 'Any'.
    """
    return solidity_to_primitive_type(solidity_type).annotation
