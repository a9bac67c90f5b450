"""Error types raised while generating or calling contract clients."""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from eth_utils.conversions import to_hex
from eth_utils.crypto import keccak

from .types import ABIError


class ContractCallType(Enum):
    r"""The execution path a contract call was routed through."""

    READ = "read"
    TRANSACTION = "transaction"


class ConfigurationError(ValueError):
    """Raised before any network interaction when a client is set up or used incorrectly.

    This covers malformed ABI documents, bad selections, missing or conflicting connections,
    chain id mismatches and mutations invoked without a transaction-capable connection.
    """


class _ContractCallError(ValueError):
    """Base for errors that carry the context of the contract call that failed."""

    def __init__(
        self,
        *args,
        function_name: str | None = None,
        contract_call_type: ContractCallType | None = None,
        fn_args: Sequence[Any] | None = None,
    ):
        super().__init__(*args)
        self.function_name = function_name
        self.contract_call_type = contract_call_type
        self.fn_args = tuple(fn_args) if fn_args is not None else None


class AbiEncodingError(_ContractCallError):
    """Supplied arguments do not match the inputs of the target function."""


class AbiDecodingError(_ContractCallError):
    """A raw call result cannot be decoded against the function's declared outputs."""


def get_abi_errors(abi: Sequence[dict[str, Any]]) -> list[ABIError]:
    """Collect the custom error definitions of an abi.

    Arguments
    ---------
    abi: Sequence[dict[str, Any]]
        The raw abi items.

    Returns
    -------
    list[ABIError]
        One entry per item of type "error".
    """
    return [
        ABIError(name=item.get("name", ""), inputs=item.get("inputs", []), type="error")
        for item in abi
        if item.get("type") == "error"
    ]


def decode_error_selector(error_selector: str, abi: Sequence[dict[str, Any]]) -> str:
    """Decode the name of a custom error from the revert data of a call.

    Arguments
    ---------
    error_selector: str
        The hex revert data. Only the leading 4 byte selector is used, i.e. 'InvalidToken()'
        would yield '0xc1ab6dc1'.
    abi: Sequence[dict[str, Any]]
        The raw abi items containing the error definitions.

    Returns
    -------
    str
       The name of the error. If the error is not found, returns UnknownError.
    """
    selector = error_selector[:10].lower()
    for error in get_abi_errors(abi):
        # build a list of argument types like 'uint256,bytes,bool'
        input_types_csv = ",".join(error_input.get("type") or "" for error_input in error["inputs"])
        error_signature = f"{error['name']}({input_types_csv})"
        if str(to_hex(primitive=keccak(text=error_signature)))[:10] == selector:
            return error["name"]
    return "UnknownError"
