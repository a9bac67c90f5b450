"""Encoding calls and decoding results with eth-abi."""

from __future__ import annotations

from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import ABITypeError, DecodingError, EncodingError, ParseError
from eth_typing import HexStr
from eth_utils import to_checksum_address
from eth_utils.conversions import to_hex

from abiclient.abi import AbiEntry
from abiclient.codegen import MethodDefinition, MethodKind, OutputShape, PrimitiveType
from abiclient.errors import AbiDecodingError, AbiEncodingError, ContractCallType


def _call_type(method_kind: MethodKind) -> ContractCallType:
    return ContractCallType.READ if method_kind is MethodKind.QUERY else ContractCallType.TRANSACTION


def encode_function_call(
    entry: AbiEntry, fn_args: Sequence[Any], contract_call_type: ContractCallType | None = None
) -> HexStr:
    """Encode the call data of a function call.

    Arguments
    ---------
    entry: AbiEntry
        The function being called.
    fn_args: Sequence[Any]
        The arguments, in abi input order.
    contract_call_type: ContractCallType | None, optional
        The execution path of the call, attached to errors.

    Returns
    -------
    HexStr
        The 4 byte selector followed by the abi encoded arguments.
    """
    if len(fn_args) != len(entry.inputs):
        raise AbiEncodingError(
            f"{entry.signature} takes {len(entry.inputs)} arguments, got {len(fn_args)}.",
            function_name=entry.name,
            contract_call_type=contract_call_type,
            fn_args=fn_args,
        )
    try:
        encoded_args = encode(list(entry.input_types), list(fn_args))
    except (EncodingError, ABITypeError, ParseError) as exc:
        raise AbiEncodingError(
            f"Cannot encode arguments for {entry.signature}: {exc}",
            function_name=entry.name,
            contract_call_type=contract_call_type,
            fn_args=fn_args,
        ) from exc
    return HexStr(to_hex(entry.selector + encoded_args))


def encode_method_call(method: MethodDefinition, fn_args: Sequence[Any]) -> HexStr:
    """Encode the call data of a generated method."""
    return encode_function_call(method.entry, fn_args, _call_type(method.kind))


def decode_function_result(method: MethodDefinition, raw_result: bytes, output_type: type | None = None) -> Any:
    """Decode the raw result of a call according to the method's output plan.

    Arguments
    ---------
    method: MethodDefinition
        The method that was called.
    raw_result: bytes
        The abi encoded return data.
    output_type: type | None, optional
        The class to build aggregate results with. Defaults to the planned dataclass.

    Returns
    -------
    Any
        None without outputs, the value of a single output, otherwise an aggregate
        with one field per output. Addresses are returned checksummed.
    """
    output = method.plan.output
    if output.shape is OutputShape.NONE:
        return None
    try:
        values = decode(list(output.abi_types), bytes(raw_result))
    except (DecodingError, ABITypeError, ParseError, UnicodeDecodeError) as exc:
        raise AbiDecodingError(
            f"Cannot decode the result of {method.entry.signature} as ({','.join(output.abi_types)}): {exc}",
            function_name=method.name,
            contract_call_type=_call_type(method.kind),
        ) from exc
    # addresses come back from eth-abi lowercased
    values = tuple(
        to_checksum_address(value) if output_field.primitive is PrimitiveType.ADDRESS else value
        for output_field, value in zip(output.fields, values)
    )
    if output.shape is OutputShape.SINGLE:
        return values[0]
    if output_type is None:
        output_type = output.aggregate_type
    return output_type(*values)
