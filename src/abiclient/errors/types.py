"""Typed dicts for abi items that web3 does not export."""

from typing import Literal, Sequence, TypedDict

from eth_typing import ABIComponent


class ABIError(TypedDict, total=True):
    """ABI error definition."""

    name: str
    inputs: Sequence[ABIComponent]
    type: Literal["error"]
