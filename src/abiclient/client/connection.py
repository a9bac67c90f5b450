"""The connection variants a contract client can be bound to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3.types import BlockIdentifier, TxParams, TxReceipt


class QueryCapability(Protocol):
    """Read-only calls against a chain."""

    async def call(self, transaction: TxParams, block_identifier: BlockIdentifier | None = None) -> bytes:
        """Simulate a call and return the raw encoded result."""


class MutationCapability(Protocol):
    """Transaction submission on a chain, on behalf of a single account."""

    @property
    def address(self) -> ChecksumAddress:
        """The account that submits transactions."""

    async def send_transaction(self, transaction: TxParams) -> HexBytes:
        """Submit a transaction and return its hash."""

    async def wait_for_transaction_receipt(self, transaction_hash: HexBytes) -> TxReceipt:
        """Wait for a submitted transaction to settle."""


@dataclass(frozen=True)
class ReadOnlyConnection:
    """A connection that can only query."""

    query: QueryCapability
    chain_id: int


@dataclass(frozen=True)
class ReadWriteConnection:
    """A connection that can query and submit transactions."""

    query: QueryCapability
    mutation: MutationCapability
    chain_id: int


Connection = Union[ReadOnlyConnection, ReadWriteConnection]
