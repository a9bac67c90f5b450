"""In-memory connection capabilities that stand in for a node."""

from __future__ import annotations

from typing import Any, Sequence

from eth_abi import decode, encode
from eth_typing import ChecksumAddress
from eth_utils import function_signature_to_4byte_selector, to_checksum_address
from eth_utils.abi import collapse_if_tuple
from eth_utils.conversions import to_hex
from eth_utils.crypto import keccak
from hexbytes import HexBytes
from web3.types import BlockIdentifier, TxParams, TxReceipt

CHAIN_ID = 31337
"""The chain id of a local hardhat or anvil node."""
CONTRACT_ADDRESS = to_checksum_address("0x5fbdb2315678afecb367f032d93f642f64180aa3")
SENDER_ADDRESS = to_checksum_address("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")


def _selector(signature: str) -> str:
    return to_hex(function_signature_to_4byte_selector(signature))


class MockQueryBackend:
    """Answers calls with scripted results and records every call it receives."""

    def __init__(self):
        self.results: dict[str, bytes | Exception] = {}
        self.calls: list[tuple[TxParams, BlockIdentifier | None]] = []

    def script(self, signature: str, output_types: Sequence[str], values: Sequence[Any]) -> None:
        """Return the encoded values whenever the function is called.

        Arguments
        ---------
        signature: str
            The canonical signature of the function, i.e. 'totalSupply(uint256)'.
        output_types: Sequence[str]
            The abi types of the outputs.
        values: Sequence[Any]
            The values to return.
        """
        self.results[_selector(signature)] = encode(list(output_types), list(values))

    def script_raw(self, signature: str, result: bytes | Exception) -> None:
        """Return raw bytes, or raise an exception, whenever the function is called."""
        self.results[_selector(signature)] = result

    async def call(self, transaction: TxParams, block_identifier: BlockIdentifier | None = None) -> bytes:
        """Record the call and answer it from the scripted results."""
        self.calls.append((transaction, block_identifier))
        selector = str(transaction["data"])[:10]
        if selector not in self.results:
            raise LookupError(f"No result scripted for selector {selector}")
        result = self.results[selector]
        if isinstance(result, Exception):
            raise result
        return result


class EchoQueryBackend:
    """Answers every call with its own arguments, encoded as the outputs of the function."""

    def __init__(self, abi: Sequence[dict[str, Any]]):
        self.functions: dict[str, tuple[list[str], list[str]]] = {}
        for item in abi:
            if item.get("type", "function") != "function":
                continue
            input_types = [collapse_if_tuple(dict(param)) for param in item["inputs"]]
            output_types = [collapse_if_tuple(dict(param)) for param in item["outputs"]]
            signature = f"{item['name']}({','.join(input_types)})"
            self.functions[_selector(signature)] = (input_types, output_types)
        self.calls: list[tuple[TxParams, BlockIdentifier | None]] = []

    async def call(self, transaction: TxParams, block_identifier: BlockIdentifier | None = None) -> bytes:
        """Decode the arguments of the call and encode them back as its result."""
        self.calls.append((transaction, block_identifier))
        data = HexBytes(transaction["data"])
        input_types, output_types = self.functions[to_hex(data[:4])]
        return encode(output_types, list(decode(input_types, data[4:])))


class MockTransactionBackend:
    """Accepts transactions without executing them and settles each one immediately."""

    def __init__(self, address: ChecksumAddress = SENDER_ADDRESS):
        self._address = address
        self.transactions: list[TxParams] = []
        self.receipts: dict[HexBytes, TxReceipt] = {}

    @property
    def address(self) -> ChecksumAddress:
        """The account that submits transactions."""
        return self._address

    async def send_transaction(self, transaction: TxParams) -> HexBytes:
        """Record the transaction and return a hash unique to its position."""
        self.transactions.append(transaction)
        transaction_hash = HexBytes(keccak(text=f"{self._address}:{len(self.transactions)}"))
        self.receipts[transaction_hash] = TxReceipt(  # type: ignore[typeddict-item]
            transactionHash=transaction_hash,
            blockNumber=len(self.transactions),
            status=1,
            to=transaction.get("to"),  # type: ignore[typeddict-item]
            **{"from": self._address},
        )
        return transaction_hash

    async def wait_for_transaction_receipt(self, transaction_hash: HexBytes) -> TxReceipt:
        """The receipt of a recorded transaction."""
        return self.receipts[transaction_hash]
