"""Connections backed by a web3py AsyncWeb3 instance and a local account."""

from __future__ import annotations

import random

from eth_account.signers.local import LocalAccount
from eth_typing import URI, ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3._utils.threads import Timeout
from web3.exceptions import TimeExhausted, TransactionNotFound
from web3.middleware import ExtraDataToPOAMiddleware
from web3.types import BlockIdentifier, Nonce, TxParams, TxReceipt, Wei

from abiclient.config import ClientConfig
from abiclient.errors import ConfigurationError

from .connection import Connection, ReadOnlyConnection, ReadWriteConnection

DEFAULT_TXN_RECEIPT_TIMEOUT = 120.0


def initialize_async_web3_with_http_provider(rpc_uri: URI | str, request_kwargs: dict | None = None) -> AsyncWeb3:
    """Initialize an AsyncWeb3 instance using an HTTP provider and inject a Proof of Authority (poa) middleware.

    .. note::
        The poa middleware is required to connect to geth --dev and some EVM compatible chains
        like Polygon or BNB Chain, whose blocks carry extra data.

    Arguments
    ---------
    rpc_uri: URI | str
        Address of the http provider.
    request_kwargs: dict | None, optional
        Keyword arguments passed through to the requests of the provider.

    Returns
    -------
    AsyncWeb3
        The web3 instance. No request is made until it is first used.
    """
    web3 = AsyncWeb3(AsyncHTTPProvider(rpc_uri, request_kwargs))
    web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return web3


class Web3QueryBackend:
    """Read-only calls through eth_call."""

    def __init__(self, web3: AsyncWeb3):
        self.web3 = web3

    async def call(self, transaction: TxParams, block_identifier: BlockIdentifier | None = None) -> bytes:
        """Simulate the call and return its raw result."""
        return bytes(await self.web3.eth.call(transaction, block_identifier))


class Web3TransactionBackend:
    """Signs transactions with a local account and submits them as raw transactions."""

    def __init__(
        self,
        web3: AsyncWeb3,
        account: LocalAccount,
        chain_id: int,
        txn_receipt_timeout: float | None = None,
    ):
        self.web3 = web3
        self.account = account
        self.chain_id = chain_id
        if txn_receipt_timeout is None:
            txn_receipt_timeout = DEFAULT_TXN_RECEIPT_TIMEOUT
        self.txn_receipt_timeout = txn_receipt_timeout

    @property
    def address(self) -> ChecksumAddress:
        """The account that submits transactions."""
        return self.account.address

    async def build_transaction(self, transaction: TxParams) -> TxParams:
        """Fill in the sender, nonce, chain id, fees and gas of a transaction request.

        Arguments
        ---------
        transaction: TxParams
            The request, holding at least `to` and `data`.

        Returns
        -------
        TxParams
            The complete transaction, ready to be signed.
        """
        built: TxParams = {**transaction}  # type: ignore[misc]
        built["from"] = self.address
        built["chainId"] = self.chain_id
        # the pending count includes transactions that are still in the mempool
        built["nonce"] = Nonce(await self.web3.eth.get_transaction_count(self.address, "pending"))
        if "gasPrice" not in built:
            max_priority_fee = await self.web3.eth.max_priority_fee
            latest_block = await self.web3.eth.get_block("latest")
            base_fee = latest_block.get("baseFeePerGas", 0)
            built["maxPriorityFeePerGas"] = max_priority_fee
            built["maxFeePerGas"] = Wei(base_fee * 2 + max_priority_fee)
        if "gas" not in built:
            built["gas"] = await self.web3.eth.estimate_gas(built)
        return built

    async def send_transaction(self, transaction: TxParams) -> HexBytes:
        """Sign and submit a transaction.

        Arguments
        ---------
        transaction: TxParams
            The request, holding at least `to` and `data`.

        Returns
        -------
        HexBytes
            The hash of the submitted transaction.
        """
        built = await self.build_transaction(transaction)
        signed_transaction = self.account.sign_transaction(built)  # type: ignore[arg-type]
        return HexBytes(await self.web3.eth.send_raw_transaction(signed_transaction.raw_transaction))

    async def wait_for_transaction_receipt(
        self,
        transaction_hash: HexBytes,
        start_latency: float = 0.01,
        backoff_multiplier: float = 2,
    ) -> TxReceipt:
        """Retrieve the transaction receipt, polling with exponential backoff.

        This is `web3.eth.wait_for_transaction_receipt` with exponential backoff.

        Arguments
        ---------
        transaction_hash: HexBytes
            The hash of the transaction.
        start_latency: float, optional
            The starting amount of time in seconds to wait between polls.
        backoff_multiplier: float, optional
            The backoff factor for the exponential backoff.

        Returns
        -------
        TxReceipt
            The transaction receipt.
        """
        timeout = self.txn_receipt_timeout
        try:
            with Timeout(timeout) as _timeout:
                poll_latency = start_latency
                while True:
                    try:
                        tx_receipt = await self.web3.eth.get_transaction_receipt(transaction_hash)
                    except TransactionNotFound:
                        tx_receipt = None
                    if tx_receipt is not None:
                        break
                    await _timeout.async_sleep(poll_latency)
                    # Exponential backoff
                    poll_latency *= backoff_multiplier
                    # Add random latency to avoid collisions
                    poll_latency += random.uniform(0, 0.1)
        except Timeout as exc:
            raise TimeExhausted(
                f"Transaction {HexBytes(transaction_hash)!r} is not in the chain after {timeout} seconds"
            ) from exc
        return tx_receipt


async def async_build_connection(
    rpc_uri: URI | str | None = None,
    web3: AsyncWeb3 | None = None,
    account: LocalAccount | None = None,
    txn_receipt_timeout: float | None = None,
    client_config: ClientConfig | None = None,
) -> Connection:
    """Build a connection to a node, reading the chain id from it.

    Explicit arguments take precedence over the values of client_config.

    Arguments
    ---------
    rpc_uri: URI | str | None, optional
        The uri of the node. Ignored when a web3 instance is given.
    web3: AsyncWeb3 | None, optional
        An existing web3 instance.
    account: LocalAccount | None, optional
        The account that signs transactions. Without one the connection is read-only.
    txn_receipt_timeout: float | None, optional
        How long to wait for transaction receipts, in seconds. Defaults to 120.
    client_config: ClientConfig | None, optional
        Supplies the rpc uri and receipt timeout when they are not given. When its chain id
        is set, the node must be on that chain.

    Returns
    -------
    Connection
        A ReadWriteConnection when an account is given, otherwise a ReadOnlyConnection.
    """
    # pylint: disable=too-many-arguments
    if client_config is not None:
        if rpc_uri is None:
            rpc_uri = client_config.rpc_uri
        if txn_receipt_timeout is None:
            txn_receipt_timeout = client_config.txn_receipt_timeout
    if web3 is None:
        if rpc_uri is None:
            raise ConfigurationError("Either rpc_uri, web3 or client_config is required to build a connection.")
        web3 = initialize_async_web3_with_http_provider(rpc_uri)
    chain_id = await web3.eth.chain_id
    if client_config is not None and client_config.chain_id is not None and client_config.chain_id != chain_id:
        raise ConfigurationError(
            f"The node is on chain {chain_id} but the configuration expects chain {client_config.chain_id}."
        )
    query = Web3QueryBackend(web3)
    if account is None:
        return ReadOnlyConnection(query=query, chain_id=chain_id)
    mutation = Web3TransactionBackend(web3, account, chain_id, txn_receipt_timeout)
    return ReadWriteConnection(query=query, mutation=mutation, chain_id=chain_id)
