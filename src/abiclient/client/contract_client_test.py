"""Tests for contract_client.py"""

from __future__ import annotations

import asyncio
import inspect

import pytest
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3.exceptions import ContractCustomError

from abiclient.codegen import ClientDefinition, build_client_definition
from abiclient.errors import AbiDecodingError, AbiEncodingError, ConfigurationError, ContractCallType
from abiclient.test_fixtures import (
    CHAIN_ID,
    CONTRACT_ADDRESS,
    SENDER_ADDRESS,
    MockQueryBackend,
    MockTransactionBackend,
)
from abiclient.test_fixtures.abis import ECHO_ABI, TOKEN_ABI, TUPLE_ABI

from .connection import ReadOnlyConnection, ReadWriteConnection
from .contract_client import ContractClient

# we need to use the outer name for fixtures
# pylint: disable=redefined-outer-name


def _call_data(signature: str, types: list[str], values: list) -> str:
    return "0x" + (function_signature_to_4byte_selector(signature) + encode(types, values)).hex()


class TestConstruction:
    """A client is bound to exactly one connection on the contract's chain."""

    def test_read_only(self, token_definition: ClientDefinition, read_connection: ReadOnlyConnection):
        """Bindings are exposed read-only."""
        client = ContractClient(
            contract_address=CONTRACT_ADDRESS.lower(),
            chain_id=CHAIN_ID,
            read_connection=read_connection,
            definition=token_definition,
        )
        assert client.contract_address == CONTRACT_ADDRESS
        assert client.chain_id == CHAIN_ID
        assert client.connection is read_connection
        assert not client.can_transact
        with pytest.raises(AttributeError):
            client.chain_id = 1  # type: ignore[misc]

    def test_no_connection(self, token_definition: ClientDefinition):
        """A client without a connection cannot be built."""
        with pytest.raises(ConfigurationError):
            ContractClient(contract_address=CONTRACT_ADDRESS, chain_id=CHAIN_ID, definition=token_definition)

    def test_both_connections(
        self,
        token_definition: ClientDefinition,
        read_connection: ReadOnlyConnection,
        read_write_connection: ReadWriteConnection,
    ):
        """A client takes a read connection or a read-write connection, never both."""
        with pytest.raises(ConfigurationError):
            ContractClient(
                contract_address=CONTRACT_ADDRESS,
                chain_id=CHAIN_ID,
                read_connection=read_connection,
                read_write_connection=read_write_connection,
                definition=token_definition,
            )

    def test_wrong_connection_variant(
        self, token_definition: ClientDefinition, read_write_connection: ReadWriteConnection
    ):
        """The connection must match the keyword it is passed as."""
        with pytest.raises(ConfigurationError):
            ContractClient(
                contract_address=CONTRACT_ADDRESS,
                chain_id=CHAIN_ID,
                read_connection=read_write_connection,  # type: ignore[arg-type]
                definition=token_definition,
            )

    def test_chain_mismatch(self, token_definition: ClientDefinition, read_connection: ReadOnlyConnection):
        """The connection must be on the chain of the contract."""
        with pytest.raises(ConfigurationError):
            ContractClient(
                contract_address=CONTRACT_ADDRESS,
                chain_id=8453,
                read_connection=read_connection,
                definition=token_definition,
            )

    def test_invalid_address(self, token_definition: ClientDefinition, read_connection: ReadOnlyConnection):
        """Contract addresses are validated."""
        with pytest.raises(ConfigurationError):
            ContractClient(
                contract_address="0x1234",
                chain_id=CHAIN_ID,
                read_connection=read_connection,
                definition=token_definition,
            )

    def test_missing_definition(self, read_connection: ReadOnlyConnection):
        """A plain client needs a definition."""
        with pytest.raises(ConfigurationError):
            ContractClient(contract_address=CONTRACT_ADDRESS, chain_id=CHAIN_ID, read_connection=read_connection)


class TestQueries:
    """Query methods call through the connection and decode the result."""

    def test_total_supply(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """totalSupply(5) answered with 42 returns 42."""
        mock_query_backend.script("totalSupply(uint256)", ["uint256"], [42])
        assert asyncio.run(token_read_client.totalSupply(5)) == 42
        transaction, block_identifier = mock_query_backend.calls[0]
        assert transaction["to"] == CONTRACT_ADDRESS
        assert transaction["data"] == _call_data("totalSupply(uint256)", ["uint256"], [5])
        assert "from" not in transaction
        assert block_identifier is None

    def test_block_number(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Queries can be made at a historical block."""
        mock_query_backend.script("name()", ["string"], ["Scout Game Builders"])
        assert asyncio.run(token_read_client.name(block_number=12)) == "Scout Game Builders"
        assert mock_query_backend.calls[0][1] == 12

    def test_aggregate_result(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Several outputs are returned as one aggregate with a field per output."""
        mock_query_backend.script(
            "getTokenInfo(uint256)", ["address", "uint256", "bool", "string"], [SENDER_ADDRESS, 20, False, "uri"]
        )
        info = asyncio.run(token_read_client.getTokenInfo(tokenId=3))
        assert (info.owner, info.price, info.output2, info.uri) == (SENDER_ADDRESS, 20, False, "uri")
        assert type(info).__name__ == "GetTokenInfoOutput"

    def test_read_write_query_is_sent_from_the_account(
        self, token_read_write_client: ContractClient, mock_query_backend: MockQueryBackend
    ):
        """Queries through a read-write connection are simulated from its account."""
        mock_query_backend.script("balanceOf(address,uint256)", ["uint256"], [7])
        assert asyncio.run(token_read_write_client.balanceOf(SENDER_ADDRESS, 1)) == 7
        assert mock_query_backend.calls[0][0]["from"] == SENDER_ADDRESS

    def test_concurrent_queries(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Queries on one client can run concurrently."""
        mock_query_backend.script("totalSupply(uint256)", ["uint256"], [42])
        mock_query_backend.script("balanceOf(address,uint256)", ["uint256"], [3])
        mock_query_backend.script("name()", ["string"], ["Builders"])

        async def _query_all():
            return await asyncio.gather(
                token_read_client.totalSupply(1),
                token_read_client.balanceOf(SENDER_ADDRESS, 1),
                token_read_client.name(),
            )

        assert asyncio.run(_query_all()) == [42, 3, "Builders"]
        assert len(mock_query_backend.calls) == 3

    def test_echo_round_trip(self, echo_client: ContractClient):
        """Values survive encoding, the call and decoding unchanged."""

        async def _echo_all():
            return await asyncio.gather(
                echo_client.echoAddress(SENDER_ADDRESS),
                echo_client.echoUint(2**256 - 1),
                echo_client.echoInt(-5),
                echo_client.echoBool(True),
                echo_client.echoString("scout game"),
                echo_client.echoBytes(b"\x01\x02"),
            )

        assert asyncio.run(_echo_all()) == [SENDER_ADDRESS, 2**256 - 1, -5, True, "scout game", b"\x01\x02"]
        assert asyncio.run(echo_client.echoAddress(SENDER_ADDRESS.lower())) == SENDER_ADDRESS

    def test_wrong_arity(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Missing arguments fail before the call is made."""
        with pytest.raises(AbiEncodingError) as err:
            asyncio.run(token_read_client.balanceOf(SENDER_ADDRESS))
        assert err.value.function_name == "balanceOf"
        assert err.value.contract_call_type is ContractCallType.READ
        assert not mock_query_backend.calls

    def test_wrong_type(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Arguments that cannot be encoded fail before the call is made."""
        with pytest.raises(AbiEncodingError) as err:
            asyncio.run(token_read_client.totalSupply("five"))
        assert err.value.fn_args == ("five",)
        assert not mock_query_backend.calls

    def test_undecodable_result(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """A result that does not match the outputs is a decoding error."""
        mock_query_backend.script_raw("totalSupply(uint256)", b"\x01")
        with pytest.raises(AbiDecodingError):
            asyncio.run(token_read_client.totalSupply(5))

    def test_custom_error(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Reverts with a custom error are re-raised with the name of the error."""
        mock_query_backend.script_raw("totalSupply(uint256)", ContractCustomError("0xc1ab6dc1", data="0xc1ab6dc1"))
        with pytest.raises(ContractCustomError) as err:
            asyncio.run(token_read_client.totalSupply(5))
        assert "ContractCustomError InvalidToken raised." in err.value.args


class TestMutations:
    """Mutation methods require a read-write connection and submit exactly one transaction."""

    def test_mint_read_only(self, token_read_client: ContractClient, mock_query_backend: MockQueryBackend):
        """Mutations on a read-only client fail before any network interaction."""
        with pytest.raises(ConfigurationError):
            asyncio.run(token_read_client.mint(SENDER_ADDRESS, 1, 10))
        assert not mock_query_backend.calls

    def test_mint(self, token_read_write_client: ContractClient, mock_transaction_backend: MockTransactionBackend):
        """A mutation submits one transaction and returns its receipt."""
        receipt = asyncio.run(token_read_write_client.mint(SENDER_ADDRESS, 1, 10))
        assert len(mock_transaction_backend.transactions) == 1
        transaction = mock_transaction_backend.transactions[0]
        assert transaction["to"] == CONTRACT_ADDRESS
        assert transaction["value"] == 0
        assert "gasPrice" not in transaction
        assert transaction["data"] == _call_data(
            "mint(address,uint256,uint256)", ["address", "uint256", "uint256"], [SENDER_ADDRESS, 1, 10]
        )
        assert receipt["status"] == 1
        assert receipt is mock_transaction_backend.receipts[HexBytes(receipt["transactionHash"])]

    def test_value_and_gas_price(
        self, token_read_write_client: ContractClient, mock_transaction_backend: MockTransactionBackend
    ):
        """Transaction options are attached to the transaction."""
        asyncio.run(token_read_write_client.buyToken(1, 2, "scout", value=10**18, gas_price=3 * 10**9))
        transaction = mock_transaction_backend.transactions[0]
        assert transaction["value"] == 10**18
        assert transaction["gasPrice"] == 3 * 10**9

    def test_struct_arguments(self, read_write_connection: ReadWriteConnection):
        """Tuple arguments are passed through as python tuples."""
        client = ContractClient(
            contract_address=CONTRACT_ADDRESS,
            chain_id=CHAIN_ID,
            read_write_connection=read_write_connection,
            definition=build_client_definition("Vesting", TUPLE_ABI),
        )
        streams = [(100, SENDER_ADDRESS), (200, CONTRACT_ADDRESS)]
        asyncio.run(client.createStreams(streams))
        mutation = read_write_connection.mutation
        assert isinstance(mutation, MockTransactionBackend)
        assert mutation.transactions[0]["data"] == _call_data(
            "createStreams((uint256,address)[])", ["(uint256,address)[]"], [streams]
        )

    def test_transact_query_method(self, token_read_write_client: ContractClient):
        """Each method is bound to a single execution path."""
        with pytest.raises(ConfigurationError):
            asyncio.run(token_read_write_client._async_transact("totalSupply", (1,)))  # pylint: disable=protected-access


class TestDynamicMethods:
    """Methods of a plain client are resolved by name."""

    def test_signature(self, token_read_client: ContractClient):
        """Dynamic methods carry their planned signature."""
        assert list(inspect.signature(token_read_client.mint).parameters) == [
            "account",
            "tokenId",
            "amount",
            "value",
            "gas_price",
        ]
        assert list(inspect.signature(token_read_client.pause).parameters) == ["value", "gas_price"]
        assert inspect.iscoroutinefunction(token_read_client.totalSupply)

    def test_unknown_method(self, token_read_client: ContractClient):
        """Functions that are not in the definition do not exist."""
        with pytest.raises(AttributeError):
            _ = token_read_client.transfer
        assert "mint" in dir(token_read_client)
        assert "setBaseUri" not in dir(token_read_client)


class TestSubclass:
    """Clients declared as subclasses build their definition from their abi."""

    def test_definition_from_abi(self, read_connection: ReadOnlyConnection, mock_query_backend: MockQueryBackend):
        """The contract name defaults to the class name without the Client suffix."""

        class TokenClient(ContractClient):
            """A hand written token client."""

            abi = TOKEN_ABI

            async def totalSupply(self, tokenId: int, *, block_number=None) -> int:
                """Query totalSupply(uint256)."""
                return await self._async_query("totalSupply", (tokenId,), block_number=block_number)

        assert TokenClient.definition is not None
        assert TokenClient.definition.contract_name == "Token"
        assert ContractClient.definition is None
        client = TokenClient(contract_address=CONTRACT_ADDRESS, chain_id=CHAIN_ID, read_connection=read_connection)
        mock_query_backend.script("totalSupply(uint256)", ["uint256"], [42])
        mock_query_backend.script("name()", ["string"], ["Builders"])
        assert asyncio.run(client.totalSupply(5)) == 42
        assert asyncio.run(client.name()) == "Builders"
