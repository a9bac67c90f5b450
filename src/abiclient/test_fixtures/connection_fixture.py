"""Test fixtures for connections and clients backed by in-memory capabilities."""

from __future__ import annotations

import pytest

from abiclient.client import ContractClient, ReadOnlyConnection, ReadWriteConnection
from abiclient.codegen import ClientDefinition, build_client_definition

from .abis import ECHO_ABI, TOKEN_ABI
from .mock_connection import CHAIN_ID, CONTRACT_ADDRESS, EchoQueryBackend, MockQueryBackend, MockTransactionBackend

# we need to use the outer name for fixtures
# pylint: disable=redefined-outer-name


@pytest.fixture(scope="function")
def mock_query_backend() -> MockQueryBackend:
    """A query capability with no scripted results."""
    return MockQueryBackend()


@pytest.fixture(scope="function")
def mock_transaction_backend() -> MockTransactionBackend:
    """A transaction capability that settles every transaction."""
    return MockTransactionBackend()


@pytest.fixture(scope="function")
def read_connection(mock_query_backend: MockQueryBackend) -> ReadOnlyConnection:
    """A read-only connection on the local chain."""
    return ReadOnlyConnection(query=mock_query_backend, chain_id=CHAIN_ID)


@pytest.fixture(scope="function")
def read_write_connection(
    mock_query_backend: MockQueryBackend, mock_transaction_backend: MockTransactionBackend
) -> ReadWriteConnection:
    """A read-write connection on the local chain."""
    return ReadWriteConnection(query=mock_query_backend, mutation=mock_transaction_backend, chain_id=CHAIN_ID)


@pytest.fixture(scope="session")
def token_definition() -> ClientDefinition:
    """The client definition of the token contract."""
    return build_client_definition("Token", TOKEN_ABI)


@pytest.fixture(scope="function")
def token_read_client(token_definition: ClientDefinition, read_connection: ReadOnlyConnection) -> ContractClient:
    """A token client that can only query.

    Arguments
    ---------
    token_definition: ClientDefinition
        The client definition of the token contract.
    read_connection: ReadOnlyConnection
        The connection of the client.

    Returns
    -------
    ContractClient
        The client, dispatching methods by name.
    """
    return ContractClient(
        contract_address=CONTRACT_ADDRESS,
        chain_id=CHAIN_ID,
        read_connection=read_connection,
        definition=token_definition,
    )


@pytest.fixture(scope="function")
def token_read_write_client(
    token_definition: ClientDefinition, read_write_connection: ReadWriteConnection
) -> ContractClient:
    """A token client that can query and submit transactions."""
    return ContractClient(
        contract_address=CONTRACT_ADDRESS,
        chain_id=CHAIN_ID,
        read_write_connection=read_write_connection,
        definition=token_definition,
    )


@pytest.fixture(scope="function")
def echo_client() -> ContractClient:
    """A client for a contract that returns its arguments."""
    connection = ReadOnlyConnection(query=EchoQueryBackend(ECHO_ABI), chain_id=CHAIN_ID)
    return ContractClient(
        contract_address=CONTRACT_ADDRESS,
        chain_id=CHAIN_ID,
        read_connection=connection,
        definition=build_client_definition("Echo", ECHO_ABI),
    )
