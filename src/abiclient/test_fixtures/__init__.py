"""Test fixtures for abiclient."""

from .abis import ECHO_ABI, TOKEN_ABI, TUPLE_ABI
from .connection_fixture import (
    echo_client,
    mock_query_backend,
    mock_transaction_backend,
    read_connection,
    read_write_connection,
    token_definition,
    token_read_client,
    token_read_write_client,
)
from .mock_connection import (
    CHAIN_ID,
    CONTRACT_ADDRESS,
    SENDER_ADDRESS,
    EchoQueryBackend,
    MockQueryBackend,
    MockTransactionBackend,
)
