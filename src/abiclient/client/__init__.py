"""The runtime contract client and the connections it is bound to."""

from .codec import decode_function_result, encode_function_call, encode_method_call
from .connection import Connection, MutationCapability, QueryCapability, ReadOnlyConnection, ReadWriteConnection
from .contract_client import ContractClient
from .web3_connection import (
    DEFAULT_TXN_RECEIPT_TIMEOUT,
    Web3QueryBackend,
    Web3TransactionBackend,
    async_build_connection,
    initialize_async_web3_with_http_provider,
)
