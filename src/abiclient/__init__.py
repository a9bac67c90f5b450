"""Typed async clients for smart contracts, generated from their abi. This file exposes the main entry points."""

from abiclient.abi import load_abi_from_file, parse_abi, select_functions
from abiclient.client import (
    ContractClient,
    ReadOnlyConnection,
    ReadWriteConnection,
    Web3QueryBackend,
    Web3TransactionBackend,
    async_build_connection,
)
from abiclient.codegen import (
    ClientDefinition,
    MethodKind,
    PrimitiveType,
    build_client_definition,
    generate_client_from_file,
    render_client_source,
)
from abiclient.config import ClientConfig, build_client_config
from abiclient.errors import AbiDecodingError, AbiEncodingError, ConfigurationError
