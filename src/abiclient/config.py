"""Defines the client generation and connection configuration from env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from eth_typing import URI

from abiclient.errors import ConfigurationError


@dataclass
class ClientConfig:
    """The configuration dataclass for generating clients and connecting them to a node."""

    rpc_uri: URI | str = URI("http://localhost:8545")
    """The uri to the ethereum node."""
    chain_id: int | None = None
    """The chain connections must be on. If None, any chain the node reports is accepted."""
    artifacts_dir: str = "./artifacts/contracts"
    """The directory holding compiled contract artifacts."""
    clients_dir: str = "./clients"
    """The directory generated clients are written to."""
    line_length: int = 100
    """The maximum line length of generated clients."""
    txn_receipt_timeout: float = 120.0
    """How long to wait for a transaction receipt, in seconds."""

    def __post_init__(self):
        if isinstance(self.rpc_uri, str):
            self.rpc_uri = URI(self.rpc_uri)
        try:
            if isinstance(self.chain_id, str):
                self.chain_id = int(self.chain_id)
            if isinstance(self.line_length, str):
                self.line_length = int(self.line_length)
            if isinstance(self.txn_receipt_timeout, str):
                self.txn_receipt_timeout = float(self.txn_receipt_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid client configuration: {exc}") from exc


def build_client_config(dotenv_file: str = "abiclient.env") -> ClientConfig:
    """Build a client config that looks for environmental variables.
    If env var exists, use that, otherwise, default.

    Arguments
    ---------
    dotenv_file: str, optional
        The path location of the dotenv file to load from.
        Defaults to "abiclient.env".

    Returns
    -------
    ClientConfig
        Config settings required to generate and connect clients.
    """
    # Look for and load local config if it exists
    if os.path.exists(dotenv_file):
        load_dotenv(dotenv_file)

    env_vars = {
        "rpc_uri": "RPC_URI",
        "chain_id": "CHAIN_ID",
        "artifacts_dir": "ARTIFACTS_DIR",
        "clients_dir": "CLIENTS_DIR",
        "line_length": "LINE_LENGTH",
        "txn_receipt_timeout": "TXN_RECEIPT_TIMEOUT",
    }
    arg_dict = {}
    for field_name, env_var in env_vars.items():
        value = os.getenv(env_var)
        if value is not None:
            arg_dict[field_name] = value
    return ClientConfig(**arg_dict)
