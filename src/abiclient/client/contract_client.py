"""The runtime contract client: encode, dispatch and decode contract calls."""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, ClassVar, Coroutine, Sequence

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3.exceptions import ContractCustomError
from web3.types import BlockIdentifier, TxParams, TxReceipt, Wei

from abiclient.codegen import ClientDefinition, MethodDefinition, MethodKind, build_client_definition
from abiclient.errors import ConfigurationError, decode_error_selector

from .codec import decode_function_result, encode_method_call
from .connection import Connection, ReadOnlyConnection, ReadWriteConnection


def _checked_method(
    method: MethodDefinition, generated: Callable[..., Coroutine[Any, Any, Any]]
) -> Callable[..., Coroutine[Any, Any, Any]]:
    """Wrap a typed method of a generated client so calls are checked like dynamic ones.

    Mutations require a read-write connection before anything else. Arguments are bound
    against the method's plan, so mismatches raise AbiEncodingError instead of TypeError.

    Arguments
    ---------
    method: MethodDefinition
        The method the generated function implements.
    generated: Callable[..., Coroutine[Any, Any, Any]]
        The generated coroutine function, taking `self` first.

    Returns
    -------
    Callable[..., Coroutine[Any, Any, Any]]
        The wrapped coroutine function, with the signature of the generated one.
    """

    @functools.wraps(generated)
    async def _method(self: ContractClient, *args, **kwargs):
        if method.kind is MethodKind.MUTATION:
            self._require_read_write(method.name)
        fn_args, options = method.plan.bind_arguments(args, kwargs)
        return await generated(self, *fn_args, **options)

    return _method


class ContractClient:
    """A client for a deployed contract, bound to one address, one chain and one connection.

    Generated clients subclass this and declare an `abi` class attribute; their definition is
    emitted when the class is created and each function gets a typed method. A plain
    ContractClient takes the definition as an argument and resolves methods by name.
    """

    contract_name: ClassVar[str] = ""
    abi: ClassVar[list[dict[str, Any]]] = []
    output_types: ClassVar[dict[str, type]] = {}
    """Classes used for aggregate results, keyed by function name."""
    definition: ClientDefinition | None = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "abi" in cls.__dict__:
            contract_name = cls.contract_name or cls.__name__.removesuffix("Client")
            cls.definition = build_client_definition(contract_name, cls.abi)
            for method in cls.definition.methods:
                generated = cls.__dict__.get(method.python_name)
                if inspect.iscoroutinefunction(generated):
                    setattr(cls, method.python_name, _checked_method(method, generated))

    def __init__(
        self,
        contract_address: str,
        chain_id: int,
        read_connection: ReadOnlyConnection | None = None,
        read_write_connection: ReadWriteConnection | None = None,
        definition: ClientDefinition | None = None,
    ) -> None:
        """Bind the client to a contract.

        Arguments
        ---------
        contract_address: str
            The address of the deployed contract.
        chain_id: int
            The chain the contract is deployed on. Must match the connection's chain.
        read_connection: ReadOnlyConnection | None, optional
            A query-only connection. Exactly one connection must be given.
        read_write_connection: ReadWriteConnection | None, optional
            A transaction-capable connection. Exactly one connection must be given.
        definition: ClientDefinition | None, optional
            The methods of the client. Generated clients carry their own.
        """
        # pylint: disable=too-many-arguments
        if read_connection is None and read_write_connection is None:
            raise ConfigurationError("At least one connection is required.")
        if read_connection is not None and read_write_connection is not None:
            raise ConfigurationError("Provide only a read connection or a read-write connection, not both.")
        if read_connection is not None and not isinstance(read_connection, ReadOnlyConnection):
            raise ConfigurationError(f"read_connection must be a ReadOnlyConnection, got {type(read_connection)}.")
        if read_write_connection is not None and not isinstance(read_write_connection, ReadWriteConnection):
            raise ConfigurationError(
                f"read_write_connection must be a ReadWriteConnection, got {type(read_write_connection)}."
            )
        connection: Connection = read_connection or read_write_connection  # type: ignore[assignment]
        if connection.chain_id != chain_id:
            raise ConfigurationError(
                f"Connection is on chain {connection.chain_id} but the contract is on chain {chain_id}. "
                "The connection must be on the same chain as the contract."
            )
        definition = definition or type(self).definition
        if definition is None:
            raise ConfigurationError(f"{type(self).__name__} needs a client definition.")
        try:
            checksum_address = to_checksum_address(contract_address)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid contract address {contract_address!r}.") from exc

        self.definition = definition
        self._client_contract_address = checksum_address
        self._client_chain_id = chain_id
        self._client_connection = connection

    @property
    def contract_address(self) -> ChecksumAddress:
        """The address of the contract."""
        return self._client_contract_address

    @property
    def chain_id(self) -> int:
        """The chain the contract is deployed on."""
        return self._client_chain_id

    @property
    def connection(self) -> Connection:
        """The connection every call goes through."""
        return self._client_connection

    @property
    def can_transact(self) -> bool:
        """Whether the client holds a transaction-capable connection."""
        return isinstance(self._client_connection, ReadWriteConnection)

    def __getattr__(self, name: str) -> Callable[..., Coroutine[Any, Any, Any]]:
        definition = self.__dict__.get("definition")
        method = definition.find_python_method(name) if definition is not None else None
        if method is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self._bind_method(method)

    def __dir__(self):
        names = list(super().__dir__())
        if self.definition is not None:
            names += [method.python_name for method in self.definition.methods]
        return sorted(set(names))

    def _bind_method(self, method: MethodDefinition) -> Callable[..., Coroutine[Any, Any, Any]]:
        """Build the coroutine function for a method, following its fixed execution path."""
        plan = method.plan
        if method.kind is MethodKind.QUERY:

            async def _method(*args, **kwargs):
                fn_args, options = plan.bind_arguments(args, kwargs)
                return await self._async_query(method.name, fn_args, **options)

        else:

            async def _method(*args, **kwargs):
                self._require_read_write(method.name)
                fn_args, options = plan.bind_arguments(args, kwargs)
                return await self._async_transact(method.name, fn_args, **options)

        _method.__name__ = method.python_name
        _method.__qualname__ = f"{type(self).__name__}.{method.python_name}"
        _method.__signature__ = plan.python_signature()  # type: ignore[attr-defined]
        _method.__doc__ = f"{method.kind.value.capitalize()} method for {method.entry.signature}."
        return _method

    def _require_read_write(self, function_name: str) -> ReadWriteConnection:
        connection = self._client_connection
        if not isinstance(connection, ReadWriteConnection):
            raise ConfigurationError(
                f"A read-write connection is required to call {function_name}, "
                f"but {type(self).__name__} was created with a read-only connection."
            )
        return connection

    def _annotate_custom_error(self, err: ContractCustomError, function_name: str, fn_args: Sequence[Any]) -> None:
        revert_data = err.data if isinstance(err.data, str) else str(err.args[0])
        assert self.definition is not None
        error_name = decode_error_selector(revert_data, self.definition.abi)
        logging.warning(
            "ContractCustomError %s raised.\n function name: %s\nfunction args: %s", error_name, function_name, fn_args
        )
        err.args += (f"ContractCustomError {error_name} raised.",)

    async def _async_query(
        self,
        function_name: str,
        fn_args: Sequence[Any] = (),
        block_number: BlockIdentifier | None = None,
    ) -> Any:
        """Call a query method and decode its result.

        Arguments
        ---------
        function_name: str
            The name of the function in the abi.
        fn_args: Sequence[Any]
            The arguments, in abi input order.
        block_number: BlockIdentifier | None, optional
            The block to query at. Defaults to the latest block.

        Returns
        -------
        Any
            The decoded result.
        """
        assert self.definition is not None
        method = self.definition.get_method(function_name)
        if method.kind is not MethodKind.QUERY:
            raise ConfigurationError(f"{function_name} is a mutation and cannot be called as a query.")
        call_data = encode_method_call(method, fn_args)
        transaction: TxParams = {"to": self._client_contract_address, "data": call_data}
        if isinstance(self._client_connection, ReadWriteConnection):
            transaction["from"] = self._client_connection.mutation.address
        logging.debug("Calling %s.%s%s", self.definition.contract_name, function_name, tuple(fn_args))
        try:
            raw_result = await self._client_connection.query.call(transaction, block_number)
        except ContractCustomError as err:
            self._annotate_custom_error(err, function_name, fn_args)
            raise
        return decode_function_result(method, raw_result, self.output_types.get(function_name))

    async def _async_transact(
        self,
        function_name: str,
        fn_args: Sequence[Any] = (),
        value: int | None = None,
        gas_price: int | None = None,
    ) -> TxReceipt:
        """Submit a mutation method as a transaction and wait for its receipt.

        Arguments
        ---------
        function_name: str
            The name of the function in the abi.
        fn_args: Sequence[Any]
            The arguments, in abi input order.
        value: int | None, optional
            The wei attached to the transaction. Defaults to 0.
        gas_price: int | None, optional
            Overrides the gas price of the transaction.

        Returns
        -------
        TxReceipt
            The receipt of the settled transaction.
        """
        connection = self._require_read_write(function_name)
        assert self.definition is not None
        method = self.definition.get_method(function_name)
        if method.kind is not MethodKind.MUTATION:
            raise ConfigurationError(f"{function_name} is a query and cannot be submitted as a transaction.")
        call_data = encode_method_call(method, fn_args)
        transaction: TxParams = {
            "to": self._client_contract_address,
            "data": call_data,
            "value": Wei(value if value is not None else 0),
        }
        if gas_price is not None:
            transaction["gasPrice"] = Wei(gas_price)
        try:
            transaction_hash = await connection.mutation.send_transaction(transaction)
        except ContractCustomError as err:
            self._annotate_custom_error(err, function_name, fn_args)
            raise
        logging.info(
            "Submitted %s.%s in transaction %s",
            self.definition.contract_name,
            function_name,
            transaction_hash.hex(),
        )
        return await connection.mutation.wait_for_transaction_receipt(transaction_hash)
