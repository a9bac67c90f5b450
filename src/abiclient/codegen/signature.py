"""Planning the python signature of a generated contract method."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field, make_dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Mapping, Sequence

from abiclient.abi import AbiEntry
from abiclient.errors import AbiEncodingError, ContractCallType

from .classify import MethodKind, classify
from .format import avoid_python_keywords, capitalize_first_letter_only
from .types import PrimitiveType, solidity_to_primitive_type

QUERY_OPTIONS = ("block_number",)
"""Optional keyword arguments accepted by query methods."""
MUTATION_OPTIONS = ("value", "gas_price")
"""Optional keyword arguments accepted by mutation methods."""
RESERVED_NAMES = frozenset({"self", *QUERY_OPTIONS, *MUTATION_OPTIONS})


class OutputShape(Enum):
    r"""How the outputs of a function are returned."""

    NONE = "none"
    SINGLE = "single"
    AGGREGATE = "aggregate"


@dataclass(frozen=True)
class ParamPlan:
    """A single input of a generated method."""

    name: str
    """The name declared in the abi."""
    python_name: str
    """The name of the python argument."""
    abi_type: str
    primitive: PrimitiveType

    @property
    def annotation(self) -> str:
        """The annotation of the argument in generated source."""
        return self.primitive.annotation


@dataclass(frozen=True)
class OutputField:
    """A single output of a function."""

    name: str
    abi_type: str
    primitive: PrimitiveType

    @property
    def annotation(self) -> str:
        """The annotation of the field in generated source."""
        return self.primitive.annotation


@dataclass(frozen=True)
class OutputPlan:
    """The declared output shape of a function."""

    shape: OutputShape
    fields: tuple[OutputField, ...]
    aggregate_name: str | None = None
    """The class name of the aggregate, only set for OutputShape.AGGREGATE."""

    @property
    def abi_types(self) -> tuple[str, ...]:
        """The types to decode a raw result with."""
        return tuple(output_field.abi_type for output_field in self.fields)

    @property
    def annotation(self) -> str:
        """The return annotation of the method in generated source."""
        if self.shape is OutputShape.NONE:
            return "None"
        if self.shape is OutputShape.SINGLE:
            return self.fields[0].annotation
        assert self.aggregate_name is not None
        return self.aggregate_name

    @cached_property
    def aggregate_type(self) -> type:
        """A frozen dataclass with one field per output."""
        if self.shape is not OutputShape.AGGREGATE or self.aggregate_name is None:
            raise TypeError(f"Outputs with shape {self.shape.value} have no aggregate type.")
        return make_dataclass(
            self.aggregate_name,
            [(output_field.name, output_field.primitive.python_type) for output_field in self.fields],
            frozen=True,
        )


@dataclass(frozen=True)
class SignaturePlan:
    """Everything needed to generate, or dynamically call, a contract method."""

    function_name: str
    kind: MethodKind
    params: tuple[ParamPlan, ...]
    output: OutputPlan
    _signature: inspect.Signature = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # frozen dataclass, so the signature is cached through object.__setattr__
        object.__setattr__(self, "_signature", self._build_signature())

    @property
    def accepts_transaction_options(self) -> bool:
        """Whether the method takes the optional value and gas price of a transaction."""
        return self.kind is MethodKind.MUTATION

    @property
    def takes_arguments(self) -> bool:
        """Whether the method takes a parameter container at all.

        Mutations always do, for their transaction options. Queries only do when they have inputs.
        """
        return bool(self.params) or self.accepts_transaction_options

    @property
    def option_names(self) -> tuple[str, ...]:
        """The keyword-only options of the method."""
        return MUTATION_OPTIONS if self.accepts_transaction_options else QUERY_OPTIONS

    def _build_signature(self) -> inspect.Signature:
        parameters = [
            inspect.Parameter(param.python_name, inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=param.annotation)
            for param in self.params
        ]
        annotations = {"block_number": "BlockIdentifier | None", "value": "int | None", "gas_price": "int | None"}
        parameters += [
            inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=None, annotation=annotations[name])
            for name in self.option_names
        ]
        return_annotation = self.output.annotation if self.kind is MethodKind.QUERY else "TxReceipt"
        return inspect.Signature(parameters, return_annotation=return_annotation)

    def python_signature(self) -> inspect.Signature:
        """The signature of the generated python method, without `self`.

        Returns
        -------
        inspect.Signature
            The abi inputs in order, followed by the keyword-only call options.
        """
        return self._signature

    def bind_arguments(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> tuple[tuple[Any, ...], dict[str, Any]]:
        """Bind a call against the method signature.

        Arguments
        ---------
        args: Sequence[Any]
            Positional arguments of the call.
        kwargs: Mapping[str, Any]
            Keyword arguments of the call.

        Returns
        -------
        tuple[tuple[Any, ...], dict[str, Any]]
            The abi arguments in input order, and the call options.
        """
        try:
            bound = self._signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise AbiEncodingError(
                f"Arguments do not match {self.function_name}{self._signature}: {exc}",
                function_name=self.function_name,
                contract_call_type=(
                    ContractCallType.TRANSACTION if self.accepts_transaction_options else ContractCallType.READ
                ),
                fn_args=tuple(args),
            ) from exc
        fn_args = tuple(bound.arguments[param.python_name] for param in self.params)
        options = {name: bound.arguments.get(name) for name in self.option_names}
        return fn_args, options


def _unique_names(candidates: Sequence[str], fallback_prefix: str) -> list[str]:
    """Resolve empty and clashing names.

    Arguments
    ---------
    candidates: Sequence[str]
        The preferred name of each position, or an empty string.
    fallback_prefix: str
        Positions without a usable name are called `<fallback_prefix><i>`.

    Returns
    -------
    list[str]
        Distinct names, one per position. The first position claiming a name keeps it.
    """
    names: list[str] = []
    for i, candidate in enumerate(candidates):
        if not candidate or candidate in names:
            candidate = f"{fallback_prefix}{i}"
            # must not take a name a later position asks for either
            while candidate in names or candidate in candidates[i + 1 :]:
                candidate = "_" + candidate
        names.append(candidate)
    return names


def plan_output(entry: AbiEntry) -> OutputPlan:
    """Derive the output shape of a function.

    Arguments
    ---------
    entry: AbiEntry
        The function.

    Returns
    -------
    OutputPlan
        No value without outputs, the single mapped type for one output,
        otherwise a named aggregate keyed by each output's name (or output<i>).
    """
    names = _unique_names(
        [avoid_python_keywords(output.name) if output.name else "" for output in entry.outputs], "output"
    )
    fields = [
        OutputField(name=name, abi_type=output.canonical_type, primitive=solidity_to_primitive_type(output.type))
        for name, output in zip(names, entry.outputs)
    ]
    if not fields:
        return OutputPlan(shape=OutputShape.NONE, fields=())
    if len(fields) == 1:
        return OutputPlan(shape=OutputShape.SINGLE, fields=tuple(fields))
    return OutputPlan(
        shape=OutputShape.AGGREGATE,
        fields=tuple(fields),
        aggregate_name=f"{capitalize_first_letter_only(entry.name)}Output",
    )


def plan_signature(entry: AbiEntry) -> SignaturePlan:
    """Derive the signature plan of a function.

    Arguments
    ---------
    entry: AbiEntry
        The function.

    Returns
    -------
    SignaturePlan
        The inputs, options and outputs of the generated method.
    """
    python_names = _unique_names(
        [avoid_python_keywords(param.name, RESERVED_NAMES) if param.name else "" for param in entry.inputs], "arg"
    )
    params = [
        ParamPlan(
            name=param.name,
            python_name=python_name,
            abi_type=param.canonical_type,
            primitive=solidity_to_primitive_type(param.type),
        )
        for python_name, param in zip(python_names, entry.inputs)
    ]
    return SignaturePlan(
        function_name=entry.name,
        kind=classify(entry),
        params=tuple(params),
        output=plan_output(entry),
    )
