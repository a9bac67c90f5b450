"""Rendering client definitions as python source with jinja templates."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, Template

from abiclient.abi import load_abi_from_file

from .classify import MethodKind
from .emit import ClientDefinition, MethodDefinition, build_client_definition
from .format import format_code, write_code
from .signature import OutputShape

DEFAULT_LINE_LENGTH = 100

_OPTION_ANNOTATIONS = {
    "block_number": "BlockIdentifier | None",
    "value": "int | None",
    "gas_price": "int | None",
}


def setup_templates() -> Template:
    """Grabs the client template.

    Returns
    -------
    Template
        A jinja template for a python module containing a typed contract client.
    """
    templates_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
    env = Environment(loader=FileSystemLoader(templates_dir), trim_blocks=True, lstrip_blocks=True)
    return env.get_template("client.py.jinja2")


def _method_data(method: MethodDefinition) -> dict:
    plan = method.plan
    arguments = ["self"]
    arguments += [f"{param.python_name}: {param.annotation}" for param in plan.params]
    arguments.append("*")
    arguments += [f"{option}: {_OPTION_ANNOTATIONS[option]} = None" for option in plan.option_names]
    call_args = [param.python_name for param in plan.params]
    is_query = method.kind is MethodKind.QUERY
    return {
        "name": method.name,
        "python_name": method.python_name,
        "arguments": ", ".join(arguments),
        # a single argument still needs the trailing comma of a tuple
        "call_args": f"{call_args[0]}," if len(call_args) == 1 else ", ".join(call_args),
        "return_annotation": plan.output.annotation if is_query else "TxReceipt",
        "is_query": is_query,
        "description": f"{'Query' if is_query else 'Submit a transaction calling'} {method.entry.signature}.",
    }


def render_client_source(definition: ClientDefinition, line_length: int = DEFAULT_LINE_LENGTH) -> str:
    """Returns the source of a python module containing the client.

    Arguments
    ---------
    definition: ClientDefinition
        The client to render.
    line_length: int, optional
        The maximum line length of the formatted source.

    Returns
    -------
    str
        A Black formatted python module with one typed async method per client method.
    """
    aggregates = [
        {
            "name": method.plan.output.aggregate_name,
            "function_name": method.name,
            "fields": method.plan.output.fields,
        }
        for method in definition.queries
        if method.plan.output.shape is OutputShape.AGGREGATE
    ]
    output_types = ", ".join(f"{aggregate['function_name']!r}: {aggregate['name']}" for aggregate in aggregates)
    rendered = setup_templates().render(
        contract_name=definition.contract_name,
        client_name=definition.client_name,
        aggregates=aggregates,
        abi_literal=repr(definition.abi),
        output_types=output_types,
        methods=[_method_data(method) for method in definition.methods],
    )
    return format_code(rendered, line_length)


def client_module_path(
    artifact_path: str | os.PathLike, output_dir: str | os.PathLike, artifacts_root: str | os.PathLike | None = None
) -> Path:
    """Where the client generated from an artifact is written.

    Arguments
    ---------
    artifact_path: str | os.PathLike
        The abi or artifact file, i.e. 'artifacts/protocol/Vesting.sol/Vesting.json'.
    output_dir: str | os.PathLike
        The directory clients are written to.
    artifacts_root: str | os.PathLike | None, optional
        When given, the directory of the artifact relative to this root is kept under output_dir.

    Returns
    -------
    Path
        `<output_dir>/[<relative dir>/]<ContractName>Client.py`
    """
    artifact_path = Path(artifact_path)
    module_dir = Path(output_dir)
    if artifacts_root is not None:
        relative_dir = artifact_path.resolve().parent.relative_to(Path(artifacts_root).resolve())
        module_dir = module_dir / relative_dir
    return module_dir / f"{artifact_path.stem}Client.py"


def generate_client_from_file(
    artifact_path: str | os.PathLike,
    output_dir: str | os.PathLike,
    selected_indices: Sequence[int] | None = None,
    write_client: bool = True,
    contract_name: str | None = None,
    artifacts_root: str | os.PathLike | None = None,
    line_length: int = DEFAULT_LINE_LENGTH,
) -> str:
    """Generates the client module for an abi or artifact file.

    Arguments
    ---------
    artifact_path: str | os.PathLike
        Path to the abi json file or compiled artifact.
    output_dir: str | os.PathLike
        Path to the directory where the client is written.
    selected_indices: Sequence[int] | None, optional
        Zero-based positions of the functions to include. Defaults to every function.
    write_client: bool, optional
        Whether to write the module. Defaults to True.
    contract_name: str | None, optional
        The name of the contract. Defaults to the stem of the file name.
    artifacts_root: str | os.PathLike | None, optional
        Keeps the directory structure of the artifacts below this root.
    line_length: int, optional
        The maximum line length of the formatted source.

    Returns
    -------
    str
        The generated source.
    """
    # pylint: disable=too-many-arguments
    abi = load_abi_from_file(artifact_path)
    definition = build_client_definition(contract_name or Path(artifact_path).stem, abi, selected_indices)
    source = render_client_source(definition, line_length)
    if write_client:
        output_path = client_module_path(artifact_path, output_dir, artifacts_root)
        write_code(output_path, source)
        logging.info("API Client written to %s", output_path)
    return source
