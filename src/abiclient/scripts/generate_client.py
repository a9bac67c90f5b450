"""Generates the typed client for a single abi or artifact file."""

from __future__ import annotations

import argparse
from typing import NamedTuple, Sequence

from abiclient.codegen import generate_client_from_file
from abiclient.config import build_client_config
from abiclient.errors import ConfigurationError
from abiclient.logs import setup_logging


def main(argv: Sequence[str] | None = None) -> None:
    """Generates a client module.

    Arguments
    ---------
    argv: Sequence[str] | None, optional
        The command line arguments. Defaults to sys.argv.
    """
    parsed_args = parse_arguments(argv)
    setup_logging(log_stdout=True)
    source = generate_client_from_file(
        parsed_args.abi_path,
        parsed_args.output_dir,
        selected_indices=parsed_args.selected_indices,
        write_client=not parsed_args.dry_run,
        contract_name=parsed_args.contract_name,
        artifacts_root=parsed_args.artifacts_root,
        line_length=parsed_args.line_length,
    )
    if parsed_args.dry_run:
        print(source)


def parse_selection(selection: str | None) -> list[int] | None:
    """Converts a comma separated list of 1-based function positions to zero-based indices.

    Arguments
    ---------
    selection: str | None
        The selection, i.e. '1,3'. Empty means every function.

    Returns
    -------
    list[int] | None
        The zero-based indices, or None to select every function.
    """
    if selection is None or not selection.strip():
        return None
    indices: list[int] = []
    for item in selection.split(","):
        try:
            position = int(item.strip())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid selection {item!r}, expected a number.") from exc
        if position < 1:
            raise ConfigurationError(f"Invalid selection {position}, positions start at 1.")
        indices.append(position - 1)
    return indices


class Args(NamedTuple):
    """Command line arguments for generating a client."""

    abi_path: str
    output_dir: str
    selected_indices: list[int] | None
    contract_name: str | None
    artifacts_root: str | None
    line_length: int
    dry_run: bool


def namespace_to_args(namespace: argparse.Namespace) -> Args:
    """Converts argprase.Namespace to Args.

    Arguments
    ---------
    namespace: argparse.Namespace
        Object for storing arg attributes.

    Returns
    -------
    Args
        Formatted arguments
    """
    return Args(
        abi_path=namespace.abi_path,
        output_dir=namespace.output_dir,
        selected_indices=parse_selection(namespace.select),
        contract_name=namespace.contract_name,
        artifacts_root=namespace.artifacts_root,
        line_length=namespace.line_length,
        dry_run=namespace.dry_run,
    )


def parse_arguments(argv: Sequence[str] | None = None) -> Args:
    """Parses input arguments. Defaults come from the environment, see `build_client_config`.

    Arguments
    ---------
    argv: Sequence[str] | None, optional
        The command line arguments. Defaults to sys.argv.

    Returns
    -------
    Args
        Formatted arguments
    """
    config = build_client_config()
    parser = argparse.ArgumentParser(description="Generates a typed async client from a contract abi.")
    parser.add_argument("abi_path", type=str, help="The abi json file or compiled contract artifact.")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=config.clients_dir,
        help=f"The directory the client is written to. Defaults to {config.clients_dir}.",
    )
    parser.add_argument(
        "--select",
        type=str,
        default=None,
        help="Comma separated 1-based positions in the abi of the functions to include, i.e. '1,3'. "
        "Defaults to every function.",
    )
    parser.add_argument(
        "--contract-name", type=str, default=None, help="The contract name. Defaults to the file name."
    )
    parser.add_argument(
        "--artifacts-root",
        type=str,
        default=None,
        help="Keep the directory structure of the file below this root in the output directory.",
    )
    parser.add_argument("--line-length", type=int, default=config.line_length, help="Maximum line length.")
    parser.add_argument("--dry-run", action="store_true", help="Print the client instead of writing it.")
    return namespace_to_args(parser.parse_args(argv))


if __name__ == "__main__":
    main()
