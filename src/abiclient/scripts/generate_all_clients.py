"""Generates typed clients for every compiled contract artifact under a directory."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import NamedTuple, Sequence

from abiclient.codegen import generate_client_from_file
from abiclient.config import build_client_config
from abiclient.errors import ConfigurationError
from abiclient.logs import setup_logging

# Directories of artifacts that never get a client
EXCLUDED_DIRS = frozenset({"build-info", "libs", "test"})


def find_artifact_files(artifacts_dir: str | Path) -> list[Path]:
    """Find the contract artifacts below a directory.

    Debug files (`*.dbg.json`) and anything below an excluded directory are skipped.

    Arguments
    ---------
    artifacts_dir: str | Path
        The root of the artifacts.

    Returns
    -------
    list[Path]
        The artifact files, sorted by path.
    """
    root = Path(artifacts_dir)
    artifact_files = []
    for path in sorted(root.rglob("*.json")):
        relative_parts = path.relative_to(root).parts
        if ".dbg." in path.name or EXCLUDED_DIRS.intersection(relative_parts[:-1]):
            continue
        artifact_files.append(path)
    return artifact_files


def main(argv: Sequence[str] | None = None) -> None:
    """Generates a client for every artifact.

    Artifacts that cannot be turned into a client are logged and skipped.

    Arguments
    ---------
    argv: Sequence[str] | None, optional
        The command line arguments. Defaults to sys.argv.
    """
    parsed_args = parse_arguments(argv)
    setup_logging(log_stdout=True)
    artifact_files = find_artifact_files(parsed_args.artifacts_dir)
    logging.info("Generating API clients for %s artifacts in %s", len(artifact_files), parsed_args.artifacts_dir)
    skipped: list[Path] = []
    for i, artifact_file in enumerate(artifact_files):
        logging.info("Generating API client for %s (%s of %s)", artifact_file, i + 1, len(artifact_files))
        try:
            generate_client_from_file(
                artifact_file,
                parsed_args.output_dir,
                artifacts_root=parsed_args.artifacts_dir,
                line_length=parsed_args.line_length,
            )
        except ConfigurationError as err:
            logging.warning("Skipping %s: %s", artifact_file, err)
            skipped.append(artifact_file)
    if skipped:
        logging.warning("Skipped %s of %s artifacts: %s", len(skipped), len(artifact_files), skipped)


class Args(NamedTuple):
    """Command line arguments for generating every client."""

    artifacts_dir: str
    output_dir: str
    line_length: int


def namespace_to_args(namespace: argparse.Namespace) -> Args:
    """Converts argprase.Namespace to Args."""
    return Args(
        artifacts_dir=namespace.artifacts_dir,
        output_dir=namespace.output_dir,
        line_length=namespace.line_length,
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
    parser = argparse.ArgumentParser(description="Generates typed async clients for all contract artifacts.")
    parser.add_argument(
        "--artifacts-dir",
        type=str,
        default=config.artifacts_dir,
        help=f"The directory holding compiled artifacts. Defaults to {config.artifacts_dir}.",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=config.clients_dir,
        help=f"The directory clients are written to. Defaults to {config.clients_dir}.",
    )
    parser.add_argument("--line-length", type=int, default=config.line_length, help="Maximum line length.")
    return namespace_to_args(parser.parse_args(argv))


if __name__ == "__main__":
    main()
