"""Loading abi documents from files and selecting the functions to generate."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Sequence

from abiclient.errors import ConfigurationError

from .entries import AbiEntry, ContractInterface, has_unnamed_inputs


def load_abi_from_file(file_path: str | os.PathLike) -> list[dict[str, Any]]:
    """Loads a contract abi from a file.

    The file can either hold the abi array itself, or a compiled contract artifact
    (hardhat or foundry output) that carries the array under an "abi" key.

    Arguments
    ---------
    file_path: str | os.PathLike
        The path to the abi or artifact file.

    Returns
    -------
    list[dict[str, Any]]
        The raw abi items.
    """
    resolved_path = Path(file_path).resolve()
    if not resolved_path.is_file():
        raise ConfigurationError(f"ABI file not found at path: {resolved_path}")
    with open(resolved_path, "r", encoding="utf-8") as file:
        try:
            document = json.load(file)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Failed to load ABI from {resolved_path}: {exc}") from exc
    if isinstance(document, dict) and isinstance(document.get("abi"), list):
        return document["abi"]
    if not isinstance(document, list):
        raise ConfigurationError(f"Invalid ABI format in {resolved_path}. Expected an array.")
    return document


def select_functions(
    interface: ContractInterface, selected_indices: Sequence[int] | None = None
) -> list[AbiEntry]:
    """Pick the functions to include in a client.

    Arguments
    ---------
    interface: ContractInterface
        The parsed abi.
    selected_indices: Sequence[int] | None, optional
        Zero-based positions in the raw abi. Defaults to every function.
        Positions of events or errors are ignored.

    Returns
    -------
    list[AbiEntry]
        The selected functions, in selection order. Functions with unnamed inputs are skipped.
    """
    entry_at_index = dict(zip(interface.function_indices, interface.entries))
    if selected_indices is None:
        candidates = list(interface.entries)
    else:
        candidates = []
        for index in selected_indices:
            if not 0 <= index < len(interface.abi):
                raise ConfigurationError(f"Selected index {index} is out of range for an abi of {len(interface.abi)}.")
            if index in entry_at_index:
                candidates.append(entry_at_index[index])

    selected: list[AbiEntry] = []
    for entry in candidates:
        if has_unnamed_inputs(entry):
            logging.warning("Function %s has unnamed inputs. Skipping...", entry.name)
            continue
        if entry not in selected:
            selected.append(entry)
    return selected
