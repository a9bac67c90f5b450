"""Parsing, validating and loading contract ABIs."""

from .entries import (
    AbiEntry,
    AbiParam,
    ContractInterface,
    Mutability,
    entries_by_name,
    has_unnamed_inputs,
    is_abi_function,
    parse_abi,
    parse_abi_entry,
)
from .loading import load_abi_from_file, select_functions
