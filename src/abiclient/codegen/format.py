"""Formatting utilities for generated names and source."""

from __future__ import annotations

import builtins
import keyword
import os
import re

import black

_BUILTIN_NAMES = frozenset(name for name in dir(builtins) if not name.startswith("_"))


def avoid_python_keywords(name: str, reserved: frozenset[str] | set[str] = frozenset()) -> str:
    """Make sure the variable name is not a reserved Python word. If it is, prepend with an underscore.

    Arguments
    ---------
    name: str
       Unsafe variable name.
    reserved: frozenset[str] | set[str], optional
       Additional names that are taken in the scope the variable lives in.

    Returns
    -------
    str
        A string prepended with an underscore if it was a python reserved word.
    """
    if keyword.iskeyword(name) or keyword.issoftkeyword(name) or name in _BUILTIN_NAMES or name in reserved:
        return "_" + name
    return name


def capitalize_first_letter_only(string: str) -> str:
    """Capitalizes the first letter of a string without affecting the rest of the string.
    capitalize() will lowercase the rest of the letters."""
    if not string:
        return string
    return string[0].upper() + string[1:]


def format_code(code: str, line_length: int) -> str:
    """Format code with Black.

    Arguments
    ---------
    code: str
        A string containing Python code.
    line_length: int
        Output file's maximum line length.

    Returns
    -------
    str
        A string containing the Black-formatted code.
    """
    # remove blank lines left by the template and let Black sort it out
    code = re.sub(r"^[ \t]*\n", "", code, flags=re.MULTILINE)
    try:
        return black.format_file_contents(code, fast=False, mode=black.Mode(line_length=line_length))
    except black.NothingChanged:
        return code
    except ValueError as exc:
        raise ValueError(f"cannot format with Black\n code:\n{code}") from exc


def write_code(path: str | os.PathLike, code: str) -> None:
    """Save to specified path the provided code, creating parent directories as needed.

    Arguments
    ---------
    path: str | os.PathLike
        The location of the output file.
    code: str
        The code to be written, as a single string.
    """
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as output_file:
        output_file.write(code)
