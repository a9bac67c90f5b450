"""Classification of contract functions into queries and mutations."""

from __future__ import annotations

from enum import Enum

from abiclient.abi import AbiEntry, Mutability


class MethodKind(Enum):
    r"""The execution path of a generated method."""

    QUERY = "query"
    """Read-only call, never submits a transaction."""
    MUTATION = "mutation"
    """State-changing call, submitted as a transaction."""


_KIND_BY_MUTABILITY: dict[Mutability, MethodKind] = {
    Mutability.PURE: MethodKind.QUERY,
    Mutability.VIEW: MethodKind.QUERY,
    Mutability.NONPAYABLE: MethodKind.MUTATION,
    Mutability.PAYABLE: MethodKind.MUTATION,
}


def classify(entry: AbiEntry) -> MethodKind:
    """Classify a function by its declared mutability.

    Arguments
    ---------
    entry: AbiEntry
        The function to classify.

    Returns
    -------
    MethodKind
        QUERY for pure and view functions, MUTATION for nonpayable and payable ones.
    """
    return _KIND_BY_MUTABILITY[entry.mutability]
