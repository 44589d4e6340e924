"""Comparison and ordering primitives over major.minor versions."""

from __future__ import annotations

import operator
from typing import Callable, Dict, Iterable, List, Union

from .models import PythonVersion

VersionLike = Union[PythonVersion, str]

_OPERATORS: Dict[str, Callable[[PythonVersion, PythonVersion], bool]] = {
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
    "eq": operator.eq,
}


def as_version(value: VersionLike) -> PythonVersion:
    """Coerce a string or PythonVersion into a PythonVersion.

    Raises:
        MalformedVersionError: If a string is not ``X.Y``.
    """
    if isinstance(value, PythonVersion):
        return value
    return PythonVersion.parse(value)


def version_compare(v1: VersionLike, op: str, v2: VersionLike) -> bool:
    """Compare two versions with one of ``lt``, ``le``, ``gt``, ``ge``, ``eq``.

    Args:
        v1: Left-hand version
        op: Operator name
        v2: Right-hand version

    Returns:
        Result of the comparison.

    Raises:
        MalformedVersionError: If either version is not ``X.Y``.
        ValueError: If the operator name is unknown.
    """
    try:
        fn = _OPERATORS[op]
    except KeyError:
        raise ValueError(f"Unknown comparison operator: {op}") from None
    return fn(as_version(v1), as_version(v2))


def sort_versions(versions: Iterable[VersionLike]) -> List[PythonVersion]:
    """Return unique versions in ascending order."""
    return sorted({as_version(v) for v in versions})


def max_version(versions: Iterable[VersionLike]) -> PythonVersion:
    """Return the highest version.

    Raises:
        ValueError: If no versions were given.
    """
    ordered = sort_versions(versions)
    if not ordered:
        raise ValueError("Cannot select the highest version of an empty set")
    return ordered[-1]
