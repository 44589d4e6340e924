"""Render a resolved version set for CI consumption."""

from __future__ import annotations

import json
import re
from typing import Iterable, List

from constants import Constants

from .models import PythonVersion, ResolvedOutputs
from .ordering import max_version, sort_versions

_TOKEN_RE = re.compile(r"^\d+\.\d+$")


def format_versions(versions: Iterable[PythonVersion]) -> str:
    """Space-joined ascending list, e.g. ``3.9 3.10 3.11``."""
    return " ".join(str(v) for v in sort_versions(versions))


def get_build_version(versions: Iterable[PythonVersion]) -> str:
    """Highest version as text.

    Raises:
        ValueError: If no versions were given.
    """
    return str(max_version(versions))


def generate_matrix_json(versions: Iterable[PythonVersion]) -> str:
    """Matrix document, e.g. ``{"python-version": ["3.9","3.10"]}``.

    An empty set renders as ``{"python-version": []}``.
    """
    values = [str(v) for v in sort_versions(versions)]
    return json.dumps({Constants.MATRIX_KEY: values}, separators=(",", ": "))


def parse_matrix_json(text: str) -> List[PythonVersion]:
    """Recover the versions from a matrix document, preserving order."""
    data = json.loads(text)
    return [PythonVersion.parse(v) for v in data[Constants.MATRIX_KEY]]


def build_outputs(versions: Iterable[PythonVersion]) -> ResolvedOutputs:
    """Derive all three outputs from a non-empty resolved set."""
    ordered = sort_versions(versions)
    return ResolvedOutputs(
        supported_versions=format_versions(ordered),
        build_version=get_build_version(ordered),
        matrix_json=generate_matrix_json(ordered),
    )


def validate_version_format(versions: str) -> bool:
    """True if every whitespace-separated token is ``X.Y``."""
    return all(_TOKEN_RE.match(token) for token in versions.split())


def validate_json_format(text: str) -> bool:
    """True if text is an object holding only the matrix key mapped to an array."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return False
    return (
        isinstance(data, dict)
        and list(data) == [Constants.MATRIX_KEY]
        and isinstance(data[Constants.MATRIX_KEY], list)
    )
