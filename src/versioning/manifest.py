"""Locate Python version declarations inside a pyproject.toml manifest.

This is best-effort text matching rather than a TOML parser: only the
``requires-python`` key, the Poetry ``python`` dependency and
``Programming Language :: Python :: X.Y`` classifiers are recognized.
Commented lines are ignored and the first occurrence of a key wins.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Iterator, List, Optional

from .errors import ManifestMissingError
from .models import ManifestConstraint, PythonVersion

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"^\s*#")
_SECTION_RE = re.compile(r"^\[\[?[^\]]+\]\]?\s*(#.*)?$")
_POETRY_DEPS_RE = re.compile(r"^\[tool\.poetry\.dependencies\]")
_REQUIRES_PYTHON_RE = re.compile(r"""requires-python\s*=\s*['"]([^'"]*)['"]""")
_POETRY_PYTHON_RE = re.compile(r"""^\s*python\s*=\s*['"]([^'"]*)['"]""")
_CLASSIFIER_RE = re.compile(r"Programming Language :: Python :: (\d+\.\d+)(?![\d.])")

REQUIRES_PYTHON = "requires-python"
POETRY_PYTHON = "tool.poetry.dependencies.python"


def read_manifest(path: str) -> str:
    """Read a manifest as UTF-8 text.

    Raises:
        ManifestMissingError: If the file does not exist.
    """
    if not os.path.isfile(path):
        raise ManifestMissingError(path)
    logger.debug("Reading manifest %s", path)
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _active_lines(lines: List[str]) -> Iterator[str]:
    for line in lines:
        if not _COMMENT_RE.match(line):
            yield line


def _poetry_dependencies_section(lines: List[str]) -> List[str]:
    """Lines between ``[tool.poetry.dependencies]`` and the next section header."""
    section: List[str] = []
    inside = False
    for line in lines:
        if _POETRY_DEPS_RE.match(line):
            inside = True
            continue
        if inside and _SECTION_RE.match(line):
            break
        if inside:
            section.append(line)
    return section


def _first_value(lines: List[str], pattern: re.Pattern) -> Optional[str]:
    for line in _active_lines(lines):
        m = pattern.search(line)
        if m:
            return m.group(1).strip()
    return None


def extract_requires_python_constraint(text: str) -> Optional[ManifestConstraint]:
    """Return the declared constraint expression, if any.

    ``requires-python`` is tried first, then ``python`` under
    ``[tool.poetry.dependencies]``. An empty value counts as not found.
    """
    lines = text.splitlines()

    value = _first_value(lines, _REQUIRES_PYTHON_RE)
    if value:
        return ManifestConstraint(expression=value, origin=REQUIRES_PYTHON)

    value = _first_value(_poetry_dependencies_section(lines), _POETRY_PYTHON_RE)
    if value:
        return ManifestConstraint(expression=value, origin=POETRY_PYTHON)

    return None


def extract_classifiers(text: str) -> List[PythonVersion]:
    """Return classifier-declared versions in first-seen order, de-duplicated."""
    seen: List[PythonVersion] = []
    for line in _active_lines(text.splitlines()):
        for raw in _CLASSIFIER_RE.findall(line):
            version = PythonVersion.parse(raw)
            if version not in seen:
                seen.append(version)
    return seen
