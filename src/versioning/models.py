"""Data models for version resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from constants import Constants

from .errors import MalformedVersionError

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class PythonVersion:
    """A major.minor interpreter version; ordering is lexicographic on (major, minor)."""
    major: int
    minor: int

    @classmethod
    def parse(cls, text: str) -> "PythonVersion":
        """Parse ``X.Y`` into a PythonVersion.

        Raises:
            MalformedVersionError: If text is not two dot-separated non-negative integers.
        """
        m = _VERSION_RE.match(str(text).strip())
        if not m:
            raise MalformedVersionError(f"Not a major.minor version: '{text}'")
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def truncate(cls, text: str) -> "PythonVersion":
        """Parse ``X.Y``, ``X.Y.Z`` or ``X.Y.*``, dropping anything after ``X.Y``."""
        m = re.match(r"^(\d+)\.(\d+)(?:\.(?:\d+|\*))?$", str(text).strip())
        if not m:
            raise MalformedVersionError(f"Not a major.minor[.patch|.*] version: '{text}'")
        return cls(int(m.group(1)), int(m.group(2)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class CandidateOrigin(Enum):
    """Where the candidate version set came from."""
    LIVE = "live"
    STATIC = "static"


class ResolutionMethod(Enum):
    """Which manifest declaration produced the resolved set."""
    CONSTRAINT = "constraint"
    CLASSIFIERS = "classifiers"


@dataclass
class CandidateSet:
    """Versions eligible for matching, with their end-of-life dates where known.

    ``eol_dates`` maps a version to its EOL date; ``date.min`` marks a version
    reported as already past EOL without a date, None means not scheduled.
    """
    versions: List[PythonVersion]
    origin: CandidateOrigin
    eol_dates: Dict[PythonVersion, Optional[date]] = field(default_factory=dict)


@dataclass
class ManifestConstraint:
    """A constraint expression and the declaration it was read from."""
    expression: str
    origin: str  # "requires-python" | "tool.poetry.dependencies.python"


@dataclass
class ResolutionResult:
    """Resolution outcome handed to the EOL gate and output formatting."""
    versions: List[PythonVersion]
    method: ResolutionMethod
    constraint: Optional[str] = None


@dataclass
class ResolvedOutputs:
    """The three values published for CI consumption."""
    supported_versions: str
    build_version: str
    matrix_json: str

    def as_dict(self) -> Dict[str, str]:
        """Map output names to values."""
        return {
            Constants.OUTPUT_SUPPORTED: self.supported_versions,
            Constants.OUTPUT_BUILD: self.build_version,
            Constants.OUTPUT_MATRIX: self.matrix_json,
        }
