"""Exceptions raised while resolving supported Python versions."""

from __future__ import annotations

from typing import List, Optional, Sequence


class MalformedVersionError(ValueError):
    """Raised when text is not two dot-separated non-negative integers."""


class ResolutionError(Exception):
    """Base class for failures that abort a resolution run."""


class ManifestMissingError(ResolutionError):
    """The project manifest does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Manifest not found: {path}")
        self.path = path


class NoConstraintFoundError(ResolutionError):
    """Neither a constraint expression nor classifiers were declared."""

    def __init__(self, path: Optional[str] = None):
        where = f" in {path}" if path else ""
        super().__init__(f"No Python version information found{where}")
        self.path = path


class MalformedConstraintError(ResolutionError):
    """A constraint clause does not match any recognized shape."""

    def __init__(self, constraint: str, clause: str):
        super().__init__(f"Malformed constraint clause '{clause}' in '{constraint}'")
        self.constraint = constraint
        self.clause = clause


class NoMatchingVersionsError(ResolutionError):
    """Filtering against the candidate set left nothing."""

    def __init__(self, constraint: Optional[str] = None, detail: Optional[str] = None):
        if detail:
            message = detail
        elif constraint:
            message = f"No candidate Python versions satisfy '{constraint}'"
        else:
            message = "No candidate Python versions match the declared classifiers"
        super().__init__(message)
        self.constraint = constraint


class EndOfLifeViolationError(ResolutionError):
    """Resolved versions are past end-of-life while running in fail mode."""

    def __init__(self, versions: Sequence, messages: Sequence[str]):
        self.versions = list(versions)
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


class CandidateSourceUnavailable(Exception):
    """The live lifecycle lookup failed; callers fall back to the static set."""
