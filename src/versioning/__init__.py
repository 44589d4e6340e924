"""Constraint resolution for supported Python versions."""

from .models import PythonVersion, ResolutionResult
from .pipeline import resolve_manifest, resolve_versions

__all__ = [
    "PythonVersion",
    "ResolutionResult",
    "resolve_manifest",
    "resolve_versions",
]
