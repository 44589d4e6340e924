"""Resolve a project's supported Python versions against a candidate set.

The constraint declaration is tried first; when it is absent or does not
resolve, classifier entries are intersected with the candidates instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled

from .errors import (
    MalformedConstraintError,
    NoConstraintFoundError,
    NoMatchingVersionsError,
    ResolutionError,
)
from .evaluator import parse_version_constraint
from .manifest import extract_classifiers, extract_requires_python_constraint, read_manifest
from .models import PythonVersion, ResolutionMethod, ResolutionResult
from .ordering import sort_versions

logger = logging.getLogger(__name__)


def _intersect_classifiers(
    classifiers: List[PythonVersion], candidates: List[PythonVersion]
) -> List[PythonVersion]:
    available = set(candidates)
    return [v for v in classifiers if v in available]


def resolve_versions(
    manifest_text: str,
    candidates: Iterable[PythonVersion],
    manifest_path: Optional[str] = None,
) -> ResolutionResult:
    """Resolve supported versions from manifest text.

    Args:
        manifest_text: Contents of pyproject.toml
        candidates: Versions eligible for matching
        manifest_path: Only used in error messages

    Returns:
        ResolutionResult with a non-empty, ascending version list.

    Raises:
        NoConstraintFoundError: No constraint and no classifiers declared.
        MalformedConstraintError: The constraint could not be parsed and no
            classifier fallback matched.
        NoMatchingVersionsError: Nothing declared matches the candidates.
    """
    pool = sort_versions(candidates)
    constraint_error: Optional[ResolutionError] = None

    declared = extract_requires_python_constraint(manifest_text)
    if declared is not None:
        logger.info("Found %s constraint: %s", declared.origin, declared.expression)
        try:
            versions = parse_version_constraint(declared.expression, pool)
            return ResolutionResult(
                versions=sort_versions(versions),
                method=ResolutionMethod.CONSTRAINT,
                constraint=declared.expression,
            )
        except (MalformedConstraintError, NoMatchingVersionsError) as exc:
            constraint_error = exc
            logger.warning("%s; trying classifiers", exc)

    classifiers = extract_classifiers(manifest_text)
    if is_debug_enabled(logger):
        logger.debug(
            "Classifier scan finished",
            extra=extra_context(
                event="classifier_scan",
                component="pipeline",
                action="extract_classifiers",
                outcome="found" if classifiers else "none",
                target=manifest_path,
            ),
        )
    if classifiers:
        matched = _intersect_classifiers(classifiers, pool)
        if matched:
            logger.info("Using classifier versions: %s", " ".join(str(v) for v in classifiers))
            return ResolutionResult(
                versions=sort_versions(matched),
                method=ResolutionMethod.CLASSIFIERS,
            )

    if constraint_error is not None:
        raise constraint_error
    if classifiers:
        raise NoMatchingVersionsError()
    raise NoConstraintFoundError(manifest_path)


def resolve_manifest(path: str, candidates: Iterable[PythonVersion]) -> ResolutionResult:
    """Read the manifest at ``path`` and resolve it.

    Raises:
        ManifestMissingError: If the manifest does not exist.
    """
    return resolve_versions(read_manifest(path), candidates, manifest_path=path)
