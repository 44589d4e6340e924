"""Evaluate canonical constraints against a candidate version set."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled

from .errors import MalformedConstraintError, MalformedVersionError, NoMatchingVersionsError
from .models import PythonVersion
from .normalizer import normalize_expression
from .ordering import sort_versions, version_compare

logger = logging.getLogger(__name__)

_CLAUSE_RE = re.compile(r"^(>=|<=|==|!=|>|<)(.*)$")

_OP_NAMES = {
    ">=": "ge",
    ">": "gt",
    "<=": "le",
    "<": "lt",
    "==": "eq",
}


def parse_clause(clause: str) -> Tuple[str, PythonVersion]:
    """Split a canonical clause into (operator, version).

    ``!=`` clauses tolerate a patch component or a ``.*`` wildcard, which is dropped.

    Raises:
        MalformedVersionError: If the operator or version is not recognized.
    """
    m = _CLAUSE_RE.match(clause.strip())
    if not m:
        raise MalformedVersionError(f"Unrecognized clause: '{clause}'")
    op, value = m.group(1), m.group(2).strip()
    if op == "!=":
        return op, PythonVersion.truncate(value)
    return op, PythonVersion.parse(value)


def _apply_clause(op: str, bound: PythonVersion, candidates: List[PythonVersion]) -> List[PythonVersion]:
    if op == "==":
        for v in candidates:
            if version_compare(v, "eq", bound):
                return [v]
        return []
    if op == "!=":
        return [v for v in candidates if not version_compare(v, "eq", bound)]
    return [v for v in candidates if version_compare(v, _OP_NAMES[op], bound)]


def evaluate_constraint(
    constraint: str,
    candidates: Iterable[PythonVersion],
    original: Optional[str] = None,
) -> List[PythonVersion]:
    """Return candidates satisfying a canonical constraint, ascending.

    Clauses are applied left to right, each narrowing the pool left by the
    previous one. Processing stops at the first clause that leaves nothing.

    Args:
        constraint: Canonical constraint, e.g. ``>=3.10,<3.13``
        candidates: Candidate versions
        original: Raw expression for error messages, defaults to ``constraint``

    Returns:
        Matching versions in ascending order (never empty).

    Raises:
        MalformedConstraintError: If a clause is not a recognized shape.
        NoMatchingVersionsError: If no candidate satisfies the constraint.
    """
    reported = original if original is not None else constraint
    pool = sort_versions(candidates)

    for clause in constraint.split(","):
        clause = clause.strip()
        try:
            op, bound = parse_clause(clause)
        except MalformedVersionError:
            raise MalformedConstraintError(reported, clause) from None

        pool = _apply_clause(op, bound, pool)
        if is_debug_enabled(logger):
            logger.debug(
                "Applied constraint clause",
                extra=extra_context(
                    event="constraint_clause",
                    component="evaluator",
                    action="filter",
                    target=clause,
                    outcome="match" if pool else "empty",
                ),
            )
        if not pool:
            raise NoMatchingVersionsError(reported)

    return pool


def parse_version_constraint(expression: str, candidates: Iterable[PythonVersion]) -> List[PythonVersion]:
    """Normalize a raw constraint expression and evaluate it against candidates."""
    canonical = normalize_expression(expression)
    return evaluate_constraint(canonical, candidates, original=expression)

