"""Rewrite constraint dialects into canonical comparison clauses.

Supported rewrites:
    ^X.Y / ^X.Y.Z     => >=X.Y,<(X+1).0
    ~=X.Y / ~=X.Y.Z   => >=X.Y,<X.(Y+1)
    ==X.Y.*           => >=X.Y,<X.(Y+1)
    <,<=,>,>=,==,!=   => patch component dropped (<3.13.5 => <3.13)

Anything else is returned unchanged; the evaluator decides if it is malformed.
"""

from __future__ import annotations

import re

_CARET_RE = re.compile(r"^\^(\d+)\.(\d+)(?:\.\d+)?$")
_COMPATIBLE_RE = re.compile(r"^~=(\d+)\.(\d+)(?:\.\d+)?$")
_WILDCARD_EQ_RE = re.compile(r"^==(\d+)\.(\d+)\.\*$")
_PATCH_RE = re.compile(r"^(!=|==|>=|<=|>|<)(\d+\.\d+)\.\d+$")


def normalize_constraint(token: str) -> str:
    """Normalize a single constraint clause without evaluating it.

    Args:
        token: One clause, e.g. ``^3.10`` or ``<3.13.2``

    Returns:
        Canonical clause text, possibly comma-joined.
    """
    c = re.sub(r"\s+", "", token)

    m = _CARET_RE.match(c)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor},<{major + 1}.0"

    m = _COMPATIBLE_RE.match(c) or _WILDCARD_EQ_RE.match(c)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor},<{major}.{minor + 1}"

    m = _PATCH_RE.match(c)
    if m:
        return f"{m.group(1)}{m.group(2)}"

    return c


def normalize_expression(expression: str) -> str:
    """Normalize every comma-separated clause of an expression and re-join them."""
    clauses = [part.strip() for part in expression.split(",")]
    return ",".join(normalize_constraint(part) for part in clauses if part)
