"""Tests for constraint normalization."""

import pytest

from versioning.normalizer import normalize_constraint, normalize_expression


class TestNormalizeConstraint:
    """Test single-clause normalization."""

    @pytest.mark.parametrize("token,expected", [
        ("^3.10", ">=3.10,<4.0"),
        ("^3.10.1", ">=3.10,<4.0"),
        ("~=3.10", ">=3.10,<3.11"),
        ("~=3.10.1", ">=3.10,<3.11"),
        ("==3.10.*", ">=3.10,<3.11"),
    ])
    def test_shorthand_forms(self, token, expected):
        """Test caret, compatible-release and wildcard rewrites."""
        assert normalize_constraint(token) == expected

    def test_wildcard_matches_compatible_release(self):
        """Test ==X.Y.* normalizes identically to ~=X.Y."""
        assert normalize_constraint("==3.10.*") == normalize_constraint("~=3.10")

    @pytest.mark.parametrize("token,expected", [
        ("<3.13.5", "<3.13"),
        ("<=3.13.5", "<=3.13"),
        (">3.9.1", ">3.9"),
        (">=3.9.2", ">=3.9"),
        ("==3.10.4", "==3.10"),
        ("!=3.10.2", "!=3.10"),
    ])
    def test_patch_stripped(self, token, expected):
        """Test patch components are dropped from comparison clauses."""
        assert normalize_constraint(token) == expected

    def test_exclusion_without_patch_unchanged(self):
        """Test an exclusion clause without patch passes through."""
        assert normalize_constraint("!=3.10") == "!=3.10"

    def test_canonical_clause_unchanged(self):
        """Test an already canonical clause is returned as-is."""
        assert normalize_constraint(">=3.9") == ">=3.9"

    def test_unrecognized_passes_through(self):
        """Test unknown shapes are deferred to the evaluator."""
        assert normalize_constraint("invalid") == "invalid"
        assert normalize_constraint("~3.10") == "~3.10"

    def test_interior_whitespace_removed(self):
        """Test whitespace between operator and version is ignored."""
        assert normalize_constraint(">= 3.9") == ">=3.9"


class TestNormalizeExpression:
    """Test multi-clause normalization."""

    def test_each_clause_normalized(self):
        """Test every clause of a comma list is normalized."""
        assert normalize_expression(">=3.9, <3.13.2") == ">=3.9,<3.13"

    def test_shorthand_inside_list(self):
        """Test shorthand clauses expand inside a list."""
        assert normalize_expression("~=3.10, !=3.10.1") == ">=3.10,<3.11,!=3.10"

    def test_empty_parts_dropped(self):
        """Test stray commas do not create empty clauses."""
        assert normalize_expression(">=3.9,") == ">=3.9"
