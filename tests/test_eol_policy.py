"""Tests for the end-of-life warn/strip/fail gate."""

import logging
from datetime import date

import pytest

from analysis.eol_policy import apply_eol_policy, eol_message, find_eol_versions
from constants import EolBehaviour
from versioning.errors import EndOfLifeViolationError, NoMatchingVersionsError
from versioning.models import PythonVersion

TODAY = date(2026, 1, 15)
V39, V310, V311 = PythonVersion(3, 9), PythonVersion(3, 10), PythonVersion(3, 11)
EOL_DATES = {
    V39: date(2025, 10, 31),
    V310: date(2026, 10, 31),
    V311: date(2027, 10, 31),
}


class TestFindEolVersions:
    """Test EOL detection."""

    def test_detects_past_eol(self):
        """Test only versions past EOL are reported."""
        assert find_eol_versions([V39, V310, V311], EOL_DATES, TODAY) == [V39]

    def test_unknown_dates_supported(self):
        """Test versions without dates are treated as supported."""
        assert find_eol_versions([PythonVersion(3, 14)], EOL_DATES, TODAY) == []


class TestApplyEolPolicy:
    """Test each mode."""

    def test_warn_keeps_versions(self, caplog):
        """Test warn mode keeps EOL versions and logs a warning."""
        with caplog.at_level(logging.WARNING):
            result = apply_eol_policy([V39, V310], EOL_DATES, EolBehaviour.WARN, TODAY)
        assert result == [V39, V310]
        assert "3.9 reached end-of-life on 2025-10-31" in caplog.text

    def test_strip_removes_versions(self, caplog):
        """Test strip mode removes EOL versions and logs a warning."""
        with caplog.at_level(logging.WARNING):
            result = apply_eol_policy([V39, V310, V311], EOL_DATES, "strip", TODAY)
        assert result == [V310, V311]
        assert "3.9" in caplog.text

    def test_strip_everything_fails(self):
        """Test stripping every version is a resolution failure."""
        with pytest.raises(NoMatchingVersionsError):
            apply_eol_policy([V39], EOL_DATES, EolBehaviour.STRIP, TODAY)

    def test_fail_raises_with_message_per_version(self):
        """Test fail mode names each offending version."""
        later = date(2026, 12, 1)
        with pytest.raises(EndOfLifeViolationError) as exc:
            apply_eol_policy([V39, V310, V311], EOL_DATES, "fail", later)
        assert exc.value.versions == [V39, V310]
        assert len(exc.value.messages) == 2
        assert "3.10" in exc.value.messages[1]

    def test_fail_passes_when_supported(self):
        """Test fail mode succeeds without EOL versions."""
        assert apply_eol_policy([V310, V311], EOL_DATES, EolBehaviour.FAIL, TODAY) == [V310, V311]

    def test_boundary_date_is_eol(self):
        """Test an EOL date equal to today counts as EOL."""
        with pytest.raises(EndOfLifeViolationError):
            apply_eol_policy([V310], EOL_DATES, "fail", date(2026, 10, 31))

    def test_day_before_boundary_supported(self):
        """Test the day before the EOL date is still supported."""
        assert apply_eol_policy([V310], EOL_DATES, "fail", date(2026, 10, 30)) == [V310]

    def test_invalid_mode(self):
        """Test an unknown mode is rejected."""
        with pytest.raises(ValueError):
            apply_eol_policy([V310], EOL_DATES, "ignore", TODAY)


class TestEolMessage:
    """Test message rendering."""

    def test_with_date(self):
        """Test a dated message."""
        assert eol_message(V39, date(2025, 10, 31)) == "Python 3.9 reached end-of-life on 2025-10-31"

    def test_without_date(self):
        """Test the undated form used for eol=true."""
        assert eol_message(V39, date.min) == "Python 3.9 has reached end-of-life"
