"""Tests for the command-line entry point."""

import logging
from datetime import date
from unittest.mock import patch

import pytest

from args import parse_args
from cli_config import Settings
from constants import Constants, EolBehaviour, ExitCodes
from pyversions import main, run
from registry.endoflife import get_static_candidates
from versioning.errors import EndOfLifeViolationError, NoMatchingVersionsError

BEFORE_ANY_EOL = date(2025, 6, 1)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host CI environment out of the tests."""
    for name in (
        Constants.ENV_PATH_PREFIX,
        Constants.ENV_NETWORK_TIMEOUT,
        Constants.ENV_MAX_RETRIES,
        Constants.ENV_EOL_BEHAVIOUR,
        Constants.ENV_OFFLINE_MODE,
        Constants.ENV_EXCLUDE_EOL,
        Constants.ENV_LOG_LEVEL,
        Constants.ENV_GITHUB_OUTPUT,
        Constants.ENV_GITHUB_ACTIONS,
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_pyversions", False):
            root.removeHandler(handler)


@pytest.fixture
def project(tmp_path):
    """Write a pyproject.toml and return its directory."""
    def _write(text):
        (tmp_path / "pyproject.toml").write_text(text, encoding="utf-8")
        return tmp_path
    return _write


class TestArgs:
    """Test CLI argument parsing."""

    def test_defaults_are_unset(self):
        """Test unset options stay None so other sources can apply."""
        ns = parse_args([])
        assert ns.PATH_PREFIX is None
        assert ns.NETWORK_TIMEOUT is None
        assert ns.OFFLINE_MODE is None
        assert ns.EXCLUDE_EOL is None
        assert ns.EOL_BEHAVIOUR is None

    def test_options(self):
        """Test every option is parsed."""
        ns = parse_args([
            "-d", "proj", "--manifest", "alt.toml", "--timeout", "2", "--retries", "1",
            "--eol-behaviour", "STRIP", "--offline", "--github-output", "out.txt",
            "--loglevel", "debug", "--exclude-eol",
        ])
        assert ns.PATH_PREFIX == "proj"
        assert ns.MANIFEST == "alt.toml"
        assert ns.NETWORK_TIMEOUT == "2"
        assert ns.MAX_RETRIES == "1"
        assert ns.EOL_BEHAVIOUR == "strip"
        assert ns.OFFLINE_MODE is True
        assert ns.GITHUB_OUTPUT == "out.txt"
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.EXCLUDE_EOL is True

    def test_invalid_eol_behaviour(self):
        """Test argparse rejects unknown modes."""
        with pytest.raises(SystemExit):
            parse_args(["--eol-behaviour", "ignore"])


class TestRun:
    """Test the run orchestration."""

    def test_offline_run(self, project):
        """Test an offline run resolves against the static set."""
        root = project('[project]\nrequires-python = ">=3.10"\n')
        settings = Settings(path_prefix=str(root), offline_mode=True)
        outputs = run(settings, today=BEFORE_ANY_EOL)
        assert outputs.supported_versions == "3.10 3.11 3.12 3.13"
        assert outputs.build_version == "3.13"
        assert outputs.matrix_json == '{"python-version": ["3.10","3.11","3.12","3.13"]}'

    def test_strip_mode(self, project):
        """Test strip mode removes EOL versions from the outputs."""
        root = project('[project]\nrequires-python = ">=3.9"\n')
        settings = Settings(path_prefix=str(root), offline_mode=True, eol_behaviour=EolBehaviour.STRIP)
        outputs = run(settings, today=date(2026, 1, 1))
        assert outputs.supported_versions == "3.10 3.11 3.12 3.13"

    def test_fail_mode(self, project):
        """Test fail mode raises before outputs are built."""
        root = project('[project]\nrequires-python = ">=3.9"\n')
        settings = Settings(path_prefix=str(root), offline_mode=True, eol_behaviour=EolBehaviour.FAIL)
        with patch("pyversions.build_outputs") as mock_build:
            with pytest.raises(EndOfLifeViolationError):
                run(settings, today=date(2026, 1, 1))
            mock_build.assert_not_called()

    @patch("pyversions.get_candidate_versions")
    def test_passes_network_settings(self, mock_candidates, project):
        """Test timeout, retries and offline reach the candidate source."""
        mock_candidates.return_value = get_static_candidates()
        root = project('[project]\nrequires-python = ">=3.12"\n')
        settings = Settings(path_prefix=str(root), network_timeout=2.5, max_retries=4)
        run(settings, today=BEFORE_ANY_EOL)
        kwargs = mock_candidates.call_args.kwargs
        assert kwargs["timeout"] == 2.5
        assert kwargs["retries"] == 4
        assert kwargs["offline"] is False
        assert kwargs["exclude_eol"] is False

    @patch("registry.endoflife.get_json")
    def test_exclude_eol_drops_past_versions_before_policy(self, mock_get_json, project):
        """Test the strict lookup removes EOL versions so fail mode passes."""
        mock_get_json.return_value = (200, {}, [
            {"cycle": "3.11", "eol": "2027-10-31"},
            {"cycle": "3.10", "eol": "2026-10-31"},
            {"cycle": "3.9", "eol": "2025-10-31"},
        ])
        root = project('[project]\nrequires-python = ">=3.9"\n')
        settings = Settings(
            path_prefix=str(root), exclude_eol=True, eol_behaviour=EolBehaviour.FAIL
        )
        outputs = run(settings, today=date(2026, 1, 1))
        assert outputs.supported_versions == "3.10 3.11"

    def test_no_match(self, project):
        """Test a constraint above every candidate fails."""
        root = project('[project]\nrequires-python = ">=5.0"\n')
        with pytest.raises(NoMatchingVersionsError):
            run(Settings(path_prefix=str(root), offline_mode=True), today=BEFORE_ANY_EOL)


class TestMain:
    """Test exit codes and output publishing."""

    @patch("pyversions.date")
    def test_success_writes_outputs(self, mock_date, project, tmp_path, capsys):
        """Test outputs are printed and appended to the output file."""
        mock_date.today.return_value = BEFORE_ANY_EOL
        root = project('[project]\nrequires-python = ">=3.11,<3.13"\n')
        out_file = tmp_path / "github_output"

        code = main(["-d", str(root), "--offline", "--github-output", str(out_file)])

        assert code == ExitCodes.SUCCESS.value
        printed = capsys.readouterr().out
        assert "supported_python=3.11 3.12" in printed
        assert out_file.read_text(encoding="utf-8").splitlines() == [
            "supported_python=3.11 3.12",
            "build_python=3.12",
            'matrix_json={"python-version": ["3.11","3.12"]}',
        ]

    def test_missing_manifest(self, tmp_path):
        """Test a missing manifest exits with FILE_ERROR."""
        assert main(["-d", str(tmp_path), "--offline"]) == ExitCodes.FILE_ERROR.value

    def test_no_versions_declared(self, project):
        """Test a manifest without declarations exits with RESOLUTION_ERROR."""
        root = project('[project]\nname = "demo"\n')
        assert main(["-d", str(root), "--offline"]) == ExitCodes.RESOLUTION_ERROR.value

    def test_malformed_constraint(self, project):
        """Test a malformed constraint exits with RESOLUTION_ERROR."""
        root = project('[project]\nrequires-python = "nonsense"\n')
        assert main(["-d", str(root), "--offline"]) == ExitCodes.RESOLUTION_ERROR.value

    @patch("pyversions.date")
    def test_eol_fail(self, mock_date, project):
        """Test fail mode with EOL versions exits with EOL_VIOLATION."""
        mock_date.today.return_value = date(2026, 1, 1)
        root = project('[project]\nrequires-python = ">=3.9"\n')
        code = main(["-d", str(root), "--offline", "--eol-behaviour", "fail"])
        assert code == ExitCodes.EOL_VIOLATION.value

    @patch("pyversions.date")
    def test_eol_warn_still_succeeds(self, mock_date, project):
        """Test warnings do not change the exit code."""
        mock_date.today.return_value = date(2026, 1, 1)
        root = project('[project]\nrequires-python = ">=3.9"\n')
        assert main(["-d", str(root), "--offline"]) == ExitCodes.SUCCESS.value

    def test_invalid_config(self, project, monkeypatch):
        """Test an invalid setting exits with CONFIG_ERROR."""
        root = project('[project]\nrequires-python = ">=3.9"\n')
        monkeypatch.setenv(Constants.ENV_MAX_RETRIES, "many")
        assert main(["-d", str(root), "--offline"]) == ExitCodes.CONFIG_ERROR.value
