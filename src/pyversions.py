"""python-supported-versions - supported, non end-of-life Python versions of a project

    Reads the project's pyproject.toml, resolves its declared Python support
    against the currently maintained interpreter versions and publishes:

        supported_python  space-separated ascending list
        build_python      the highest supported version
        matrix_json       {"python-version": [...]} for CI matrices

    Returns:
        int: Exit code
"""
import logging
import sys
from datetime import date
from typing import List, Optional

from analysis.eol_policy import apply_eol_policy
from args import parse_args
from cli_config import ConfigError, Settings, load_settings
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from registry.endoflife import get_candidate_versions
from versioning.errors import EndOfLifeViolationError, ManifestMissingError, ResolutionError
from versioning.models import ResolvedOutputs
from versioning.output import build_outputs
from versioning.pipeline import resolve_manifest

logger = logging.getLogger(__name__)


def run(settings: Settings, today: Optional[date] = None) -> ResolvedOutputs:
    """Resolve, gate and format the supported versions for one project.

    Args:
        settings: Runtime settings
        today: Reference date for EOL checks, defaults to the current date

    Returns:
        The three published outputs.

    Raises:
        ResolutionError: Any failure that aborts the run.
    """
    today = today or date.today()
    candidates = get_candidate_versions(
        timeout=settings.network_timeout,
        retries=settings.max_retries,
        offline=settings.offline_mode,
        today=today,
        exclude_eol=settings.exclude_eol,
    )
    logger.info(
        "Candidate Python versions (%s): %s",
        candidates.origin.value,
        " ".join(str(v) for v in candidates.versions),
    )

    result = resolve_manifest(settings.manifest_path, candidates.versions)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolution finished",
            extra=extra_context(
                event="resolution",
                component="cli",
                action="resolve",
                outcome=result.method.value,
                target=settings.manifest_path,
            ),
        )

    versions = apply_eol_policy(result.versions, candidates.eol_dates, settings.eol_behaviour, today)
    return build_outputs(versions)


def write_outputs(outputs: ResolvedOutputs, path: Optional[str]) -> None:
    """Print outputs and append them to a GitHub output file when configured."""
    lines: List[str] = [f"{key}={value}" for key, value in outputs.as_dict().items()]
    for line in lines:
        print(line)
    if path:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_LEVEL", None))

    try:
        settings = load_settings(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return ExitCodes.CONFIG_ERROR.value
    configure_logging(settings.log_level)

    try:
        outputs = run(settings)
    except ManifestMissingError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except EndOfLifeViolationError as exc:
        logger.error("End-of-life Python versions declared (%d); failing", len(exc.versions))
        return ExitCodes.EOL_VIOLATION.value
    except ResolutionError as exc:
        logger.error("%s", exc)
        return ExitCodes.RESOLUTION_ERROR.value

    try:
        write_outputs(outputs, settings.github_output)
    except OSError as exc:
        logger.error("Failed to write outputs to %s: %s", settings.github_output, exc)
        return ExitCodes.FILE_ERROR.value

    logger.info("Build Python version: %s", outputs.build_version)
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
