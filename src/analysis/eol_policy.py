"""End-of-life gate applied to a resolved version set.

Modes:
    warn  - keep EOL versions, log a warning for each
    strip - drop EOL versions, log a warning for each
    fail  - raise EndOfLifeViolationError naming every EOL version
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Union

from constants import EolBehaviour
from registry.endoflife import is_eol
from versioning.errors import EndOfLifeViolationError, NoMatchingVersionsError
from versioning.models import PythonVersion

logger = logging.getLogger(__name__)


def find_eol_versions(
    versions: List[PythonVersion],
    eol_dates: Dict[PythonVersion, Optional[date]],
    today: date,
) -> List[PythonVersion]:
    """Versions whose EOL date is on or before ``today``."""
    return [v for v in versions if is_eol(eol_dates.get(v), today)]


def eol_message(version: PythonVersion, eol_date: Optional[date]) -> str:
    """Human-readable EOL notice for one version."""
    if eol_date is None or eol_date == date.min:
        return f"Python {version} has reached end-of-life"
    return f"Python {version} reached end-of-life on {eol_date.isoformat()}"


def apply_eol_policy(
    versions: List[PythonVersion],
    eol_dates: Dict[PythonVersion, Optional[date]],
    mode: Union[EolBehaviour, str],
    today: Optional[date] = None,
) -> List[PythonVersion]:
    """Filter or gate resolved versions according to ``mode``.

    Args:
        versions: Resolved versions, ascending
        eol_dates: Known EOL dates per version
        mode: warn, strip or fail
        today: Reference date, defaults to the current date

    Returns:
        The versions to publish.

    Raises:
        EndOfLifeViolationError: In fail mode when any version is EOL.
        NoMatchingVersionsError: In strip mode when every version is EOL.
    """
    behaviour = EolBehaviour(mode) if not isinstance(mode, EolBehaviour) else mode
    today = today or date.today()

    expired = find_eol_versions(versions, eol_dates, today)
    if not expired:
        return list(versions)

    messages = [eol_message(v, eol_dates.get(v)) for v in expired]

    if behaviour is EolBehaviour.FAIL:
        for message in messages:
            logger.error(message)
        raise EndOfLifeViolationError(expired, messages)

    for message in messages:
        logger.warning(message)

    if behaviour is EolBehaviour.WARN:
        return list(versions)

    kept = [v for v in versions if v not in expired]
    if not kept:
        raise NoMatchingVersionsError(
            detail="Every resolved Python version is past end-of-life"
        )
    logger.info("Stripped end-of-life versions: %s", " ".join(str(v) for v in expired))
    return kept
