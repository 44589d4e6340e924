"""Candidate Python versions from the endoflife.date lifecycle registry.

The live lookup is time-bounded and retried a bounded number of times. Any
failure (transport, bad status, malformed or empty payload) falls back to a
built-in static set, so ``get_candidate_versions`` never raises.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from versioning.errors import CandidateSourceUnavailable
from versioning.models import CandidateOrigin, CandidateSet, PythonVersion
from versioning.ordering import sort_versions

logger = logging.getLogger(__name__)

_CYCLE_RE = re.compile(r"^\d+\.\d+$")


def _parse_eol(value: Any) -> Optional[date]:
    """Map the registry ``eol`` field to a date.

    A boolean ``true`` means already past without a known date and maps to
    ``date.min``; ``false`` or null means not scheduled.
    """
    if value is True:
        return date.min
    if value is None or value is False:
        return None
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def is_eol(eol_date: Optional[date], today: date) -> bool:
    """True if a version with this EOL date is no longer supported on ``today``."""
    return eol_date is not None and eol_date <= today


def get_static_candidates() -> CandidateSet:
    """Return the built-in candidate set. Never fails."""
    versions = sort_versions(Constants.STATIC_PYTHON_VERSIONS)
    eol_dates = {
        PythonVersion.parse(v): _parse_eol(d)
        for v, d in Constants.STATIC_EOL_DATES.items()
    }
    return CandidateSet(versions=versions, origin=CandidateOrigin.STATIC, eol_dates=eol_dates)


def _validate_payload(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, list) or not payload:
        raise CandidateSourceUnavailable("lifecycle payload is not a non-empty array")
    if not all(isinstance(item, dict) and "cycle" in item for item in payload):
        raise CandidateSourceUnavailable("lifecycle payload entries lack a 'cycle' field")
    return payload


def parse_lifecycle_records(
    payload: Any,
    *,
    floor: PythonVersion,
    today: date,
    exclude_eol: bool = False,
) -> CandidateSet:
    """Filter registry records into a live candidate set.

    Args:
        payload: Decoded JSON from the registry
        floor: Lowest minor version to keep
        today: Reference date for EOL checks
        exclude_eol: Drop versions already past EOL instead of leaving that
            decision to the EOL policy

    Raises:
        CandidateSourceUnavailable: If the payload is malformed or nothing survives filtering.
    """
    records = _validate_payload(payload)
    eol_dates: Dict[PythonVersion, Optional[date]] = {}
    for record in records:
        cycle = str(record.get("cycle", "")).strip()
        if not _CYCLE_RE.match(cycle):
            continue
        version = PythonVersion.parse(cycle)
        if version < floor:
            continue
        eol_date = _parse_eol(record.get("eol"))
        if exclude_eol and is_eol(eol_date, today):
            continue
        eol_dates[version] = eol_date

    if not eol_dates:
        raise CandidateSourceUnavailable("no lifecycle records survived filtering")
    return CandidateSet(
        versions=sort_versions(eol_dates),
        origin=CandidateOrigin.LIVE,
        eol_dates=eol_dates,
    )


def fetch_eol_aware_versions(
    *,
    timeout: float = Constants.REQUEST_TIMEOUT,
    retries: int = Constants.HTTP_RETRY_MAX,
    floor: Optional[PythonVersion] = None,
    today: Optional[date] = None,
    exclude_eol: bool = False,
) -> CandidateSet:
    """Fetch and filter the live lifecycle data.

    Raises:
        CandidateSourceUnavailable: On any network or payload failure.
    """
    status_code, _, payload = get_json(Constants.EOL_API_URL, timeout=timeout, retries=retries)
    if status_code != 200 or payload is None:
        raise CandidateSourceUnavailable(f"lifecycle lookup failed (status {status_code})")
    return parse_lifecycle_records(
        payload,
        floor=floor or PythonVersion.parse(Constants.MIN_PYTHON_VERSION),
        today=today or date.today(),
        exclude_eol=exclude_eol,
    )


def get_candidate_versions(
    *,
    timeout: float = Constants.REQUEST_TIMEOUT,
    retries: int = Constants.HTTP_RETRY_MAX,
    offline: bool = False,
    floor: Optional[PythonVersion] = None,
    today: Optional[date] = None,
    exclude_eol: bool = False,
) -> CandidateSet:
    """Return the currently acceptable versions, live when possible.

    Offline mode returns the static set without touching the network.
    """
    if offline:
        logger.info("Offline mode: using static Python versions")
        return get_static_candidates()

    try:
        candidates = fetch_eol_aware_versions(
            timeout=timeout,
            retries=retries,
            floor=floor,
            today=today,
            exclude_eol=exclude_eol,
        )
    except CandidateSourceUnavailable as exc:
        logger.warning("Using static Python versions: %s", exc)
        return get_static_candidates()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.warning("Using static Python versions: unexpected lifecycle error: %s", exc)
        return get_static_candidates()

    if is_debug_enabled(logger):
        logger.debug(
            "Live candidate versions",
            extra=extra_context(
                event="candidates",
                component="endoflife",
                action="fetch",
                outcome="live",
                target=" ".join(str(v) for v in candidates.versions),
            ),
        )
    return candidates
