import logging
from typing import Iterable

from biomarker_trends.schemas.lab_result import LabResult

logger = logging.getLogger(__name__)


def normalize_name(raw_name: str | None) -> str | None:
    """Grouping key for a test name: trimmed and lower-cased.

    Returns None when nothing is left after trimming, since such results
    cannot be grouped or rendered.
    """
    if raw_name is None:
        return None
    key = raw_name.strip().lower()
    return key or None


def partition_results(results: Iterable[LabResult]) -> tuple[list[tuple[str, LabResult]], list[LabResult]]:
    keyed: list[tuple[str, LabResult]] = []
    dropped: list[LabResult] = []
    for result in results:
        key = normalize_name(result.test_name)
        if key is None:
            logger.warning(
                "Dropping lab result without a test name (report=%s, date=%s)",
                result.report_id,
                result.report_date,
            )
            dropped.append(result)
            continue
        keyed.append((key, result))
    return keyed, dropped
