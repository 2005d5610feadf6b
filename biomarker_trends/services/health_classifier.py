from typing import Sequence

from biomarker_trends.schemas.biomarker import HealthStatus

RECENT_WINDOW = 3
OPTIMAL_MIN_POINTS = 3


def classify_health(latest_is_abnormal: bool, series: Sequence[float]) -> HealthStatus:
    """Four-level status from the latest abnormal flag and the series length.

    Reference ranges are not consulted. For an abnormal latest result the
    recent window is only checked for size: historic points are not
    re-evaluated for abnormality.
    """
    if latest_is_abnormal:
        recent = series[-RECENT_WINDOW:]
        if len(recent) >= 2:
            return HealthStatus.CRITICAL
        return HealthStatus.WARNING

    if len(series) >= OPTIMAL_MIN_POINTS:
        return HealthStatus.OPTIMAL
    return HealthStatus.GOOD
