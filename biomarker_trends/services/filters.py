from collections import defaultdict
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from biomarker_trends.schemas.biomarker import (
    AggregatedBiomarker,
    BiomarkerTrend,
    CategorySummary,
    HealthStatus,
    SeriesPoint,
)
from biomarker_trends.schemas.lab_result import LabResult
from biomarker_trends.services.aggregator import aggregate
from biomarker_trends.services.name_normalizer import normalize_name
from biomarker_trends.services.trend_analyzer import calculate_trend, to_float

NO_RANGE_TEXT = "N/A"
DIRECT_UPLOAD_SOURCE = "Direct Upload"
OTHER_SOURCE = "Other"
FLAGGED_STATUSES = {HealthStatus.WARNING, HealthStatus.CRITICAL}


class TimeFrame(str, Enum):
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "All"


_LOOKBACK = {
    TimeFrame.ONE_MONTH: relativedelta(months=1),
    TimeFrame.THREE_MONTHS: relativedelta(months=3),
    TimeFrame.SIX_MONTHS: relativedelta(months=6),
    TimeFrame.ONE_YEAR: relativedelta(years=1),
}

# Minimum age of the oldest point before a frame is worth offering.
_MIN_HISTORY_DAYS = {
    TimeFrame.ONE_MONTH: 30,
    TimeFrame.THREE_MONTHS: 90,
    TimeFrame.SIX_MONTHS: 180,
    TimeFrame.ONE_YEAR: 365,
}


def select_category(results: Iterable[LabResult], category: str | None = None) -> list[LabResult]:
    if category is None:
        return list(results)
    return [r for r in results if r.category == category]


def select_date_range(
    results: Iterable[LabResult], start: date | None = None, end: date | None = None
) -> list[LabResult]:
    """Results dated within ``start``..``end`` inclusive; a missing bound is open."""
    return [
        r for r in results
        if (start is None or r.report_date >= start) and (end is None or r.report_date <= end)
    ]


def aggregate_for_category(results: Iterable[LabResult], category: str | None = None) -> list[AggregatedBiomarker]:
    return aggregate(select_category(results, category))


def aggregate_for_date_range(
    results: Iterable[LabResult], start: date | None = None, end: date | None = None
) -> list[AggregatedBiomarker]:
    return aggregate(select_date_range(results, start, end))


def group_by_report(results: Iterable[LabResult]) -> dict[str | None, list[LabResult]]:
    reports: dict[str | None, list[LabResult]] = defaultdict(list)
    for result in results:
        reports[result.report_id].append(result)
    return dict(reports)


def _abnormal_report_ids(results: Iterable[LabResult]) -> set[str | None]:
    return {
        report_id
        for report_id, members in group_by_report(results).items()
        if any(member.is_abnormal for member in members)
    }


def filter_abnormal_reports(results: Iterable[LabResult]) -> list[LabResult]:
    """Every result of each report that holds at least one abnormal result."""
    results = list(results)
    flagged = _abnormal_report_ids(results)
    return [r for r in results if r.report_id in flagged]


def filter_normal_reports(results: Iterable[LabResult]) -> list[LabResult]:
    results = list(results)
    flagged = _abnormal_report_ids(results)
    return [r for r in results if r.report_id not in flagged]


def report_source(result: LabResult) -> str:
    if result.medical_case_id:
        return result.medical_case_id
    if result.patient_id:
        return DIRECT_UPLOAD_SOURCE
    return OTHER_SOURCE


def group_by_source(results: Iterable[LabResult]) -> dict[str, list[LabResult]]:
    sources: dict[str, list[LabResult]] = defaultdict(list)
    for result in results:
        sources[report_source(result)].append(result)
    return dict(sources)


def most_recent_report(results: Iterable[LabResult]) -> list[LabResult]:
    """Results of the latest-dated report; on equal dates the one seen last wins."""
    ordered = sorted(results, key=lambda r: r.report_date)
    if not ordered:
        return []
    latest_id = ordered[-1].report_id
    return [r for r in ordered if r.report_id == latest_id]


def biomarker_trend(test_name: str, results: Iterable[LabResult]) -> BiomarkerTrend | None:
    """Trend card for one biomarker, or None if no result carries that name."""
    key = normalize_name(test_name)
    if key is None:
        return None
    matching = sorted(
        (r for r in results if normalize_name(r.test_name) == key),
        key=lambda r: r.report_date,
    )
    if not matching:
        return None

    latest = matching[-1]
    values = [v for v in (to_float(r.value) for r in matching) if v is not None]
    trend = calculate_trend(values)
    return BiomarkerTrend(
        current_value=to_float(latest.value) or 0.0,
        current_value_text=latest.value or "",
        comparison_text=trend.magnitude_text,
        comparison_percentage=trend.percentage_text,
        trend_direction=trend.direction,
        normal_range=(latest.reference_range or "").strip() or NO_RANGE_TEXT,
    )


def search_biomarkers(biomarkers: Iterable[AggregatedBiomarker], text: str | None = None) -> list[AggregatedBiomarker]:
    needle = (text or "").strip().casefold()
    if needle:
        biomarkers = [
            b for b in biomarkers
            if needle in b.display_name.casefold() or needle in b.category.casefold()
        ]
    return sorted(biomarkers, key=lambda b: b.latest_date, reverse=True)


def filter_series(series: Sequence[SeriesPoint], frame: TimeFrame, today: date | None = None) -> list[SeriesPoint]:
    if frame is TimeFrame.ALL:
        return list(series)
    cutoff = (today or date.today()) - _LOOKBACK[frame]
    return [point for point in series if point.report_date >= cutoff]


def available_time_frames(series: Sequence[SeriesPoint], today: date | None = None) -> list[TimeFrame]:
    if not series:
        return [TimeFrame.ALL]
    oldest = min(point.report_date for point in series)
    history = ((today or date.today()) - oldest) // timedelta(days=1)

    frames = [TimeFrame.ALL]
    for frame, min_days in _MIN_HISTORY_DAYS.items():
        if history >= min_days:
            frames.append(frame)
    return list(reversed(frames))


def summarize_categories(biomarkers: Iterable[AggregatedBiomarker]) -> list[CategorySummary]:
    grouped: dict[str, dict[str, int]] = defaultdict(lambda: {"total": 0, "flagged": 0, "normal": 0})
    for item in biomarkers:
        counts = grouped[item.category]
        counts["total"] += 1
        if item.health_status in FLAGGED_STATUSES:
            counts["flagged"] += 1
        else:
            counts["normal"] += 1

    return [
        CategorySummary(category=category, **counts)
        for category, counts in sorted(grouped.items(), key=lambda kv: kv[0])
    ]
