import logging
from collections import defaultdict
from typing import Iterable

from biomarker_trends.schemas.biomarker import AggregatedBiomarker, SeriesPoint
from biomarker_trends.schemas.lab_result import LabResult
from biomarker_trends.services.health_classifier import classify_health
from biomarker_trends.services.name_normalizer import partition_results
from biomarker_trends.services.trend_analyzer import calculate_trend, to_float

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"


def _build_series(members: list[LabResult]) -> list[SeriesPoint]:
    series = []
    for member in members:
        value = to_float(member.value)
        if value is None:
            continue
        series.append(SeriesPoint(report_date=member.report_date, value=value))
    return series


def _aggregate_group(canonical_name: str, members: list[LabResult]) -> AggregatedBiomarker:
    # sorted() is stable: on equal dates the result seen last in the input is the latest.
    ordered = sorted(members, key=lambda result: result.report_date)
    latest = ordered[-1]

    series = _build_series(ordered)
    values = [point.value for point in series]
    if len(series) < len(ordered):
        logger.debug(
            "Skipped %d non-numeric value(s) for %s",
            len(ordered) - len(series),
            canonical_name,
        )

    trend = calculate_trend(values)
    return AggregatedBiomarker(
        canonical_name=canonical_name,
        display_name=latest.test_name or canonical_name,
        current_value_text=latest.value or "",
        unit=latest.unit or "",
        reference_range_text=latest.reference_range or "",
        category=latest.category or DEFAULT_CATEGORY,
        latest_date=latest.report_date,
        historical_series=series,
        health_status=classify_health(latest.is_abnormal, values),
        trend_direction=trend.direction,
        trend_magnitude_text=trend.magnitude_text,
        trend_percentage_text=trend.percentage_text,
        sample_count=len(ordered),
    )


def aggregate(results: Iterable[LabResult]) -> list[AggregatedBiomarker]:
    """Collapse raw lab results into one aggregated record per biomarker.

    Results are grouped by normalized test name; results without a name are
    dropped with a warning. The input is never modified and every call builds
    new records, so identical input always yields equal output.
    """
    keyed, dropped = partition_results(results)
    if dropped:
        logger.info("Excluded %d lab result(s) without a test name from aggregation", len(dropped))

    groups: dict[str, list[LabResult]] = defaultdict(list)
    for key, result in keyed:
        groups[key].append(result)

    return [_aggregate_group(name, members) for name, members in groups.items()]
