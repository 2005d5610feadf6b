from biomarker_trends.services.aggregator import aggregate
from biomarker_trends.services.descriptors import describe_biomarker
from biomarker_trends.services.filters import (
    TimeFrame,
    aggregate_for_category,
    aggregate_for_date_range,
    available_time_frames,
    biomarker_trend,
    filter_abnormal_reports,
    filter_normal_reports,
    filter_series,
    group_by_report,
    group_by_source,
    most_recent_report,
    search_biomarkers,
    select_category,
    select_date_range,
    summarize_categories,
)
from biomarker_trends.services.health_classifier import classify_health
from biomarker_trends.services.name_normalizer import normalize_name
from biomarker_trends.services.range_parser import RangeBounds, is_value_in_range, parse_range
from biomarker_trends.services.trend_analyzer import TrendResult, calculate_trend

__all__ = [
    "RangeBounds",
    "TimeFrame",
    "TrendResult",
    "aggregate",
    "aggregate_for_category",
    "aggregate_for_date_range",
    "available_time_frames",
    "biomarker_trend",
    "calculate_trend",
    "classify_health",
    "describe_biomarker",
    "filter_abnormal_reports",
    "filter_normal_reports",
    "filter_series",
    "group_by_report",
    "group_by_source",
    "is_value_in_range",
    "most_recent_report",
    "normalize_name",
    "parse_range",
    "search_biomarkers",
    "select_category",
    "select_date_range",
    "summarize_categories",
]
