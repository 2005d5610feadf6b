from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, FiniteFloat


class HealthStatus(str, Enum):
    OPTIMAL = "optimal"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    report_date: date
    value: float


class AggregatedBiomarker(BaseModel):
    """One biomarker's history across every report it appears in."""
    model_config = ConfigDict(frozen=True)

    canonical_name: str
    display_name: str
    current_value_text: str
    unit: str
    reference_range_text: str
    category: str
    latest_date: date
    historical_series: list[SeriesPoint]
    health_status: HealthStatus
    trend_direction: TrendDirection
    trend_magnitude_text: str
    trend_percentage_text: str
    sample_count: int


class BiomarkerTrend(BaseModel):
    """Trend card for a single biomarker."""
    model_config = ConfigDict(frozen=True)

    current_value: float
    current_value_text: str
    comparison_text: str
    comparison_percentage: str
    trend_direction: TrendDirection
    normal_range: str


class ReferenceBounds(BaseModel):
    min: float
    max: float


class BiomarkerItem(BaseModel):
    id: str
    biomarker: AggregatedBiomarker
    description: str
    reference_bounds: ReferenceBounds | None


class CategorySummary(BaseModel):
    category: str
    total: int
    flagged: int
    normal: int


class TrendRequest(BaseModel):
    series: list[FiniteFloat]


class TrendResponse(BaseModel):
    direction: TrendDirection
    magnitude_text: str
    percentage_text: str
