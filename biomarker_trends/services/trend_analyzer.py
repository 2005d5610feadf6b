import math
import re
from typing import NamedTuple, Sequence

from biomarker_trends.schemas.biomarker import TrendDirection

STABLE_THRESHOLD = 0.01
NO_COMPARISON_TEXT = "No comparison"
NO_PERCENTAGE_TEXT = "--"

# Plain ASCII decimals only; float() alone would also take "1_0" or "١٢".
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class TrendResult(NamedTuple):
    direction: TrendDirection
    magnitude_text: str
    percentage_text: str


def to_float(value: str | None) -> float | None:
    if value is None:
        return None
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def compute_delta(prev: float, curr: float) -> float:
    if prev == 0:
        return 0.0
    return abs((curr - prev) / prev) * 100.0


def calculate_trend(series: Sequence[float]) -> TrendResult:
    """Direction and size of the change between the two most recent values.

    Earlier history is ignored. NaN and infinite entries are skipped. A zero
    previous value yields "0%" instead of dividing by zero.
    """
    finite = [value for value in series if math.isfinite(value)]
    if len(finite) < 2:
        return TrendResult(TrendDirection.STABLE, NO_COMPARISON_TEXT, NO_PERCENTAGE_TEXT)

    previous = finite[-2]
    current = finite[-1]
    change = current - previous
    percentage = compute_delta(previous, current)

    if abs(change) < STABLE_THRESHOLD:
        direction = TrendDirection.STABLE
    elif change > 0:
        direction = TrendDirection.UP
    else:
        direction = TrendDirection.DOWN

    return TrendResult(direction, f"{abs(change):.1f}", f"{percentage:.0f}%")
