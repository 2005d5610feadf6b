from functools import lru_cache
from typing import NamedTuple

from biomarker_trends.services.trend_analyzer import to_float


class RangeBounds(NamedTuple):
    min: float
    max: float


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> RangeBounds | None:
    # Accepted forms: "12.0-15.5", "<200", "> 40".
    clean = text.strip()

    if "-" in clean:
        # Only the first hyphen splits, so a negative lower bound ("-5--2") does not parse.
        low_text, high_text = clean.split("-", 1)
        low = to_float(low_text)
        high = to_float(high_text)
        if low is None or high is None:
            return None
        return RangeBounds(low, high)

    if clean.startswith("<"):
        high = to_float(clean[1:])
        return RangeBounds(0.0, high) if high is not None else None

    if clean.startswith(">"):
        low = to_float(clean[1:])
        if low is None:
            return None
        # No real upper limit exists; twice the floor gives charts a band to shade.
        return RangeBounds(low, low * 2)

    return None


def parse_range(text: str | None) -> RangeBounds | None:
    if not text:
        return None
    return _parse_cached(text)


def is_value_in_range(value: float, bounds: RangeBounds | None) -> bool:
    if bounds is None:
        return True
    return bounds.min <= value <= bounds.max
