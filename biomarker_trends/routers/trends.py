from fastapi import APIRouter, Query

from biomarker_trends.routers.presenters import to_item
from biomarker_trends.schemas.biomarker import ReferenceBounds, TrendRequest, TrendResponse
from biomarker_trends.schemas.lab_result import LabResult
from biomarker_trends.services.filters import aggregate_for_category
from biomarker_trends.services.range_parser import parse_range
from biomarker_trends.services.trend_analyzer import calculate_trend

router = APIRouter(prefix="/api", tags=["trends"])


@router.post("/biomarkers/aggregate")
def aggregate_results(results: list[LabResult], category: str | None = Query(default=None)):
    biomarkers = aggregate_for_category(results, category)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "biomarkers": [to_item(b).model_dump(mode="json") for b in biomarkers],
            "total": len(biomarkers),
        },
    }


@router.get("/ranges/parse")
def parse_reference_range(text: str = Query(...)):
    bounds = parse_range(text)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": ReferenceBounds(min=bounds.min, max=bounds.max).model_dump() if bounds else None,
    }


@router.post("/trends/calculate")
def calculate(request: TrendRequest):
    trend = calculate_trend(request.series)
    payload = TrendResponse(
        direction=trend.direction,
        magnitude_text=trend.magnitude_text,
        percentage_text=trend.percentage_text,
    )
    return {"statusCode": 200, "message": "Success", "data": payload.model_dump(mode="json")}
