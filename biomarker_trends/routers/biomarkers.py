from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from biomarker_trends.database import get_db
from biomarker_trends.routers.presenters import to_item
from biomarker_trends.schemas.biomarker import AggregatedBiomarker
from biomarker_trends.services.aggregator import aggregate
from biomarker_trends.services.filters import (
    TimeFrame,
    aggregate_for_date_range,
    available_time_frames,
    biomarker_trend,
    filter_abnormal_reports,
    filter_normal_reports,
    filter_series,
    search_biomarkers,
    group_by_report,
    group_by_source,
    most_recent_report,
    select_category,
    select_date_range,
    summarize_categories,
)
from biomarker_trends.services.name_normalizer import normalize_name
from biomarker_trends.services.store import load_lab_results

router = APIRouter(prefix="/api/patients/{patient_id}/biomarkers", tags=["biomarkers"])


def _find(biomarkers: list[AggregatedBiomarker], name: str) -> AggregatedBiomarker:
    key = normalize_name(name)
    for biomarker in biomarkers:
        if biomarker.canonical_name == key:
            return biomarker
    raise HTTPException(status_code=404, detail=f"Biomarker '{name}' not found")


@router.get("")
def list_biomarkers(
    patient_id: str,
    medical_case_id: str | None = Query(default=None),
    category: str | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    search: str | None = Query(default=None),
    abnormal: bool | None = Query(default=None, description="true: only reports with an abnormal result, false: only fully normal reports"),
    db: Session = Depends(get_db),
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    results = load_lab_results(db, patient_id, medical_case_id)
    if abnormal is True:
        results = filter_abnormal_reports(results)
    elif abnormal is False:
        results = filter_normal_reports(results)
    selected = select_category(results, category)
    biomarkers = search_biomarkers(aggregate_for_date_range(selected, start_date, end_date), search)
    skipped = sum(1 for r in select_date_range(selected, start_date, end_date) if normalize_name(r.test_name) is None)

    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "biomarkers": [to_item(b).model_dump(mode="json") for b in biomarkers],
            "total": len(biomarkers),
            "skipped_results": skipped,
        },
    }


@router.get("/categories")
def categories(
    patient_id: str,
    medical_case_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    biomarkers = aggregate(load_lab_results(db, patient_id, medical_case_id))
    return {
        "statusCode": 200,
        "message": "Success",
        "data": [summary.model_dump() for summary in summarize_categories(biomarkers)],
    }


@router.get("/sources")
def sources(patient_id: str, db: Session = Depends(get_db)):
    grouped = group_by_source(load_lab_results(db, patient_id))
    data = [
        {"source": source, "reports": len(group_by_report(members)), "results": len(members)}
        for source, members in sorted(grouped.items())
    ]
    return {"statusCode": 200, "message": "Success", "data": data}


@router.get("/latest-report")
def latest_report(
    patient_id: str,
    medical_case_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    members = most_recent_report(load_lab_results(db, patient_id, medical_case_id))
    if not members:
        raise HTTPException(status_code=404, detail=f"No dated reports for patient '{patient_id}'")
    latest = members[-1]
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "report_id": latest.report_id,
            "report_date": latest.report_date.isoformat(),
            "lab_name": latest.lab_name,
            "results": [member.model_dump(mode="json") for member in members],
        },
    }


@router.get("/{name:path}/trend")
def trend(
    patient_id: str,
    name: str,
    medical_case_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    card = biomarker_trend(name, load_lab_results(db, patient_id, medical_case_id))
    if card is None:
        raise HTTPException(status_code=404, detail=f"Biomarker '{name}' not found")
    return {"statusCode": 200, "message": "Success", "data": card.model_dump(mode="json")}


@router.get("/{name:path}/history")
def history(
    patient_id: str,
    name: str,
    time_frame: TimeFrame = Query(default=TimeFrame.ALL),
    medical_case_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    biomarker = _find(aggregate(load_lab_results(db, patient_id, medical_case_id)), name)
    today = date.today()
    points = filter_series(biomarker.historical_series, time_frame, today)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "biomarker": biomarker.display_name,
            "unit": biomarker.unit,
            "reference_range": biomarker.reference_range_text,
            "time_frame": time_frame.value,
            "available_time_frames": [frame.value for frame in available_time_frames(biomarker.historical_series, today)],
            "points": [point.model_dump(mode="json") for point in points],
        },
    }
