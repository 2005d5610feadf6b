import logging

from sqlalchemy.orm import Session

from biomarker_trends.models.lab_report import LabReportRecord, TestResultRecord
from biomarker_trends.schemas.lab_result import LabResult

logger = logging.getLogger(__name__)


def load_lab_results(db: Session, patient_id: str, medical_case_id: str | None = None) -> list[LabResult]:
    """Read every stored test result for a patient as engine input."""
    query = (
        db.query(TestResultRecord, LabReportRecord)
        .join(LabReportRecord, TestResultRecord.doc_id == LabReportRecord.doc_id)
        .filter(LabReportRecord.patient_id == patient_id)
    )
    if medical_case_id is not None:
        query = query.filter(LabReportRecord.medical_case_id == medical_case_id)
    rows = query.order_by(LabReportRecord.report_date.asc(), LabReportRecord.created_at.asc(), TestResultRecord.id.asc()).all()

    results = []
    undated: set[str] = set()
    for test, report in rows:
        if report.report_date is None:
            undated.add(report.doc_id)
            continue
        results.append(
            LabResult(
                test_name=test.test_name,
                value=test.value,
                unit=test.unit,
                reference_range=test.reference_range,
                is_abnormal=bool(test.is_abnormal),
                report_date=report.report_date,
                report_id=report.doc_id,
                lab_name=report.lab_name,
                category=report.category,
                patient_id=report.patient_id,
                medical_case_id=report.medical_case_id,
            )
        )

    if undated:
        logger.warning("Skipped %d report(s) without a report date for patient %s", len(undated), patient_id)
    return results
