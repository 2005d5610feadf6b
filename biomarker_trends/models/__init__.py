from biomarker_trends.models.lab_report import LabReportRecord, TestResultRecord

__all__ = [
    "LabReportRecord",
    "TestResultRecord",
]
