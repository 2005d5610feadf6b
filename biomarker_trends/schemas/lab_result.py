from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class LabResult(BaseModel):
    """Single lab test result as read from one report, before aggregation."""
    model_config = ConfigDict(frozen=True)

    test_name: str | None = Field(default=None, description="Raw test name as printed on the report")
    value: str | None = Field(default=None, description="Result value as text, may be non-numeric")
    unit: str | None = Field(default=None, description="Unit of measurement")
    reference_range: str | None = Field(default=None, description="Free-text normal/reference range")
    is_abnormal: bool = Field(default=False, description="Whether the lab flagged the result as abnormal")
    report_date: date = Field(description="Date of the report the result belongs to")
    report_id: str | None = Field(default=None, description="Identifier of the source report")
    lab_name: str | None = Field(default=None, description="Laboratory that produced the report")
    category: str | None = Field(default=None, description="Category or panel of the report")
    patient_id: str | None = Field(default=None, description="Patient the report belongs to")
    medical_case_id: str | None = Field(default=None, description="Medical case the report was filed under")
