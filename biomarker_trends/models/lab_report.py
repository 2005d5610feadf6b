from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import BIGINT, Boolean, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from biomarker_trends.database import Base


class LabReportRecord(Base):
    __tablename__ = "lab_reports"

    doc_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    patient_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    medical_case_id: Mapped[str | None] = mapped_column(String(36), index=True, nullable=True)
    lab_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    report_date: Mapped[date | None] = mapped_column(Date, index=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    test_results = relationship("TestResultRecord", back_populates="report", cascade="all, delete-orphan")


class TestResultRecord(Base):
    __tablename__ = "test_results"

    id: Mapped[int] = mapped_column(BIGINT().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    doc_id: Mapped[str] = mapped_column(String(36), ForeignKey("lab_reports.doc_id", ondelete="CASCADE"), index=True)
    test_name: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_range: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_abnormal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    report = relationship("LabReportRecord", back_populates="test_results")
