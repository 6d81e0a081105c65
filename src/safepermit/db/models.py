from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from safepermit.db.base import Base, TimestampMixin, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    phone: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_login: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    applications: Mapped[list[SafeForm]] = relationship(back_populates="user", passive_deletes=True)


class SafeForm(TimestampMixin, Base):
    __tablename__ = "safe_forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    application_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    applicant_name: Mapped[str] = mapped_column(String(100), nullable=False)
    applicant_id: Mapped[str] = mapped_column(String(20), nullable=False)
    applicant_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    applicant_employee_number: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    applicant_department: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    work_company: Mapped[str] = mapped_column(String(200), nullable=False)
    work_project: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    work_location: Mapped[str] = mapped_column(String(500), nullable=False)
    work_type: Mapped[str] = mapped_column(String(50), default="quality_rework", nullable=False)
    work_content: Mapped[str] = mapped_column(Text, nullable=False)
    work_start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    work_end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    is_product_work: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    product_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    product_specification: Mapped[str | None] = mapped_column(String(200), nullable=True)
    product_quantity: Mapped[str | None] = mapped_column(String(100), nullable=True)

    work_basis: Mapped[str | None] = mapped_column(String(50), nullable=True)
    basis_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    danger_types: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    notifier_name: Mapped[str] = mapped_column(String(100), nullable=False)
    notifier_employee_number: Mapped[str] = mapped_column(String(50), nullable=False)
    notifier_department: Mapped[str] = mapped_column(String(100), nullable=False)
    notifier_phone: Mapped[str] = mapped_column(String(20), nullable=False)

    user: Mapped[User | None] = relationship(back_populates="applications")
    persons: Mapped[list[AccompanyingPerson]] = relationship(
        back_populates="form",
        order_by="AccompanyingPerson.id",
        passive_deletes=True,
    )


class AccompanyingPerson(Base):
    __tablename__ = "accompanying_persons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    form_id: Mapped[int] = mapped_column(ForeignKey("safe_forms.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    id_number: Mapped[str] = mapped_column(String(20), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    employee_number: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    department: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    form: Mapped[SafeForm] = relationship(back_populates="persons")


# Sync tables are read by other software: camelCase column names and no
# foreign key back to the primary tables.


class SyncFormHead(Base):
    __tablename__ = "safeformhead"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    application_number: Mapped[str] = mapped_column("applicationNumber", Text, nullable=False)
    name: Mapped[str] = mapped_column("name", Text, nullable=False)
    id_number: Mapped[str] = mapped_column("idNumber", Text, nullable=False)
    company_name: Mapped[str] = mapped_column("companyName", Text, nullable=False)
    phone_number: Mapped[str] = mapped_column("phoneNumber", Text, nullable=False)
    submit_time: Mapped[str] = mapped_column("submitTime", Text, nullable=False)
    start_date: Mapped[str] = mapped_column("startDate", Text, nullable=False)
    start_time: Mapped[str] = mapped_column("startTime", Text, nullable=False)
    working_hours: Mapped[str] = mapped_column("workingHours", Text, nullable=False)
    work_location: Mapped[str] = mapped_column("workLocation", Text, nullable=False)
    work_type: Mapped[str] = mapped_column("workType", Text, nullable=False)
    is_product_work: Mapped[bool] = mapped_column("isProductWork", Boolean, nullable=False)
    project_name: Mapped[str] = mapped_column("projectName", Text, nullable=False)
    vehicle_number: Mapped[str] = mapped_column("vehicleNumber", Text, nullable=False)
    track_position: Mapped[str] = mapped_column("trackPosition", Text, nullable=False)
    work_content: Mapped[str] = mapped_column("workContent", Text, nullable=False)
    work_basis: Mapped[str] = mapped_column("workBasis", Text, nullable=False)
    basis_number: Mapped[str] = mapped_column("basisNumber", Text, nullable=False)
    danger_types: Mapped[str] = mapped_column("dangerTypes", Text, nullable=False)
    notifier_name: Mapped[str] = mapped_column("notifierName", Text, nullable=False)
    notifier_number: Mapped[str] = mapped_column("notifierNumber", Text, nullable=False)
    notifier_department: Mapped[str] = mapped_column("notifierDepartment", Text, nullable=False)
    accompanying_count: Mapped[int] = mapped_column("accompaningCount", Integer, nullable=False)


class SyncAccompanyingPerson(Base):
    __tablename__ = "accompaningpersons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    form_application_number: Mapped[str] = mapped_column("formApplicationNumber", Text, index=True, nullable=False)
    name: Mapped[str] = mapped_column("name", Text, nullable=False)
    id_number: Mapped[str] = mapped_column("idNumber", Text, nullable=False)
    phone_number: Mapped[str] = mapped_column("phoneNumber", Text, nullable=False)


Index("safeformhead_applicationNumber", SyncFormHead.application_number, unique=True)
