"""Attendance record model: one row per punch event.

Rows are append-only; the only removal path is deleting an employee's
records for a whole calendar day.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Text
from punch_api.core.database import Base
import enum


class PunchType(str, enum.Enum):
    PUNCH_IN = "punchin"
    PUNCH_OUT = "punchout"


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String(7), ForeignKey("employees.employee_id"), nullable=False, index=True)

    punch_type = Column(String(8), nullable=False)
    punch_time = Column(DateTime(timezone=True), nullable=False, index=True)

    # Opaque image payload (base64 from the capture client)
    image_data = Column(Text, nullable=True)

    # GPS location
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
