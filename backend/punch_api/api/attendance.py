"""Attendance API: employee login, punch in/out, daily records, status.

Employee IDs look like ATS0001 ... ATS0999. Images travel as opaque base64
strings and are stored as given.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from punch_api.core.database import get_db
from punch_api.core.exceptions import InvalidDate
from punch_api.schemas.attendance import (
    DailyAttendance, DeleteRecordsRequest, DeleteRecordsResponse, EmployeeStatus,
    LoginRequest, LoginResponse, PunchRequest, PunchResponse,
)
from punch_api.services.attendance import AttendanceService

router = APIRouter(prefix="/api", tags=["attendance"])


# ── Login ────────────────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Log an employee in, registering the ID on first use."""
    employee = AttendanceService(db).login(body.employee_id)
    return LoginResponse(message="Login successful", employee_id=employee.employee_id)


# ── Punch ────────────────────────────────────────────────────────────

@router.post("/punch", response_model=PunchResponse)
def punch(body: PunchRequest, db: Session = Depends(get_db)):
    timestamp = AttendanceService(db).punch(
        body.employee_id,
        body.type,
        image_data=body.image_data,
        location=body.location,
    )
    action = "punched in" if body.type == "punchin" else "punched out"
    return PunchResponse(message=f"Successfully {action}", timestamp=timestamp)


# ── Records ──────────────────────────────────────────────────────────

@router.get("/records", response_model=List[DailyAttendance])
def get_records(
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    day: Optional[str] = Query(None, alias="date"),  # "2024-01-31" format
    db: Session = Depends(get_db),
):
    """First punch-in and last punch-out per employee per day."""
    return AttendanceService(db).list_records(employee_id=employee_id, day=_parse_day(day))


def _parse_day(value: Optional[str]) -> Optional[date]:
    # An empty date means no date filter
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDate()


@router.delete("/records", response_model=DeleteRecordsResponse)
def delete_records(
    body: Optional[DeleteRecordsRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Delete all punches of the selected employees on the selected days."""
    deleted = AttendanceService(db).delete_records(body.records if body else None)
    return DeleteRecordsResponse(message="Records deleted successfully", deleted=deleted)


# ── Status ───────────────────────────────────────────────────────────

@router.get("/employee-status/{employee_id}", response_model=EmployeeStatus)
def get_employee_status(employee_id: str, db: Session = Depends(get_db)):
    return AttendanceService(db).get_status(employee_id)
