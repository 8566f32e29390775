import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from punch_api.core.config import settings
from punch_api.core.exceptions import EmptySelection, EmployeeNotFound, InvalidPunchType
from punch_api.core.validators import require_employee_id
from punch_api.models.attendance import AttendanceRecord, PunchType
from punch_api.models.employee import Employee
from punch_api.schemas.attendance import (
    DailyAttendance, EmployeeStatus, Location, PunchMoment, RecordSelection,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
PUNCH_TYPES = {t.value for t in PunchType}


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _location(latitude, longitude) -> Optional[Location]:
    if latitude is None or longitude is None:
        return None
    return Location(latitude=latitude, longitude=longitude)


def _moment(punch_time: datetime) -> PunchMoment:
    return PunchMoment(
        date_time=punch_time,
        timestamp=(punch_time - EPOCH) // timedelta(milliseconds=1),
    )


def day_bounds(day: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """UTC half-open interval covering one local calendar day."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def group_daily_records(records: Iterable[AttendanceRecord], tz: ZoneInfo) -> List[DailyAttendance]:
    """
    Collapse punch events into one entry per employee per local day.

    The earliest punch-in and the latest punch-out of each day are kept.
    On equal timestamps the record seen first stays.
    """
    groups: Dict[Tuple[str, date], dict] = {}

    for record in records:
        punch_time = _as_utc(record.punch_time)
        day = punch_time.astimezone(tz).date()
        key = (record.employee_id, day)

        group = groups.get(key)
        if group is None:
            group = groups[key] = {"employee_id": record.employee_id, "date": day, "in": None, "out": None}

        if record.punch_type == PunchType.PUNCH_IN.value:
            kept = group["in"]
            if kept is None or punch_time < kept[0]:
                group["in"] = (punch_time, record)
        else:
            kept = group["out"]
            if kept is None or punch_time > kept[0]:
                group["out"] = (punch_time, record)

    results = []
    for group in groups.values():
        entry = DailyAttendance(employee_id=group["employee_id"], date=group["date"].isoformat())
        if group["in"]:
            punch_time, record = group["in"]
            entry.punch_in = _moment(punch_time)
            entry.punch_in_image = record.image_data
            entry.punch_in_location = _location(record.latitude, record.longitude)
        if group["out"]:
            punch_time, record = group["out"]
            entry.punch_out = _moment(punch_time)
            entry.punch_out_image = record.image_data
            entry.punch_out_location = _location(record.latitude, record.longitude)
        results.append(entry)
    return results


class AttendanceService:
    """
    Punch in/out bookkeeping over the employees and attendance_records tables.

    Every write path commits once and rolls back on failure, so a punch never
    leaves a record without the matching employee status update.
    """

    def __init__(self, db: Session, tz: Optional[ZoneInfo] = None):
        self.db = db
        self.tz = tz or ZoneInfo(settings.TIMEZONE)

    def login(self, employee_id: str) -> Employee:
        """Return the employee, registering it on first login."""
        require_employee_id(employee_id)

        employee = self.db.query(Employee).filter(Employee.employee_id == employee_id).first()
        if employee:
            return employee

        employee = Employee(employee_id=employee_id, is_punched_in=False)
        self.db.add(employee)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent login registered the same ID first
            self.db.rollback()
            return self.db.query(Employee).filter(Employee.employee_id == employee_id).one()

        logger.info(f"Registered employee {employee_id}")
        return employee

    def punch(
        self,
        employee_id: str,
        punch_type: str,
        image_data: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> datetime:
        """Record a punch and update the employee's status. Returns the punch time."""
        require_employee_id(employee_id)
        if punch_type not in PUNCH_TYPES:
            raise InvalidPunchType()

        latitude = location.latitude if location else None
        longitude = location.longitude if location else None
        is_punch_in = punch_type == PunchType.PUNCH_IN.value

        try:
            employee = (
                self.db.query(Employee)
                .filter(Employee.employee_id == employee_id)
                .with_for_update()
                .first()
            )
            if not employee:
                raise EmployeeNotFound()

            timestamp = datetime.now(timezone.utc)
            self.db.add(AttendanceRecord(
                employee_id=employee_id,
                punch_type=punch_type,
                punch_time=timestamp,
                image_data=image_data,
                latitude=latitude,
                longitude=longitude,
            ))

            employee.is_punched_in = is_punch_in
            employee.last_action_time = timestamp
            employee.last_action_type = punch_type
            # Punch-out keeps the last known location
            if is_punch_in:
                employee.last_location_latitude = latitude
                employee.last_location_longitude = longitude

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"{employee_id} {punch_type} at {timestamp.isoformat()}")
        return timestamp

    def list_records(self, employee_id: Optional[str] = None, day: Optional[date] = None) -> List[DailyAttendance]:
        query = self.db.query(AttendanceRecord)

        if employee_id:
            query = query.filter(AttendanceRecord.employee_id == employee_id)

        if day:
            start, end = day_bounds(day, self.tz)
            query = query.filter(
                AttendanceRecord.punch_time >= start,
                AttendanceRecord.punch_time < end,
            )

        rows = query.order_by(AttendanceRecord.punch_time.desc(), AttendanceRecord.id.desc()).all()
        return group_daily_records(rows, self.tz)

    def delete_records(self, selections: Optional[List[RecordSelection]]) -> int:
        """Delete every record of each (employee, day) pair. All or nothing."""
        if not selections:
            raise EmptySelection()
        for selection in selections:
            require_employee_id(selection.employee_id)

        deleted = 0
        try:
            for selection in selections:
                start, end = day_bounds(selection.date, self.tz)
                deleted += (
                    self.db.query(AttendanceRecord)
                    .filter(
                        AttendanceRecord.employee_id == selection.employee_id,
                        AttendanceRecord.punch_time >= start,
                        AttendanceRecord.punch_time < end,
                    )
                    .delete(synchronize_session=False)
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted {deleted} attendance records across {len(selections)} selections")
        return deleted

    def get_status(self, employee_id: str) -> EmployeeStatus:
        require_employee_id(employee_id)

        employee = self.db.query(Employee).filter(Employee.employee_id == employee_id).first()
        if not employee:
            raise EmployeeNotFound()

        return EmployeeStatus(
            is_punched_in=employee.is_punched_in,
            last_action_time=_as_utc(employee.last_action_time) if employee.last_action_time else None,
            last_action_type=employee.last_action_type,
            location=_location(employee.last_location_latitude, employee.last_location_longitude),
        )
