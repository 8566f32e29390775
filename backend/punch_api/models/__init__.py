from punch_api.models.employee import Employee
from punch_api.models.attendance import AttendanceRecord, PunchType

__all__ = [
    "Employee",
    "AttendanceRecord",
    "PunchType",
]
