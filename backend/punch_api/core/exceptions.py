"""Errors raised by the attendance service.

Each carries the HTTP status it maps to; ``main.py`` renders them as
``{"error": message}``.
"""


class AttendanceError(Exception):
    """Base exception for rejected attendance operations."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidEmployeeId(AttendanceError):
    message = "Invalid Employee ID format. Use ATS0XXX (XXX from 001 to 999)"


class InvalidPunchType(AttendanceError):
    message = "Invalid punch type"


class EmptySelection(AttendanceError):
    message = "No records selected for deletion"


class EmployeeNotFound(AttendanceError):
    status_code = 404
    message = "Employee not found"


class InvalidDate(AttendanceError):
    message = "Invalid date format. Use YYYY-MM-DD"
