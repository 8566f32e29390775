import re

from punch_api.core.exceptions import InvalidEmployeeId

# ATS0 followed by 001-999
EMPLOYEE_ID_PATTERN = re.compile(r"^ATS0(?!000)[0-9]{3}$")


def validate_employee_id(value) -> bool:
    if not isinstance(value, str):
        return False
    # fullmatch so a trailing newline is not accepted
    return EMPLOYEE_ID_PATTERN.fullmatch(value) is not None


def require_employee_id(value) -> str:
    if not validate_employee_id(value):
        raise InvalidEmployeeId()
    return value
