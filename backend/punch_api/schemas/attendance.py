from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime


class Location(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class LoginRequest(BaseModel):
    # Left optional so a missing ID is reported as a format error
    employee_id: Optional[str] = Field(None, alias="employeeId")

    class Config:
        populate_by_name = True


class LoginResponse(BaseModel):
    message: str
    employee_id: str = Field(..., alias="employeeId")

    class Config:
        populate_by_name = True


class PunchRequest(BaseModel):
    employee_id: Optional[str] = Field(None, alias="employeeId")
    type: Optional[str] = None
    image_data: Optional[str] = Field(None, alias="imageData")
    location: Optional[Location] = None

    class Config:
        populate_by_name = True


class PunchResponse(BaseModel):
    message: str
    timestamp: datetime


class PunchMoment(BaseModel):
    date_time: datetime = Field(..., alias="dateTime")
    timestamp: int  # epoch milliseconds

    class Config:
        populate_by_name = True


class DailyAttendance(BaseModel):
    """First punch-in and last punch-out of one employee on one day."""
    employee_id: str = Field(..., alias="employeeId")
    date: str
    punch_in: Optional[PunchMoment] = Field(None, alias="punchIn")
    punch_out: Optional[PunchMoment] = Field(None, alias="punchOut")
    punch_in_image: Optional[str] = Field(None, alias="punchInImage")
    punch_out_image: Optional[str] = Field(None, alias="punchOutImage")
    punch_in_location: Optional[Location] = Field(None, alias="punchInLocation")
    punch_out_location: Optional[Location] = Field(None, alias="punchOutLocation")

    class Config:
        populate_by_name = True


class RecordSelection(BaseModel):
    employee_id: str = Field(..., alias="employeeId")
    date: date

    class Config:
        populate_by_name = True


class DeleteRecordsRequest(BaseModel):
    records: Optional[List[RecordSelection]] = None

    @field_validator("records", mode="before")
    @classmethod
    def non_array_selects_nothing(cls, value):
        # Anything but an array counts as an empty selection
        return value if isinstance(value, list) else None


class DeleteRecordsResponse(BaseModel):
    message: str
    deleted: int


class EmployeeStatus(BaseModel):
    is_punched_in: bool = Field(..., alias="isPunchedIn")
    last_action_time: Optional[datetime] = Field(None, alias="lastActionTime")
    last_action_type: Optional[str] = Field(None, alias="lastActionType")
    location: Optional[Location] = None

    class Config:
        populate_by_name = True
        from_attributes = True
