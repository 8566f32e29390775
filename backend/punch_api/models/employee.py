from sqlalchemy import Column, String, Boolean, DateTime, Float
from sqlalchemy.sql import func
from punch_api.core.database import Base


class Employee(Base):
    """Current punch state of one employee, refreshed on every punch."""
    __tablename__ = "employees"

    employee_id = Column(String(7), primary_key=True)

    is_punched_in = Column(Boolean, default=False, nullable=False)
    last_action_time = Column(DateTime(timezone=True), nullable=True)
    last_action_type = Column(String(8), nullable=True)  # punchin / punchout

    # Written on punch-in only
    last_location_latitude = Column(Float, nullable=True)
    last_location_longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
