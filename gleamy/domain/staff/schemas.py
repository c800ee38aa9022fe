"""Staff schemas - employee accounts managed by administrators"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AssignmentStatus, BookingStatus
from ...shared.validators import validate_email, validate_phone
from ..accounts.schemas import UserResponse


class EmployeeCreate(BaseModel):
    """The Firebase account must already exist; its UID links the two"""

    firebaseUid: str = Field(..., min_length=1)
    email: str
    displayName: Optional[str] = None
    phoneNumber: Optional[str] = None
    position: Optional[str] = None
    skills: list[str] = []
    experience: Optional[int] = Field(None, ge=0, description="Years")
    hireDate: Optional[date] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class EmployeeUpdate(BaseModel):
    """Availability is not editable here; only job assignment changes it"""

    position: Optional[str] = None
    skills: Optional[list[str]] = None
    experience: Optional[int] = Field(None, ge=0)


class EmployeeResponse(BaseModel):
    id: int
    employee_code: str
    position: Optional[str]
    skills: list[str]
    experience: Optional[int]
    hire_date: Optional[date]
    is_available: bool
    active_job_count: int
    created_at: Optional[datetime] = None
    user: UserResponse

    class Config:
        from_attributes = True


class AssignedBookingBrief(BaseModel):
    id: int
    booking_number: str
    status: BookingStatus
    scheduled_date: date

    class Config:
        from_attributes = True


class EmployeeAssignmentBrief(BaseModel):
    id: int
    status: AssignmentStatus
    assigned_at: datetime
    voided_at: Optional[datetime]
    booking: AssignedBookingBrief

    class Config:
        from_attributes = True


class EmployeeListItem(EmployeeResponse):
    assignments: list[EmployeeAssignmentBrief] = []
