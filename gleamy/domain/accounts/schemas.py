"""Account schemas - users and their customer / employee profiles"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import BookingStatus, UserRole, UserStatus
from ...shared.validators import validate_email, validate_phone


class RegisterRequest(BaseModel):
    """The Firebase UID always comes from the verified token, never the body"""

    email: Optional[str] = None
    displayName: Optional[str] = None
    phoneNumber: Optional[str] = None
    photoURL: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class ProfileUpdate(BaseModel):
    displayName: Optional[str] = None
    phoneNumber: Optional[str] = None
    photoURL: Optional[str] = None
    # Customer profile fields, ignored for other roles
    address: Optional[str] = None
    city: Optional[str] = None
    postalCode: Optional[str] = None

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: Optional[str]
    phone_number: Optional[str]
    photo_url: Optional[str]
    role: UserRole
    status: UserStatus
    email_verified: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerProfile(BaseModel):
    id: int
    address: Optional[str]
    city: Optional[str]
    postal_code: Optional[str]

    class Config:
        from_attributes = True


class EmployeeProfile(BaseModel):
    id: int
    employee_code: str
    position: Optional[str]
    skills: list[str]
    experience: Optional[int]
    hire_date: Optional[date]
    is_available: bool
    active_job_count: int

    class Config:
        from_attributes = True


class UserDetailResponse(UserResponse):
    customer: Optional[CustomerProfile] = None
    employee: Optional[EmployeeProfile] = None


class CustomerBookingBrief(BaseModel):
    id: int
    booking_number: str
    status: BookingStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerListItem(CustomerProfile):
    created_at: Optional[datetime] = None
    user: UserResponse
    bookings: list[CustomerBookingBrief] = []
