"""Job assignment schemas"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AssignmentStatus, BookingStatus
from ..bookings.schemas import (
    CustomerSummary,
    EmployeeSummary,
    MediaResponse,
    ServiceSummary,
)


class ImageKind(str, Enum):
    BEFORE = "before"
    AFTER = "after"


class AssignEmployeeRequest(BaseModel):
    bookingId: int
    employeeId: int
    notes: Optional[str] = None


class JobStatusUpdate(BaseModel):
    """Accepts "started" / "completed" as well as the upper-case status names"""

    status: AssignmentStatus
    notes: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class JobImagesRequest(BaseModel):
    type: ImageKind
    images: list[str] = Field(..., min_length=1, max_length=10)


class JobBookingSummary(BaseModel):
    id: int
    booking_number: str
    scheduled_date: date
    scheduled_time: str
    duration: int
    address: Optional[str]
    city: Optional[str]
    postal_code: Optional[str]
    special_instructions: Optional[str]
    status: BookingStatus
    environment_images: list[str]
    service: Optional[ServiceSummary] = None
    customer: Optional[CustomerSummary] = None

    class Config:
        from_attributes = True


class JobBookingDetail(JobBookingSummary):
    uploaded_media: list[MediaResponse] = []


class AssignmentResponse(BaseModel):
    id: int
    booking_id: int
    employee_id: int
    status: AssignmentStatus
    assigned_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    voided_at: Optional[datetime]
    notes: Optional[str]
    before_images: list[str]
    after_images: list[str]
    booking: Optional[JobBookingSummary] = None

    class Config:
        from_attributes = True


class AssignmentDetailResponse(AssignmentResponse):
    booking: Optional[JobBookingDetail] = None
    employee: Optional[EmployeeSummary] = None
