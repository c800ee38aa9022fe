"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import (
    AssignmentStatus,
    BookingStatus,
    MediaType,
    PaymentStatus,
    ServiceCategory,
)
from ...shared.validators import validate_time_of_day


class BookingCreate(BaseModel):
    """Schema for creating a new booking"""

    serviceId: int
    scheduledDate: date
    scheduledTime: str
    duration: Optional[int] = Field(None, gt=0, description="Minutes; defaults to the service duration")
    address: Optional[str] = None
    city: Optional[str] = None
    postalCode: Optional[str] = None
    specialInstructions: Optional[str] = None

    @field_validator("scheduledTime")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)


class BookingUpdate(BaseModel):
    """Schema for updating a booking; omitted fields are left unchanged"""

    scheduledDate: Optional[date] = None
    scheduledTime: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    address: Optional[str] = None
    city: Optional[str] = None
    postalCode: Optional[str] = None
    specialInstructions: Optional[str] = None

    @field_validator("scheduledTime")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)


class EnvironmentImagesRequest(BaseModel):
    """Media references produced by the upload collaborator"""

    images: list[str] = Field(..., min_length=1, max_length=10)


class ServiceSummary(BaseModel):
    id: int
    name: str
    category: ServiceCategory
    base_price: int
    price_unit: Optional[str]
    duration: int

    class Config:
        from_attributes = True


class PersonSummary(BaseModel):
    id: int
    email: str
    display_name: Optional[str]
    phone_number: Optional[str]

    class Config:
        from_attributes = True


class EmployeeSummary(BaseModel):
    id: int
    employee_code: str
    position: Optional[str]
    user: PersonSummary

    class Config:
        from_attributes = True


class CustomerSummary(BaseModel):
    id: int
    address: Optional[str]
    city: Optional[str]
    postal_code: Optional[str]
    user: PersonSummary

    class Config:
        from_attributes = True


class AssignmentSummary(BaseModel):
    id: int
    employee_id: int
    status: AssignmentStatus
    assigned_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    voided_at: Optional[datetime]
    notes: Optional[str]
    employee: Optional[EmployeeSummary] = None

    class Config:
        from_attributes = True


class MediaResponse(BaseModel):
    id: int
    media_type: MediaType
    reference: str
    file_name: Optional[str]
    mime_type: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    rating: int
    comment: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    booking_number: str
    customer_id: int
    service_id: int
    scheduled_date: date
    scheduled_time: str
    duration: int
    address: Optional[str]
    city: Optional[str]
    postal_code: Optional[str]
    special_instructions: Optional[str]
    estimated_price: int
    final_price: Optional[int]
    status: BookingStatus
    payment_status: PaymentStatus
    environment_images: list[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    service: Optional[ServiceSummary] = None
    assignments: list[AssignmentSummary] = []

    class Config:
        from_attributes = True


class BookingDetailResponse(BookingResponse):
    customer: Optional[CustomerSummary] = None
    uploaded_media: list[MediaResponse] = []
    review: Optional[ReviewResponse] = None
