import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class UserRole(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class ServiceCategory(str, enum.Enum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    SPECIALIZED = "SPECIALIZED"


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    REFUNDED = "REFUNDED"


class AssignmentStatus(str, enum.Enum):
    ASSIGNED = "ASSIGNED"
    STARTED = "STARTED"
    COMPLETED = "COMPLETED"


class MediaType(str, enum.Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    display_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    photo_url = Column(String(500), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), default=UserRole.CUSTOMER, nullable=False)
    status = Column(
        Enum(UserStatus, name="user_status"), default=UserStatus.ACTIVE, nullable=False
    )
    email_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="user", uselist=False)
    employee = relationship("Employee", back_populates="user", uselist=False)


class Customer(Base):
    """Customer profile; its address is the default location for new bookings"""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    address = Column(Text, nullable=True)
    city = Column(String(255), nullable=True)
    postal_code = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="customer")
    bookings = relationship("Booking", back_populates="customer")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    employee_code = Column(String(50), unique=True, index=True, nullable=False)
    position = Column(String(255), nullable=True)
    skills = Column(JSON, default=list, nullable=False)
    experience = Column(Integer, nullable=True)  # Years
    hire_date = Column(Date, nullable=True)

    # Only the job assignment workflow writes these two
    is_available = Column(Boolean, default=True, nullable=False)
    active_job_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="employee")
    assignments = relationship(
        "JobAssignment", back_populates="employee", order_by="JobAssignment.assigned_at.desc()"
    )


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(Enum(ServiceCategory, name="service_category"), nullable=False)
    base_price = Column(Integer, nullable=False)  # Minor currency unit
    price_unit = Column(String(100), nullable=True)  # e.g. "per service"
    duration = Column(Integer, nullable=False)  # Minutes
    features = Column(JSON, default=list, nullable=False)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="service")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_number = Column(String(50), unique=True, index=True, nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)

    # Scheduling
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(10), nullable=False)  # HH:MM format
    duration = Column(Integer, nullable=False)  # Minutes

    # Location
    address = Column(Text, nullable=True)
    city = Column(String(255), nullable=True)
    postal_code = Column(String(20), nullable=True)
    special_instructions = Column(Text, nullable=True)

    # Pricing - estimated_price is a snapshot of Service.base_price at creation
    estimated_price = Column(Integer, nullable=False)
    final_price = Column(Integer, nullable=True)

    status = Column(
        Enum(BookingStatus, name="booking_status"),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status"), default=PaymentStatus.PENDING, nullable=False
    )

    environment_images = Column(JSON, default=list, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="bookings")
    service = relationship("Service", back_populates="bookings")
    assignments = relationship(
        "JobAssignment", back_populates="booking", order_by="JobAssignment.assigned_at"
    )
    uploaded_media = relationship(
        "UploadedMedia", back_populates="booking", order_by="UploadedMedia.id"
    )
    review = relationship("Review", back_populates="booking", uselist=False)


class JobAssignment(Base):
    """Links a booking to the employee performing it"""

    __tablename__ = "job_assignments"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    # Status workflow: ASSIGNED → STARTED → COMPLETED
    status = Column(
        Enum(AssignmentStatus, name="assignment_status"),
        default=AssignmentStatus.ASSIGNED,
        nullable=False,
        index=True,
    )
    assigned_at = Column(DateTime(timezone=True), nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    # Set when the booking is cancelled and the assignment is released
    voided_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)
    before_images = Column(JSON, default=list, nullable=False)
    after_images = Column(JSON, default=list, nullable=False)

    booking = relationship("Booking", back_populates="assignments")
    employee = relationship("Employee", back_populates="assignments")

    @property
    def is_active(self) -> bool:
        return self.status != AssignmentStatus.COMPLETED and self.voided_at is None


class UploadedMedia(Base):
    __tablename__ = "uploaded_media"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    media_type = Column(Enum(MediaType, name="media_type"), default=MediaType.IMAGE, nullable=False)
    reference = Column(Text, nullable=False)  # Opaque media reference, never interpreted
    file_name = Column(String(255), nullable=True)
    mime_type = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking = relationship("Booking", back_populates="uploaded_media")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking = relationship("Booking", back_populates="review")
