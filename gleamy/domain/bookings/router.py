"""Booking router - FastAPI endpoints for customer bookings"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import customer_actor, get_current_actor
from ...database import get_db
from ...shared.responses import success
from ..actor import Actor
from .schemas import (
    BookingCreate,
    BookingDetailResponse,
    BookingResponse,
    BookingUpdate,
    EnvironmentImagesRequest,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", status_code=201)
async def create_booking(
    data: BookingCreate,
    actor: Actor = Depends(customer_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Create a new booking for the current customer"""
    booking = service.create_booking(data, actor)
    logger.info(f"📅 Booking {booking.booking_number} created by user {actor.subject_id}")
    return success(
        {"booking": BookingResponse.model_validate(booking)},
        message="Booking created successfully",
    )


@router.get("")
async def get_my_bookings(
    actor: Actor = Depends(customer_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Get all bookings of the current customer, newest first"""
    bookings = service.get_my_bookings(actor)
    return success(
        {"bookings": [BookingResponse.model_validate(b) for b in bookings]},
        results=len(bookings),
    )


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    actor: Actor = Depends(get_current_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Get a booking with customer, assignments, media and review"""
    booking = service.get_booking(booking_id, actor)
    return success({"booking": BookingDetailResponse.model_validate(booking)})


@router.put("/{booking_id}")
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    actor: Actor = Depends(get_current_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Update schedule, location or instructions while the booking is PENDING or CONFIRMED"""
    booking = service.update_booking(booking_id, data, actor)
    logger.info(f"✏️ Booking {booking.booking_number} updated by user {actor.subject_id}")
    return success(
        {"booking": BookingResponse.model_validate(booking)},
        message="Booking updated successfully",
    )


@router.delete("/{booking_id}")
async def cancel_booking(
    booking_id: int,
    actor: Actor = Depends(get_current_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Cancel a booking; any active job assignment is released"""
    booking = service.cancel_booking(booking_id, actor)
    logger.info(f"🚫 Booking {booking.booking_number} cancelled by user {actor.subject_id}")
    return success(
        {"booking": BookingResponse.model_validate(booking)},
        message="Booking cancelled successfully",
    )


@router.post("/{booking_id}/images")
async def upload_environment_images(
    booking_id: int,
    data: EnvironmentImagesRequest,
    actor: Actor = Depends(customer_actor),
    service: BookingService = Depends(get_booking_service),
):
    """Attach environment images (media references) to a booking"""
    images = service.attach_environment_images(booking_id, data.images, actor)
    logger.info(f"🖼️ {len(data.images)} image(s) attached to booking {booking_id}")
    return success({"images": images}, message="Images uploaded successfully")
