"""Service catalog router - public listing, admin management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import ServiceCategory, User
from ...shared.responses import success
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("")
async def get_services(
    category: Optional[ServiceCategory] = Query(None),
    isActive: Optional[bool] = Query(None),
    service: CatalogService = Depends(get_catalog_service),
):
    """List services ordered by name, optionally filtered"""
    services = service.get_services(category, isActive)
    return success(
        {"services": [ServiceResponse.model_validate(s) for s in services]},
        results=len(services),
    )


@router.get("/{service_id}")
async def get_service(
    service_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    return success({"service": ServiceResponse.model_validate(service.get_service(service_id))})


@router.post("", status_code=201)
async def create_service(
    data: ServiceCreate,
    current_user: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    created = service.create_service(data)
    logger.info(f"✅ Service '{created.name}' created by {current_user.email}")
    return success(
        {"service": ServiceResponse.model_validate(created)},
        message="Service created successfully",
    )


@router.put("/{service_id}")
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    current_user: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    updated = service.update_service(service_id, data)
    logger.info(f"✏️ Service {service_id} updated by {current_user.email}")
    return success(
        {"service": ServiceResponse.model_validate(updated)},
        message="Service updated successfully",
    )


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    current_user: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a service, or deactivate it when bookings reference it"""
    if service.delete_service(service_id):
        logger.info(f"🗑️ Service {service_id} deleted by {current_user.email}")
        return success(message="Service deleted successfully")

    logger.info(f"📦 Service {service_id} is booked, deactivated by {current_user.email}")
    return success(message="Service is referenced by bookings and has been deactivated")
