"""Service catalog - what customers can book and at what base price"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import atomic
from ...models import Service, ServiceCategory
from ..errors import Conflict, NotFound
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

# Request field -> Service column
SERVICE_FIELDS = {
    "name": "name",
    "description": "description",
    "category": "category",
    "basePrice": "base_price",
    "priceUnit": "price_unit",
    "duration": "duration",
    "features": "features",
    "imageUrl": "image_url",
    "isActive": "is_active",
}

# Columns that an explicit null must not clear
REQUIRED_FIELDS = ("name", "category", "basePrice", "duration", "features", "isActive")


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(
        self, category: Optional[ServiceCategory] = None, is_active: Optional[bool] = None
    ) -> list[Service]:
        return self.repo.get_services(self.db, category, is_active)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        if self.repo.get_service_by_name(self.db, data.name):
            raise Conflict(f"A service named '{data.name}' already exists")

        values = {column: getattr(data, field) for field, column in SERVICE_FIELDS.items()}
        with atomic(self.db):
            service = self.repo.create_service(self.db, Service(**values))

        self.db.refresh(service)
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)

        updates = data.model_dump(exclude_unset=True)
        if updates.get("name") and updates["name"] != service.name:
            if self.repo.get_service_by_name(self.db, updates["name"]):
                raise Conflict(f"A service named '{updates['name']}' already exists")

        with atomic(self.db):
            for field, value in updates.items():
                if value is None and field in REQUIRED_FIELDS:
                    continue
                setattr(service, SERVICE_FIELDS[field], value)

        self.db.refresh(service)
        return service

    def delete_service(self, service_id: int) -> bool:
        """
        Delete a service. Services that bookings already reference are
        deactivated instead. Returns True when the row was deleted.
        """
        service = self.get_service(service_id)

        with atomic(self.db):
            if self.repo.is_referenced(self.db, service.id):
                service.is_active = False
                deleted = False
            else:
                self.repo.delete_service(self.db, service)
                deleted = True
        return deleted
