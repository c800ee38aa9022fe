"""Service catalog repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking, Service, ServiceCategory


class ServiceRepository:
    """Repository for service catalog database operations"""

    @staticmethod
    def get_services(
        db: Session,
        category: Optional[ServiceCategory] = None,
        is_active: Optional[bool] = None,
    ) -> list[Service]:
        query = db.query(Service)
        if category:
            query = query.filter(Service.category == category)
        if is_active is not None:
            query = query.filter(Service.is_active.is_(is_active))
        return query.order_by(Service.name.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_service_by_name(db: Session, name: str) -> Optional[Service]:
        return db.query(Service).filter(Service.name == name).first()

    @staticmethod
    def create_service(db: Session, service: Service) -> Service:
        db.add(service)
        db.flush()
        return service

    @staticmethod
    def is_referenced(db: Session, service_id: int) -> bool:
        return db.query(Booking.id).filter(Booking.service_id == service_id).first() is not None

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
