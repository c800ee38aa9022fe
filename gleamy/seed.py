"""
Seed the service catalog.

Run with: python -m gleamy.seed
Services are matched by name, so running it again updates them in place.
"""

import logging

from sqlalchemy.orm import Session

from .database import Base, SessionLocal, engine
from .models import Service, ServiceCategory

logger = logging.getLogger(__name__)

SERVICES = [
    {
        "name": "Home Deep Cleaning",
        "description": "Comprehensive deep cleaning service for your entire home including kitchen, bathrooms, bedrooms, and living areas.",
        "base_price": 8000,
        "price_unit": "per service",
        "duration": 180,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Office Cleaning",
        "description": "Professional office cleaning service including workstations, meeting rooms, pantry, and common areas.",
        "base_price": 12000,
        "price_unit": "per service",
        "duration": 120,
        "category": ServiceCategory.COMMERCIAL,
    },
    {
        "name": "Kitchen Deep Cleaning",
        "description": "Specialized kitchen cleaning including appliances, cabinets, countertops, and floor scrubbing.",
        "base_price": 5000,
        "price_unit": "per service",
        "duration": 120,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Bathroom Sanitization",
        "description": "Complete bathroom cleaning and sanitization including tiles, fixtures, mirrors, and floor.",
        "base_price": 3500,
        "price_unit": "per bathroom",
        "duration": 60,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Window & Glass Cleaning",
        "description": "Professional window and glass surface cleaning for homes and offices.",
        "base_price": 4000,
        "price_unit": "per service",
        "duration": 90,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Carpet & Upholstery Cleaning",
        "description": "Deep cleaning service for carpets, sofas, and upholstered furniture using professional equipment.",
        "base_price": 6500,
        "price_unit": "per service",
        "duration": 150,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Move-In/Move-Out Cleaning",
        "description": "Thorough cleaning service for properties before moving in or after moving out.",
        "base_price": 10000,
        "price_unit": "per property",
        "duration": 240,
        "category": ServiceCategory.RESIDENTIAL,
    },
    {
        "name": "Post-Construction Cleaning",
        "description": "Specialized cleaning service to remove construction dust, debris, and prepare space for use.",
        "base_price": 15000,
        "price_unit": "per property",
        "duration": 300,
        "category": ServiceCategory.COMMERCIAL,
    },
    {
        "name": "Car Interior Cleaning",
        "description": "Complete interior car cleaning including vacuuming, dashboard wiping, and seat cleaning.",
        "base_price": 2500,
        "price_unit": "per vehicle",
        "duration": 60,
        "category": ServiceCategory.SPECIALIZED,
    },
    {
        "name": "Laundry Service",
        "description": "Professional washing, drying, and folding service for your clothes and linens.",
        "base_price": 1500,
        "price_unit": "per kg",
        "duration": 90,
        "category": ServiceCategory.SPECIALIZED,
    },
]


def seed_services(db: Session) -> tuple[int, int]:
    """Upsert SERVICES by name. Returns (created, updated)"""
    created = updated = 0
    try:
        for data in SERVICES:
            existing = db.query(Service).filter(Service.name == data["name"]).first()
            if existing:
                for key, value in data.items():
                    setattr(existing, key, value)
                existing.is_active = True
                updated += 1
                logger.info(f"✅ Updated service: {data['name']}")
            else:
                db.add(Service(**data, is_active=True, features=[]))
                created += 1
                logger.info(f"✅ Created service: {data['name']}")
        db.commit()
    except Exception:
        db.rollback()
        raise
    return created, updated


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    logger.info("🌱 Seeding database...")

    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        created, updated = seed_services(db)
    except Exception as e:
        logger.error(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()

    logger.info(f"🎉 Database seeded successfully! ({created} created, {updated} updated)")


if __name__ == "__main__":
    main()
