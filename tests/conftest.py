"""Test fixtures for the Gleamy API."""

import itertools
import os

import pytest

# Set test environment before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")
os.environ.setdefault("EMPLOYEE_MAX_ACTIVE_JOBS", "1")

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gleamy.auth import get_token_claims, security
from gleamy.database import Base, get_db
from gleamy.domain.actor import Actor
from gleamy.main import app
from gleamy.models import (
    Customer,
    Employee,
    Service,
    ServiceCategory,
    User,
    UserRole,
    UserStatus,
)

_ids = itertools.count(1)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


# --- Factories ---


def make_user(db, role=UserRole.CUSTOMER, status=UserStatus.ACTIVE, **fields):
    n = next(_ids)
    user = User(
        firebase_uid=fields.pop("firebase_uid", f"uid-{n}"),
        email=fields.pop("email", f"user{n}@example.com"),
        display_name=fields.pop("display_name", f"User {n}"),
        role=role,
        status=status,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_customer(db, address="12 Galle Road", city="Colombo", postal_code="00300", **user_fields):
    user = make_user(db, role=UserRole.CUSTOMER, **user_fields)
    customer = Customer(user_id=user.id, address=address, city=city, postal_code=postal_code)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def make_employee(db, status=UserStatus.ACTIVE, is_available=True, **user_fields):
    user = make_user(db, role=UserRole.EMPLOYEE, status=status, **user_fields)
    employee = Employee(
        user_id=user.id,
        employee_code=f"EMP-TEST-{user.id:05d}",
        position="Cleaner",
        skills=["deep cleaning"],
        is_available=is_available,
        active_job_count=0,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def make_admin(db, **user_fields):
    return make_user(db, role=UserRole.ADMIN, **user_fields)


def make_service(
    db,
    name=None,
    base_price=8000,
    duration=180,
    category=ServiceCategory.RESIDENTIAL,
    is_active=True,
):
    service = Service(
        name=name or f"Service {next(_ids)}",
        description="Test service",
        category=category,
        base_price=base_price,
        price_unit="per service",
        duration=duration,
        features=[],
        is_active=is_active,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def actor_for(user) -> Actor:
    return Actor(subject_id=user.id, role=user.role)


@pytest.fixture
def factories():
    """Factory functions bundled for tests that build their own scenarios."""

    class Factories:
        user = staticmethod(make_user)
        customer = staticmethod(make_customer)
        employee = staticmethod(make_employee)
        admin = staticmethod(make_admin)
        service = staticmethod(make_service)
        actor = staticmethod(actor_for)

    return Factories


# --- API client ---


def _claims_from_bearer(
    bearer: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Treat the bearer token as the Firebase UID."""
    if not bearer:
        raise HTTPException(status_code=401, detail="Not authenticated")
    uid = bearer.credentials
    return {"uid": uid, "email": f"{uid}@example.com", "email_verified": True}


def auth_header(user_or_uid) -> dict:
    uid = getattr(user_or_uid, "firebase_uid", user_or_uid)
    return {"Authorization": f"Bearer {uid}"}


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_claims] = _claims_from_bearer
    yield TestClient(app)
    app.dependency_overrides.clear()
