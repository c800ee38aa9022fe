"""Account routers - registration, login and user profile endpoints"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_token_claims
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import ProfileUpdate, RegisterRequest, UserDetailResponse, UserResponse
from .service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency injection for AccountService"""
    return AccountService(db)


# ============================================================================
# AUTH
# ============================================================================


@router.post("/register", status_code=201)
async def register(
    data: RegisterRequest,
    claims: dict = Depends(get_token_claims),
    service: AccountService = Depends(get_account_service),
):
    """Register the user behind a verified Firebase token as a customer"""
    user = service.register(claims, data)
    logger.info(f"🆕 User registered: {user.email}")
    return success(
        {"user": UserDetailResponse.model_validate(user)},
        message="User registered successfully",
    )


@router.post("/login")
async def login(
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    """Exchange a valid Firebase token for the user and their profiles"""
    user = service.get_profile(current_user.id)
    logger.info(f"🔑 User logged in: {user.email}")
    return success({"user": UserDetailResponse.model_validate(user)})


@router.get("/me")
async def get_me(
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return success({"user": UserDetailResponse.model_validate(service.get_profile(current_user.id))})


@router.put("/profile")
async def update_auth_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    user = service.update_profile(current_user, data)
    return success(
        {"user": UserResponse.model_validate(user)},
        message="Profile updated successfully",
    )


# ============================================================================
# USERS
# ============================================================================


@users_router.get("/profile")
async def get_user_profile(
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return success({"user": UserDetailResponse.model_validate(service.get_profile(current_user.id))})


@users_router.put("/profile")
async def update_user_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    """Update the user and, for customers, their default booking address"""
    user = service.update_profile(current_user, data)
    logger.info(f"✏️ Profile updated for {user.email}")
    return success(
        {"user": UserDetailResponse.model_validate(user)},
        message="Profile updated successfully",
    )


@users_router.delete("/account")
async def deactivate_account(
    current_user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    """Deactivate (not delete) the current account"""
    service.deactivate_account(current_user)
    logger.info(f"🔒 Account deactivated: {current_user.email}")
    return success(message="Account deactivated successfully")
