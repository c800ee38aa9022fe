import logging

import firebase_admin
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions
from sqlalchemy.orm import Session

from . import config
from .database import get_db
from .domain.actor import Actor
from .models import ADMIN_ROLES, User, UserRole, UserStatus

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def init_firebase_app():
    """Initialize the Firebase Admin SDK (only once)"""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": config.FIREBASE_PROJECT_ID} if config.FIREBASE_PROJECT_ID else None

    if config.FIREBASE_SERVICE_ACCOUNT_PATH:
        cred = credentials.Certificate(config.FIREBASE_SERVICE_ACCOUNT_PATH)
        app = firebase_admin.initialize_app(cred, options)
        logger.info("🔥 Firebase Admin initialized with service account")
        return app

    try:
        cred = credentials.ApplicationDefault()
        app = firebase_admin.initialize_app(cred, options)
        logger.info("🔥 Firebase Admin initialized with default credentials")
    except Exception as e:
        # Token verification only needs the project id
        logger.warning(f"⚠️ Default credentials unavailable ({e}), using project ID only")
        app = firebase_admin.initialize_app(options=options)
    return app


def verify_firebase_token(token: str) -> dict:
    """Verify a Firebase ID token and return its decoded claims"""
    init_firebase_app()
    try:
        return firebase_auth.verify_id_token(token)
    except firebase_auth.ExpiredIdTokenError as e:
        logger.warning("⚠️ Expired Firebase token")
        raise HTTPException(status_code=401, detail="Token expired") from e
    except (firebase_auth.InvalidIdTokenError, ValueError) as e:
        logger.warning(f"⚠️ Invalid Firebase token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token") from e
    except firebase_exceptions.FirebaseError as e:
        logger.error(f"❌ Firebase token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Token verification failed") from e


def get_token_claims(
    bearer: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Verified token claims, for routes that run before a User row exists"""
    if not bearer:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    claims = verify_firebase_token(bearer.credentials)
    if not claims.get("uid"):
        logger.error(f"❌ Token missing uid claim. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")
    return claims


def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db),
) -> User:
    """Get the registered, active user behind the Firebase token"""
    user = db.query(User).filter(User.firebase_uid == claims["uid"]).first()

    if not user:
        logger.info(f"🔍 No user registered for Firebase UID {claims['uid']}")
        raise HTTPException(status_code=404, detail="User not found. Please register first.")

    if user.status != UserStatus.ACTIVE:
        logger.warning(f"⚠️ Inactive user {user.email} attempted to authenticate")
        raise HTTPException(status_code=403, detail="Account is not active")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user


def require_roles(*roles: UserRole):
    """Dependency factory restricting a route to the given roles"""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(
                f"⚠️ User {user.email} ({user.role.value}) denied, requires {[r.value for r in roles]}"
            )
            raise HTTPException(status_code=403, detail="Access denied. Insufficient permissions.")
        return user

    return dependency


def to_actor(user: User) -> Actor:
    return Actor(subject_id=user.id, role=user.role)


def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return to_actor(user)


def require_actor(*roles: UserRole):
    """Like require_roles, but yields the Actor handed to the domain services"""
    role_check = require_roles(*roles)

    def dependency(user: User = Depends(role_check)) -> Actor:
        return to_actor(user)

    return dependency


require_admin = require_roles(*ADMIN_ROLES)
customer_actor = require_actor(UserRole.CUSTOMER)
employee_actor = require_actor(UserRole.EMPLOYEE)
