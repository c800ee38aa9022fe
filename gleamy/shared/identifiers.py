"""Human-readable identifiers for bookings and employees"""

import secrets
import string
from datetime import datetime, timezone
from typing import Optional

# No 0/O or 1/I so codes survive being read over the phone
CODE_ALPHABET = "".join(c for c in string.ascii_uppercase + string.digits if c not in "01IO")


def random_code(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_booking_number(prefix: str = "GLM", now: Optional[datetime] = None) -> str:
    """e.g. GLM-20260118-K3J9QW2Z"""
    now = now or datetime.now(timezone.utc)
    return f"{prefix}-{now:%Y%m%d}-{random_code(8)}"


def generate_employee_code() -> str:
    """e.g. EMP-2026-7KX4P"""
    return f"EMP-{datetime.now(timezone.utc):%Y}-{random_code(5)}"
