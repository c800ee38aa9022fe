from dataclasses import dataclass

from ..models import ADMIN_ROLES, UserRole


@dataclass(frozen=True)
class Actor:
    """Verified caller identity handed to the workflows by the auth layer"""

    subject_id: int  # users.id
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
