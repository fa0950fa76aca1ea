"""
Roles and the pure role check used by route guards.
"""

import enum
from typing import Iterable


class Role(str, enum.Enum):
    ADMIN = "admin"
    INSPECTOR = "inspector"
    COBRADOR = "cobrador"  # collects payments in the field


ALL_ROLES = (Role.ADMIN, Role.INSPECTOR, Role.COBRADOR)


def permit(role: str | None, allowed: Iterable[Role | str]) -> bool:
    """True iff ``role`` is one of ``allowed``."""
    if role is None:
        return False
    try:
        actual = Role(role)
    except ValueError:
        return False
    return actual in {Role(r) for r in allowed}
