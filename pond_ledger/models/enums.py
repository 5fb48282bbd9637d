"""
Shared enumerations for database models.

Mapping Python enums to database enums means an invalid role or
payment status is rejected by the database, not just by request
validation.
"""

import enum


class UserRole(str, enum.Enum):
    """Caller roles. Admins and owners may perform destructive operations."""
    EMPLOYEE = "employee"
    ADMIN = "admin"
    OWNER = "owner"


class PaymentStatus(str, enum.Enum):
    """Whether a sale was settled at the time it was recorded."""
    PAID = "paid"
    UNPAID = "unpaid"


class DebtStatus(str, enum.Enum):
    UNPAID = "unpaid"
    PAID = "paid"


ELEVATED_ROLES = (UserRole.ADMIN, UserRole.OWNER)


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Store enum values (``'paid'``) rather than member names (``'PAID'``)."""
    return [member.value for member in enum_cls]
