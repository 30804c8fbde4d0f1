"""
Demo accounts of the Music Tech Shop storefront.

The login page prints both accounts for visitors, so they are not secrets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Credentials:
    """Immutable (email, password, role) used as login input."""

    email: str
    password: str
    role: UserRole

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***', role={self.role.value})"


ADMIN_CREDENTIALS = Credentials("admin@test.com", "admin123", UserRole.ADMIN)
CUSTOMER_CREDENTIALS = Credentials("user@test.com", "user123", UserRole.CUSTOMER)


__all__ = [
    "UserRole",
    "Credentials",
    "ADMIN_CREDENTIALS",
    "CUSTOMER_CREDENTIALS",
]
