"""
Test data for the Music Tech Shop UI suite.

    - credentials: fixed demo accounts shown on the login page
    - test_data_factory: search term generation
"""

from .credentials import ADMIN_CREDENTIALS, CUSTOMER_CREDENTIALS, Credentials, UserRole
from .test_data_factory import SearchTermFactory

__all__ = [
    "ADMIN_CREDENTIALS",
    "CUSTOMER_CREDENTIALS",
    "Credentials",
    "SearchTermFactory",
    "UserRole",
]
