"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Music Tech Shop storefront.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods (never raise, return a sentinel)

Author: Automation Team
License: MIT
================================================================================
"""

from .about_page import AboutPage
from .cart_page import CartPage
from .components import FooterComponent, HeaderComponent
from .home_page import HomePage
from .login_page import LoginPage
from .product_detail_page import ProductDetailPage
from .products_page import ListingFilters, ProductsPage
from .returns_page import ReturnsPage
from .search_results_page import SearchResultsPage
from .shipping_page import ShippingPage
from .terms_page import TermsPage

__all__ = [
    "AboutPage",
    "CartPage",
    "FooterComponent",
    "HeaderComponent",
    "HomePage",
    "ListingFilters",
    "LoginPage",
    "ProductDetailPage",
    "ProductsPage",
    "ReturnsPage",
    "SearchResultsPage",
    "ShippingPage",
    "TermsPage",
]
