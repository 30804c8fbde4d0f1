"""Shared page fragments (header, footer)."""

from .footer_component import FooterComponent
from .header_component import HeaderComponent

__all__ = ["FooterComponent", "HeaderComponent"]
