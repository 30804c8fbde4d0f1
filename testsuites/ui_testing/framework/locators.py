"""
Declarative element locators.

A Locator is an immutable description of how to find elements: a CSS
selector, a tag name, or an XPath expression. Page objects own them as
class-level constants.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Locator:
    strategy: str
    value: str
    name: str = ""

    STRATEGIES = ("css", "tag", "xpath")

    def __post_init__(self) -> None:
        if self.strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown locator strategy: {self.strategy}")

    @classmethod
    def css(cls, value: str, name: str = "") -> "Locator":
        return cls("css", value, name)

    @classmethod
    def tag(cls, value: str, name: str = "") -> "Locator":
        return cls("tag", value, name)

    @classmethod
    def xpath(cls, value: str, name: str = "") -> "Locator":
        return cls("xpath", value, name)

    @property
    def query(self) -> str:
        """Selector string understood by Playwright."""
        if self.strategy == "xpath":
            return f"xpath={self.value}"
        if self.strategy == "tag":
            return f"css={self.value}"
        return self.value

    def __str__(self) -> str:
        return self.name or f"{self.strategy}:{self.value}"


__all__ = ["Locator"]
