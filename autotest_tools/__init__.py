"""
================================================================================
Autotest Tools
================================================================================

Infrastructure utilities shared by the Music Tech Shop test suites.

Modules:
    - common: loguru logger setup and filesystem helpers
    - report_tools: Allure attachments, result summary, report generation

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import attach_text

    init_logger(level="DEBUG")
    attach_text("https://music-tech-shop.vercel.app/cart", name="Current URL")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
