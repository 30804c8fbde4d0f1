"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project markers, tags tests by directory, and keeps the
end-to-end suite opt-in: tests marked `e2e` are skipped unless pytest runs
with `--e2e` or the RUN_E2E environment variable is truthy.

================================================================================
"""

import os

import pytest


TRUTHY = ("true", "1", "yes", "on")


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live storefront (opt in with --e2e)"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "cart: Tests related to the shopping cart"
    )
    config.addinivalue_line(
        "markers", "catalog: Tests related to product listing, detail and search"
    )
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )
    config.addinivalue_line(
        "markers", "layout: Tests related to theme, responsiveness and accessibility"
    )


def _e2e_enabled(config) -> bool:
    if config.getoption("--e2e", default=False):
        return True
    return os.environ.get("RUN_E2E", "").strip().lower() in TRUTHY


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by directory and skip e2e tests unless explicitly enabled.
    """
    run_e2e = _e2e_enabled(config)
    skip_e2e = pytest.mark.skip(reason="end-to-end test; run with --e2e or RUN_E2E=1")

    for item in items:
        path = str(item.fspath)

        # Auto-add 'ui' and 'e2e' markers to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        # Auto-add 'unit' marker to tests in unit directory
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)

        if not run_e2e and "e2e" in item.keywords:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Music Tech Shop UI Automation Suite",
        f"End-to-end tests: {'enabled' if _e2e_enabled(config) else 'skipped (use --e2e)'}",
        "=" * 60,
        "",
    ]
