"""
Repository-level pytest configuration.

Why this lives at the root:
  - Command-line options must be registered by an initial conftest, and the
    root one is always loaded whatever path pytest is pointed at
  - Keeps the UI option names in one discoverable place

Options:
  --e2e             run the end-to-end suite against the live storefront
  --ui-browser      edge | chrome | firefox (overrides `browser`)
  --ui-headless     true | false (overrides `headless`)
  --ui-base-url     storefront URL (overrides `base.url`)
"""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_addoption(parser):
    group = parser.getgroup("music-tech-shop", "Music Tech Shop UI suite")
    group.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests against the live storefront (also RUN_E2E=1)",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        help="Browser for UI tests: edge, chrome or firefox",
    )
    group.addoption(
        "--ui-headless",
        action="store",
        default=None,
        help="Run the browser headless: true or false",
    )
    group.addoption(
        "--ui-base-url",
        action="store",
        default=None,
        help="Base URL of the storefront under test",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
