"""
================================================================================
Failure Evidence
================================================================================

Screenshot and page-source capture for failed UI tests.

Files land in the artifacts directory as
    <sanitized test id>_<YYYY-mm-dd_HH-MM-SS>.png
    <sanitized test id>_<YYYY-mm-dd_HH-MM-SS>.html
and are attached to the Allure report together with the current URL.

Capture is best-effort: a closed or half-started session never turns a test
failure into a teardown error.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from autotest_tools.report_tools.allure_utils import attach_file, attach_text

from .browser_manager import BrowserSession


TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def sanitize_test_id(test_id: str) -> str:
    """Replace everything outside [A-Za-z0-9_-] with underscores."""
    return re.sub(r"[^A-Za-z0-9_-]", "_", test_id)


def artifact_stem(test_id: str, when: Optional[datetime] = None) -> str:
    when = when or datetime.now()
    return f"{sanitize_test_id(test_id)}_{when.strftime(TIMESTAMP_FORMAT)}"


async def capture_failure_evidence(
    session: Optional[BrowserSession],
    test_id: str,
    artifacts_dir: Path,
) -> Dict[str, Path]:
    """
    Save a screenshot and the page source of a failed test.

    Args:
        session: Session of the failing test (may be None or closed)
        test_id: pytest node id
        artifacts_dir: Output directory, created if missing

    Returns:
        Mapping of "screenshot" / "page_source" to the files written
    """
    saved: Dict[str, Path] = {}
    if session is None or session.is_closed:
        logger.warning(f"No open browser session for {test_id}, skipping evidence capture")
        return saved

    stem = artifact_stem(test_id)
    page = session.page

    with allure.step("Capture failure evidence"):
        try:
            artifacts_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create artifacts directory {artifacts_dir}: {e}")
            return saved

        screenshot_path = artifacts_dir / f"{stem}.png"
        try:
            await page.screenshot(path=str(screenshot_path), full_page=True)
            saved["screenshot"] = screenshot_path
            attach_file(screenshot_path, name="failure_screenshot", attachment_type=allure.attachment_type.PNG)
        except (PlaywrightError, OSError) as e:
            logger.warning(f"Failed to capture screenshot: {e}")

        source_path = artifacts_dir / f"{stem}.html"
        try:
            source = await page.content()
            source_path.write_text(source, encoding="utf-8")
            saved["page_source"] = source_path
            attach_file(source_path, name="failure_page_source", attachment_type=allure.attachment_type.HTML)
        except (PlaywrightError, OSError) as e:
            logger.warning(f"Failed to capture page source: {e}")

        attach_text(page.url, name="Current URL")

    for kind, path in saved.items():
        logger.info(f"Saved {kind}: {path}")
    return saved


__all__ = [
    "artifact_stem",
    "capture_failure_evidence",
    "sanitize_test_id",
]
