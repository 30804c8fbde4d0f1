"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the UI framework, plus result summarising and
HTML report generation used by the test runner.

Features:
- Text and file attachments
- Result summary from allure-results (*-result.json)
- Report generation through the Allure CLI

================================================================================
"""

import json
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_file(path: Path, name: Optional[str] = None, attachment_type=None):
    """
    Attach a file from disk (screenshot, page source, log).

    Args:
        path: File to attach
        name: Attachment name, defaults to the file name
        attachment_type: allure.attachment_type member, guessed from the suffix if omitted
    """
    path = Path(path)
    if attachment_type is None:
        attachment_type = {
            ".png": allure.attachment_type.PNG,
            ".html": allure.attachment_type.HTML,
            ".json": allure.attachment_type.JSON,
        }.get(path.suffix.lower(), allure.attachment_type.TEXT)
    allure.attach.file(str(path), name=name or path.name, attachment_type=attachment_type)


# ================================================================================
# Result Summary
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    failed_tests: List[str] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Pass rate percentage over executed (non-skipped) tests."""
        executed = self.total - self.skipped
        if executed <= 0:
            return 0.0
        return (self.passed / executed) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "failed_tests": self.failed_tests,
            "timestamp": self.timestamp,
        }


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Build a summary from allure-results.

    Args:
        results_dir: Directory holding *-result.json files

    Returns:
        TestResultSummary (all zeros if the directory is missing)
    """
    summary = TestResultSummary()
    results_dir = Path(results_dir)
    if not results_dir.exists():
        return summary

    for result_file in sorted(results_dir.glob("*-result.json")):
        try:
            result = json.loads(result_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")
            continue

        summary.total += 1
        status = result.get("status", "unknown")
        if status == "passed":
            summary.passed += 1
        elif status == "failed":
            summary.failed += 1
            summary.failed_tests.append(result.get("fullName") or result.get("name", "?"))
        elif status == "broken":
            summary.broken += 1
            summary.failed_tests.append(result.get("fullName") or result.get("name", "?"))
        elif status == "skipped":
            summary.skipped += 1
        else:
            summary.unknown += 1

        summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

    return summary


# ================================================================================
# Report Generation
# ================================================================================

def generate_allure_report(results_dir: Path, report_dir: Path) -> bool:
    """
    Generate Allure HTML report with the Allure CLI.

    Returns:
        True if the report was generated
    """
    cmd = ["allure", "generate", str(results_dir), "-o", str(report_dir), "--clean"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"Report generated at {report_dir}")
    return True


__all__ = [
    "attach_text",
    "attach_file",
    "TestResultSummary",
    "summarize_results",
    "generate_allure_report",
]
