"""Pytest configuration, fixtures and rich failure output for the formatting tests."""
from __future__ import annotations

import logging
import re

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from transcript_polish.core.config import reset_config
from transcript_polish.text_formatting.formatter import TextFormatter
from transcript_polish.text_formatting.formatting_config import FormattingConfig

# Keep pipeline debug logging out of the test output
logging.getLogger("transcript_polish").setLevel(logging.CRITICAL)

console = Console()

_ASSERTION_PATTERN = re.compile(r"Input '(.*)' should format to '(.*)' but got '(.*)'")


class FormatterTestReporter:
    """Collects formatting failures and prints them as one table at the end."""

    def __init__(self):
        self.failures: list[tuple[str, str, str, str]] = []
        self.passes = 0
        self.total = 0

    def record_result(self, test_name: str, input_text: str, expected: str, actual: str, passed: bool):
        self.total += 1
        if passed:
            self.passes += 1
        else:
            self.failures.append((test_name, input_text, expected, actual))

    def print_summary(self):
        if not self.failures:
            console.print(
                Panel.fit(
                    f"[bold green]✨ All {self.total} formatting checks passed ✨[/bold green]",
                    title="Formatting Results",
                    border_style="green",
                )
            )
            return

        table = Table(title="Text Formatting Failures", show_header=True, header_style="bold magenta")
        table.add_column("Test", style="cyan", no_wrap=False)
        table.add_column("Input", style="yellow")
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")
        for test_name, input_text, expected, actual in self.failures:
            table.add_row(test_name.split("::")[-1], input_text, expected, actual)
        console.print(table)


reporter = FormatterTestReporter()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Feed formatting assertion results to the reporter."""
    outcome = yield
    report = outcome.get_result()
    if report.when != "call" or "text_formatting" not in str(item.fspath):
        return

    if report.failed and report.longrepr:
        match = _ASSERTION_PATTERN.search(str(report.longrepr))
        if match:
            reporter.record_result(item.nodeid, *match.groups(), passed=False)
    elif report.passed:
        reporter.passes += 1
        reporter.total += 1


def pytest_sessionfinish(session, exitstatus):
    if reporter.failures:
        console.print("\n")
        reporter.print_summary()


def assert_format(input_text: str, expected: str, actual: str, test_name: str = ""):
    """Equality assertion that shows a rich panel and a character diff on failure."""
    if expected != actual:
        console.print(
            Panel.fit(
                f"[bold]Input:[/bold] '{input_text}'\n"
                f"[bold green]Expected:[/bold green] '{expected}'\n"
                f"[bold red]Actual:[/bold red] '{actual}'",
                title=f"Assertion Failed: {test_name}",
                border_style="red",
            )
        )

        if len(expected) < 60 and len(actual) < 60:
            diff_text = ""
            for e, a in zip(expected, actual):
                diff_text += f"[red]{a}[/red]" if e != a else a
            if len(actual) > len(expected):
                diff_text += f"[red]{actual[len(expected):]}[/red]"
            console.print(f"[bold]Diff:[/bold] {diff_text}")

    assert expected == actual, f"Input '{input_text}' should format to '{expected}' but got '{actual}'"


@pytest.fixture(scope="session")
def formatter():
    """One TextFormatter for the whole session; it holds no per-call state."""
    return TextFormatter(language="en")


@pytest.fixture
def default_config():
    return FormattingConfig()


@pytest.fixture
def formatting_config():
    """
    Factory for configs with every rule off except the ones named.

    Usage: formatting_config(convert_numbers_to_digits=True)
    """
    return FormattingConfig.all_disabled


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no settings file in reach and a fresh global loader."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TRANSCRIPT_POLISH_CONFIG", raising=False)
    reset_config()
    yield tmp_path
    reset_config()
