"""Reporting windows supported by the tracker.

A closed set of calendar-aligned periods. Parsing user input into one of
these values is the CLI's job; the Core only ever receives the enum.
"""

from __future__ import annotations

from enum import Enum


class ReportingPeriod(str, Enum):
    """Calendar windows anchored to the local wall-clock date."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    def phrase(self) -> str:
        """Human readable phrase used in report lines ("this week")."""

        return "today" if self is ReportingPeriod.TODAY else f"this {self.value}"
