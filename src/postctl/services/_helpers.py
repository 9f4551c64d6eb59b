"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import date, datetime


def today() -> date:
    """Today's date in local time (post dates are author-local)."""
    return datetime.now().astimezone().date()


def parse_day(value: str) -> date:
    """Parse ``YYYY-MM-DD``.

    Raises:
        ValueError: If *value* is not an ISO calendar date.
    """
    return date.fromisoformat(value)
