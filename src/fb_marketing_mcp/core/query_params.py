# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Normalization helpers for tool arguments before they reach the Graph API."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

DEFAULT_INSIGHT_METRICS = ("impressions", "clicks", "spend", "cpc", "ctr", "reach", "frequency")

_DATE_FORMAT = "%Y-%m-%d"


def _normalize_list_tokens(values: Optional[Sequence[Any]]) -> List[str]:
    normalized: List[str] = []
    seen = set()
    for raw in values or []:
        token = str(raw).strip()
        if not token:
            continue
        if token in seen:
            continue
        seen.add(token)
        normalized.append(token)
    return normalized


def coerce_number(value: Any, field: str) -> Optional[Union[int, float]]:
    """Turn numeric-looking input into int/float; None and blank strings mean absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value

    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{field} must be a number, got '{value}'") from None


def coerce_budget(value: Any, field: str) -> Optional[int]:
    """Budgets are positive integers in the account's minor currency unit."""
    number = coerce_number(value, field)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            raise ValueError(f"{field} must be a whole number of minor currency units (cents), got {value!r}")
        number = int(number)
    if number <= 0:
        raise ValueError(f"{field} must be greater than zero")
    return number


def normalize_limit(limit: Any, *, default: int, maximum: int) -> int:
    number = coerce_number(limit, "limit")
    if number is None:
        return default
    return max(1, min(int(number), maximum))


def normalize_time_range(since: Any, until: Any) -> Dict[str, str]:
    """Validate a YYYY-MM-DD time range and return the Graph time_range object."""
    since_text = str(since or "").strip()
    until_text = str(until or "").strip()
    if not (since_text and until_text):
        raise ValueError("time range must contain both 'since' and 'until' in YYYY-MM-DD format")

    try:
        since_date = datetime.datetime.strptime(since_text, _DATE_FORMAT).date()
        until_date = datetime.datetime.strptime(until_text, _DATE_FORMAT).date()
    except ValueError:
        raise ValueError(
            f"time range dates must use YYYY-MM-DD format, got since='{since_text}' until='{until_text}'"
        ) from None

    if since_date > until_date:
        raise ValueError(f"'since' ({since_text}) must not be after 'until' ({until_text})")

    return {"since": since_date.strftime(_DATE_FORMAT), "until": until_date.strftime(_DATE_FORMAT)}


def normalize_metrics(metrics: Optional[Union[str, Sequence[Any]]]) -> List[str]:
    """Accept a list or comma-separated string; fall back to the default metric set."""
    if isinstance(metrics, str):
        metrics = metrics.split(",")
    normalized = _normalize_list_tokens([str(metric).lower() for metric in metrics or []])
    return normalized or list(DEFAULT_INSIGHT_METRICS)


def normalize_time_increment(time_increment: Any) -> Union[int, str]:
    if time_increment is None or str(time_increment).strip() == "":
        return 1
    if str(time_increment).strip().lower() in {"all_days", "monthly"}:
        return str(time_increment).strip().lower()
    number = coerce_number(time_increment, "time_increment")
    if not isinstance(number, int) or not 1 <= number <= 90:
        raise ValueError("time_increment must be 'all_days', 'monthly' or a whole number of days between 1 and 90")
    return number


def clean_text(value: Any) -> str:
    return str(value or "").strip()


def next_page_cursor(payload: Dict[str, Any]) -> Optional[str]:
    """Return the 'after' cursor when the Graph response says another page exists."""
    paging = payload.get("paging")
    if not isinstance(paging, dict) or not paging.get("next"):
        return None
    cursors = paging.get("cursors")
    if isinstance(cursors, dict):
        return cursors.get("after")
    return None


def format_ratio_percent(ratio: Any) -> str:
    """Render a fraction such as 0.015 as '1.5%' without rounding it to whole percents."""
    return f"{float(ratio) * 100:g}%"
