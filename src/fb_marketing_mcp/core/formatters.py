# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Plain-text rendering of tool results.

Every function here is pure: it takes a ToolResult and returns the text block the
MCP host shows to the assistant. Optional fields are emitted only when present.
Budgets are shown as returned by the Graph API, in minor currency units.
"""


from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .query_params import format_ratio_percent
from .results import ToolResult

_CAMPAIGN_DETAIL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("objective", "Objective"),
    ("status", "Status"),
    ("buying_type", "Buying Type"),
    ("daily_budget", "Daily Budget"),
    ("lifetime_budget", "Lifetime Budget"),
    ("spend_cap", "Spend Cap"),
    ("budget_remaining", "Budget Remaining"),
    ("created_time", "Created"),
    ("start_time", "Start Time"),
    ("stop_time", "End Time"),
)

_CAMPAIGN_SUMMARY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("objective", "Objective"),
    ("status", "Status"),
    ("daily_budget", "Daily Budget"),
    ("lifetime_budget", "Lifetime Budget"),
    ("created_time", "Created"),
    ("start_time", "Start Time"),
    ("stop_time", "End Time"),
)

_AUDIENCE_DETAIL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("subtype", "Subtype"),
    ("description", "Description"),
    ("customer_file_source", "Customer File Source"),
    ("retention_days", "Retention Days"),
    ("time_created", "Created"),
    ("time_updated", "Updated"),
)

_METRIC_LABELS = {
    "impressions": "Impressions",
    "clicks": "Clicks",
    "spend": "Spend",
    "cpc": "CPC",
    "cpm": "CPM",
    "ctr": "CTR",
    "reach": "Reach",
    "frequency": "Frequency",
}

_TOTAL_TEMPLATES: Tuple[Tuple[str, str], ...] = (
    ("impressions", "  Total Impressions: {}"),
    ("clicks", "  Total Clicks: {}"),
    ("spend", "  Total Spend: {:.2f}"),
    ("ctr", "  Overall CTR: {:.2f}%"),
    ("cpc", "  Overall CPC: {:.2f}"),
)

_UPDATE_LABELS = {
    "name": "Name",
    "status": "Status",
    "daily_budget": "Daily Budget",
    "stop_time": "End Time",
    "description": "Description",
}


def _present(value: Any) -> bool:
    return value is not None and value != "" and value != [] and value != {}


def _field_lines(record: Dict[str, Any], fields: Iterable[Tuple[str, str]], indent: str = "") -> List[str]:
    return [f"{indent}{label}: {record[key]}" for key, label in fields if _present(record.get(key))]


def _failure(action: str, result: ToolResult) -> str:
    return f"{action} failed: {result.message}"


def _next_page_hint(noun: str, cursor: Optional[str]) -> List[str]:
    if not cursor:
        return []
    return [f"More {noun} available. Pass page_cursor=\"{cursor}\" to fetch the next page."]


def _status_line(label: str, status: Any) -> Optional[str]:
    if not isinstance(status, dict) or not _present(status.get("description")):
        return None
    code = status.get("code")
    suffix = f" ({code})" if _present(code) else ""
    return f"{label}: {status['description']}{suffix}"


def _audience_size(record: Dict[str, Any]) -> Optional[str]:
    lower = record.get("approximate_count_lower_bound")
    upper = record.get("approximate_count_upper_bound")
    if _present(lower) and _present(upper):
        return f"{lower} - {upper}"
    if _present(lower):
        return f"at least {lower}"
    if _present(upper):
        return f"up to {upper}"
    return None


# Campaigns


def format_create_campaign(result: ToolResult) -> str:
    if not result.success:
        return _failure("Campaign creation", result)

    data = result.data or {}
    lines = [f"{result.message}!", "", f"Campaign ID: {data.get('id')}"]
    lines += _field_lines(
        data,
        (
            ("name", "Name"),
            ("objective", "Objective"),
            ("status", "Status"),
            ("daily_budget", "Daily Budget"),
            ("start_time", "Start Time"),
            ("stop_time", "End Time"),
        ),
    )
    return "\n".join(lines)


def format_campaign_list(result: ToolResult) -> str:
    if not result.success:
        return _failure("Fetching campaigns", result)

    data = result.data or {}
    campaigns: Sequence[Dict[str, Any]] = data.get("campaigns") or []
    if not campaigns:
        return "No campaigns found."

    lines = [f"{result.message}:", ""]
    for index, campaign in enumerate(campaigns, start=1):
        lines.append(f"{index}. {campaign.get('name') or '(unnamed)'} (ID: {campaign.get('id')})")
        lines += _field_lines(campaign, _CAMPAIGN_SUMMARY_FIELDS, indent="   ")
        lines.append("")
    lines += _next_page_hint("campaigns", data.get("next_cursor"))
    return "\n".join(lines).rstrip()


def format_campaign_details(result: ToolResult) -> str:
    if not result.success:
        return _failure("Fetching campaign details", result)

    campaign = result.data or {}
    lines = ["Campaign Details:", "", f"ID: {campaign.get('id')}"]
    if _present(campaign.get("name")):
        lines.append(f"Name: {campaign['name']}")
    lines += _field_lines(campaign, _CAMPAIGN_DETAIL_FIELDS)

    categories = campaign.get("special_ad_categories")
    if _present(categories):
        lines.append(f"Special Ad Categories: {', '.join(str(item) for item in categories)}")
    return "\n".join(lines)


def format_update_campaign(result: ToolResult) -> str:
    if not result.success:
        return _failure("Campaign update", result)

    data = result.data or {}
    lines = [f"{result.message}!", "", f"Campaign ID: {data.get('id')}", "Updated fields:"]
    for key, value in (data.get("updated_fields") or {}).items():
        lines.append(f"  {_UPDATE_LABELS.get(key, key)}: {value}")
    return "\n".join(lines)


def format_delete_campaign(result: ToolResult) -> str:
    if not result.success:
        return _failure("Campaign deletion", result)
    return f"{result.message}. Campaign ID: {(result.data or {}).get('id')}"


# Insights


def _metric_value(metric: str, value: Any) -> str:
    if metric == "ctr":
        return f"{value}%"
    return str(value)


def format_campaign_insights(result: ToolResult) -> str:
    if not result.success:
        return _failure("Fetching campaign insights", result)
    if result.data is None:
        return result.message

    data = result.data
    time_range = data.get("time_range") or {}
    metrics: Sequence[str] = data.get("metrics") or []
    lines = [
        f"Campaign insights for {data.get('campaign_id')} ({time_range.get('since')} to {time_range.get('until')}):",
        "",
    ]

    for row in data.get("insights") or []:
        start, stop = row.get("date_start"), row.get("date_stop")
        if _present(start) and start == stop:
            lines.append(f"Date: {start}")
        elif _present(start) and _present(stop):
            lines.append(f"Period: {start} to {stop}")
        for metric in metrics:
            if _present(row.get(metric)):
                label = _METRIC_LABELS.get(metric, metric.replace("_", " ").title())
                lines.append(f"  {label}: {_metric_value(metric, row[metric])}")
        lines.append("")

    totals = data.get("totals") or {}
    total_lines = [
        template.format(totals[key]) for key, template in _TOTAL_TEMPLATES if totals.get(key) is not None
    ]
    if total_lines:
        lines += ["Totals:", *total_lines]
    return "\n".join(lines).rstrip()


# Audiences


def format_create_audience(result: ToolResult) -> str:
    if not result.success:
        return _failure("Audience creation", result)

    data = result.data or {}
    lines = [f"{result.message}!", "", f"Audience ID: {data.get('id')}"]
    lines += _field_lines(
        data,
        (
            ("name", "Name"),
            ("subtype", "Subtype"),
            ("description", "Description"),
            ("customer_file_source", "Customer File Source"),
            ("origin_audience_id", "Source Audience ID"),
            ("country", "Country"),
        ),
    )
    if _present(data.get("ratio")):
        lines.append(f"Ratio: {format_ratio_percent(data['ratio'])}")
    return "\n".join(lines)


def format_audience_list(result: ToolResult) -> str:
    if not result.success:
        return _failure("Fetching custom audiences", result)

    data = result.data or {}
    audiences: Sequence[Dict[str, Any]] = data.get("audiences") or []
    if not audiences:
        return "No custom audiences found."

    lines = [f"{result.message}:", ""]
    for index, audience in enumerate(audiences, start=1):
        lines.append(f"{index}. {audience.get('name') or '(unnamed)'} (ID: {audience.get('id')})")
        lines += _field_lines(audience, (("subtype", "Subtype"), ("time_created", "Created")), indent="   ")
        size = _audience_size(audience)
        if size:
            lines.append(f"   Approximate Size: {size}")
        lines.append("")
    lines += _next_page_hint("audiences", data.get("next_cursor"))
    return "\n".join(lines).rstrip()


def format_audience_details(result: ToolResult) -> str:
    if not result.success:
        return _failure("Fetching audience details", result)

    audience = result.data or {}
    lines = ["Audience Details:", "", f"ID: {audience.get('id')}"]
    if _present(audience.get("name")):
        lines.append(f"Name: {audience['name']}")
    lines += _field_lines(audience, _AUDIENCE_DETAIL_FIELDS)

    size = _audience_size(audience)
    if size:
        lines.append(f"Approximate Size: {size}")
    for label, key in (("Operation Status", "operation_status"), ("Delivery Status", "delivery_status")):
        status_line = _status_line(label, audience.get(key))
        if status_line:
            lines.append(status_line)
    return "\n".join(lines)


def format_update_audience(result: ToolResult) -> str:
    if not result.success:
        return _failure("Audience update", result)

    data = result.data or {}
    lines = [f"{result.message}!", "", f"Audience ID: {data.get('id')}", "Updated fields:"]
    for key, value in (data.get("updated_fields") or {}).items():
        lines.append(f"  {_UPDATE_LABELS.get(key, key)}: {value}")
    return "\n".join(lines)


def format_delete_audience(result: ToolResult) -> str:
    if not result.success:
        return _failure("Audience deletion", result)
    return f"{result.message}. Audience ID: {(result.data or {}).get('id')}"
