# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Campaign CRUD operations."""


from typing import Any, Dict, List, Optional

from .config import MarketingConfig
from .graph_client import graph_operation, make_api_request, unwrap_graph_payload
from .graph_constants import CAMPAIGN_FIELDS, CAMPAIGN_LIST_FIELDS
from .query_params import clean_text, coerce_budget, next_page_cursor, normalize_limit
from .results import ToolResult

DEFAULT_CAMPAIGN_LIMIT = 10
MAX_CAMPAIGN_LIMIT = 100


def _normalize_categories(values: Optional[List[str]]) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    normalized = [str(item).strip().upper() for item in values if str(item).strip()]
    deduped = list(dict.fromkeys(normalized))
    if "NONE" in deduped:
        if len(deduped) > 1:
            raise ValueError("special_ad_categories cannot mix 'NONE' with other categories")
        return []
    return deduped


@graph_operation
async def create_campaign(
    name: str,
    objective: str,
    status: str = "PAUSED",
    daily_budget: Optional[Any] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    special_ad_categories: Optional[List[str]] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """Create a campaign under the configured ad account."""
    name = clean_text(name)
    objective = clean_text(objective).upper()
    if not name:
        return ToolResult.fail("Campaign name is required")
    if not objective:
        return ToolResult.fail("Campaign objective is required")

    budget = coerce_budget(daily_budget, "daily_budget")
    status = clean_text(status).upper() or "PAUSED"

    payload: Dict[str, Any] = {
        "name": name,
        "objective": objective,
        "status": status,
        "special_ad_categories": _normalize_categories(special_ad_categories),
    }
    if budget is not None:
        payload["daily_budget"] = budget
    if clean_text(start_time):
        payload["start_time"] = clean_text(start_time)
    if clean_text(end_time):
        payload["end_time"] = clean_text(end_time)

    result = unwrap_graph_payload(
        await make_api_request(f"{config.ad_account_id}/campaigns", config, payload, method="POST")
    )
    campaign_id = result.get("id")
    if not campaign_id:
        return ToolResult.fail("Campaign creation returned no campaign id")

    data = {
        "id": campaign_id,
        "name": name,
        "objective": objective,
        "status": status,
        "daily_budget": budget,
        "start_time": payload.get("start_time"),
        "stop_time": payload.get("end_time"),
    }
    return ToolResult.ok("Campaign created successfully", data)


@graph_operation
async def get_campaigns(
    limit: Optional[Any] = None,
    status: Optional[str] = None,
    page_cursor: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """List campaigns in the configured ad account, optionally filtered by effective status."""
    params: Dict[str, Any] = {
        "fields": ",".join(CAMPAIGN_LIST_FIELDS),
        "page_size": normalize_limit(limit, default=DEFAULT_CAMPAIGN_LIMIT, maximum=MAX_CAMPAIGN_LIMIT),
    }
    if clean_text(status):
        params["effective_status"] = [clean_text(status).upper()]
    if clean_text(page_cursor):
        params["page_cursor"] = clean_text(page_cursor)

    payload = unwrap_graph_payload(await make_api_request(f"{config.ad_account_id}/campaigns", config, params))
    campaigns = [item for item in payload.get("data") or [] if isinstance(item, dict)]
    data = {"campaigns": campaigns, "next_cursor": next_page_cursor(payload)}

    if not campaigns:
        return ToolResult.ok("No campaigns found", data)
    noun = "campaign" if len(campaigns) == 1 else "campaigns"
    return ToolResult.ok(f"Found {len(campaigns)} {noun}", data)


@graph_operation
async def get_campaign_details(campaign_id: str, *, config: Optional[MarketingConfig] = None) -> ToolResult:
    """Fetch the full field set of one campaign."""
    campaign_id = clean_text(campaign_id)
    if not campaign_id:
        return ToolResult.fail("Campaign ID is required")

    payload = unwrap_graph_payload(
        await make_api_request(campaign_id, config, {"fields": ",".join(CAMPAIGN_FIELDS)})
    )
    return ToolResult.ok("Campaign details retrieved", payload)


@graph_operation
async def update_campaign(
    campaign_id: str,
    name: Optional[str] = None,
    status: Optional[str] = None,
    daily_budget: Optional[Any] = None,
    end_time: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """Update selected fields of an existing campaign."""
    campaign_id = clean_text(campaign_id)
    if not campaign_id:
        return ToolResult.fail("Campaign ID is required")

    payload: Dict[str, Any] = {}
    if clean_text(name):
        payload["name"] = clean_text(name)
    if clean_text(status):
        payload["status"] = clean_text(status).upper()
    budget = coerce_budget(daily_budget, "daily_budget")
    if budget is not None:
        payload["daily_budget"] = budget
    if clean_text(end_time):
        payload["end_time"] = clean_text(end_time)

    if not payload:
        return ToolResult.fail("No update parameters provided")

    result = unwrap_graph_payload(await make_api_request(campaign_id, config, payload, method="POST"))
    if result.get("success") is False:
        return ToolResult.fail(f"Facebook did not apply the update to campaign {campaign_id}")

    updated_fields = {("stop_time" if key == "end_time" else key): value for key, value in payload.items()}
    return ToolResult.ok("Campaign updated successfully", {"id": campaign_id, "updated_fields": updated_fields})


@graph_operation
async def delete_campaign(campaign_id: str, *, config: Optional[MarketingConfig] = None) -> ToolResult:
    """Delete a campaign."""
    campaign_id = clean_text(campaign_id)
    if not campaign_id:
        return ToolResult.fail("Campaign ID is required")

    result = unwrap_graph_payload(await make_api_request(campaign_id, config, method="DELETE"))
    if result.get("success") is False:
        return ToolResult.fail(f"Facebook did not delete campaign {campaign_id}")

    return ToolResult.ok("Campaign deleted successfully", {"id": campaign_id})
