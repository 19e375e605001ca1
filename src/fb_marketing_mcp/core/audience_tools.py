# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Custom and lookalike audience operations."""


import re
from typing import Any, Dict, Optional

from .config import MarketingConfig
from .graph_client import graph_operation, make_api_request, unwrap_graph_payload
from .graph_constants import AUDIENCE_FIELDS, AUDIENCE_LIST_FIELDS
from .query_params import clean_text, coerce_number, format_ratio_percent, next_page_cursor, normalize_limit
from .results import ToolResult

DEFAULT_AUDIENCE_LIMIT = 10
MAX_AUDIENCE_LIMIT = 100

MIN_LOOKALIKE_RATIO = 0.01
MAX_LOOKALIKE_RATIO = 0.20

_CUSTOMER_FILE_SOURCES = {
    "USER_PROVIDED_ONLY",
    "PARTNER_PROVIDED_ONLY",
    "BOTH_USER_AND_PARTNER_PROVIDED",
}


@graph_operation
async def create_custom_audience(
    name: str,
    subtype: str = "CUSTOM",
    description: Optional[str] = None,
    customer_file_source: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """Create a custom audience under the configured ad account."""
    name = clean_text(name)
    if not name:
        return ToolResult.fail("Audience name is required")

    payload: Dict[str, Any] = {"name": name, "subtype": clean_text(subtype).upper() or "CUSTOM"}
    if clean_text(description):
        payload["description"] = clean_text(description)
    if clean_text(customer_file_source):
        source = clean_text(customer_file_source).upper()
        if source not in _CUSTOMER_FILE_SOURCES:
            return ToolResult.fail(
                f"customer_file_source must be one of: {', '.join(sorted(_CUSTOMER_FILE_SOURCES))}"
            )
        payload["customer_file_source"] = source

    result = unwrap_graph_payload(
        await make_api_request(f"{config.ad_account_id}/customaudiences", config, payload, method="POST")
    )
    if not result.get("id"):
        return ToolResult.fail("Audience creation returned no audience id")

    data = {"id": result["id"], **payload}
    return ToolResult.ok("Custom audience created successfully", data)


@graph_operation
async def create_lookalike_audience(
    source_audience_id: str,
    country: str,
    ratio: Any = MIN_LOOKALIKE_RATIO,
    name: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """Create a lookalike audience seeded from an existing custom audience."""
    source_audience_id = clean_text(source_audience_id)
    if not source_audience_id:
        return ToolResult.fail("Source audience ID is required")

    country = clean_text(country).upper()
    if not re.match(r"^[A-Z]{2}$", country):
        return ToolResult.fail("country must be a two-letter ISO country code, e.g. 'US'")

    ratio_value = coerce_number(ratio, "ratio")
    if ratio_value is None:
        ratio_value = MIN_LOOKALIKE_RATIO
    if not MIN_LOOKALIKE_RATIO <= ratio_value <= MAX_LOOKALIKE_RATIO:
        return ToolResult.fail(
            f"ratio must be between {MIN_LOOKALIKE_RATIO} and {MAX_LOOKALIKE_RATIO} (1% to 20% of the country)"
        )

    default_name = f"Lookalike ({country}, {format_ratio_percent(ratio_value)}) of {source_audience_id}"
    audience_name = clean_text(name) or default_name
    payload: Dict[str, Any] = {
        "name": audience_name,
        "subtype": "LOOKALIKE",
        "origin_audience_id": source_audience_id,
        "lookalike_spec": {"country": country, "ratio": ratio_value},
    }

    result = unwrap_graph_payload(
        await make_api_request(f"{config.ad_account_id}/customaudiences", config, payload, method="POST")
    )
    if not result.get("id"):
        return ToolResult.fail("Lookalike creation returned no audience id")

    data = {
        "id": result["id"],
        "name": audience_name,
        "subtype": "LOOKALIKE",
        "origin_audience_id": source_audience_id,
        "country": country,
        "ratio": ratio_value,
    }
    return ToolResult.ok("Lookalike audience created successfully", data)


@graph_operation
async def get_custom_audiences(
    limit: Optional[Any] = None,
    page_cursor: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """List custom audiences in the configured ad account."""
    params: Dict[str, Any] = {
        "fields": ",".join(AUDIENCE_LIST_FIELDS),
        "page_size": normalize_limit(limit, default=DEFAULT_AUDIENCE_LIMIT, maximum=MAX_AUDIENCE_LIMIT),
    }
    if clean_text(page_cursor):
        params["page_cursor"] = clean_text(page_cursor)

    payload = unwrap_graph_payload(
        await make_api_request(f"{config.ad_account_id}/customaudiences", config, params)
    )
    audiences = [item for item in payload.get("data") or [] if isinstance(item, dict)]
    data = {"audiences": audiences, "next_cursor": next_page_cursor(payload)}

    if not audiences:
        return ToolResult.ok("No custom audiences found", data)
    noun = "audience" if len(audiences) == 1 else "audiences"
    return ToolResult.ok(f"Found {len(audiences)} {noun}", data)


@graph_operation
async def get_audience_details(audience_id: str, *, config: Optional[MarketingConfig] = None) -> ToolResult:
    audience_id = clean_text(audience_id)
    if not audience_id:
        return ToolResult.fail("Audience ID is required")

    payload = unwrap_graph_payload(
        await make_api_request(audience_id, config, {"fields": ",".join(AUDIENCE_FIELDS)})
    )
    return ToolResult.ok("Audience details retrieved", payload)


@graph_operation
async def update_custom_audience(
    audience_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    audience_id = clean_text(audience_id)
    if not audience_id:
        return ToolResult.fail("Audience ID is required")

    payload: Dict[str, Any] = {}
    if clean_text(name):
        payload["name"] = clean_text(name)
    if description is not None:
        payload["description"] = str(description).strip()

    if not payload:
        return ToolResult.fail("No update parameters provided")

    result = unwrap_graph_payload(await make_api_request(audience_id, config, payload, method="POST"))
    if result.get("success") is False:
        return ToolResult.fail(f"Facebook did not apply the update to audience {audience_id}")

    return ToolResult.ok("Custom audience updated successfully", {"id": audience_id, "updated_fields": payload})


@graph_operation
async def delete_custom_audience(audience_id: str, *, config: Optional[MarketingConfig] = None) -> ToolResult:
    audience_id = clean_text(audience_id)
    if not audience_id:
        return ToolResult.fail("Audience ID is required")

    result = unwrap_graph_payload(await make_api_request(audience_id, config, method="DELETE"))
    if result.get("success") is False:
        return ToolResult.fail(f"Facebook did not delete audience {audience_id}")

    return ToolResult.ok("Custom audience deleted successfully", {"id": audience_id})
