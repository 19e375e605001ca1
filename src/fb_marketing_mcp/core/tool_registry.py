# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""MCP tool surface.

Each handler forwards its arguments to the matching operation and returns the
formatted text block. FastMCP derives the input schema from the signature and
the tool description from the docstring.
"""


from typing import List, Optional, Union

from . import analytics_tools, audience_tools, campaign_tools, formatters
from .mcp_runtime import mcp_server


@mcp_server.tool(name="create_campaign")
async def create_campaign_tool(
    name: str,
    objective: str,
    status: str = "PAUSED",
    daily_budget: Optional[Union[int, str]] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    special_ad_categories: Optional[List[str]] = None,
) -> str:
    """Create a Facebook ad campaign in the configured ad account.

    objective: e.g. OUTCOME_TRAFFIC, OUTCOME_LEADS, OUTCOME_SALES, OUTCOME_AWARENESS.
    daily_budget is in the account's minor currency unit (1000 = 10.00 USD).
    start_time/end_time are ISO 8601 timestamps.
    """
    result = await campaign_tools.create_campaign(
        name=name,
        objective=objective,
        status=status,
        daily_budget=daily_budget,
        start_time=start_time,
        end_time=end_time,
        special_ad_categories=special_ad_categories,
    )
    return formatters.format_create_campaign(result)


@mcp_server.tool(name="get_campaigns")
async def get_campaigns_tool(
    limit: Optional[Union[int, str]] = 10,
    status: Optional[str] = None,
    page_cursor: Optional[str] = None,
) -> str:
    """List campaigns in the configured ad account, optionally filtered by status (ACTIVE, PAUSED, ARCHIVED)."""
    result = await campaign_tools.get_campaigns(limit=limit, status=status, page_cursor=page_cursor)
    return formatters.format_campaign_list(result)


@mcp_server.tool(name="get_campaign_details")
async def get_campaign_details_tool(campaign_id: str) -> str:
    """Show every known field of one campaign: budgets, schedule, status and special ad categories."""
    result = await campaign_tools.get_campaign_details(campaign_id=campaign_id)
    return formatters.format_campaign_details(result)


@mcp_server.tool(name="update_campaign")
async def update_campaign_tool(
    campaign_id: str,
    name: Optional[str] = None,
    status: Optional[str] = None,
    daily_budget: Optional[Union[int, str]] = None,
    end_time: Optional[str] = None,
) -> str:
    """Update a campaign's name, status, daily budget (minor currency units) or end time."""
    result = await campaign_tools.update_campaign(
        campaign_id=campaign_id,
        name=name,
        status=status,
        daily_budget=daily_budget,
        end_time=end_time,
    )
    return formatters.format_update_campaign(result)


@mcp_server.tool(name="delete_campaign")
async def delete_campaign_tool(campaign_id: str) -> str:
    """Permanently delete a campaign."""
    result = await campaign_tools.delete_campaign(campaign_id=campaign_id)
    return formatters.format_delete_campaign(result)


@mcp_server.tool(name="get_campaign_insights")
async def get_campaign_insights_tool(
    campaign_id: str,
    since: str,
    until: str,
    metrics: Optional[List[str]] = None,
    time_increment: Optional[Union[int, str]] = 1,
) -> str:
    """Fetch campaign performance between two YYYY-MM-DD dates, with totals.

    metrics defaults to impressions, clicks, spend, cpc, ctr, reach and frequency.
    time_increment is the number of days per row (1 = daily) or 'all_days' for one row.
    """
    result = await analytics_tools.get_campaign_insights(
        campaign_id=campaign_id,
        since=since,
        until=until,
        metrics=metrics,
        time_increment=time_increment,
    )
    return formatters.format_campaign_insights(result)


@mcp_server.tool(name="create_custom_audience")
async def create_custom_audience_tool(
    name: str,
    subtype: str = "CUSTOM",
    description: Optional[str] = None,
    customer_file_source: Optional[str] = None,
) -> str:
    """Create a custom audience in the configured ad account.

    customer_file_source: USER_PROVIDED_ONLY, PARTNER_PROVIDED_ONLY or BOTH_USER_AND_PARTNER_PROVIDED.
    """
    result = await audience_tools.create_custom_audience(
        name=name,
        subtype=subtype,
        description=description,
        customer_file_source=customer_file_source,
    )
    return formatters.format_create_audience(result)


@mcp_server.tool(name="create_lookalike_audience")
async def create_lookalike_audience_tool(
    source_audience_id: str,
    country: str,
    ratio: Union[float, str] = 0.01,
    name: Optional[str] = None,
) -> str:
    """Create a lookalike audience from an existing audience. ratio ranges from 0.01 (1%) to 0.20 (20%)."""
    result = await audience_tools.create_lookalike_audience(
        source_audience_id=source_audience_id,
        country=country,
        ratio=ratio,
        name=name,
    )
    return formatters.format_create_audience(result)


@mcp_server.tool(name="get_custom_audiences")
async def get_custom_audiences_tool(
    limit: Optional[Union[int, str]] = 10,
    page_cursor: Optional[str] = None,
) -> str:
    """List custom audiences in the configured ad account with their approximate sizes."""
    result = await audience_tools.get_custom_audiences(limit=limit, page_cursor=page_cursor)
    return formatters.format_audience_list(result)


@mcp_server.tool(name="get_audience_details")
async def get_audience_details_tool(audience_id: str) -> str:
    """Show the details, size and delivery status of one custom audience."""
    result = await audience_tools.get_audience_details(audience_id=audience_id)
    return formatters.format_audience_details(result)


@mcp_server.tool(name="update_custom_audience")
async def update_custom_audience_tool(
    audience_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """Rename a custom audience or change its description."""
    result = await audience_tools.update_custom_audience(
        audience_id=audience_id,
        name=name,
        description=description,
    )
    return formatters.format_update_audience(result)


@mcp_server.tool(name="delete_custom_audience")
async def delete_custom_audience_tool(audience_id: str) -> str:
    """Permanently delete a custom audience."""
    result = await audience_tools.delete_custom_audience(audience_id=audience_id)
    return formatters.format_delete_audience(result)
