# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Public exports for fb-marketing-mcp core modules."""

from .analytics_tools import aggregate_insight_totals, get_campaign_insights
from .audience_tools import (
    create_custom_audience,
    create_lookalike_audience,
    delete_custom_audience,
    get_audience_details,
    get_custom_audiences,
    update_custom_audience,
)
from .campaign_tools import (
    create_campaign,
    delete_campaign,
    get_campaign_details,
    get_campaigns,
    update_campaign,
)
from .config import ConfigurationError, MarketingConfig, get_config, load_config
from .mcp_runtime import main, mcp_server
from .results import ToolResult

__all__ = [
    "mcp_server",
    "main",
    "ToolResult",
    "MarketingConfig",
    "ConfigurationError",
    "load_config",
    "get_config",
    "create_campaign",
    "get_campaigns",
    "get_campaign_details",
    "update_campaign",
    "delete_campaign",
    "get_campaign_insights",
    "aggregate_insight_totals",
    "create_custom_audience",
    "create_lookalike_audience",
    "get_custom_audiences",
    "get_audience_details",
    "update_custom_audience",
    "delete_custom_audience",
]
