# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Graph API version and endpoint constants."""

import re

GRAPH_API_HOST = "https://graph.facebook.com"
DEFAULT_GRAPH_API_VERSION = "v22.0"


def normalize_graph_api_version(raw_version: str) -> str:
    """Normalize API version to vNN.N format, falling back to the default."""
    candidate = str(raw_version or "").strip()
    if not candidate:
        return DEFAULT_GRAPH_API_VERSION

    if not candidate.startswith("v"):
        candidate = f"v{candidate}"

    if not re.match(r"^v\d+\.\d+$", candidate):
        return DEFAULT_GRAPH_API_VERSION

    return candidate


CAMPAIGN_FIELDS = (
    "id",
    "name",
    "objective",
    "status",
    "buying_type",
    "daily_budget",
    "lifetime_budget",
    "spend_cap",
    "budget_remaining",
    "created_time",
    "start_time",
    "stop_time",
    "special_ad_categories",
)

CAMPAIGN_LIST_FIELDS = (
    "id",
    "name",
    "objective",
    "status",
    "daily_budget",
    "lifetime_budget",
    "created_time",
    "start_time",
    "stop_time",
)

AUDIENCE_FIELDS = (
    "id",
    "name",
    "description",
    "subtype",
    "approximate_count_lower_bound",
    "approximate_count_upper_bound",
    "customer_file_source",
    "retention_days",
    "time_created",
    "time_updated",
    "operation_status",
    "delivery_status",
)

AUDIENCE_LIST_FIELDS = (
    "id",
    "name",
    "subtype",
    "approximate_count_lower_bound",
    "approximate_count_upper_bound",
    "time_created",
)
