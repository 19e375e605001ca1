# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Suggested prompts exposed to MCP hosts."""


from typing import Optional

from .mcp_runtime import mcp_server


@mcp_server.prompt(name="campaign_creation_prompt", description="Plan and create a new Facebook campaign.")
def campaign_creation_prompt(business_goal: str, daily_budget: Optional[str] = None) -> str:
    budget_line = (
        f"The daily budget is {daily_budget} in the ad account's minor currency unit (e.g. cents)."
        if daily_budget
        else "Ask me for a daily budget before creating anything."
    )
    return (
        "Help me launch a Facebook advertising campaign.\n\n"
        f"Business goal: {business_goal}\n"
        f"{budget_line}\n\n"
        "1. Pick the campaign objective that best matches the goal "
        "(OUTCOME_AWARENESS, OUTCOME_TRAFFIC, OUTCOME_ENGAGEMENT, OUTCOME_LEADS, OUTCOME_APP_PROMOTION "
        "or OUTCOME_SALES) and explain the choice in one sentence.\n"
        "2. Propose a clear campaign name.\n"
        "3. Call create_campaign with status PAUSED so nothing spends before I review it.\n"
        "4. Call get_campaign_details on the new campaign ID and summarize what was created."
    )


@mcp_server.prompt(name="campaign_analysis_prompt", description="Analyze a campaign's performance over a date range.")
def campaign_analysis_prompt(campaign_id: str, since: str, until: str) -> str:
    return (
        f"Analyze the performance of Facebook campaign {campaign_id} from {since} to {until}.\n\n"
        "1. Call get_campaign_details to understand the objective, budget and schedule.\n"
        f"2. Call get_campaign_insights with campaign_id={campaign_id}, since={since} and until={until}.\n"
        "3. Report total impressions, clicks and spend, plus the overall CTR and CPC.\n"
        "4. Point out the best and worst days and any sudden changes.\n"
        "5. Finish with up to three concrete optimization suggestions tied to the numbers."
    )


@mcp_server.prompt(name="audience_strategy_prompt", description="Design a custom and lookalike audience strategy.")
def audience_strategy_prompt(product_description: str) -> str:
    return (
        "Design an audience strategy for the following product:\n\n"
        f"{product_description}\n\n"
        "1. Call get_custom_audiences to see which audiences already exist.\n"
        "2. Suggest which existing audiences to reuse and which new custom audiences to create.\n"
        "3. For the strongest seed audience, suggest a lookalike country and ratio "
        "(1% for precision, up to 20% for reach) and call create_lookalike_audience only after I confirm."
    )
