import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from fb_marketing_mcp.core.campaign_tools import (
    create_campaign,
    delete_campaign,
    get_campaign_details,
    get_campaigns,
    update_campaign,
)
from fb_marketing_mcp.core.config import MarketingConfig

CONFIG = MarketingConfig(
    app_id="1234",
    app_secret="app-secret",
    access_token="token_12345678901234567890",
    ad_account_id="act_42",
)


@pytest.mark.asyncio
async def test_create_campaign_posts_to_account_and_coerces_budget():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "120210000000001"}
        result = await create_campaign(
            name="Spring Sale",
            objective="outcome_traffic",
            status="paused",
            daily_budget="1500",
            start_time="2024-03-01T00:00:00+0000",
            end_time="2024-03-31T00:00:00+0000",
            config=CONFIG,
        )

    assert result.success is True
    assert result.data["id"] == "120210000000001"
    assert result.data["stop_time"] == "2024-03-31T00:00:00+0000"

    assert mock_api.call_args.args[0] == "act_42/campaigns"
    assert mock_api.call_args.kwargs["method"] == "POST"
    params = mock_api.call_args.args[2]
    assert params["daily_budget"] == 1500
    assert params["objective"] == "OUTCOME_TRAFFIC"
    assert params["status"] == "PAUSED"
    assert params["special_ad_categories"] == []
    assert params["end_time"] == "2024-03-31T00:00:00+0000"


@pytest.mark.asyncio
async def test_create_campaign_requires_name_and_objective_before_api_call():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        missing_name = await create_campaign(name="  ", objective="OUTCOME_TRAFFIC", config=CONFIG)
        missing_objective = await create_campaign(name="Spring", objective="", config=CONFIG)

    assert missing_name.success is False
    assert "name" in missing_name.message
    assert missing_objective.success is False
    assert "objective" in missing_objective.message
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_create_campaign_rejects_non_numeric_budget():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        result = await create_campaign(name="Spring", objective="OUTCOME_TRAFFIC", daily_budget="ten", config=CONFIG)

    assert result.success is False
    assert "daily_budget" in result.message
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_get_campaigns_forwards_limit_status_and_cursor():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {
            "data": [{"id": "1", "name": "A"}, {"id": "2", "name": "B"}],
            "paging": {"cursors": {"after": "next_1"}, "next": "https://graph.facebook.com/next"},
        }
        result = await get_campaigns(limit="5", status="active", page_cursor="cursor_1", config=CONFIG)

    assert result.success is True
    assert result.message == "Found 2 campaigns"
    assert result.data["next_cursor"] == "next_1"

    params = mock_api.call_args.args[2]
    assert params["page_size"] == 5
    assert params["effective_status"] == ["ACTIVE"]
    assert params["page_cursor"] == "cursor_1"


@pytest.mark.asyncio
async def test_get_campaigns_empty_list_is_success():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"data": [], "paging": {}}
        result = await get_campaigns(config=CONFIG)

    assert result.success is True
    assert result.message == "No campaigns found"
    assert result.data["campaigns"] == []
    assert result.data["next_cursor"] is None
    assert mock_api.call_args.args[2]["page_size"] == 10


@pytest.mark.asyncio
async def test_get_campaign_details_requests_full_field_set():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "c_1", "name": "Spring"}
        result = await get_campaign_details(campaign_id="c_1", config=CONFIG)

    assert result.success is True
    assert result.data == {"id": "c_1", "name": "Spring"}
    fields = mock_api.call_args.args[2]["fields"].split(",")
    assert {"lifetime_budget", "spend_cap", "budget_remaining", "special_ad_categories"} <= set(fields)


@pytest.mark.asyncio
async def test_update_campaign_sends_only_provided_fields():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": True}
        result = await update_campaign(
            campaign_id="c_1",
            status="active",
            daily_budget=2500.0,
            end_time="2024-04-30T00:00:00+0000",
            config=CONFIG,
        )

    assert result.success is True
    assert result.data["updated_fields"] == {
        "status": "ACTIVE",
        "daily_budget": 2500,
        "stop_time": "2024-04-30T00:00:00+0000",
    }
    params = mock_api.call_args.args[2]
    assert "name" not in params
    assert params["daily_budget"] == 2500


@pytest.mark.asyncio
async def test_update_campaign_without_changes_fails_before_api_call():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        result = await update_campaign(campaign_id="c_1", config=CONFIG)

    assert result.success is False
    assert result.message == "No update parameters provided"
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_delete_campaign_issues_delete():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": True}
        result = await delete_campaign(campaign_id="c_1", config=CONFIG)

    assert result.success is True
    assert result.data == {"id": "c_1"}
    assert mock_api.call_args.args[0] == "c_1"
    assert mock_api.call_args.kwargs["method"] == "DELETE"


@pytest.mark.asyncio
async def test_delete_campaign_reports_unacknowledged_delete():
    with patch("fb_marketing_mcp.core.campaign_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": False}
        result = await delete_campaign(campaign_id="c_1", config=CONFIG)

    assert result.success is False
    assert "c_1" in result.message
