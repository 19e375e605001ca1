import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from fb_marketing_mcp.core.audience_tools import (
    create_custom_audience,
    create_lookalike_audience,
    delete_custom_audience,
    get_audience_details,
    get_custom_audiences,
    update_custom_audience,
)
from fb_marketing_mcp.core.config import MarketingConfig
from fb_marketing_mcp.core.graph_client import _build_request_params

CONFIG = MarketingConfig(
    app_id="1234",
    app_secret="app-secret",
    access_token="token_12345678901234567890",
    ad_account_id="act_42",
)


@pytest.mark.asyncio
async def test_create_custom_audience_posts_to_customaudiences():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "aud_1"}
        result = await create_custom_audience(
            name="Newsletter subscribers",
            description="Imported list",
            customer_file_source="user_provided_only",
            config=CONFIG,
        )

    assert result.success is True
    assert result.data["id"] == "aud_1"
    assert mock_api.call_args.args[0] == "act_42/customaudiences"
    params = mock_api.call_args.args[2]
    assert params == {
        "name": "Newsletter subscribers",
        "subtype": "CUSTOM",
        "description": "Imported list",
        "customer_file_source": "USER_PROVIDED_ONLY",
    }


@pytest.mark.asyncio
async def test_create_custom_audience_rejects_unknown_file_source():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        result = await create_custom_audience(name="List", customer_file_source="somewhere", config=CONFIG)

    assert result.success is False
    assert "customer_file_source" in result.message
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_create_lookalike_audience_builds_spec():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "aud_2"}
        result = await create_lookalike_audience(
            source_audience_id="aud_1",
            country="us",
            ratio="0.05",
            config=CONFIG,
        )

    assert result.success is True
    assert result.data["name"] == "Lookalike (US, 5%) of aud_1"
    params = mock_api.call_args.args[2]
    assert params["subtype"] == "LOOKALIKE"
    assert params["origin_audience_id"] == "aud_1"
    assert params["lookalike_spec"] == {"country": "US", "ratio": 0.05}

    encoded = _build_request_params(params, CONFIG)
    assert json.loads(encoded["lookalike_spec"]) == {"country": "US", "ratio": 0.05}


@pytest.mark.asyncio
@pytest.mark.parametrize("country,ratio", [("USA", 0.01), ("US", 0.5), ("US", "0")])
async def test_create_lookalike_audience_validates_inputs(country, ratio):
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        result = await create_lookalike_audience(
            source_audience_id="aud_1",
            country=country,
            ratio=ratio,
            config=CONFIG,
        )

    assert result.success is False
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_get_custom_audiences_clamps_limit():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"data": [{"id": "aud_1", "name": "Buyers"}], "paging": {}}
        result = await get_custom_audiences(limit=500, config=CONFIG)

    assert result.success is True
    assert result.message == "Found 1 audience"
    assert mock_api.call_args.args[2]["page_size"] == 100


@pytest.mark.asyncio
async def test_get_custom_audiences_empty():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"data": []}
        result = await get_custom_audiences(config=CONFIG)

    assert result.success is True
    assert result.message == "No custom audiences found"


@pytest.mark.asyncio
async def test_get_audience_details_returns_payload():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "aud_1", "name": "Buyers", "subtype": "CUSTOM"}
        result = await get_audience_details(audience_id="aud_1", config=CONFIG)

    assert result.success is True
    assert result.data["subtype"] == "CUSTOM"
    assert "operation_status" in mock_api.call_args.args[2]["fields"]


@pytest.mark.asyncio
async def test_update_custom_audience_allows_clearing_description():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": True}
        result = await update_custom_audience(audience_id="aud_1", description="", config=CONFIG)

    assert result.success is True
    assert mock_api.call_args.args[2] == {"description": ""}


@pytest.mark.asyncio
async def test_delete_custom_audience_issues_delete():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": True}
        result = await delete_custom_audience(audience_id="aud_1", config=CONFIG)

    assert result.success is True
    assert mock_api.call_args.kwargs["method"] == "DELETE"


@pytest.mark.asyncio
async def test_create_lookalike_audience_default_name_keeps_fractional_percent():
    with patch("fb_marketing_mcp.core.audience_tools.make_api_request", new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"id": "aud_3"}
        result = await create_lookalike_audience(
            source_audience_id="aud_1",
            country="GB",
            ratio=0.015,
            config=CONFIG,
        )

    assert result.data["name"] == "Lookalike (GB, 1.5%) of aud_1"
    assert mock_api.call_args.args[2]["lookalike_spec"] == {"country": "GB", "ratio": 0.015}
