# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Campaign insights retrieval and client-side aggregation."""


from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence, Union

from .config import MarketingConfig
from .graph_client import graph_operation, make_api_request, unwrap_graph_payload
from .query_params import clean_text, normalize_metrics, normalize_time_increment, normalize_time_range
from .results import ToolResult

_CENT = Decimal("0.01")


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _to_decimal(value: Any) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def round_money(value: Any) -> float:
    """Round half-up to cents."""
    return float(_to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def aggregate_insight_totals(
    rows: Sequence[Dict[str, Any]],
    metrics: Optional[Sequence[str]] = None,
) -> Dict[str, Optional[float]]:
    """Sum additive metrics across rows and derive overall CTR/CPC from the sums.

    Only totals for requested metrics are returned; all of them when metrics is None.
    Reach and frequency are not additive across periods, so they are not totalled.
    """
    impressions = sum(_to_int(row.get("impressions")) for row in rows)
    clicks = sum(_to_int(row.get("clicks")) for row in rows)
    spend = sum((_to_decimal(row.get("spend")) for row in rows if row.get("spend") is not None), Decimal(0))

    ctr = round(clicks / impressions * 100.0, 2) if impressions else None
    cpc = round_money(spend / clicks) if clicks else None

    totals = {
        "impressions": impressions,
        "clicks": clicks,
        "spend": round_money(spend),
        "ctr": ctr,
        "cpc": cpc,
    }
    if metrics is None:
        return totals
    return {key: value for key, value in totals.items() if key in metrics}


@graph_operation
async def get_campaign_insights(
    campaign_id: str,
    since: str,
    until: str,
    metrics: Optional[Union[str, List[str]]] = None,
    time_increment: Optional[Union[int, str]] = 1,
    *,
    config: Optional[MarketingConfig] = None,
) -> ToolResult:
    """Fetch per-period insight rows for one campaign and total them."""
    campaign_id = clean_text(campaign_id)
    if not campaign_id:
        return ToolResult.fail("Campaign ID is required")

    time_range = normalize_time_range(since, until)
    requested_metrics = normalize_metrics(metrics)
    params: Dict[str, Any] = {
        "fields": ",".join(requested_metrics),
        "date_range": time_range,
        "time_increment": normalize_time_increment(time_increment),
    }

    payload = unwrap_graph_payload(await make_api_request(f"{campaign_id}/insights", config, params))
    rows = [row for row in payload.get("data") or [] if isinstance(row, dict)]

    if not rows:
        return ToolResult.ok(
            f"No insights data available for campaign {campaign_id} "
            f"between {time_range['since']} and {time_range['until']}"
        )

    data = {
        "campaign_id": campaign_id,
        "time_range": time_range,
        "metrics": requested_metrics,
        "insights": rows,
        "totals": aggregate_insight_totals(rows, requested_metrics),
    }
    noun = "row" if len(rows) == 1 else "rows"
    return ToolResult.ok(f"Retrieved {len(rows)} insight {noun}", data)
