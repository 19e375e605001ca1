# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared Graph API client and the operation decorator used by every tool."""


import functools
import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from .config import ConfigurationError, MarketingConfig, get_config
from .results import ToolResult
from .server_logging import logger


class McpToolError(Exception):
    """Base error type for failures raised inside tool operations."""


class GraphApiError(McpToolError):
    """The Graph API answered with an error object."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


USER_AGENT = "fb-marketing-mcp/1.0"
REQUEST_TIMEOUT = 30.0

_SECRET_PARAMS = {"access_token", "appsecret_proof"}

_KEY_ALIASES = {
    "page_size": "limit",
    "page_cursor": "after",
    "date_range": "time_range",
    "end_time": "stop_time",
}


def _log_rate_headers(headers: Any, endpoint: str) -> None:
    usage_headers = {
        "x-app-usage": headers.get("x-app-usage"),
        "x-ad-account-usage": headers.get("x-ad-account-usage"),
        "x-business-use-case-usage": headers.get("x-business-use-case-usage"),
    }
    used = {k: v for k, v in usage_headers.items() if v}
    if used:
        logger.info("graph_rate_usage endpoint=%s data=%s", endpoint, json.dumps(used))


def _build_request_params(params: Optional[Dict[str, Any]], config: MarketingConfig) -> Dict[str, Any]:
    request_params: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        graph_key = _KEY_ALIASES.get(key, key)
        if isinstance(value, (dict, list)):
            request_params[graph_key] = json.dumps(value)
        else:
            request_params[graph_key] = value

    request_params["access_token"] = config.access_token
    request_params["appsecret_proof"] = config.appsecret_proof()
    return request_params


def _redact_params(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***REDACTED***" if k in _SECRET_PARAMS else v) for k, v in params.items()}


def _sanitize_url(raw_url: str) -> str:
    try:
        parts = urlsplit(raw_url)
        query_pairs = parse_qsl(parts.query, keep_blank_values=True)
        filtered_pairs = [(key, value) for key, value in query_pairs if key.lower() not in _SECRET_PARAMS]
        sanitized_query = urlencode(filtered_pairs, doseq=True)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, sanitized_query, parts.fragment))
    except ValueError:
        return raw_url


def _sanitize_response_payload(value: Any) -> Any:
    """Recursively strip credentials from URL-like response values such as paging links."""
    if isinstance(value, dict):
        return {key: _sanitize_response_payload(item) for key, item in value.items()}

    if isinstance(value, list):
        return [_sanitize_response_payload(item) for item in value]

    if isinstance(value, str) and ("access_token=" in value.lower() or "appsecret_proof=" in value.lower()):
        return _sanitize_url(value)

    return value


def _graph_error_payload(body: Any, status_code: Optional[int]) -> Dict[str, Any]:
    error_obj = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error_obj, dict):
        return {
            "error": {
                "message": f"HTTP Error: {status_code}" if status_code else "Unknown Graph API error",
                "status_code": status_code,
            }
        }

    message = str(error_obj.get("message") or "").strip() or f"HTTP Error: {status_code}"
    user_message = str(error_obj.get("error_user_msg") or "").strip()
    if user_message and user_message != message:
        message = f"{message} ({user_message})"

    return {
        "error": {
            "message": message,
            "code": error_obj.get("code"),
            "type": error_obj.get("type"),
            "status_code": status_code,
        }
    }


async def make_api_request(
    endpoint: str,
    config: MarketingConfig,
    params: Optional[Dict[str, Any]] = None,
    method: str = "GET",
) -> Dict[str, Any]:
    """Execute one Graph API request and return its JSON payload or an error payload."""
    url = f"{config.graph_api_base}/{endpoint}"
    request_params = _build_request_params(params, config)

    logger.debug("Graph request method=%s url=%s params=%s", method, url, _redact_params(request_params))

    headers = {"User-Agent": USER_AGENT}
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
        try:
            if method == "GET":
                response = await client.get(url, params=request_params, headers=headers)
            elif method == "POST":
                response = await client.post(url, data=request_params, headers=headers)
            elif method == "DELETE":
                response = await client.delete(url, params=request_params, headers=headers)
            else:
                return {"error": {"message": f"Unsupported HTTP method: {method}"}}

            _log_rate_headers(response.headers, endpoint)
            response.raise_for_status()
            try:
                body = response.json()
            except json.JSONDecodeError:
                return {"text_response": response.text, "status_code": response.status_code}

            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                return _graph_error_payload(body, response.status_code)
            return _sanitize_response_payload(body)

        except httpx.HTTPStatusError as exc:
            _log_rate_headers(exc.response.headers, endpoint)
            try:
                error_body = exc.response.json()
            except json.JSONDecodeError:
                error_body = None
            payload = _sanitize_response_payload(_graph_error_payload(error_body, exc.response.status_code))
            logger.warning(
                "Graph request rejected method=%s endpoint=%s status=%s message=%s",
                method,
                endpoint,
                exc.response.status_code,
                payload["error"]["message"],
            )
            return payload

        except httpx.HTTPError as exc:
            logger.exception("Graph request failed: %s", _sanitize_url(str(exc)))
            message = str(exc) or exc.__class__.__name__
            if "access_token=" in message.lower():
                message = _sanitize_url(message)
            return {"error": {"message": message}}


def unwrap_graph_payload(payload: Any) -> Dict[str, Any]:
    """Raise GraphApiError for error payloads, otherwise return the payload."""
    if not isinstance(payload, dict):
        raise GraphApiError(f"Unexpected Graph API response: {payload!r}")

    error_obj = payload.get("error")
    if error_obj:
        if isinstance(error_obj, dict):
            raise GraphApiError(str(error_obj.get("message") or "Unknown Graph API error"), error_obj.get("code"))
        raise GraphApiError(str(error_obj))

    return payload


def graph_operation(func):
    """Decorator injecting the active config and collapsing every failure into a ToolResult."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k != "config"}
        logger.debug("Operation call name=%s kwargs=%s", func.__name__, safe_kwargs)
        try:
            if kwargs.get("config") is None:
                kwargs["config"] = get_config()
            return await func(*args, **kwargs)
        except GraphApiError as exc:
            logger.warning("Graph error in %s code=%s message=%s", func.__name__, exc.code, exc)
            return ToolResult.fail(str(exc))
        except (ConfigurationError, ValueError) as exc:
            logger.warning("Invalid request in %s: %s", func.__name__, exc)
            return ToolResult.fail(str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unhandled tool exception in %s", func.__name__)
            return ToolResult.fail(str(exc) or exc.__class__.__name__)

    return wrapper
