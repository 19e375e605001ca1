# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Server bootstrap entrypoints for fb-marketing-mcp."""

from fb_marketing_mcp.core.mcp_runtime import main as _main


def run() -> int:
    """Validate configuration, then serve MCP tools over stdio."""
    return _main()
