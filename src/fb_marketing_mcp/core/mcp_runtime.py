# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""FastMCP runtime assembly and stdio CLI entrypoint."""

import argparse
import logging
import sys

from mcp.server.fastmcp import FastMCP

from .config import ConfigurationError, load_config, set_config
from .server_logging import logger

mcp_server = FastMCP("facebook-marketing")

# Upstream HTTP libraries log full request URLs, which carry access_token.
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def _import_tool_modules() -> None:
    from . import prompt_templates, tool_registry  # noqa: F401


def _load_validated_config() -> bool:
    try:
        config = load_config()
    except ConfigurationError as exc:
        logger.error("configuration_invalid error=%s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        return False

    set_config(config)
    return True


def _run_stdio() -> int:
    _import_tool_modules()
    logger.info("server_start transport=stdio")
    mcp_server.run(transport="stdio")
    return 0


def main() -> int:
    """CLI entrypoint used by `python -m fb_marketing_mcp` and scripts."""
    parser = argparse.ArgumentParser(
        description="Facebook Marketing API tools over MCP (stdio).",
        epilog=(
            "Requires FACEBOOK_APP_ID, FACEBOOK_APP_SECRET, FACEBOOK_ACCESS_TOKEN and "
            "FACEBOOK_ACCOUNT_ID in the environment or a .env file."
        ),
    )
    parser.add_argument("--version", action="store_true", help="Print package version")
    parser.add_argument("--check-config", action="store_true", help="Validate configuration and exit")
    parser.add_argument("--transport", type=str, default="stdio", help=argparse.SUPPRESS)

    args = parser.parse_args()

    if args.version:
        from fb_marketing_mcp import __version__

        print(f"Facebook Marketing MCP v{__version__}")
        return 0

    if args.transport != "stdio":
        print("This build supports stdio MCP only.")
        return 2

    if not _load_validated_config():
        return 1

    if args.check_config:
        print("Configuration OK")
        return 0

    return _run_stdio()


if __name__ == "__main__":
    raise SystemExit(main())
