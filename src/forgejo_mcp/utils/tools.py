"""Selection of individual tools through ENABLED_TOOLS."""

import logging

from .env import get_env_list

logger = logging.getLogger("forgejo-mcp.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Read the ENABLED_TOOLS comma-separated list.

    Returns:
        Tool names to expose, or None to expose every tool
    """
    enabled = get_env_list("ENABLED_TOOLS")
    if enabled is not None:
        logger.debug(f"ENABLED_TOOLS restricts the server to: {enabled}")
    return enabled


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Whether ``tool_name`` passes the ENABLED_TOOLS filter."""
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
