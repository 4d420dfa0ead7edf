"""Toolset definitions and filtering utilities for Forgejo MCP.

Groups the tools into named toolsets controlled via the TOOLSETS env var.
Supports 'all', 'default', and comma-separated toolset names.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("forgejo-mcp.utils.toolsets")

TOOLSET_TAG_PREFIX = "toolset:"


@dataclass(frozen=True)
class ToolsetDefinition:
    """Metadata for a named toolset group."""

    name: str
    description: str
    default: bool


ALL_TOOLSETS: dict[str, ToolsetDefinition] = {
    "issues": ToolsetDefinition(
        name="issues",
        description="Issues, comments, issue labels, attachments and dependencies",
        default=True,
    ),
    "labels": ToolsetDefinition(
        name="labels",
        description="Repository label management",
        default=True,
    ),
    "milestones": ToolsetDefinition(
        name="milestones",
        description="Milestone management",
        default=True,
    ),
    "releases": ToolsetDefinition(
        name="releases",
        description="Releases and release attachments",
        default=True,
    ),
    "pulls": ToolsetDefinition(
        name="pulls",
        description="Pull request listing, details and creation",
        default=True,
    ),
    "repositories": ToolsetDefinition(
        name="repositories",
        description="Repository search and details",
        default=True,
    ),
    "wiki": ToolsetDefinition(
        name="wiki",
        description="Wiki page operations",
        default=False,
    ),
    "actions": ToolsetDefinition(
        name="actions",
        description="Forgejo Actions task listing",
        default=False,
    ),
}

DEFAULT_TOOLSETS: set[str] = {
    name for name, defn in ALL_TOOLSETS.items() if defn.default
}


def get_enabled_toolsets() -> set[str] | None:
    """Parse the TOOLSETS env var into a set of enabled toolset names.

    Returns:
        None when TOOLSETS is unset or blank (no toolset filtering), otherwise
        the set of valid names. 'all' expands to every toolset and 'default'
        to the default ones. Unknown names are dropped with a warning; if only
        unknown names are given the result is empty and every tool is hidden.

    Examples:
        TOOLSETS unset -> None
        TOOLSETS="all" -> every toolset
        TOOLSETS="default,wiki" -> defaults + wiki
        TOOLSETS="typo_name" -> set()
    """
    toolsets_str = os.getenv("TOOLSETS")
    if not toolsets_str:
        return None

    tokens = [t.strip() for t in toolsets_str.split(",") if t.strip()]
    if not tokens:
        return None

    result: set[str] = set()
    for token in tokens:
        normalized = token.lower()
        if normalized == "all":
            logger.info("TOOLSETS: 'all' keyword, enabling all toolsets.")
            return set(ALL_TOOLSETS.keys())
        elif normalized == "default":
            result |= DEFAULT_TOOLSETS
        elif normalized in ALL_TOOLSETS:
            result.add(normalized)
        else:
            logger.warning(f"TOOLSETS: unknown toolset name '{token}', ignoring.")

    if result:
        logger.info(f"TOOLSETS: enabled toolsets: {sorted(result)}")
    else:
        logger.warning("TOOLSETS: no valid toolset names found, all tools are blocked.")
    return result


def should_include_tool_by_toolset(
    tool_tags: set[str], enabled_toolsets: set[str] | None
) -> bool:
    """Check if a tool should be included based on toolset filtering.

    Tools without a toolset tag are always included.
    """
    if enabled_toolsets is None:
        return True

    toolset_name = get_toolset_tag(tool_tags)
    if toolset_name is None:
        return True
    return toolset_name in enabled_toolsets


def get_toolset_tag(tags: set[str]) -> str | None:
    """Extract the toolset name (without prefix) from a tool's tag set."""
    for tag in tags:
        if tag.startswith(TOOLSET_TAG_PREFIX):
            return tag[len(TOOLSET_TAG_PREFIX) :]
    return None
