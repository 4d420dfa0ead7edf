from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forgejo_mcp.forgejo import ForgejoFetcher


@dataclass(frozen=True)
class MainAppContext:
    """Context holding the shared fetcher and server settings."""

    forgejo_fetcher: ForgejoFetcher | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
    enabled_toolsets: set[str] | None = None
