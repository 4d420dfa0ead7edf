"""Dependency provider for ForgejoFetcher with context awareness.

Provides get_forgejo_fetcher for use in tool functions.
"""

from __future__ import annotations

import hashlib
import logging

from cachetools import TTLCache
from fastmcp import Context
from fastmcp.server.dependencies import get_http_request
from starlette.requests import Request

from forgejo_mcp.forgejo import ForgejoFetcher
from forgejo_mcp.servers.context import MainAppContext
from forgejo_mcp.utils.logging import mask_sensitive

logger = logging.getLogger("forgejo-mcp.servers.dependencies")

class FetcherCache(TTLCache):
    """TTL cache of fetchers that closes a fetcher's HTTP session when it leaves.

    Fetchers leave on expiry, on eviction at ``maxsize`` and on ``clear()``.
    """

    def popitem(self) -> tuple[str, ForgejoFetcher]:
        key, fetcher = super().popitem()
        logger.debug("Closing evicted per-user ForgejoFetcher")
        fetcher.close()
        return key, fetcher

    def expire(self, time: float | None = None) -> list[tuple[str, ForgejoFetcher]]:
        expired = super().expire(time)
        for _key, fetcher in expired:
            logger.debug("Closing expired per-user ForgejoFetcher")
            fetcher.close()
        return expired


# Per-user fetchers, keyed by a digest of the user's token
user_fetcher_cache: FetcherCache = FetcherCache(maxsize=100, ttl=300)


def _get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


def _get_user_fetcher(shared_fetcher: ForgejoFetcher, token: str) -> ForgejoFetcher:
    key = hashlib.sha256(token.encode("utf-8")).hexdigest()
    fetcher = user_fetcher_cache.get(key)
    if fetcher is None:
        logger.debug(
            f"Creating user-specific ForgejoFetcher (token {mask_sensitive(token)})"
        )
        fetcher = ForgejoFetcher(config=shared_fetcher.config.with_token(token))
        user_fetcher_cache[key] = fetcher
    return fetcher


async def get_forgejo_fetcher(ctx: Context) -> ForgejoFetcher:
    """Returns a ForgejoFetcher appropriate for the current request context.

    In HTTP transports a token sent by the MCP client (captured by
    UserTokenMiddleware) takes precedence over the server token. Otherwise
    the shared fetcher built at startup is returned.

    Raises:
        ValueError: If Forgejo is not configured
    """
    app_lifespan_ctx = _get_app_context(ctx)
    if app_lifespan_ctx is None or app_lifespan_ctx.forgejo_fetcher is None:
        raise ValueError(
            "Forgejo client is not configured. Set FORGEJO_URL (and optionally "
            "FORGEJO_TOKEN) or pass --server."
        )
    shared_fetcher = app_lifespan_ctx.forgejo_fetcher

    try:
        request: Request = get_http_request()
    except RuntimeError:
        logger.debug("Not in an HTTP request context, using the shared fetcher.")
        return shared_fetcher

    user_token = getattr(request.state, "user_forgejo_token", None)
    if not user_token:
        return shared_fetcher
    return _get_user_fetcher(shared_fetcher, user_token)
