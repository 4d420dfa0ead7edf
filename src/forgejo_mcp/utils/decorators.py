import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context
from fastmcp.exceptions import ToolError

from forgejo_mcp.exceptions import (
    ForgejoHTTPError,
    MCPForgejoAuthenticationError,
    MCPForgejoError,
)

logger = logging.getLogger("forgejo-mcp.utils.decorators")


F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def check_write_access(func: F) -> F:
    """
    Decorator rejecting write tools while the server runs in read-only mode.

    Raises ValueError("Cannot <tool name> in read-only mode."). The decorated
    function must be async and take `ctx: Context` as its first argument.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx_dict = ctx.request_context.lifespan_context
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )  # type: ignore

        if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
            tool_name = func.__name__
            action_description = tool_name.replace("_", " ")
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            raise ValueError(f"Cannot {action_description} in read-only mode.")

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def handle_forgejo_errors(action: str) -> Callable[[F], F]:
    """
    Decorator converting Forgejo failures of a tool into a ToolError.

    The error message reads ``failed to <action>: <cause>``. 401 and 403
    answers are reported as authentication failures. ValueError, such as a
    bad date argument, is converted the same way. Other exceptions propagate
    unchanged.

    Args:
        action: What the tool does, e.g. "list issues".
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except ToolError:
                raise
            except ForgejoHTTPError as e:
                cause: Exception = e
                if e.status_code in (401, 403):
                    cause = MCPForgejoAuthenticationError(
                        f"Authentication failed ({e.status_code}). Token may be "
                        "expired, invalid or missing the required scope."
                    )
                logger.error(f"{func.__name__} failed: {cause}")
                raise ToolError(f"failed to {action}: {cause}") from e
            except (MCPForgejoError, ValueError) as e:
                logger.error(f"{func.__name__} failed: {e}")
                raise ToolError(f"failed to {action}: {e}") from e

        return wrapper  # type: ignore

    return decorator
