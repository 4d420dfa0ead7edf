"""Environment variable helpers for Forgejo MCP."""

import os


def is_env_truthy(env_var_name: str, default: str = "") -> bool:
    """Check if environment variable is set to a standard truthy value.

    Considers 'true', '1', 'yes', 'y', 'on' as truthy values (case-insensitive).

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to a truthy value, False otherwise
    """
    return os.getenv(env_var_name, default).strip().lower() in (
        "true",
        "1",
        "yes",
        "y",
        "on",
    )


def is_env_ssl_verify(env_var_name: str, default: str = "true") -> bool:
    """Check SSL verification setting, verifying unless explicitly disabled.

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set

    Returns:
        False only for 'false', '0' or 'no'
    """
    value = os.getenv(env_var_name, default) or default
    return value.strip().lower() not in ("false", "0", "no")


def get_env_list(env_var_name: str) -> list[str] | None:
    """Split a comma-separated environment variable into trimmed items.

    Returns:
        The non-empty items, or None when the variable is unset or blank
    """
    raw = os.getenv(env_var_name)
    if not raw:
        return None
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or None
