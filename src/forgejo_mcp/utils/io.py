"""Server mode switches read from the environment."""

from .env import is_env_truthy


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and refuses every tool that creates, edits or
    deletes something on the Forgejo instance, leaving the read tools
    available.

    Returns:
        True if READ_ONLY_MODE is set to a truthy value, False otherwise
    """
    return is_env_truthy("READ_ONLY_MODE", "false")
