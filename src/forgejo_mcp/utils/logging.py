"""Helpers for keeping secrets out of log output."""


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a token for logging, keeping only its last characters.

    Args:
        value: Secret to mask
        keep_chars: Number of trailing characters to keep visible

    Returns:
        "Not Provided" for empty values, otherwise the masked value
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return "*" * (len(value) - keep_chars) + value[-keep_chars:]
