"""
Base model shared by the Forgejo API models.

Models are built from decoded API JSON with ``from_api_response`` and render
themselves for tool output with ``to_markdown``.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator

EMPTY_RESPONSE_MARKDOWN = "*Operation completed successfully*"


def _zero_time_to_none(value: Any) -> Any:
    # Forgejo serializes unset timestamps as "0001-01-01T00:00:00Z"
    if value == "" or (isinstance(value, str) and value.startswith("0001-01-01")):
        return None
    return value


ApiDatetime = Annotated[datetime | None, BeforeValidator(_zero_time_to_none)]


class ApiModel(BaseModel):
    """Base class for Forgejo API response models."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_api_response(cls, data: dict[str, Any] | None, **kwargs: Any):
        """Create a model instance from a decoded API response.

        Args:
            data: Decoded JSON object; None yields a model with default values
            **kwargs: Values overriding the response data

        Returns:
            Model instance
        """
        return cls.model_validate({**(data or {}), **kwargs})

    def to_markdown(self) -> str:
        raise NotImplementedError


class _Renderable(Protocol):
    def to_markdown(self) -> str: ...


def render_bulleted(items: Iterable[_Renderable], empty: str) -> str:
    """Render items as a "- " bullet list, or ``empty`` when there are none."""
    lines = [f"- {item.to_markdown()}\n" for item in items]
    return "".join(lines) if lines else empty


def render_numbered(items: Iterable[_Renderable], empty: str) -> str:
    """Render items as a 1-based numbered list, or ``empty`` when there are none."""
    lines = [f"{i}. {item.to_markdown()}\n" for i, item in enumerate(items, start=1)]
    return "".join(lines) if lines else empty
