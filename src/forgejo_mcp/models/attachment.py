"""Issue and release attachment (asset) model."""

from .base import ApiDatetime, ApiModel, render_bulleted


class ForgejoAttachment(ApiModel):
    id: int = 0
    name: str = ""
    size: int = 0
    download_count: int = 0
    uuid: str = ""
    browser_download_url: str = ""
    created_at: ApiDatetime = None

    def to_markdown(self) -> str:
        """Render as ``**name** (N bytes) [Download](url)``."""
        markdown = f"**{self.name}**"
        if self.size > 0:
            markdown += f" ({self.size} bytes)"
        if self.browser_download_url:
            markdown += f" [Download]({self.browser_download_url})"
        return markdown


def render_attachments(attachments: list[ForgejoAttachment]) -> str:
    return render_bulleted(attachments, "*No attachments found*")
