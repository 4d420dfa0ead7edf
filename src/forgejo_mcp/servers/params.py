"""Tool parameter types shared by the Forgejo tool servers."""

from typing import Annotated

from pydantic import Field

from forgejo_mcp.forgejo.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

Owner = Annotated[
    str,
    Field(description="Repository owner (user or organization name), e.g. 'octo'"),
]
Repo = Annotated[str, Field(description="Repository name, e.g. 'hello-world'")]
IssueIndex = Annotated[
    int, Field(description="Issue number as shown in the UI, e.g. 42", ge=1)
]
Page = Annotated[int, Field(description="Page number (1-based)", ge=1)]
Limit = Annotated[
    int,
    Field(
        description=f"Maximum number of results per page (1-{MAX_PAGE_LIMIT})",
        ge=1,
        le=MAX_PAGE_LIMIT,
    ),
]

DEFAULT_LIMIT = DEFAULT_PAGE_LIMIT
