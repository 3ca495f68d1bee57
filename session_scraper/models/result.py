"""Fetch result data model."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class FetchResult(BaseModel):
    """Body and metadata of a fetched page."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str = Field(..., description="Final URL of the response")
    status_code: int = Field(..., description="HTTP status code")
    text: str = Field(default="", description="Response body decoded as text")
    relogin_error: Optional[Exception] = Field(
        default=None, description="Failure of the relogin this fetch triggered"
    )

    @property
    def ok(self) -> bool:
        """True when no relogin failure is attached."""
        return self.relogin_error is None
