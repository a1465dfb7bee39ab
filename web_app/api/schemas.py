"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from shortlinks.common.url_builder import build_short_url
from shortlinks.database.models import Link


class CreateLinkRequest(BaseModel):
    """Request to create a link.

    Both fields are checked by LinkService rather than here, so a missing or
    malformed url gets the same 400 body as any other invalid input.
    """

    url: Optional[str] = Field(None, description="The URL to shorten")
    code: Optional[str] = Field(None, description="Optional code, 6-8 letters or digits")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "code": "myrepo1"
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """A link as returned by the API."""

    code: str = Field(..., description="The link code")
    url: str = Field(..., description="The target URL")
    click_count: int = Field(..., description="Number of completed redirects")
    last_clicked: Optional[datetime] = Field(None, description="Time of the latest redirect")
    created_at: datetime = Field(..., description="Creation timestamp")
    short_url: str = Field(..., description="The complete short URL")

    @classmethod
    def from_link(cls, link: Link, base_url: str) -> "LinkResponse":
        """Render a stored link; short_url is derived, never stored."""
        return cls(
            code=link.code,
            url=link.url,
            click_count=link.click_count,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
            short_url=build_short_url(link.code, base_url),
        )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "abc123",
                    "url": "https://example.com/very/long/path",
                    "click_count": 0,
                    "last_clicked": None,
                    "created_at": "2024-01-01T12:00:00Z",
                    "short_url": "https://sho.rt/abc123"
                }
            ]
        }
    }


class DeleteResponse(BaseModel):
    """Response after deleting a link."""

    ok: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = Field(..., description="Whether the service can reach its store")
    version: str = Field(..., description="Service version")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
