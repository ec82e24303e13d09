"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from linkshort.common.validators import is_valid_short_code, is_valid_url


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL."""

    long_url: str = Field(..., description="The URL to shorten")
    custom_alias: Optional[str] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "examples": [
                {"longUrl": "https://example.com/very/long/path/to/resource"},
                {"longUrl": "https://github.com/user/repo", "customAlias": "myrepo"},
            ]
        },
    )

    @field_validator("long_url")
    @classmethod
    def validate_long_url(cls, v: str) -> str:
        is_valid, error = is_valid_url(v)
        if not is_valid:
            raise ValueError(error)
        return v

    @field_validator("custom_alias")
    @classmethod
    def validate_custom_alias(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        is_valid, error = is_valid_short_code(v)
        if not is_valid:
            raise ValueError(error)
        return v


class ShortLinkResponse(CamelModel):
    """Summary of a short link, returned on creation and by the details endpoint."""

    short_code: str = Field(..., description="The short code")
    long_url: str = Field(..., description="The redirect target")
    short_url: str = Field(..., description="The complete short URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    clicks: int = Field(..., ge=0, description="Successful redirects so far")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shortCode": "k3x9qa",
                    "longUrl": "https://example.com/a/b/c",
                    "shortUrl": "http://localhost:3005/k3x9qa",
                    "createdAt": "2024-01-01T12:00:00Z",
                    "clicks": 0,
                }
            ]
        },
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
