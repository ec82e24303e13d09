"""Data models for the link shortener."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Any) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class ShortLink:
    """One shortened URL as stored in the links collection.

    Records are immutable once written; only ``clicks`` changes, and only
    through the repository's atomic increment.
    """

    long_url: str
    short_code: str
    created_at: datetime
    clicks: int = 0
    creator_ip: Optional[str] = None
    id: Optional[str] = None

    def with_id(self, link_id: str) -> "ShortLink":
        """Return a copy carrying the identifier assigned by the store."""
        return replace(self, id=link_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "long_url": self.long_url,
            "short_code": self.short_code,
            "created_at": self.created_at.isoformat(),
            "clicks": self.clicks,
            "creator_ip": self.creator_ip,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShortLink":
        """Create from a dictionary or database row."""
        link_id = data.get("id")
        return cls(
            long_url=data["long_url"],
            short_code=data["short_code"],
            created_at=_as_utc(data["created_at"]),
            clicks=int(data.get("clicks") or 0),
            creator_ip=data.get("creator_ip"),
            id=str(link_id) if link_id is not None else None,
        )
