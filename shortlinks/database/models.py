"""Data models for short links."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Link:
    """Represents one row of the links table."""

    code: str
    url: str
    created_at: datetime
    click_count: int = 0
    last_clicked: Optional[datetime] = None

    def clicked(self, at: datetime) -> "Link":
        """Return a copy with one more click recorded at ``at``.

        ``last_clicked`` never precedes ``created_at``, even if the clock
        stepped backwards between insert and visit.
        """
        return replace(
            self,
            click_count=self.click_count + 1,
            last_clicked=max(at, self.created_at),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "url": self.url,
            "click_count": self.click_count,
            "last_clicked": self.last_clicked.isoformat() if self.last_clicked else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_record(cls, record) -> "Link":
        """Create from a database record (asyncpg Record or mapping)."""
        return cls(
            code=record["code"],
            url=record["url"],
            created_at=record["created_at"],
            click_count=record["click_count"],
            last_clicked=record["last_clicked"],
        )
