"""Run model for stored generation output."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass
class Run:
    """A generated llms.txt awaiting (or past) payment."""

    id: str
    content: str
    created_at: datetime
    expires_at: datetime
    paid_at: datetime | None = None

    @property
    def paid(self) -> bool:
        return self.paid_at is not None

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage, timestamps as ISO-8601 strings."""
        data = asdict(self)
        for key in ("created_at", "expires_at", "paid_at"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Run":
        paid_at = data.get("paid_at")
        return cls(
            id=data["id"],
            content=data["content"],
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            paid_at=datetime.fromisoformat(paid_at) if paid_at else None,
        )
