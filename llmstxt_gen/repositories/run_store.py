"""Redis-backed storage for generation runs.

Each run is one JSON value under ``llms_run:{id}`` written with SETEX, so
Redis evicts it on its own once the TTL passes. ``expires_at`` is also
stored and checked on read so callers never see a run past its expiry.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

import redis

from llmstxt_gen.config import Settings
from llmstxt_gen.models import Run

logger = logging.getLogger(__name__)

KEY_PREFIX = "llms_run:"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RedisRunStore:
    """Creates, finds, marks paid and sweeps runs in Redis."""

    def __init__(
        self,
        client: "redis.Redis",
        run_ttl: timedelta = timedelta(hours=24),
        paid_ttl: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.redis = client
        self.run_ttl = run_ttl
        self.paid_ttl = paid_ttl
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisRunStore":
        return cls(
            redis.from_url(settings.redis_url),
            run_ttl=timedelta(hours=settings.run_ttl_hours),
            paid_ttl=timedelta(days=settings.paid_run_ttl_days),
        )

    def _key(self, run_id: str) -> str:
        """Generate Redis key for a run."""
        return f"{KEY_PREFIX}{run_id}"

    def _write(self, run: Run, ttl: timedelta) -> None:
        self.redis.setex(
            self._key(run.id),
            max(1, int(ttl.total_seconds())),
            json.dumps(run.to_dict()),
        )

    def get(self, run_id: str) -> Run | None:
        """Stored run regardless of its expiry timestamp."""
        if not run_id:
            return None
        data = self.redis.get(self._key(run_id))
        if not data:
            return None
        try:
            return Run.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable run {run_id}: {e}")
            return None

    def create(self, content: str) -> str:
        """Store new unpaid content with the short TTL and return its id."""
        if not content or not content.strip():
            raise ValueError("Run content is required")

        now = self.clock()
        run = Run(
            id=str(uuid4()),
            content=content,
            created_at=now,
            expires_at=now + self.run_ttl,
        )
        self._write(run, self.run_ttl)
        logger.info(f"Created run {run.id} (expires {run.expires_at.isoformat()})")
        return run.id

    def find_active(self, run_id: str) -> Run | None:
        """Run if it exists and has not expired."""
        run = self.get(run_id)
        if run is None or not run.is_active(self.clock()):
            return None
        return run

    def mark_paid(self, run_id: str) -> Run | None:
        """Record payment and extend retention to the paid TTL from now."""
        run = self.get(run_id)
        if run is None:
            logger.warning(f"Payment received for unknown run {run_id}")
            return None

        now = self.clock()
        run.paid_at = now
        run.expires_at = now + self.paid_ttl
        self._write(run, self.paid_ttl)
        logger.info(f"Marked run {run_id} paid (expires {run.expires_at.isoformat()})")
        return run

    def delete_expired(self) -> int:
        """Delete runs whose expiry has passed; returns how many were removed."""
        now = self.clock()
        deleted = 0
        for key in self.redis.scan_iter(match=f"{KEY_PREFIX}*"):
            if isinstance(key, bytes):
                key = key.decode()
            run = self.get(key[len(KEY_PREFIX):])
            if run is None or not run.is_active(now):
                deleted += self.redis.delete(key)
        return deleted
