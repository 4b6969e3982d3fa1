"""Celery task definitions.

These tasks are thin wrappers that call into the repository layer.
"""

import logging

from llmstxt_gen.config import get_settings
from llmstxt_gen.repositories import RedisRunStore
from llmstxt_gen.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name="llmstxt_gen.workers.tasks.cleanup_expired_runs")
def cleanup_expired_runs() -> int:
    """Delete runs past their expiry (unpaid after a day, paid after 30 days)."""
    store = RedisRunStore.from_settings(get_settings())
    deleted = store.delete_expired()
    logger.info(f"cleanup_expired_runs: deleted {deleted} expired runs")
    return deleted
