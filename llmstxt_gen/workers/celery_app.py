"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging

from llmstxt_gen.config import get_settings
from llmstxt_gen.log_config import configure_logging

settings = get_settings()


@setup_logging.connect
def configure_worker_logging(**kwargs):
    configure_logging(settings.log_level)


celery_app = Celery(
    "llmstxt",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["llmstxt_gen.workers.tasks"],
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,  # Don't hijack root logger (we configure it ourselves)
    # Result backend
    result_expires=3600,  # 1 hour
    # Beat schedule for periodic cleanup
    beat_schedule={
        "cleanup-expired-runs": {
            "task": "llmstxt_gen.workers.tasks.cleanup_expired_runs",
            "schedule": crontab(minute=0),  # Run every hour, on the hour
        },
    },
)
