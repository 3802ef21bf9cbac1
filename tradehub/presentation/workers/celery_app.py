"""Celery Application Configuration.

- Redis broker and result backend
- Beat schedule running the parse batch every ``parse_interval_seconds``
- Structured logging initialised per worker process

Usage:
    celery -A tradehub.presentation.workers worker --beat --loglevel=info  # development only
"""

from celery import Celery
from celery.signals import worker_process_init

from tradehub.config import get_settings, setup_logging

settings = get_settings()

celery_app = Celery(
    "trade_hub_stp",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "tradehub.presentation.workers.tasks.parsing_tasks",
    ],
)

celery_app.conf.update(
    # ==================== Task Settings ====================
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution
    task_acks_late=settings.celery_task_acks_late,
    task_time_limit=settings.celery_task_time_limit,
    task_soft_time_limit=max(settings.celery_task_time_limit - 30, 1),

    result_expires=3600,

    # ==================== Worker Settings ====================
    # Messages are processed strictly one at a time per worker
    worker_prefetch_multiplier=1,
    worker_concurrency=settings.celery_worker_concurrency,
    worker_max_tasks_per_child=1000,

    # ==================== Broker Settings ====================
    broker_connection_retry_on_startup=True,
    broker_connection_retry=True,
    broker_connection_max_retries=10,

    # ==================== Beat Scheduler ====================
    beat_schedule={
        "process-pending-messages": {
            "task": "tradehub.presentation.workers.tasks.parsing_tasks.process_pending_messages",
            "schedule": settings.parse_interval_seconds,
            "kwargs": {"max_messages": settings.parse_batch_size},
        },
    },

    # ==================== Task Routes ====================
    task_routes={
        "tradehub.presentation.workers.tasks.parsing_tasks.*": {"queue": "stp_parsing"},
    },

    task_default_queue="default",
    task_default_exchange="default",
    task_default_routing_key="default",
)


@worker_process_init.connect
def init_worker_logging(**kwargs) -> None:
    setup_logging(settings)
