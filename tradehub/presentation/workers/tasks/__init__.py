"""Celery tasks."""

from .parsing_tasks import process_message, process_pending_messages

__all__ = [
    "process_pending_messages",
    "process_message",
]
