"""Celery workers for the STP parse pipeline.

Usage:
    # Start worker
    celery -A tradehub.presentation.workers worker --loglevel=info

    # Start beat scheduler
    celery -A tradehub.presentation.workers beat --loglevel=info
"""

from .celery_app import celery_app

__all__ = ["celery_app"]
