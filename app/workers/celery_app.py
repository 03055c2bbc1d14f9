"""
Celery application configuration.
"""

from celery import Celery

from app.config import settings

celery_app = Celery(
    "tourpay",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "app.workers.booking_email",
    ],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="Asia/Kolkata",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    broker_connection_timeout=2,
)
