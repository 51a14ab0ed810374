# resto/celery_worker.py
from celery import Celery

from resto.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "resto",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# import tasks explicitly so the worker registers them
celery_app.conf.imports = (
    "resto.services.notification_service",
)

celery_app.conf.timezone = "UTC"

# publishing happens inside api requests, do not hang them on a dead broker
celery_app.conf.broker_connection_timeout = 2
celery_app.conf.task_publish_retry = False
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
