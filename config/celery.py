import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("rambo")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Remove used and expired one-time passwords every hour
    "purge-expired-otps": {
        "task": "users.purge_expired_otps",
        "schedule": crontab(minute=30),
    },
}

app.conf.timezone = "UTC"
