"""Celery tasks for the users domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import purge_stale_otps

logger = logging.getLogger(__name__)


@shared_task(name="users.purge_expired_otps")
def purge_expired_otps() -> dict[str, int]:
    """Delete one-time passwords that were used or have expired.

    Runs hourly through Celery Beat.
    """
    removed = purge_stale_otps()
    if removed:
        logger.info(f"Purged {removed} stale one-time passwords")
    return {"removed": removed}
