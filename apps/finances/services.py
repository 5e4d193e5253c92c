"""Revenue bookkeeping and earnings reports for owners."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from django.utils import timezone  # type: ignore

from .models import Revenue

logger = logging.getLogger(__name__)

MONTHLY = "monthly"
WEEKLY = "weekly"
PERIOD_BUCKETS = {MONTHLY: 12, WEEKLY: 8}


def record_rent_payment(booking) -> Revenue:
    """Book the owner's revenue for a paid rental."""
    revenue = Revenue.objects.create(
        owner_id=booking.owner_id,
        property_id=booking.property_id,
        booking=booking,
        amount=booking.payment_amount,
        revenue_type=Revenue.RevenueType.RENT,
        description=f"Rent payment for {booking.property.title}",
    )
    logger.info(f"Revenue {revenue.id} recorded for owner {booking.owner_id}: {revenue.amount}")
    return revenue


def reverse_rent_payment(booking) -> int:
    """Drop the revenue booked for a rental that has been refunded."""
    deleted, _ = Revenue.objects.filter(booking=booking).delete()
    if deleted:
        logger.info(f"Revenue for booking {booking.id} reversed after refund")
    return deleted


def _month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _shift_months(moment: datetime, months: int) -> datetime:
    index = moment.year * 12 + (moment.month - 1) + months
    return moment.replace(year=index // 12, month=index % 12 + 1)


def bucket_starts(period: str, now: datetime | None = None) -> list[datetime]:
    """Start of each reporting bucket, oldest first, ending with the current one."""
    now = timezone.localtime(now or timezone.now())
    count = PERIOD_BUCKETS[period]
    if period == MONTHLY:
        current = _month_start(now)
        return [_shift_months(current, -offset) for offset in range(count - 1, -1, -1)]
    current = (now - timedelta(days=now.weekday())).replace(hour=0, minute=0, second=0, microsecond=0)
    return [current - timedelta(weeks=offset) for offset in range(count - 1, -1, -1)]


def _label(period: str, start: datetime) -> str:
    if period == MONTHLY:
        return start.strftime("%b %Y")
    return start.strftime("%d %b")


def earnings_series(owner, period: str = MONTHLY, now: datetime | None = None) -> dict[str, Any]:
    """Zero-filled earnings per month (last 12) or per week (last 8).

    Raises:
        ValueError: unknown ``period``.
    """
    if period not in PERIOD_BUCKETS:
        raise ValueError(f"Unknown period '{period}'. Use 'monthly' or 'weekly'.")

    starts = bucket_starts(period, now)
    totals = [Decimal("0.00") for _ in starts]
    records = Revenue.objects.filter(owner=owner, created_at__gte=starts[0]).values_list(
        "created_at", "amount"
    )
    for created_at, amount in records:
        created_at = timezone.localtime(created_at)
        for index in range(len(starts) - 1, -1, -1):
            if created_at >= starts[index]:
                totals[index] += amount
                break

    buckets = [
        {"label": _label(period, start), "start": start.date().isoformat(), "earnings": total}
        for start, total in zip(starts, totals)
    ]
    return {"period": period, "buckets": buckets, "total": sum(totals, Decimal("0.00"))}
