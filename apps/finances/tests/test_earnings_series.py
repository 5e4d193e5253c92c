"""Unit tests for the owner earnings series."""

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.finances.models import Revenue
from apps.finances.services import bucket_starts, earnings_series
from apps.properties.models import Property
from apps.users.models import User

NOW = datetime(2026, 3, 15, 10, 30, tzinfo=dt_timezone.utc)


def test_monthly_buckets_cover_last_twelve_months():
    starts = bucket_starts("monthly", NOW)

    assert len(starts) == 12
    assert starts[0].date() == date(2025, 4, 1)
    assert starts[-1].date() == date(2026, 3, 1)


def test_weekly_buckets_start_on_mondays():
    starts = bucket_starts("weekly", NOW)

    assert len(starts) == 8
    assert starts[-1].date() == date(2026, 3, 9)
    assert starts[0].date() == date(2026, 1, 19)
    assert all(start.weekday() == 0 for start in starts)


@pytest.fixture
def owner():
    return User.objects.create_user(email="owner@example.com", role=User.RoleChoices.OWNER)


@pytest.fixture
def listing(owner):
    return Property.objects.create(
        owner=owner,
        title="Garden flat",
        property_type=Property.PropertyType.APARTMENT,
        category=Property.Category.RENT,
        price=Decimal("700.00"),
        address="2 Park Ln",
        city="Springfield",
    )


def _revenue(owner, listing, amount: str, created_at: datetime) -> Revenue:
    revenue = Revenue.objects.create(
        owner=owner,
        property=listing,
        amount=Decimal(amount),
        revenue_type=Revenue.RevenueType.RENT,
    )
    Revenue.objects.filter(pk=revenue.pk).update(created_at=created_at)
    return revenue


@pytest.mark.django_db
def test_monthly_series_is_zero_filled(owner, listing):
    _revenue(owner, listing, "100.00", datetime(2026, 2, 10, tzinfo=dt_timezone.utc))
    _revenue(owner, listing, "50.00", datetime(2026, 3, 1, 8, tzinfo=dt_timezone.utc))
    _revenue(owner, listing, "25.00", datetime(2026, 3, 14, tzinfo=dt_timezone.utc))
    _revenue(owner, listing, "999.00", datetime(2024, 1, 1, tzinfo=dt_timezone.utc))

    series = earnings_series(owner, "monthly", now=NOW)

    assert series["period"] == "monthly"
    assert len(series["buckets"]) == 12
    assert series["buckets"][-1] == {"label": "Mar 2026", "start": "2026-03-01", "earnings": Decimal("75.00")}
    assert series["buckets"][-2]["earnings"] == Decimal("100.00")
    assert all(bucket["earnings"] == Decimal("0.00") for bucket in series["buckets"][:-2])
    assert series["total"] == Decimal("175.00")


@pytest.mark.django_db
def test_series_ignores_other_owners(owner, listing):
    other = User.objects.create_user(email="other@example.com", role=User.RoleChoices.OWNER)
    _revenue(owner, listing, "10.00", datetime(2026, 3, 10, tzinfo=dt_timezone.utc))

    assert earnings_series(other, "weekly", now=NOW)["total"] == Decimal("0.00")
    assert earnings_series(owner, "weekly", now=NOW)["buckets"][-1]["earnings"] == Decimal("10.00")


def test_unknown_period_rejected():
    with pytest.raises(ValueError):
        earnings_series(None, "yearly", now=NOW)
