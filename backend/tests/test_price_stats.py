from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy import asc

from app.models import PriceEntry
from app.services.listing import order_clause
from app.services.pricing import COMPARE_SORT_FIELDS, compute_price_stats


def entry(price, is_available=True):
    return SimpleNamespace(price=Decimal(price), is_available=is_available)


def test_stats_for_mixed_availability():
    stats = compute_price_stats([
        entry("10.00"),
        entry("8.50", is_available=False),
        entry("12.00"),
    ])

    assert stats.total_stores == 3
    assert stats.available_stores == 2
    assert stats.unavailable_stores == 1
    assert stats.min_price == 10.0
    assert stats.max_price == 12.0
    assert stats.avg_price == 11.0


def test_stats_without_available_prices_are_null():
    stats = compute_price_stats([entry("5.00", is_available=False)])

    assert stats.total_stores == 1
    assert stats.available_stores == 0
    assert stats.unavailable_stores == 1
    assert stats.min_price is None
    assert stats.max_price is None
    assert stats.avg_price is None


def test_stats_for_no_prices():
    stats = compute_price_stats([])

    assert stats.total_stores == 0
    assert stats.available_stores == stats.unavailable_stores == 0
    assert stats.avg_price is None


def test_average_stays_within_min_and_max():
    entries = [entry("0.10"), entry("0.10"), entry("0.10"), entry("0.20"), entry("0.10")]
    stats = compute_price_stats(entries)

    assert stats.min_price <= stats.avg_price <= stats.max_price

    equal = compute_price_stats([entry("0.10")] * 3)
    assert equal.min_price == equal.avg_price == equal.max_price == 0.1


def test_stats_accept_float_prices():
    stats = compute_price_stats([SimpleNamespace(price=2.5, is_available=True)])
    assert stats.avg_price == 2.5


def test_unknown_sort_key_uses_fallback():
    fallback = PriceEntry.price.asc()

    assert order_clause("bogus", True, COMPARE_SORT_FIELDS, fallback) is fallback
    assert order_clause(None, False, COMPARE_SORT_FIELDS, fallback) is fallback
    assert str(order_clause("price", False, COMPARE_SORT_FIELDS, fallback)) == str(
        asc(PriceEntry.price)
    )
