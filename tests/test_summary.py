"""Tests for dashboard statistics."""

import pytest

from refundtrack.models import Product
from refundtrack.summary import DashboardStats, summarize, summary_totals


def _done(item, **kwargs):
    return Product(
        item=item,
        order_placed=True,
        order_delivered=True,
        review_added=True,
        review_live=True,
        review_ss_sent=True,
        **kwargs,
    )


@pytest.fixture
def products():
    return [
        _done("Shoes", paid=20.0, received=20.0),
        _done("Headphones", paid=40.0, received=45.0),
        Product(item="Mug", paid=10.0),
        Product(item="Bottle", order_delivered=True, paid=15.0, received=None),
        Product(item="", paid=100.0, received=1.0),
        Product(item="Broken", paid=float("nan")),
    ]


def test_summarize(products):
    stats = summarize(products)
    assert stats.total_products == 5
    assert stats.completed_orders == 2
    assert stats.total_paid == 85.0
    assert stats.total_received == 65.0
    # 0 + 5 - 10 - 15, NaN delta skipped
    assert stats.net_delta == -20.0
    assert stats.remaining_exposure == 25.0
    assert not stats.is_profitable


def test_summarize_empty():
    stats = summarize([])
    assert stats == DashboardStats()
    assert stats.is_profitable


def test_shoes_counts_as_completed():
    stats = summarize([_done("Shoes", paid=20.0, received=20.0)])
    assert stats.completed_orders == 1
    assert stats.net_delta == 0
    assert stats.remaining_exposure == 0


def test_void_complete_product_still_counts():
    """Completed-orders counting uses the completion rule alone, without the void check."""
    stats = summarize([_done("Void Item", is_void=True, paid=5.0, received=5.0)])
    assert stats.completed_orders == 1


def test_whitespace_item_excluded():
    stats = summarize([Product(item="  ", paid=9.0)])
    assert stats.total_products == 0
    assert stats.total_paid == 0


def test_to_dict(products):
    d = summarize(products).to_dict()
    assert set(d) == {
        "total_products",
        "completed_orders",
        "total_paid",
        "total_received",
        "net_delta",
        "remaining_exposure",
    }


def test_summary_totals_includes_unnamed(products):
    totals = summary_totals(products)
    assert totals.total_paid == 185.0
    assert totals.total_received == 66.0
    assert totals.net_delta == -119.0
