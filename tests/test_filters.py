"""Tests for search, status and delta filtering."""

import pytest

from refundtrack.filters import (
    DeltaFilter,
    StatusFilter,
    apply_filters,
    matches_delta,
    matches_search,
    matches_status,
)
from refundtrack.models import Product
from refundtrack.status import ProductStatus, classify


def _p(item="Thing", **kwargs) -> Product:
    return Product(item=item, **kwargs)


@pytest.fixture
def products():
    return [
        _p("Shoes", order_delivered=True, review_added=True, review_live=True,
           review_ss_sent=True, paid=20.0, received=20.0),
        _p("Mug", paid=10.0),
        _p("", paid=99.0),
        _p("   ", paid=5.0),
        _p("Void Item", is_void=True, order_delivered=True, review_added=True,
           review_live=True, review_ss_sent=True, paid=5.0, received=5.0),
        _p("Desk Lamp", order_delivered=True, paid=30.0, received=35.0),
        _p("Unpriced", order_placed=False),
    ]


class TestSearch:
    def test_case_insensitive(self):
        assert matches_search(_p("Blue Water Bottle"), "water")
        assert matches_search(_p("Blue Water Bottle"), "BLUE")

    def test_empty_term_matches(self):
        assert matches_search(_p("Anything"), "")

    def test_no_match(self):
        assert not matches_search(_p("Mug"), "lamp")


class TestStatusPredicates:
    def test_all_passes_everything(self):
        assert matches_status(_p(is_void=True), StatusFilter.ALL)
        assert matches_status(_p(order_placed=False), "")

    def test_void(self):
        assert matches_status(_p(is_void=True), "void")
        assert not matches_status(_p(), "void")

    @pytest.mark.parametrize(
        "category, kwargs",
        [
            ("new", dict(order_placed=True)),
            ("review-not-added", dict(order_delivered=True)),
            ("review-pending", dict(review_added=True)),
            ("pending-refund", dict(review_ss_sent=True)),
            ("complete", dict(order_delivered=True, review_added=True, review_live=True,
                              review_ss_sent=True, paid=1.0, received=1.0)),
        ],
    )
    def test_void_guard(self, category, kwargs):
        assert matches_status(_p(**kwargs), category)
        assert not matches_status(_p(is_void=True, **kwargs), category)

    def test_categories_overlap(self):
        """Standalone predicates: one product can sit in several categories."""
        p = _p(order_placed=True, order_delivered=False, review_added=True)
        assert matches_status(p, "new")
        assert matches_status(p, "review-pending")
        assert classify(p) == ProductStatus.REVIEW_PENDING

    def test_send_screenshot_has_no_category(self):
        p = _p(order_delivered=True, review_added=True, review_live=True)
        assert classify(p) == ProductStatus.SEND_SCREENSHOT
        named = [f for f in StatusFilter if f is not StatusFilter.ALL]
        assert not any(matches_status(p, f) for f in named)

    def test_not_started_has_no_category(self):
        p = _p(order_placed=False)
        assert classify(p) == ProductStatus.NOT_STARTED
        named = [f for f in StatusFilter if f is not StatusFilter.ALL]
        assert not any(matches_status(p, f) for f in named)

    def test_pending_refund_and_review_pending_both_match(self):
        p = _p(review_added=True, review_live=False, review_ss_sent=True)
        assert matches_status(p, "pending-refund")
        assert matches_status(p, "review-pending")
        assert matches_status(p, "new")
        assert classify(p) == ProductStatus.PENDING_REFUND

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            matches_status(_p(), "not-started")


class TestDeltaPredicates:
    def test_all_includes_null_delta(self):
        assert matches_delta(_p(), DeltaFilter.ALL)

    @pytest.mark.parametrize("category", ["positive", "negative", "zero"])
    def test_null_delta_never_matches_a_category(self, category):
        assert not matches_delta(_p(), category)

    def test_nan_delta_never_matches(self):
        assert not matches_delta(_p(paid=float("nan")), "negative")

    def test_signs(self):
        assert matches_delta(_p(paid=5.0, received=8.0), "positive")
        assert matches_delta(_p(paid=5.0), "negative")
        assert matches_delta(_p(paid=5.0, received=5.0), "zero")
        assert not matches_delta(_p(paid=5.0, received=5.0), "positive")
        assert matches_delta(_p(received=3.0), "positive")

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            matches_delta(_p(), "huge")


class TestApplyFilters:
    def test_no_criteria_returns_named_products_in_order(self, products):
        result = apply_filters(products, "", "", "")
        assert [p.item for p in result] == [
            "Shoes", "Mug", "Void Item", "Desk Lamp", "Unpriced",
        ]

    def test_empty_items_excluded_even_by_search(self, products):
        assert all(p.has_item for p in apply_filters(products, " "))

    def test_and_semantics(self, products):
        result = apply_filters(products, "o", "review-not-added", "positive")
        assert [p.item for p in result] == []
        result = apply_filters(products, "lamp", "review-not-added", "positive")
        assert [p.item for p in result] == ["Desk Lamp"]

    def test_idempotent(self, products):
        once = apply_filters(products, "m", "new", "negative")
        twice = apply_filters(once, "m", "new", "negative")
        assert once == twice

    def test_delta_category_drops_unpriced(self, products):
        names = [p.item for p in apply_filters(products, delta="negative")]
        assert "Unpriced" not in names
        assert "Mug" in names

    def test_enum_and_string_criteria_agree(self, products):
        assert apply_filters(products, "", StatusFilter.VOID, DeltaFilter.ZERO) == \
            apply_filters(products, "", "void", "zero")

    def test_rejects_unknown_status(self, products):
        with pytest.raises(ValueError):
            apply_filters(products, status="bogus")


class TestScenarios:
    def test_shoes(self):
        shoes = _p("Shoes", order_delivered=True, review_added=True, review_live=True,
                   review_ss_sent=True, paid=20.0, received=20.0)
        assert classify(shoes) == ProductStatus.COMPLETE
        assert shoes.delta == 0
        assert apply_filters([shoes], delta="zero") == [shoes]

    def test_mug(self):
        mug = _p("Mug", order_placed=True, order_delivered=False, paid=10.0)
        assert classify(mug) == ProductStatus.NEW
        assert mug.delta == -10
        assert apply_filters([mug], status="new") == [mug]
        assert apply_filters([mug], status="complete") == []

    def test_void_item(self):
        void = _p("Void Item", is_void=True, order_delivered=True, review_added=True,
                  review_live=True, review_ss_sent=True, paid=5.0, received=5.0)
        assert classify(void) == ProductStatus.VOID
        assert apply_filters([void], status="complete") == []
        assert apply_filters([void], status="void") == [void]
