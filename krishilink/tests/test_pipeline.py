"""
Tests for the crop list pipeline (search, type filter, sort).
"""
import pytest

from krishilink.models.query import QueryState, SORT_KEYS
from krishilink.pipeline import (
    filter_by_text,
    filter_by_type,
    owned_by,
    sort_crops,
    transform_listings,
)

from conftest import make_crop


def names(crops):
    return [crop.name for crop in crops]


class TestScenarios:
    """The three-crop example: Rice 10, Wheat 30, Corn 20."""

    @pytest.fixture
    def three(self):
        return [
            make_crop("1", "Rice", price=10),
            make_crop("2", "Wheat", price=30),
            make_crop("3", "Corn", price=20),
        ]

    def test_price_low(self, three):
        result = transform_listings(three, QueryState(sort_key="price-low"))
        assert names(result) == ["Rice", "Corn", "Wheat"]

    def test_search_is_case_insensitive(self, three):
        result = transform_listings(three, QueryState(search_text="ric"))
        assert names(result) == ["Rice"]

        result = transform_listings(three, QueryState(search_text="RIC"))
        assert names(result) == ["Rice"]


class TestTextFilter:

    def test_matches_every_searchable_field(self, sample_crops):
        assert names(filter_by_text(sample_crops, "mango")) == ["Mango"]
        assert names(filter_by_text(sample_crops, "fruit")) == ["Mango"]
        assert names(filter_by_text(sample_crops, "dinajpur")) == ["Wheat"]
        assert names(filter_by_text(sample_crops, "sweet yellow")) == ["Corn"]

    def test_blank_search_passes_everything(self, sample_crops):
        assert filter_by_text(sample_crops, "") == sample_crops
        assert filter_by_text(sample_crops, "   ") == sample_crops

    def test_no_match(self, sample_crops):
        assert filter_by_text(sample_crops, "durian") == []


class TestTypeFilter:

    def test_all_passes_everything(self, sample_crops):
        assert filter_by_type(sample_crops, "all") == sample_crops

    def test_exact_match(self, sample_crops):
        assert names(filter_by_type(sample_crops, "Fruit")) == ["Mango"]

    def test_match_is_exact_not_substring(self, sample_crops):
        assert filter_by_type(sample_crops, "fruit") == []


class TestSort:

    def test_newest_and_oldest(self, sample_crops):
        assert names(sort_crops(sample_crops, "newest")) == ["Mango", "Corn", "Wheat", "Rice"]
        assert names(sort_crops(sample_crops, "oldest")) == ["Rice", "Wheat", "Corn", "Mango"]

    def test_quantity(self, sample_crops):
        assert names(sort_crops(sample_crops, "quantity-low")) == ["Mango", "Wheat", "Corn", "Rice"]
        assert names(sort_crops(sample_crops, "quantity-high")) == ["Rice", "Corn", "Wheat", "Mango"]

    def test_price_directions_are_reversed(self, sample_crops):
        low = sort_crops(sample_crops, "price-low")
        high = sort_crops(sample_crops, "price-high")
        assert names(high) == list(reversed(names(low)))

    def test_name_ignores_case_and_accents(self):
        crops = [
            make_crop("1", "okra"),
            make_crop("2", "Émer wheat"),
            make_crop("3", "Barley"),
        ]
        assert names(sort_crops(crops, "name-asc")) == ["Barley", "Émer wheat", "okra"]
        assert names(sort_crops(crops, "name-desc")) == ["okra", "Émer wheat", "Barley"]

    def test_sort_is_stable(self):
        crops = [
            make_crop("a", "Potato", price=15),
            make_crop("b", "Onion", price=15),
            make_crop("c", "Garlic", price=5),
        ]
        assert [c.id for c in sort_crops(crops, "price-low")] == ["c", "a", "b"]
        assert [c.id for c in sort_crops(crops, "price-high")] == ["a", "b", "c"]

    def test_unknown_key_keeps_order(self, sample_crops):
        assert sort_crops(sample_crops, "popularity") == sample_crops

    def test_missing_created_at_sorts_oldest(self, sample_crops):
        undated = sample_crops[0].model_copy(update={"id": "x", "created_at": None})
        result = sort_crops([undated, *sample_crops], "newest")
        assert result[-1].id == "x"


class TestTransform:

    def test_does_not_mutate_input(self, sample_crops):
        before = list(sample_crops)
        transform_listings(sample_crops, QueryState(sort_key="name-desc"))
        assert sample_crops == before

    def test_empty_collection(self):
        assert transform_listings([], QueryState(search_text="rice")) == []

    def test_cleared_query_is_newest_first(self, sample_crops):
        expected = sorted(sample_crops, key=lambda c: c.created_at, reverse=True)
        assert transform_listings(sample_crops, QueryState.cleared()) == expected
        assert transform_listings(sample_crops) == expected

    def test_filters_then_sorts(self, sample_crops):
        query = QueryState(search_text="r", type_filter="Grain", sort_key="price-high")
        assert names(transform_listings(sample_crops, query)) == ["Wheat", "Corn", "Rice"]

    @pytest.mark.parametrize("sort_key", SORT_KEYS)
    def test_subset_and_idempotent(self, sample_crops, sort_key):
        query = QueryState(search_text="a", sort_key=sort_key)
        once = transform_listings(sample_crops, query)
        twice = transform_listings(once, query)

        assert all(crop in sample_crops for crop in once)
        assert twice == once

    def test_deterministic(self, sample_crops):
        query = QueryState(search_text="i", sort_key="quantity-high")
        assert transform_listings(sample_crops, query) == transform_listings(sample_crops, query)


def test_owned_by(sample_crops):
    mine = make_crop("9", "Lentil", crop_type="Pulse", owner="me@example.com")
    crops = [*sample_crops, mine]
    assert owned_by(crops, "me@example.com") == [mine]
    assert owned_by(crops, None) == []
