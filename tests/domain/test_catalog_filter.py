"""Unit tests for the catalog filter and filter criteria."""

import pytest

from evergreen.domain.exceptions import ValidationError
from evergreen.domain.model.catalog import FilterCriteria, SizeFilter, TreeSize
from evergreen.domain.service.catalog_filter import filter_catalog
from tests.fakes import make_tree

FIR = make_tree("1", "Fresh Douglas Fir", TreeSize.LARGE)
FRASER = make_tree("2", "Fraser Fir", TreeSize.MEDIUM, tags=("fresh", "premium"))
SPRUCE = make_tree("3", "Blue Spruce", TreeSize.MEDIUM, tags=("premium",))
PINE = make_tree("4", "Tabletop Pine", TreeSize.SMALL, tags=("Potted",))

CATALOG = [FIR, FRASER, SPRUCE, PINE]


class TestFilterCatalog:

    def test_all_and_empty_query_returns_everything_in_order(self):
        assert filter_catalog(CATALOG, FilterCriteria()) == CATALOG

    def test_query_matches_name_or_tag(self):
        result = filter_catalog(CATALOG, FilterCriteria(query="fresh"))
        assert result == [FIR, FRASER]
        assert SPRUCE not in result

    def test_query_is_case_insensitive_and_trimmed(self):
        assert filter_catalog(CATALOG, FilterCriteria(query="  SPRUCE ")) == [SPRUCE]
        assert filter_catalog(CATALOG, FilterCriteria(query="potted")) == [PINE]

    def test_whitespace_query_is_empty(self):
        assert filter_catalog(CATALOG, FilterCriteria(query="   ")) == CATALOG

    def test_size_selector(self):
        criteria = FilterCriteria(size=SizeFilter.MEDIUM)
        assert filter_catalog(CATALOG, criteria) == [FRASER, SPRUCE]

    def test_size_and_query_compose(self):
        criteria = FilterCriteria(size=SizeFilter.MEDIUM, query="fir")
        assert filter_catalog(CATALOG, criteria) == [FRASER]

    def test_no_match_returns_empty(self):
        assert filter_catalog(CATALOG, FilterCriteria(query="cedar")) == []

    def test_input_not_mutated(self):
        items = list(CATALOG)
        filter_catalog(items, FilterCriteria(size=SizeFilter.SMALL))
        assert items == CATALOG


class TestSizeFilter:

    def test_parse_is_case_insensitive(self):
        assert SizeFilter.parse("large") is SizeFilter.LARGE
        assert SizeFilter.parse("ALL") is SizeFilter.ALL

    def test_parse_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Unknown size"):
            SizeFilter.parse("Huge")

    def test_query_param(self):
        assert SizeFilter.ALL.as_query_param() is None
        assert SizeFilter.SMALL.as_query_param() == "Small"

    def test_criteria_replacement_keeps_other_field(self):
        criteria = FilterCriteria().with_query("fresh").with_size(SizeFilter.LARGE)
        assert criteria == FilterCriteria(size=SizeFilter.LARGE, query="fresh")
