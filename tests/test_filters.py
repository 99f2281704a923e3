"""
Tests for propgraph.services.filters and SearchFilters.matches() -
parameter parsing, query validation, blacklist merging and in-memory
filter semantics.
"""

import pytest

from propgraph.config import SearchConfig
from propgraph.exceptions import ValidationError
from propgraph.models.graph import Record
from propgraph.models.search import RawSearchFilters, SearchFilters
from propgraph.services.filters import FilterBuilder, parse_property_filters, split_list


@pytest.fixture
def builder(config) -> FilterBuilder:
    return FilterBuilder(config)


# =============================================================================
# Parameter parsing
# =============================================================================

class TestParsing:

    def test_split_list(self):
        assert split_list(" Author, ,Source ") == ["Author", "Source"]

    @pytest.mark.parametrize("raw", [None, "", " , "])
    def test_split_list_empty(self, raw):
        assert split_list(raw) == []

    def test_property_pairs(self):
        assert parse_property_filters("era:ancient, lang : grc") == {"era": "ancient", "lang": "grc"}

    def test_malformed_pairs_dropped(self):
        assert parse_property_filters("broken,:x,k:,era:ancient") == {"era": "ancient"}

    def test_extra_colon_parts_ignored(self):
        assert parse_property_filters("url:http://example.org") == {"url": "http"}

    def test_no_property_param(self):
        assert parse_property_filters(None) == {}


# =============================================================================
# FilterBuilder
# =============================================================================

class TestFilterBuilder:

    @pytest.mark.parametrize("query", [None, "", "h", "  h  ", "   "])
    def test_short_query_rejected(self, builder, query):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            builder.build(query)

    def test_two_characters_accepted(self, builder):
        assert builder.build("ho") is not None

    def test_no_filters(self, builder):
        filters = builder.build("homer")
        assert filters.include_labels is None
        assert filters.exclude_labels == ("User",)
        assert filters.property_filters == ()

    def test_blacklist_merged_into_excludes(self, builder):
        filters = builder.build("homer", RawSearchFilters(exclude_label="Draft"))
        assert filters.exclude_labels == ("Draft", "User")
        assert filters.blacklisted_labels == ("User",)

    def test_blacklist_not_duplicated(self, builder):
        filters = builder.build("homer", RawSearchFilters(exclude_label="User,Draft"))
        assert filters.exclude_labels == ("User", "Draft")

    def test_including_blacklisted_label_cannot_override(self, builder):
        filters = builder.build("homer", RawSearchFilters(label="User"))
        assert filters.include_labels == ("User",)
        assert "User" in filters.exclude_labels

    def test_full_filters(self, builder):
        raw = RawSearchFilters(label="Author,Source", property="era:ancient,bad")
        filters = builder.build("homer", raw)
        assert filters.include_labels == ("Author", "Source")
        assert filters.property_map == {"era": "ancient"}

    def test_configured_blacklist(self):
        builder = FilterBuilder(SearchConfig(blacklisted_labels=frozenset({"User", "ApiKey"})))
        filters = builder.build("homer")
        assert set(filters.exclude_labels) == {"User", "ApiKey"}


# =============================================================================
# SearchFilters.matches
# =============================================================================

class TestSearchFiltersMatches:

    def test_empty_filter_matches_everything(self, make_record):
        assert SearchFilters().matches(make_record(["Author"], name="Homer"))
        assert SearchFilters().matches(Record(labels=[], properties=None))

    def test_include_labels_or(self, make_record):
        filters = SearchFilters(include_labels=("Author", "Source"))
        assert filters.matches(make_record(["Source"]))
        assert not filters.matches(make_record(["Place"]))
        assert not filters.matches(make_record([]))

    def test_exclude_labels(self, make_record):
        filters = SearchFilters(exclude_labels=("User",))
        assert not filters.matches(make_record(["Author", "User"]))
        assert filters.matches(make_record(["Author"]))

    def test_property_equality(self, make_record):
        filters = SearchFilters(property_filters=(("era", "ancient"),))
        assert filters.matches(make_record(era="ancient"))
        assert not filters.matches(make_record(era="modern"))
        assert not filters.matches(make_record(name="Homer"))

    def test_property_list_membership(self, make_record):
        filters = SearchFilters(property_filters=(("tags", "greek"),))
        assert filters.matches(make_record(tags=["ancient", "greek"]))
        assert not filters.matches(make_record(tags=["latin"]))

    def test_every_property_filter_required(self, make_record):
        filters = SearchFilters(property_filters=(("era", "ancient"), ("lang", "grc")))
        assert filters.matches(make_record(era="ancient", lang="grc"))
        assert not filters.matches(make_record(era="ancient", lang="lat"))

    def test_malformed_record_fails_property_filter(self):
        filters = SearchFilters(property_filters=(("era", "ancient"),))
        assert not filters.matches(Record(labels=["Author"], properties=None))

    def test_is_blacklisted(self, make_record):
        filters = SearchFilters(blacklisted_labels=("User",))
        assert filters.is_blacklisted(make_record(["User"]))
        assert not filters.is_blacklisted(make_record(["Author"]))
