"""
Tests for propgraph.services.scoring - match classification, score formula,
and best-match selection across properties and list values.
"""

import pytest

from propgraph.config import SearchConfig
from propgraph.models.graph import Record
from propgraph.models.search import MatchType
from propgraph.services.scoring import (
    MatchScorer,
    calculate_score,
    candidate_values,
    get_match_type,
)


@pytest.fixture
def scorer(config) -> MatchScorer:
    return MatchScorer(config)


# =============================================================================
# get_match_type / calculate_score
# =============================================================================

class TestMatchType:

    @pytest.mark.parametrize("value,expected", [
        ("homer", MatchType.EXACT),
        ("HOMER", MatchType.EXACT),
        ("Homeric Hymns", MatchType.PREFIX),
        ("The Homeric epics", MatchType.SUBSTRING),
        ("Hesiod", None),
    ])
    def test_classification(self, value, expected):
        assert get_match_type(value, "homer") == expected


class TestCalculateScore:

    def test_exact_priority(self):
        assert calculate_score(MatchType.EXACT, "Homer", "homer", is_priority=True) == pytest.approx(600.0)

    def test_prefix_priority(self):
        score = calculate_score(MatchType.PREFIX, "Homeric Hymns", "homer", is_priority=True)
        assert score == pytest.approx(150 * (1 + 5 / 13))

    def test_substring_plain(self):
        score = calculate_score(MatchType.SUBSTRING, "the homer book", "homer")
        assert score == pytest.approx(25 * (1 + 5 / 14))

    def test_shorter_value_scores_higher(self):
        short = calculate_score(MatchType.PREFIX, "homers", "homer")
        long = calculate_score(MatchType.PREFIX, "homer and the sea", "homer")
        assert short > long


class TestCandidateValues:

    def test_string(self):
        assert list(candidate_values("Homer")) == ["Homer"]

    def test_list_skips_non_strings(self):
        assert list(candidate_values(["a", 1, None, "b", 2.5])) == ["a", "b"]

    @pytest.mark.parametrize("value", [42, 3.14, True, None, {"nested": "homer"}])
    def test_scalars_contribute_nothing(self, value):
        assert list(candidate_values(value)) == []


# =============================================================================
# MatchScorer
# =============================================================================

class TestMatchScorer:

    def test_exact_on_priority_key(self, scorer, make_record):
        match = scorer.score(make_record(["Author"], name="Homer"), "homer")
        assert match.score == pytest.approx(600.0)
        assert match.matched_property == "name"
        assert match.match_type == MatchType.EXACT

    def test_list_element_exact(self, scorer, make_record):
        record = make_record(tags=["ancient", "greek", "homeric"])
        match = scorer.score(record, "homeric")
        assert match.match_type == MatchType.EXACT
        assert match.matched_property == "tags"
        assert match.score == pytest.approx(200.0)

    def test_best_property_wins(self, scorer, make_record):
        record = make_record(description="about homer", title="Homer")
        match = scorer.score(record, "homer")
        assert match.matched_property == "title"
        assert match.match_type == MatchType.EXACT

    def test_monotonic_match_types(self, scorer, make_record):
        exact = scorer.score(make_record(alias="homer"), "homer").score
        prefix = scorer.score(make_record(alias="homerx"), "homer").score
        substring = scorer.score(make_record(alias="xhomer"), "homer").score
        assert exact > prefix > substring > 0

    def test_priority_boost(self, scorer, make_record):
        priority = scorer.score(make_record(display_name="Homer"), "homer")
        plain = scorer.score(make_record(nickname="Homer"), "homer")
        assert priority.score > plain.score
        assert priority.score == pytest.approx(3 * plain.score)

    def test_first_maximum_wins_on_tie(self, scorer, make_record):
        record = make_record(alias="homer", other_alias="homer")
        match = scorer.score(record, "homer")
        assert match.matched_property == "alias"

    def test_sensitive_keys_never_matched(self, scorer, make_record):
        record = make_record(password="homer", token="homer", refreshToken="homer")
        match = scorer.score(record, "homer")
        assert match.score == 0
        assert match.matched_property is None
        assert match.match_type is None

    def test_non_string_values_ignored(self, scorer, make_record):
        match = scorer.score(make_record(lines=15693, active=True), "15693")
        assert match.score == 0

    def test_missing_properties_is_no_match(self, scorer):
        match = scorer.score(Record(labels=["Author"], properties=None), "homer")
        assert match.score == 0
        assert not match.is_match

    def test_empty_string_value_skipped(self, scorer, make_record):
        assert scorer.score(make_record(name=""), "homer").score == 0

    def test_query_case_insensitive(self, scorer, make_record):
        match = scorer.score(make_record(name="homer"), "HOMER")
        assert match.match_type == MatchType.EXACT

    def test_custom_priority_properties(self, make_record):
        scorer = MatchScorer(SearchConfig(priority_properties=frozenset({"label"})))
        boosted = scorer.score(make_record(label="Homer"), "homer")
        plain = scorer.score(make_record(name="Homer"), "homer")
        assert boosted.score > plain.score
