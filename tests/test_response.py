"""
Tests for propgraph.services.response - sensitive-property stripping,
node id resolution and camelCase serialization.
"""

import pytest

from propgraph.models.graph import Record
from propgraph.models.search import MatchType, ScoredMatch
from propgraph.services.response import ResponseShaper


@pytest.fixture
def shaper(config) -> ResponseShaper:
    return ResponseShaper(config)


def test_sensitive_properties_removed(shaper, make_record):
    record = make_record(
        ["Author"],
        nodeId="author_homer",
        name="Homer",
        password="x",
        passwordHash="y",
        salt="z",
        token="t",
        refreshToken="r",
    )
    [public] = shaper.shape([ScoredMatch(record=record, score=600.0, matched_property="name",
                                         match_type=MatchType.EXACT)])
    assert public.properties == {"nodeId": "author_homer", "name": "Homer"}


def test_fields_passed_through(shaper, make_record):
    record = make_record(["Author", "Poet"], nodeId="author_homer", name="Homer")
    match = ScoredMatch(record=record, score=600.0, matched_property="name", match_type=MatchType.EXACT)
    [public] = shaper.shape([match])
    assert public.labels == ["Author", "Poet"]
    assert public.score == 600.0
    assert public.matched_property == "name"
    assert public.match_type == MatchType.EXACT


def test_source_record_not_mutated(shaper, make_record):
    record = make_record(name="Homer", password="secret")
    shaper.shape([ScoredMatch(record=record, score=1.0)])
    assert record.properties["password"] == "secret"


def test_order_preserved(shaper, make_record):
    matches = [ScoredMatch(record=make_record(nodeId=f"n{i}"), score=10.0 - i) for i in range(3)]
    assert [p.node_id for p in shaper.shape(matches)] == ["n0", "n1", "n2"]


@pytest.mark.parametrize("record,expected", [
    (Record(properties={"nodeId": "source_iliad"}, element_id="4:x:1"), "source_iliad"),
    (Record(properties={"name": "Iliad"}, element_id="4:x:1"), "4:x:1"),
    (Record(properties={"name": "Iliad"}), "unknown"),
    (Record(properties=None), "unknown"),
])
def test_node_id(record, expected):
    assert ResponseShaper.node_id(record) == expected


def test_serialized_with_camel_case(shaper, make_record):
    record = make_record(["Author"], nodeId="author_homer", name="Homer")
    [public] = shaper.shape([ScoredMatch(record=record, score=600.0, matched_property="name",
                                         match_type=MatchType.EXACT)])
    data = public.model_dump(by_alias=True, mode="json")
    assert data["nodeId"] == "author_homer"
    assert data["matchedProperty"] == "name"
    assert data["matchType"] == "exact"
