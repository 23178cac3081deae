"""Tests for limit handling and ordered candidate lists."""

import pytest

from nodeimport.core.utils import first_match, normalize_limit, ordered_unique


@pytest.mark.parametrize("limit", [None, 0, -1, -50])
def test_non_positive_limit_defaults_to_ten(limit):
    assert normalize_limit(limit) == 10


def test_positive_limit_is_kept():
    assert normalize_limit(3) == 3


def test_ordered_unique_keeps_first_occurrence():
    assert ordered_unique(["body", "field_summary"], ["field_summary", "body", "field_text"]) == [
        "body", "field_summary", "field_text"
    ]


def test_ordered_unique_drops_empty_names():
    assert ordered_unique(["", "field_image", None]) == ["field_image"]


def test_first_match_short_circuits():
    seen = []

    def predicate(item):
        seen.append(item)
        return item > 1

    assert first_match([1, 2, 3], predicate) == 2
    assert seen == [1, 2]


def test_first_match_returns_none_without_match():
    assert first_match([], lambda item: True) is None
