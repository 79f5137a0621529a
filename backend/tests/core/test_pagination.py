"""Pagination Filter - tests for page -> skip/limit conversion.

Tests cover:
    - first page starts at offset 0
    - page 2 of size 10 skips exactly 10 documents
    - non-positive page / size are clamped to 1
    - negative skip / limit are rejected
"""

import pytest

from trouver.core.pagination import Filter


def test_defaults_are_first_page_of_ten():
    f = Filter.from_page()
    assert (f.skip, f.limit) == (0, 10)


def test_second_page_skips_one_full_page():
    f = Filter.from_page(2, 10)
    assert (f.skip, f.limit) == (10, 10)


def test_arbitrary_page():
    f = Filter.from_page(4, 25)
    assert (f.skip, f.limit) == (75, 25)


@pytest.mark.parametrize("page,size", [(0, 10), (-3, 10)])
def test_non_positive_page_clamped_to_first(page, size):
    assert Filter.from_page(page, size).skip == 0


def test_non_positive_size_clamped_to_one():
    f = Filter.from_page(3, 0)
    assert (f.skip, f.limit) == (2, 1)


def test_zero_limit_allowed_when_built_directly():
    assert Filter(skip=0, limit=0).limit == 0


@pytest.mark.parametrize("skip,limit", [(-1, 10), (0, -1)])
def test_negative_values_rejected(skip, limit):
    with pytest.raises(ValueError):
        Filter(skip=skip, limit=limit)
