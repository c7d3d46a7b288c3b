# -*- coding: utf-8 -*-
import pytest

from foxy_admin.services.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    compute_skip,
    create_pagination_info,
    normalize_page,
    normalize_page_size,
)


def test_second_of_three_pages():
    info = create_pagination_info(2, 10, 25)
    assert info.total_pages == 3
    assert info.start_item == 11
    assert info.end_item == 20
    assert info.has_prev is True
    assert info.has_next is True
    assert info.total_items == 25


def test_last_partial_page():
    info = create_pagination_info(3, 10, 25)
    assert (info.start_item, info.end_item) == (21, 25)
    assert info.has_next is False


def test_empty_result_has_one_page():
    info = create_pagination_info(1, 10, 0)
    assert info.total_pages == 1
    assert (info.start_item, info.end_item) == (0, 0)
    assert info.has_prev is False
    assert info.has_next is False


def test_exact_multiple_does_not_add_a_page():
    assert create_pagination_info(1, 10, 30).total_pages == 3


@pytest.mark.parametrize('raw, expected', [
    (None, 1), ('', 1), ('abc', 1), ('0', 1), ('-4', 1), ('3', 3), (7, 7),
])
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


@pytest.mark.parametrize('raw, expected', [
    (None, DEFAULT_PAGE_SIZE), ('x', DEFAULT_PAGE_SIZE), ('25', 25),
    ('500', MAX_PAGE_SIZE), ('0', 1),
])
def test_normalize_page_size(raw, expected):
    assert normalize_page_size(raw) == expected


def test_compute_skip():
    assert compute_skip(1, 10) == 0
    assert compute_skip(3, 20) == 40
