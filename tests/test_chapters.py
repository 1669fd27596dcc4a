"""Tests for chapter range parsing."""

import pytest

from src.chapters import parse_chapters


def test_single_chapter():
    assert parse_chapters("3") == [3]


def test_range():
    assert parse_chapters("3-5") == [3, 4, 5]


@pytest.mark.parametrize("start,end", [(1, 1), (1, 2), (7, 19), (100, 150)])
def test_range_length(start, end):
    chapters = parse_chapters(f"{start}-{end}")
    assert len(chapters) == end - start + 1
    assert chapters == sorted(chapters)
    assert chapters[0] == start
    assert chapters[-1] == end


def test_mixed_segments():
    assert parse_chapters("1-2,4") == [1, 2, 4]


def test_segment_order_preserved():
    assert parse_chapters("10, 1-2") == [10, 1, 2]


def test_whitespace_ignored():
    assert parse_chapters(" 1 - 3 , 5 ") == [1, 2, 3, 5]


def test_reverse_range_is_empty():
    assert parse_chapters("5-3") == []


def test_empty_and_none():
    assert parse_chapters("") == []
    assert parse_chapters(None) == []


def test_non_numeric_range_end():
    assert parse_chapters("x-2") == []
    assert parse_chapters("1-y") == []


def test_non_numeric_segment_skipped():
    assert parse_chapters("abc") == []
    assert parse_chapters("1,abc,3") == [1, 3]


def test_malformed_range_skipped():
    assert parse_chapters("-2") == []
    assert parse_chapters("1-2-3") == []
    assert parse_chapters("1-2-3,7") == [7]


def test_empty_segments_skipped():
    assert parse_chapters("1,,2,") == [1, 2]


def test_pure():
    spec = "1-3,5"
    assert parse_chapters(spec) == parse_chapters(spec)
