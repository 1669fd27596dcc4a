"""Tests for data models."""

import itertools
from dataclasses import replace

import pytest

from src.models import ActiveSelection, Assignment, Theme, make_record_id


def test_assignment_summary():
    assert Assignment("Genesis", "1-2").summary == "Genesis 1-2"
    assert Assignment("Rest & Worship", "").summary == "Rest & Worship"


def test_assignment_presence():
    assert Assignment("Genesis", "1").is_present
    assert not Assignment("", "1").is_present
    assert not Assignment("   ", "").is_present


def test_reading_frozen(reading_day1):
    with pytest.raises(AttributeError):
        reading_day1.id = "2026-02-01"  # type: ignore[misc]


def test_assignment_by_slot(reading_day1):
    assert reading_day1.assignment("ot").book == "Genesis"
    assert reading_day1.assignment("wisdom").book == "Psalms"
    assert reading_day1.assignment("nt").book == "Matthew"
    with pytest.raises(KeyError):
        reading_day1.assignment("apocrypha")


def test_chapter_units(reading_day1):
    assert reading_day1.chapter_units("ot") == [1, 2]
    assert reading_day1.chapter_units("nt") == [1]


def test_rest_day_has_no_chapter_units(rest_day):
    for slot in ("ot", "wisdom", "nt"):
        assert rest_day.chapter_units(slot) == []
    # The notes are still shown
    assert len(rest_day.present_assignments()) == 3


def test_present_assignments_skips_empty_book(reading_day1):
    reading = replace(reading_day1, wisdom=Assignment("", ""), nt=None)
    assert [slot for slot, _ in reading.present_assignments()] == ["ot"]
    assert reading.chapter_units("wisdom") == []
    assert reading.chapter_units("nt") == []


def test_record_id_deterministic(reading_day1):
    assert reading_day1.record_id("Genesis", 1) == reading_day1.record_id("Genesis", 1)
    assert reading_day1.record_id("Genesis", 1) == make_record_id(
        "2026-01-01", "Genesis", 1
    )


def test_record_id_no_collisions():
    days = ["2026-01-01", "2026-01-02", "2026-01", "2026"]
    books = ["Genesis", "1 John", "John", "01-Genesis", "Genesis:1", "Psalms-1"]
    chapters = [1, 2, 11, 12]
    triples = list(itertools.product(days, books, chapters))
    ids = {make_record_id(*triple) for triple in triples}
    assert len(ids) == len(triples)


def test_record_id_no_collision_on_separator_ambiguity():
    # Naive "{day}-{book}-{chapter}" joining would map both to one key
    first = make_record_id("2026-01-01", "A-1", 2)
    second = make_record_id("2026-01-01-A", "1", 2)
    assert first != second


def test_theme_toggled():
    assert Theme.LIGHT.toggled() is Theme.DARK
    assert Theme.DARK.toggled() is Theme.LIGHT


def test_active_selection_equality():
    assert ActiveSelection("Genesis", 1) == ActiveSelection("Genesis", 1)
    assert ActiveSelection("Genesis", 1) != ActiveSelection("Genesis", 2)
