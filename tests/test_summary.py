"""Tests for reading time and excerpt helpers."""

from inkwell.core.summary import excerpt, reading_time


def test_reading_time_rounds_up():
    assert reading_time("word " * 199 + "word") == "1 min read"
    assert reading_time("word " * 200 + "word") == "2 min read"


def test_reading_time_empty_is_one_minute():
    assert reading_time("") == "1 min read"


def test_reading_time_custom_speed():
    assert reading_time(" ".join(["w"] * 100), words_per_minute=50) == "2 min read"


def test_excerpt_truncates():
    text = "x" * 200
    assert excerpt(text) == "x" * 150 + "..."
    assert excerpt(text, length=10) == "x" * 10 + "..."


def test_excerpt_short_text_unchanged():
    assert excerpt("short post") == "short post"
    assert excerpt("") == ""
