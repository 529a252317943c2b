"""Tests for random helpers."""

from mool_db.utils.random import ALPHABET, number_generator, string_generator


def test_string_generator_length_and_alphabet():
    """Strings have the requested length and stay within the alphabet."""
    value = string_generator(64)

    assert len(value) == 64
    assert set(value) <= set(ALPHABET)


def test_string_generator_zero_length():
    """Zero or negative lengths give an empty string."""
    assert string_generator(0) == ""
    assert string_generator(-3) == ""


def test_number_generator_range():
    """Numbers fall in [ceil(min), floor(max))."""
    values = {number_generator(1.2, 5.9) for _ in range(200)}

    assert values <= {2, 3, 4}


def test_number_generator_empty_range():
    """An empty range returns the lower bound."""
    assert number_generator(3, 3) == 3
