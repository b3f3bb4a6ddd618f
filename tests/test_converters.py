from __future__ import annotations

import pytest

from app.commands.converters import (
    FIBONACCI_WARNING,
    binary_to_text,
    fibonacci,
    hex_to_text,
    sort_numbers,
    text_to_binary,
    text_to_hex,
)


def test_binary_encoding_is_zero_padded_groups() -> None:
    assert text_to_binary("Hi") == "01001000 01101001"
    assert binary_to_text(text_to_binary("Hi")) == "Hi"


def test_hex_encoding_is_two_digit_groups() -> None:
    assert text_to_hex("Hi\n") == "48 69 0a"
    assert hex_to_text(text_to_hex("Hi")) == "Hi"


@pytest.mark.parametrize("bad", ["0102", "zz", "01  01"])
def test_binary_decode_rejects_invalid_groups(bad: str) -> None:
    with pytest.raises(ValueError):
        binary_to_text(bad)


def test_hex_decode_rejects_invalid_groups() -> None:
    with pytest.raises(ValueError):
        hex_to_text("4g")


def test_sort_numbers_ascending() -> None:
    assert sort_numbers("5, 2, 9, 1") == "1, 2, 5, 9"
    assert sort_numbers("3.5, -1, foo, 2") == "-1, 2, 3.5"


def test_sort_reads_the_leading_number_of_each_entry() -> None:
    assert sort_numbers("1_000, 5abc, 2") == "1, 2, 5"
    assert sort_numbers(" -.5x, 2e1y, +3") == "-0.5, 3, 20"


def test_sort_numbers_without_numbers_is_rejected() -> None:
    with pytest.raises(ValueError):
        sort_numbers("a, b, c")
    with pytest.raises(ValueError):
        sort_numbers("nan, inf")


def test_fibonacci_sequences() -> None:
    assert fibonacci(1) == [0]
    assert fibonacci(2) == [0, 1]
    assert fibonacci(5) == [0, 1, 1, 2, 3]
    assert len(fibonacci(100)) == 100


@pytest.mark.parametrize("n", [0, -3, 101])
def test_fibonacci_rejects_out_of_range(n: int) -> None:
    with pytest.raises(ValueError):
        fibonacci(n)


def test_fibonacci_warning_matches_enforced_bound() -> None:
    assert "between 1 and 100" in FIBONACCI_WARNING
