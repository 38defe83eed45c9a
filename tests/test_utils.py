"""Tests for reference-string parsing and frame colouring."""

import pytest

from engine import InvalidInput, simulate_fifo
from utils import format_reference_string, get_color, parse_reference_string


class TestParseReferenceString:
    """Free text to page numbers."""

    def test_commas_and_spaces(self) -> None:
        """Commas, spaces and newlines all separate pages."""
        assert parse_reference_string(" 7, 0 1,,2\n3 ") == [7, 0, 1, 2, 3]

    def test_blank(self) -> None:
        """Blank input yields no pages."""
        assert parse_reference_string("   ") == []

    def test_not_a_number(self) -> None:
        """Non-numeric tokens are reported, not dropped."""
        with pytest.raises(InvalidInput, match="'x'"):
            parse_reference_string("1,x,2")

    def test_negative(self) -> None:
        """Negative page numbers are rejected."""
        with pytest.raises(InvalidInput):
            parse_reference_string("1,-2")

    def test_format(self) -> None:
        """Formatting joins pages with commas."""
        assert format_reference_string([7, 0, 1]) == "7,0,1"
        assert parse_reference_string(format_reference_string([3, 4])) == [3, 4]


class TestGetColor:
    """Bar colours for the frame chart."""

    def test_colors(self) -> None:
        """Empty, loaded, hit and resident frames are distinguishable."""
        run = simulate_fifo([1, 2, 1], 3)
        fault, hit = run[1], run[2]
        assert get_color(fault.frames[2], fault) == "lightgray"
        assert get_color(fault.frames[1], fault) == "#fcd34d"
        assert get_color(hit.frames[0], hit) == "lightgreen"
        assert get_color(hit.frames[1], hit) == "#bfdbfe"
