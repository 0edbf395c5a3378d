"""Tests for sos_sections_count."""

import pytest

from torchbutter.filter_design import (
    InvalidFilterTypeError,
    InvalidOrderError,
    sos_sections_count,
)


class TestSosSectionsCount:
    @pytest.mark.parametrize(
        "order,expected", [(1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (10, 5)]
    )
    def test_lowpass_highpass(self, order: int, expected: int) -> None:
        assert sos_sections_count(order, "lowpass") == expected
        assert sos_sections_count(order, "highpass") == expected

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5])
    def test_band(self, order: int) -> None:
        assert sos_sections_count(order, "bandpass") == order
        assert sos_sections_count(order, "bandstop") == order

    def test_invalid(self) -> None:
        with pytest.raises(InvalidOrderError):
            sos_sections_count(0)
        with pytest.raises(InvalidFilterTypeError):
            sos_sections_count(2, "notch")
