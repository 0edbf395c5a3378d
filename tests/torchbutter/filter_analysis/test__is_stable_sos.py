"""Tests for is_stable_sos."""

import pytest
import torch

from torchbutter.filter_analysis import is_stable_sos
from torchbutter.filter_design import SOSNormalizationError, butterworth_design


class TestIsStableSos:
    @pytest.mark.parametrize(
        "filter_type,cutoff",
        [
            ("lowpass", 0.01),
            ("highpass", 0.99),
            ("bandpass", [0.45, 0.46]),
            ("bandstop", [0.1, 0.9]),
        ],
    )
    @pytest.mark.parametrize("order", [1, 4, 9])
    def test_designs_are_stable(self, filter_type: str, cutoff, order: int) -> None:
        sos = butterworth_design(order, cutoff, filter_type, dtype=torch.float64)
        assert is_stable_sos(sos)

    @pytest.mark.parametrize(
        "section,expected",
        [
            # poles at 0.5 +- 0.5j
            ([1.0, 0.0, 0.0, 1.0, -1.0, 0.5], True),
            # double pole on the unit circle at z = 1
            ([1.0, 0.0, 0.0, 1.0, -2.0, 1.0], False),
            # real poles at 1.2 and 0.1
            ([1.0, 0.0, 0.0, 1.0, -1.3, 0.12], False),
            # first-order pole at -0.9
            ([1.0, 1.0, 0.0, 1.0, 0.9, 0.0], True),
            # first-order pole at -1
            ([1.0, 1.0, 0.0, 1.0, 1.0, 0.0], False),
        ],
    )
    def test_single_sections(self, section: list, expected: bool) -> None:
        sos = torch.tensor([section], dtype=torch.float64)
        assert is_stable_sos(sos) is expected

    def test_unnormalized_section(self) -> None:
        sos = torch.tensor([[2.0, 0.0, 0.0, 2.0, -1.0, 0.5]], dtype=torch.float64)
        assert is_stable_sos(sos)

    def test_empty_is_stable(self) -> None:
        assert is_stable_sos(torch.zeros(0, 6))

    def test_non_finite_is_unstable(self) -> None:
        sos = torch.tensor(
            [[1.0, 0.0, 0.0, 1.0, float("nan"), 0.0]], dtype=torch.float64
        )
        assert not is_stable_sos(sos)

    def test_zero_a0(self) -> None:
        sos = torch.tensor([[1.0, 0.0, 0.0, 0.0, 0.5, 0.0]], dtype=torch.float64)
        with pytest.raises(SOSNormalizationError):
            is_stable_sos(sos)
