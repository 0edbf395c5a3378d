"""Tests for frequency pre-warping."""

import math

import pytest
import torch

from torchbutter.filter_design import (
    InvalidSamplingFrequencyError,
    prewarp_frequency,
)


class TestPrewarpFrequency:
    """Tests for prewarp_frequency."""

    def test_known_value(self) -> None:
        warped = prewarp_frequency(10.0, 100.0)
        expected = 200.0 * math.tan(math.pi * 10.0 / 100.0)
        assert abs(warped.item() - expected) < 1e-12

    @pytest.mark.parametrize("frequency", [0.5, 10.0, 24.0, 45.0, 49.9])
    def test_inverse_of_bilinear_warping(self, frequency: float) -> None:
        """The bilinear transform maps the warped frequency back onto f."""
        fs = 100.0
        warped = prewarp_frequency(frequency, fs).item()
        digital = 2.0 * math.atan(warped / (2.0 * fs))
        assert abs(digital - 2.0 * math.pi * frequency / fs) < 1e-12

    def test_low_frequencies_barely_warp(self) -> None:
        warped = prewarp_frequency(0.01, 1000.0).item()
        assert abs(warped - 2.0 * math.pi * 0.01) < 1e-9

    def test_tensor_input(self) -> None:
        frequency = torch.tensor([20.0, 30.0], dtype=torch.float64)
        warped = prewarp_frequency(frequency, 100.0)

        assert warped.shape == (2,)
        assert abs(warped[0].item() * warped[1].item() - 200.0**2) < 1e-8

    def test_invalid_sampling_frequency(self) -> None:
        with pytest.raises(InvalidSamplingFrequencyError):
            prewarp_frequency(10.0, 0.0)
