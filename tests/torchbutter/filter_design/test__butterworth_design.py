"""Tests for butterworth_design against scipy.signal.butter."""

import math

import pytest
import torch
from scipy import signal as scipy_signal

from torchbutter.filter_design import (
    FrequencyOrderError,
    InvalidCutoffError,
    InvalidFilterTypeError,
    InvalidOrderError,
    InvalidParameterError,
    InvalidSamplingFrequencyError,
    NyquistViolationError,
    butterworth_design,
    sos_sections_count,
)

CASES = [
    ("lowpass", 0.3),
    ("highpass", 0.3),
    ("bandpass", [0.2, 0.5]),
    ("bandstop", [0.2, 0.5]),
]


class TestButterworthDesign:
    """Frequency responses agree with scipy for every filter type."""

    @pytest.mark.parametrize("filter_type,cutoff", CASES)
    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5, 8])
    def test_matches_scipy_normalized(
        self, filter_type: str, cutoff, order: int
    ) -> None:
        sos = butterworth_design(
            order, cutoff, filter_type, dtype=torch.float64
        )
        sos_scipy = scipy_signal.butter(
            order, cutoff, btype=filter_type, output="sos"
        )

        w = torch.linspace(0.0, math.pi, 256, dtype=torch.float64)
        torch.testing.assert_close(
            _sos_freqz(sos, w).abs(),
            _sos_freqz(torch.from_numpy(sos_scipy), w).abs(),
            rtol=1e-6,
            atol=1e-9,
        )

    @pytest.mark.parametrize(
        "filter_type,cutoff",
        [
            ("lowpass", 10.0),
            ("highpass", 10.0),
            ("bandpass", [20.0, 30.0]),
            ("bandstop", [20.0, 30.0]),
        ],
    )
    @pytest.mark.parametrize("order", [2, 4, 5])
    def test_matches_scipy_with_sampling_frequency(
        self, filter_type: str, cutoff, order: int
    ) -> None:
        sos = butterworth_design(
            order,
            cutoff,
            filter_type,
            sampling_frequency=100.0,
            dtype=torch.float64,
        )
        sos_scipy = scipy_signal.butter(
            order, cutoff, btype=filter_type, output="sos", fs=100.0
        )

        w = torch.linspace(0.0, math.pi, 256, dtype=torch.float64)
        torch.testing.assert_close(
            _sos_freqz(sos, w).abs(),
            _sos_freqz(torch.from_numpy(sos_scipy), w).abs(),
            rtol=1e-6,
            atol=1e-9,
        )

    @pytest.mark.parametrize("order", [1, 2, 3, 6])
    def test_half_power_at_cutoff(self, order: int) -> None:
        sos = butterworth_design(
            order, 10.0, "lowpass", sampling_frequency=100.0,
            dtype=torch.float64,
        )
        w = torch.tensor([2 * math.pi * 10.0 / 100.0], dtype=torch.float64)

        magnitude = _sos_freqz(sos, w).abs().item()

        assert abs(magnitude - 1.0 / math.sqrt(2.0)) < 1e-9

    @pytest.mark.parametrize("order", [1, 2, 3, 6])
    def test_band_edges_at_half_power(self, order: int) -> None:
        for filter_type in ("bandpass", "bandstop"):
            sos = butterworth_design(
                order, [20.0, 30.0], filter_type, sampling_frequency=100.0,
                dtype=torch.float64,
            )
            w = torch.tensor(
                [2 * math.pi * 20.0 / 100.0, 2 * math.pi * 30.0 / 100.0],
                dtype=torch.float64,
            )
            torch.testing.assert_close(
                _sos_freqz(sos, w).abs(),
                torch.full((2,), 1.0 / math.sqrt(2.0), dtype=torch.float64),
            )

    def test_passband_references_have_unit_gain(self) -> None:
        fs = 100.0
        lowpass = butterworth_design(4, 10.0, "lowpass", sampling_frequency=fs, dtype=torch.float64)
        highpass = butterworth_design(4, 10.0, "highpass", sampling_frequency=fs, dtype=torch.float64)
        bandstop = butterworth_design(4, [20.0, 30.0], "bandstop", sampling_frequency=fs, dtype=torch.float64)
        bandpass = butterworth_design(4, [20.0, 30.0], "bandpass", sampling_frequency=fs, dtype=torch.float64)

        dc = torch.tensor([0.0], dtype=torch.float64)
        nyquist = torch.tensor([math.pi], dtype=torch.float64)
        warped = [2 * fs * math.tan(math.pi * f / fs) for f in (20.0, 30.0)]
        center = torch.tensor(
            [2 * math.atan(math.sqrt(warped[0] * warped[1]) / (2 * fs))],
            dtype=torch.float64,
        )

        assert abs(_sos_freqz(lowpass, dc).abs().item() - 1.0) < 1e-12
        assert abs(_sos_freqz(highpass, nyquist).abs().item() - 1.0) < 1e-12
        assert abs(_sos_freqz(bandstop, dc).abs().item() - 1.0) < 1e-12
        assert abs(_sos_freqz(bandpass, center).abs().item() - 1.0) < 1e-10

    @pytest.mark.parametrize("filter_type,cutoff", CASES)
    @pytest.mark.parametrize("order", [1, 2, 3, 4, 7])
    def test_section_count(self, filter_type: str, cutoff, order: int) -> None:
        sos = butterworth_design(order, cutoff, filter_type)

        assert sos.shape == (sos_sections_count(order, filter_type), 6)

    @pytest.mark.parametrize("filter_type,cutoff", CASES)
    def test_poles_inside_unit_circle(self, filter_type: str, cutoff) -> None:
        _, poles, _ = butterworth_design(
            6, cutoff, filter_type, output="zpk", dtype=torch.float64
        )

        assert bool(torch.all(poles.abs() < 1.0))

    def test_zpk_output(self) -> None:
        zeros, poles, gain = butterworth_design(
            4, [0.2, 0.5], "bandpass", output="zpk", dtype=torch.float64
        )
        z_sp, p_sp, k_sp = scipy_signal.butter(
            4, [0.2, 0.5], btype="bandpass", output="zpk"
        )

        assert zeros.numel() == len(z_sp) == 8
        assert poles.numel() == len(p_sp) == 8
        assert abs(gain.item() - k_sp) < 1e-9 * abs(k_sp)

    @pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
    def test_dtype(self, dtype: torch.dtype) -> None:
        sos = butterworth_design(4, 0.3, dtype=dtype)
        assert sos.dtype == dtype

    def test_default_dtype(self) -> None:
        sos = butterworth_design(2, 0.3)
        assert sos.dtype == torch.get_default_dtype()

    def test_gain_placement_distribute(self) -> None:
        sos_first = butterworth_design(6, 0.1, dtype=torch.float64)
        sos_spread = butterworth_design(
            6, 0.1, gain_placement="distribute", dtype=torch.float64
        )

        w = torch.linspace(0.0, math.pi, 64, dtype=torch.float64)
        torch.testing.assert_close(
            _sos_freqz(sos_spread, w), _sos_freqz(sos_first, w)
        )

    def test_high_order_stays_stable(self) -> None:
        sos = butterworth_design(20, 0.05, dtype=torch.float64)

        assert sos.shape == (10, 6)
        assert bool(torch.all(sos[:, 5].abs() < 1.0))

    def test_tensor_cutoff(self) -> None:
        sos_tensor = butterworth_design(
            3, torch.tensor([0.2, 0.5], dtype=torch.float64), "bandstop",
            dtype=torch.float64,
        )
        sos_list = butterworth_design(
            3, [0.2, 0.5], "bandstop", dtype=torch.float64
        )

        torch.testing.assert_close(sos_tensor, sos_list)


class TestButterworthDesignGradients:
    """Cutoff frequencies are differentiable."""

    def test_gradient_wrt_cutoff(self) -> None:
        cutoff = torch.tensor(0.3, dtype=torch.float64, requires_grad=True)

        sos = butterworth_design(4, cutoff, dtype=torch.float64)
        sos.sum().backward()

        assert cutoff.grad is not None
        assert torch.isfinite(cutoff.grad)

    def test_gradient_wrt_band_edges(self) -> None:
        cutoff = torch.tensor(
            [0.2, 0.5], dtype=torch.float64, requires_grad=True
        )

        sos = butterworth_design(2, cutoff, "bandpass", dtype=torch.float64)
        sos.sum().backward()

        assert cutoff.grad is not None
        assert bool(torch.all(torch.isfinite(cutoff.grad)))


class TestButterworthDesignErrors:
    """Invalid parameters are rejected before design."""

    @pytest.mark.parametrize("order", [0, -3, 2.0, None])
    def test_invalid_order(self, order) -> None:
        with pytest.raises(InvalidOrderError):
            butterworth_design(order, 0.3)

    @pytest.mark.parametrize("cutoff", [0.0, -0.1, 1.0, 1.5, float("nan")])
    def test_invalid_normalized_cutoff(self, cutoff: float) -> None:
        with pytest.raises(InvalidCutoffError):
            butterworth_design(4, cutoff)

    @pytest.mark.parametrize(
        "filter_type,cutoff",
        [
            ("lowpass", True),
            ("highpass", torch.tensor(True)),
            ("bandpass", [True, 30.0]),
            ("bandstop", (10.0, True)),
        ],
    )
    def test_boolean_cutoff(self, filter_type: str, cutoff) -> None:
        with pytest.raises(InvalidCutoffError):
            butterworth_design(4, cutoff, filter_type, sampling_frequency=100.0)

    def test_cutoff_at_nyquist(self) -> None:
        with pytest.raises(NyquistViolationError):
            butterworth_design(4, 50.0, sampling_frequency=100.0)

    def test_band_edges_reversed(self) -> None:
        with pytest.raises(FrequencyOrderError):
            butterworth_design(
                4, [30.0, 20.0], "bandpass", sampling_frequency=100.0
            )

    def test_band_edges_equal(self) -> None:
        with pytest.raises(FrequencyOrderError):
            butterworth_design(4, [0.3, 0.3], "bandstop")

    @pytest.mark.parametrize(
        "filter_type,cutoff",
        [("lowpass", [0.1, 0.2]), ("bandpass", 0.2), ("bandstop", [0.1])],
    )
    def test_wrong_cutoff_count(self, filter_type: str, cutoff) -> None:
        with pytest.raises(InvalidCutoffError):
            butterworth_design(4, cutoff, filter_type)

    def test_invalid_filter_type(self) -> None:
        with pytest.raises(InvalidFilterTypeError):
            butterworth_design(4, 0.3, "allpass")

    def test_invalid_output(self) -> None:
        with pytest.raises(InvalidParameterError):
            butterworth_design(4, 0.3, output="ba")

    @pytest.mark.parametrize("fs", [0.0, -100.0, float("inf")])
    def test_invalid_sampling_frequency(self, fs: float) -> None:
        with pytest.raises(InvalidSamplingFrequencyError):
            butterworth_design(4, 10.0, sampling_frequency=fs)

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            butterworth_design(4, 2.0)


def _sos_freqz(sos: torch.Tensor, w: torch.Tensor) -> torch.Tensor:
    """Compute frequency response of SOS filter."""
    h = torch.ones(len(w), dtype=torch.complex128)
    z = torch.exp(1j * w.to(torch.float64))

    for section in sos:
        b0, b1, b2, a0, a1, a2 = section.to(torch.float64)
        num = b0 + b1 * z**-1 + b2 * z**-2
        den = a0 + a1 * z**-1 + a2 * z**-2
        h = h * num / den

    return h
