"""torchbutter: Butterworth IIR filter design and filtering for PyTorch."""

from . import filter, filter_analysis, filter_design
from .filter import Butterworth, SOSFilter, sosfilt
from .filter_analysis import frequency_response_sos, is_stable_sos
from .filter_design import (
    DesignError,
    FilterDesignError,
    FrequencyOrderError,
    InvalidCutoffError,
    InvalidFilterTypeError,
    InvalidOrderError,
    InvalidParameterError,
    InvalidSamplingFrequencyError,
    NyquistViolationError,
    SOSNormalizationError,
    bilinear_transform_zpk,
    butterworth_design,
    butterworth_prototype,
    lowpass_to_bandpass_zpk,
    lowpass_to_bandstop_zpk,
    lowpass_to_highpass_zpk,
    lowpass_to_lowpass_zpk,
    normalize_gain_zpk,
    prewarp_frequency,
    sos_sections_count,
    zpk_to_sos,
)

__all__ = [
    # Submodules
    "filter",
    "filter_analysis",
    "filter_design",
    # Filtering
    "Butterworth",
    "SOSFilter",
    "sosfilt",
    # Design
    "bilinear_transform_zpk",
    "butterworth_design",
    "butterworth_prototype",
    "lowpass_to_bandpass_zpk",
    "lowpass_to_bandstop_zpk",
    "lowpass_to_highpass_zpk",
    "lowpass_to_lowpass_zpk",
    "normalize_gain_zpk",
    "prewarp_frequency",
    "sos_sections_count",
    "zpk_to_sos",
    # Analysis
    "frequency_response_sos",
    "is_stable_sos",
    # Exceptions
    "DesignError",
    "FilterDesignError",
    "FrequencyOrderError",
    "InvalidCutoffError",
    "InvalidFilterTypeError",
    "InvalidOrderError",
    "InvalidParameterError",
    "InvalidSamplingFrequencyError",
    "NyquistViolationError",
    "SOSNormalizationError",
]

__version__ = "0.1.0"
