"""Butterworth IIR filter design."""

from ._bilinear_transform_zpk import bilinear_transform_zpk
from ._butterworth_design import butterworth_design
from ._butterworth_prototype import butterworth_prototype
from ._exceptions import (
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
)
from ._lowpass_to_bandpass_zpk import lowpass_to_bandpass_zpk
from ._lowpass_to_bandstop_zpk import lowpass_to_bandstop_zpk
from ._lowpass_to_highpass_zpk import lowpass_to_highpass_zpk
from ._lowpass_to_lowpass_zpk import lowpass_to_lowpass_zpk
from ._normalize_gain_zpk import normalize_gain_zpk
from ._prewarp_frequency import prewarp_frequency
from ._sos_sections_count import sos_sections_count
from ._zpk_to_sos import zpk_to_sos

__all__ = [
    # Design functions
    "butterworth_design",
    "butterworth_prototype",
    # Transforms
    "bilinear_transform_zpk",
    "lowpass_to_bandpass_zpk",
    "lowpass_to_bandstop_zpk",
    "lowpass_to_highpass_zpk",
    "lowpass_to_lowpass_zpk",
    "normalize_gain_zpk",
    "prewarp_frequency",
    # Conversions
    "zpk_to_sos",
    # SOS utilities
    "sos_sections_count",
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
