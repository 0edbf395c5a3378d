"""Exceptions for filter design module."""


class FilterDesignError(Exception):
    """Base exception for filter design errors."""

    pass


class InvalidParameterError(FilterDesignError, ValueError):
    """Raised when a caller-supplied design parameter is invalid.

    Always raised before any design or filtering work starts.
    """

    pass


class InvalidOrderError(InvalidParameterError):
    """Raised when filter order is invalid.

    This occurs when:
    - Order is not an integer (booleans included)
    - Order is zero or negative
    """

    pass


class InvalidSamplingFrequencyError(InvalidParameterError):
    """Raised when the sampling frequency is not a positive finite number."""

    pass


class InvalidCutoffError(InvalidParameterError):
    """Raised when cutoff frequency is invalid.

    This occurs when:
    - Cutoff is not finite
    - Cutoff is zero or negative
    - The wrong number of cutoffs is given for the filter type
    """

    pass


class NyquistViolationError(InvalidCutoffError):
    """Raised when frequency reaches or exceeds the Nyquist frequency.

    This occurs when:
    - Cutoff >= sampling_frequency / 2
    - Normalized cutoff >= 1
    """

    pass


class FrequencyOrderError(InvalidCutoffError):
    """Raised when band edges are not in ascending order.

    For bandpass and bandstop filters the low cutoff must be strictly
    below the high cutoff.
    """

    pass


class InvalidFilterTypeError(InvalidParameterError):
    """Raised for an unknown filter type or output format."""

    pass


class DesignError(FilterDesignError, RuntimeError):
    """Raised when the design pipeline reaches an inconsistent state.

    This occurs when:
    - A prototype pole lies on the imaginary axis
    - The bilinear transform maps a pole onto z = 1 or to infinity
    - The resulting cascade is unstable or has non-finite coefficients

    None of these are reachable for valid parameters, so seeing one
    points at a bug rather than at bad input.
    """

    pass


class SOSNormalizationError(FilterDesignError):
    """Raised when second-order section normalization fails.

    This occurs when:
    - a0 coefficient is zero (cannot normalize)
    """

    pass
