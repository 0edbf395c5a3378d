"""Predicted row count of a Butterworth SOS matrix."""

from typing import Literal

from ._constants import BAND_FILTER_TYPES
from ._validation import validate_filter_type, validate_order


def sos_sections_count(
    order: int,
    filter_type: Literal[
        "lowpass", "highpass", "bandpass", "bandstop"
    ] = "lowpass",
) -> int:
    """Number of rows ``butterworth_design(order, ..., filter_type)`` returns.

    A lowpass or highpass of order N has N poles, paired into
    ``ceil(N / 2)`` sections (one of them first-order when N is odd). The
    band transforms double the pole count to 2N, which always pairs into
    exactly N sections.

    Examples
    --------
    >>> sos_sections_count(5)
    3
    >>> sos_sections_count(5, "bandstop")
    5
    """
    order = validate_order(order)
    if validate_filter_type(filter_type) in BAND_FILTER_TYPES:
        return order
    return (order + 1) // 2
