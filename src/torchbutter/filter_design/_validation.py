"""Parameter validation shared by the design functions and the facade."""

from __future__ import annotations

import math
import operator
from typing import Sequence, Union

import torch
from torch import Tensor

from ._constants import BAND_FILTER_TYPES, FILTER_TYPES
from ._exceptions import (
    FrequencyOrderError,
    InvalidCutoffError,
    InvalidFilterTypeError,
    InvalidOrderError,
    InvalidSamplingFrequencyError,
    NyquistViolationError,
)


def validate_order(order: int) -> int:
    """Return ``order`` as an int, or raise InvalidOrderError."""
    if isinstance(order, bool):
        raise InvalidOrderError(
            f"Filter order must be a positive integer, got {order!r}"
        )
    try:
        order = operator.index(order)
    except TypeError as error:
        raise InvalidOrderError(
            f"Filter order must be a positive integer, got {order!r}"
        ) from error
    if order < 1:
        raise InvalidOrderError(f"Filter order must be positive, got {order}")
    return order


def validate_sampling_frequency(sampling_frequency: float) -> float:
    """Return ``sampling_frequency`` as a float, or raise."""
    if isinstance(sampling_frequency, bool):
        raise InvalidSamplingFrequencyError(
            f"Sampling frequency must be a number, got {sampling_frequency!r}"
        )
    try:
        value = float(sampling_frequency)
    except (TypeError, ValueError) as error:
        raise InvalidSamplingFrequencyError(
            f"Sampling frequency must be a number, got {sampling_frequency!r}"
        ) from error
    if not math.isfinite(value) or value <= 0:
        raise InvalidSamplingFrequencyError(
            f"Sampling frequency must be positive and finite, got {value}"
        )
    return value


def validate_filter_type(filter_type: str) -> str:
    if filter_type not in FILTER_TYPES:
        raise InvalidFilterTypeError(
            f"Invalid filter_type: {filter_type!r}. "
            f"Must be one of {', '.join(repr(t) for t in FILTER_TYPES)}."
        )
    return filter_type


def validate_cutoff(
    cutoff: Union[Tensor, float, Sequence[float]],
    filter_type: str,
    upper: float,
) -> Tensor:
    """Check cutoff frequencies against ``(0, upper)`` and band ordering.

    Parameters
    ----------
    cutoff : Tensor or float or sequence of float
        One frequency for lowpass/highpass, ``[low, high]`` for
        bandpass/bandstop.
    filter_type : str
        One of "lowpass", "highpass", "bandpass", "bandstop".
    upper : float
        Exclusive upper bound: the Nyquist frequency in Hz, or 1.0 for
        cutoffs normalized to Nyquist.

    Returns
    -------
    cutoff : Tensor
        0-d tensor for lowpass/highpass, shape (2,) otherwise. Tensor
        inputs keep their autograd graph.
    """
    if _contains_bool(cutoff):
        raise InvalidCutoffError(
            f"Cutoff must be a real number, not a boolean, got {cutoff!r}"
        )
    if isinstance(cutoff, Tensor):
        cutoff_tensor = cutoff
        if not cutoff_tensor.dtype.is_floating_point:
            cutoff_tensor = cutoff_tensor.to(torch.float64)
    else:
        try:
            cutoff_tensor = torch.as_tensor(cutoff, dtype=torch.float64)
        except (TypeError, ValueError, RuntimeError) as error:
            raise InvalidCutoffError(
                f"Cutoff must be a number or a pair of numbers, got {cutoff!r}"
            ) from error

    expected = 2 if filter_type in BAND_FILTER_TYPES else 1
    if cutoff_tensor.numel() != expected:
        raise InvalidCutoffError(
            f"{filter_type} requires {expected} cutoff "
            f"frequenc{'ies' if expected == 2 else 'y'}, "
            f"got {cutoff_tensor.numel()}"
        )
    cutoff_tensor = cutoff_tensor.reshape(()) if expected == 1 else cutoff_tensor.reshape(2)

    values = cutoff_tensor.detach().reshape(-1).tolist()
    for value in values:
        if not math.isfinite(value):
            raise InvalidCutoffError(f"Cutoff frequency must be finite, got {value}")
        if value <= 0:
            raise InvalidCutoffError(
                f"Cutoff frequency must be positive, got {value}"
            )
        if value >= upper:
            raise NyquistViolationError(
                f"Cutoff frequency must be below the Nyquist frequency "
                f"({upper}), got {value}"
            )

    if expected == 2 and values[0] >= values[1]:
        raise FrequencyOrderError(
            f"Lower cutoff frequency must be below the higher cutoff "
            f"frequency, got low={values[0]}, high={values[1]}"
        )

    return cutoff_tensor


def as_positive_frequency(
    value: Union[float, Tensor],
    reference: Tensor,
    name: str,
) -> Tensor:
    """Convert an analog frequency to a tensor next to ``reference``.

    Raises InvalidCutoffError unless every entry is positive and finite.
    """
    if not isinstance(value, Tensor):
        value = torch.as_tensor(
            value, dtype=reference.dtype, device=reference.device
        )
    detached = value.detach()
    if not bool(torch.all(torch.isfinite(detached))) or not bool(
        torch.all(detached > 0)
    ):
        raise InvalidCutoffError(
            f"{name} must be positive and finite, got {detached.tolist()}"
        )
    return value


def _contains_bool(cutoff) -> bool:
    if isinstance(cutoff, bool):
        return True
    if isinstance(cutoff, Tensor):
        return cutoff.dtype == torch.bool
    if isinstance(cutoff, (list, tuple)):
        return any(isinstance(value, bool) for value in cutoff)
    return False
