"""Frequency pre-warping for the bilinear transform."""

import math
from typing import Union

import torch
from torch import Tensor

from ._validation import validate_sampling_frequency


def prewarp_frequency(
    frequency: Union[float, Tensor],
    sampling_frequency: float,
) -> Tensor:
    """
    Pre-warp a digital frequency to the analog frequency the bilinear
    transform maps onto it.

    Parameters
    ----------
    frequency : float or Tensor
        Frequency or frequencies in Hz, each in (0, sampling_frequency / 2).
    sampling_frequency : float
        Sampling frequency in Hz.

    Returns
    -------
    warped : Tensor
        Analog angular frequency in rad/s, same shape as ``frequency``.

    Notes
    -----
    With :math:`\\omega = 2 \\pi f` the warped frequency is

    .. math::
        \\Omega = 2 f_s \\tan\\left(\\frac{\\omega}{2 f_s}\\right)

    so the analog corner lands exactly on ``frequency`` after the
    bilinear transform.

    Examples
    --------
    >>> prewarp_frequency(10.0, 100.0)
    tensor(64.9839, dtype=torch.float64)
    """
    sampling_frequency = validate_sampling_frequency(sampling_frequency)
    if not isinstance(frequency, Tensor):
        frequency = torch.as_tensor(frequency, dtype=torch.float64)

    return 2.0 * sampling_frequency * torch.tan(
        math.pi * frequency / sampling_frequency
    )
