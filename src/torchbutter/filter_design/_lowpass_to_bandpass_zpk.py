"""Lowpass to bandpass transform of an analog filter."""

from typing import Tuple, Union

import torch
from torch import Tensor

from ._validation import as_positive_frequency
from ._zpk_utils import quadratic_root_pairs, repeated_roots


def lowpass_to_bandpass_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    center_frequency: Union[float, Tensor] = 1.0,
    bandwidth: Union[float, Tensor] = 1.0,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Turn an analog lowpass with a 1 rad/s corner into a bandpass.

    Parameters
    ----------
    zeros, poles : Tensor
        Roots of the analog lowpass.
    gain : Tensor
        Its gain.
    center_frequency : float or Tensor
        Geometric band centre sqrt(low * high), rad/s.
    bandwidth : float or Tensor
        Band width high - low, rad/s.

    Returns
    -------
    zeros, poles, gain : tuple of Tensors
        The bandpass. Root counts double.

    Raises
    ------
    InvalidCutoffError
        If center_frequency or bandwidth is not positive and finite.

    Notes
    -----
    The substitution is

    .. math::
        s \\to \\frac{s^2 + \\Omega_0^2}{B s}

    so a root r splits into the two solutions of
    :math:`s^2 - B r s + \\Omega_0^2 = 0`. The ``n_poles - n_zeros`` zeros
    at infinity become zeros at the origin and the gain is multiplied by
    :math:`B^{n_p - n_z}`. Both band edges then sit at -3 dB.
    """
    center = as_positive_frequency(center_frequency, gain, "center_frequency")
    width = as_positive_frequency(bandwidth, gain, "bandwidth")
    center_sq = center * center
    excess = poles.numel() - zeros.numel()

    poles_new = quadratic_root_pairs(width * poles / 2, center_sq)
    zeros_new = torch.cat(
        [
            quadratic_root_pairs(width * zeros.to(poles.dtype) / 2, center_sq),
            repeated_roots(0.0, excess, poles),
        ]
    )

    return zeros_new, poles_new, gain * width**excess
