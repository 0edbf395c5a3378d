"""Lowpass to bandstop transform of an analog filter."""

from typing import Tuple, Union

import torch
from torch import Tensor

from ._validation import as_positive_frequency
from ._zpk_utils import product_ratio, quadratic_root_pairs, repeated_roots


def lowpass_to_bandstop_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    center_frequency: Union[float, Tensor] = 1.0,
    bandwidth: Union[float, Tensor] = 1.0,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Turn an analog lowpass with a 1 rad/s corner into a bandstop.

    Parameters
    ----------
    zeros, poles : Tensor
        Roots of the analog lowpass.
    gain : Tensor
        Its gain.
    center_frequency : float or Tensor
        Geometric centre of the rejected band sqrt(low * high), rad/s.
    bandwidth : float or Tensor
        Rejected band width high - low, rad/s.

    Returns
    -------
    zeros, poles, gain : tuple of Tensors
        The bandstop. Root counts double.

    Raises
    ------
    InvalidCutoffError
        If center_frequency or bandwidth is not positive and finite.

    Notes
    -----
    The substitution is :math:`s \\to B s / (s^2 + \\Omega_0^2)`. A root r
    splits into the solutions of :math:`s^2 - (B / r) s + \\Omega_0^2 = 0`.
    Each zero at infinity becomes the pair :math:`\\pm j \\Omega_0`, which
    is the notch. The gain is multiplied by ``real(prod(-zeros) /
    prod(-poles))`` so the DC level is kept.
    """
    center = as_positive_frequency(center_frequency, gain, "center_frequency")
    width = as_positive_frequency(bandwidth, gain, "bandwidth")
    center_sq = center * center
    excess = poles.numel() - zeros.numel()

    notch = torch.stack([1j * center, -1j * center])
    zeros_new = torch.cat(
        [
            quadratic_root_pairs(width / (2 * zeros.to(poles.dtype)), center_sq),
            repeated_roots(notch, excess, poles),
        ]
    )
    poles_new = quadratic_root_pairs(width / (2 * poles), center_sq)

    return zeros_new, poles_new, gain * product_ratio(zeros, poles)
