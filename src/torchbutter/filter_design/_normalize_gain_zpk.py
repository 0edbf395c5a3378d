"""Gain normalization of a digital zpk filter at a reference frequency."""

import math
from typing import Tuple, Union

import torch
from torch import Tensor

from ._exceptions import DesignError


def normalize_gain_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    frequency: Union[float, Tensor] = 0.0,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Rescale the gain of a digital filter to unit magnitude at a frequency.

    Parameters
    ----------
    zeros : Tensor
        Zeros of the digital filter.
    poles : Tensor
        Poles of the digital filter.
    gain : Tensor
        System gain of the digital filter.
    frequency : float or Tensor
        Reference angular frequency in rad/sample, 0 (DC) to pi (Nyquist).

    Returns
    -------
    zeros, poles, gain_new : tuple of Tensors
        Zeros and poles unchanged, gain rescaled so that
        ``|H(exp(j*frequency))| == 1``. The sign of the gain is kept.

    Raises
    ------
    DesignError
        If the response at the reference frequency is zero or not finite.

    Examples
    --------
    >>> z, p, k = normalize_gain_zpk(z, p, k, frequency=0.0)  # unity DC gain
    >>> z, p, k = normalize_gain_zpk(z, p, k, frequency=math.pi)  # Nyquist
    """
    if not isinstance(frequency, Tensor):
        frequency = torch.as_tensor(
            frequency, dtype=torch.float64, device=poles.device
        )
    if not 0.0 <= float(frequency.detach()) <= math.pi:
        raise DesignError(
            f"Reference frequency must lie in [0, pi], got {float(frequency)}"
        )

    z = torch.exp(1j * frequency.to(torch.float64)).to(poles.dtype)
    # exp(j*pi) carries a ~1e-16 imaginary residue
    if float(frequency.detach()) == math.pi:
        z = -torch.ones_like(z)
    response = torch.prod(z - zeros) / torch.prod(z - poles)
    magnitude = (gain * response).abs()

    if not bool(torch.isfinite(magnitude)) or float(magnitude.detach()) == 0.0:
        raise DesignError(
            f"Cannot normalize gain: response at {float(frequency)} rad/sample "
            f"is {float(magnitude.detach())}"
        )

    gain_new = gain / magnitude.to(gain.dtype)

    return zeros, poles, gain_new
