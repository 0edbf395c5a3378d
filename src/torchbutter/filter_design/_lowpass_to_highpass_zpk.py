"""Lowpass to highpass inversion of an analog filter."""

from typing import Tuple, Union

import torch
from torch import Tensor

from ._validation import as_positive_frequency
from ._zpk_utils import product_ratio, repeated_roots


def lowpass_to_highpass_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    cutoff_frequency: Union[float, Tensor] = 1.0,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Turn an analog lowpass with a 1 rad/s corner into a highpass.

    Substitutes s -> cutoff_frequency / s. Every root r moves to
    ``cutoff_frequency / r``, the missing zeros land at s = 0, and the gain
    is multiplied by ``real(prod(-zeros) / prod(-poles))`` so that the
    highpass reaches at infinite frequency the level the lowpass had at DC.

    Parameters
    ----------
    zeros, poles : Tensor
        Roots of the analog lowpass.
    gain : Tensor
        Its gain.
    cutoff_frequency : float or Tensor
        Highpass corner in rad/s.

    Returns
    -------
    zeros, poles, gain : tuple of Tensors
        The highpass, with as many zeros as poles.

    Raises
    ------
    InvalidCutoffError
        If cutoff_frequency is not positive and finite.
    """
    corner = as_positive_frequency(cutoff_frequency, gain, "cutoff_frequency")
    excess = poles.numel() - zeros.numel()

    zeros_new = torch.cat(
        [corner / zeros.to(poles.dtype), repeated_roots(0.0, excess, poles)]
    )

    return zeros_new, corner / poles, gain * product_ratio(zeros, poles)
