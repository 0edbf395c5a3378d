"""Cutoff scaling of an analog lowpass filter."""

from typing import Tuple, Union

from torch import Tensor

from ._validation import as_positive_frequency


def lowpass_to_lowpass_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    cutoff_frequency: Union[float, Tensor] = 1.0,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Rescale an analog lowpass from a 1 rad/s corner to ``cutoff_frequency``.

    Substitutes s -> s / cutoff_frequency.

    Parameters
    ----------
    zeros, poles : Tensor
        Roots of the analog lowpass.
    gain : Tensor
        Its gain.
    cutoff_frequency : float or Tensor
        Target corner in rad/s.

    Returns
    -------
    zeros, poles, gain : tuple of Tensors
        Roots scaled by ``cutoff_frequency``; the gain picks up
        ``cutoff_frequency ** (n_poles - n_zeros)`` so DC is unchanged.

    Raises
    ------
    InvalidCutoffError
        If cutoff_frequency is not positive and finite.
    """
    scale = as_positive_frequency(cutoff_frequency, gain, "cutoff_frequency")
    excess = poles.numel() - zeros.numel()

    return zeros * scale, poles * scale, gain * scale**excess
