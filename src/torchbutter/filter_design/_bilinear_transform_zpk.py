"""Bilinear (Tustin) mapping of an analog zpk filter to the z-plane."""

from typing import Tuple, Union

import torch
from torch import Tensor

from ._exceptions import DesignError, InvalidParameterError
from ._validation import validate_sampling_frequency
from ._zpk_utils import product_ratio, repeated_roots


def bilinear_transform_zpk(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    sampling_frequency: Union[float, Tensor],
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Discretize an analog filter with the bilinear transform.

    Uses :math:`s = 2 f_s (z - 1) / (z + 1)`, i.e. every analog root r
    lands on :math:`(2 f_s + r) / (2 f_s - r)`.

    Parameters
    ----------
    zeros, poles : Tensor
        Roots of the analog filter.
    gain : Tensor
        Its gain.
    sampling_frequency : float or Tensor
        Sampling rate in Hz.

    Returns
    -------
    zeros, poles, gain : tuple of Tensors
        The digital filter. Zeros at infinity become zeros at z = -1, so
        the result has as many zeros as poles. The gain is multiplied by
        ``real(prod(2*fs - zeros) / prod(2*fs - poles))``.

    Raises
    ------
    InvalidSamplingFrequencyError
        If sampling_frequency is not positive and finite.
    InvalidParameterError
        If there are more zeros than poles.
    DesignError
        If a pole sits at s = 2*fs, which has no finite image, or at
        s = 0, whose image z = 1 is on the unit circle.

    Notes
    -----
    The open left half-plane maps into the open unit disc, so stable
    analog poles stay stable. Frequencies are compressed along the way;
    see ``prewarp_frequency``.
    """
    if isinstance(sampling_frequency, Tensor):
        validate_sampling_frequency(sampling_frequency.item())
        two_fs = 2 * sampling_frequency
    else:
        two_fs = torch.as_tensor(
            2 * validate_sampling_frequency(sampling_frequency),
            dtype=gain.dtype,
            device=gain.device,
        )

    if bool(torch.any((two_fs.detach() - poles.detach()).abs() == 0)):
        raise DesignError(
            f"Pole at s = 2*fs = {float(two_fs)} has no image under the "
            "bilinear transform"
        )
    if bool(torch.any(poles.detach() == 0)):
        raise DesignError("Pole at s = 0 maps onto the unit circle at z = 1")

    def to_z(roots: Tensor) -> Tensor:
        return (two_fs + roots) / (two_fs - roots)

    excess = poles.numel() - zeros.numel()
    if excess < 0:
        raise InvalidParameterError(
            f"Improper filter: {zeros.numel()} zeros, {poles.numel()} poles"
        )

    zeros_digital = torch.cat(
        [to_z(zeros.to(poles.dtype)), repeated_roots(-1.0, excess, poles)]
    )
    gain_digital = gain * product_ratio(zeros, poles, at=two_fs)

    return zeros_digital, to_z(poles), gain_digital
