"""Butterworth analog lowpass filter prototype."""

import math
from typing import Optional, Tuple

import torch
from torch import Tensor

from ._exceptions import DesignError, InvalidParameterError
from ._validation import validate_order


def butterworth_prototype(
    order: int,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Place the poles of the order-N analog Butterworth lowpass.

    The prototype has its -3 dB corner at 1 rad/s; band transforms move
    it afterwards.

    Parameters
    ----------
    order : int
        Filter order. Must be a positive integer.
    dtype : torch.dtype, optional
        Real dtype of the result, float32 or float64. Defaults to
        torch.get_default_dtype().
    device : torch.device, optional
        Output device. Defaults to CPU.

    Returns
    -------
    zeros : Tensor
        Empty complex tensor; every zero is at infinity.
    poles : Tensor
        Shape (order,), complex64 or complex128 to match ``dtype``.
    gain : Tensor
        0-d tensor equal to 1.

    Raises
    ------
    InvalidOrderError
        If order is not a positive integer.
    DesignError
        If a pole cannot be placed in the open left half-plane.

    Notes
    -----
    The poles sit on the unit circle in the left half of the s-plane,
    equally spaced in angle:

    .. math::
        \\theta_k = \\frac{\\pi}{2} + \\frac{(2k - 1) \\pi}{2n}
        \\quad \\text{for } k = 1, \\ldots, n

    The filter has no finite zeros (all zeros at infinity). Conjugate
    poles come out at mirrored indices, and for odd orders the middle
    pole is the real pole at -1.

    Examples
    --------
    >>> zeros, poles, gain = butterworth_prototype(4)
    >>> poles.shape
    torch.Size([4])
    >>> gain
    tensor(1.)
    """
    order = validate_order(order)

    if dtype is None:
        dtype = torch.get_default_dtype()
    if device is None:
        device = torch.device("cpu")

    if dtype == torch.float32:
        complex_dtype = torch.complex64
    elif dtype == torch.float64:
        complex_dtype = torch.complex128
    else:
        raise InvalidParameterError(f"Unsupported dtype: {dtype}")

    zeros = torch.empty(0, dtype=complex_dtype, device=device)

    # Angles are computed in float64 and cast at the end
    k_indices = torch.arange(1, order + 1, dtype=torch.float64, device=device)
    angles = math.pi / 2 + (2 * k_indices - 1) * math.pi / (2 * order)

    real = torch.cos(angles)
    imag = torch.sin(angles)

    # Mirror stray right half-plane poles; a pole on the axis is unusable
    if torch.any(real == 0):
        raise DesignError(
            f"Prototype pole on the imaginary axis for order {order}"
        )
    real = -real.abs()

    poles = torch.complex(real, imag).to(complex_dtype)

    gain = torch.tensor(1.0, dtype=dtype, device=device)

    return zeros, poles, gain
