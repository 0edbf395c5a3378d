"""Complex frequency response of a cascade of second-order sections."""

import math
from typing import Optional, Tuple, Union

import torch
from torch import Tensor

from torchbutter.filter_design._exceptions import (
    InvalidParameterError,
    SOSNormalizationError,
)


def frequency_response_sos(
    sos: Tensor,
    frequencies: Union[Tensor, int] = 512,
    whole: bool = False,
    sampling_frequency: Optional[float] = None,
    validate: bool = True,
) -> Tuple[Tensor, Tensor]:
    """
    Evaluate H(e^{jw}) of an SOS cascade.

    Parameters
    ----------
    sos : Tensor
        Cascade of shape (n_sections, 6), rows [b0, b1, b2, a0, a1, a2].
    frequencies : Tensor or int, default 512
        Either a count of evenly spaced points starting at 0 and stopping
        short of Nyquist (of the sampling frequency when ``whole``), or the
        frequencies themselves.
    whole : bool, default False
        Span the whole unit circle instead of the upper half. Only used
        when ``frequencies`` is a count.
    sampling_frequency : float, optional
        Units of ``frequencies``: Hz if given, otherwise fractions of the
        Nyquist frequency (1 = Nyquist).
    validate : bool, default True
        Reject sections whose a0 is not 1.

    Returns
    -------
    frequencies : Tensor
        The evaluation grid, in the units described above.
    response : Tensor
        complex128 response at each grid point.

    Raises
    ------
    InvalidParameterError
        If ``frequencies`` is a count below 1.
    SOSNormalizationError
        If ``validate`` and some a0 differs from 1.

    Examples
    --------
    >>> from torchbutter import butterworth_design
    >>> sos = butterworth_design(4, 10.0, sampling_frequency=100.0)
    >>> f, h = frequency_response_sos(sos, sampling_frequency=100.0)
    >>> gain_db = 20 * torch.log10(h.abs())
    """
    device = sos.device
    coefficients = sos.detach().to(torch.float64)

    if validate and coefficients.numel() > 0:
        a0 = coefficients[:, 3]
        if not torch.allclose(a0, torch.ones_like(a0), atol=1e-10):
            raise SOSNormalizationError(
                f"Expected a0 = 1 in every section, got {a0.tolist()}"
            )

    if isinstance(frequencies, int):
        if isinstance(frequencies, bool) or frequencies < 1:
            raise InvalidParameterError(
                f"Number of frequency points must be positive, got {frequencies!r}"
            )
        span = 2.0 if whole else 1.0
        if sampling_frequency is not None:
            span = span * sampling_frequency / 2.0
        grid = torch.arange(frequencies, dtype=torch.float64, device=device)
        grid = grid * (span / frequencies)
    else:
        grid = frequencies.to(dtype=torch.float64, device=device).reshape(-1)

    nyquist = 1.0 if sampling_frequency is None else sampling_frequency / 2.0
    w = math.pi * grid / nyquist

    # Rows of [1, z^-1, z^-2] for every grid point
    powers = torch.exp(
        -1j * w.unsqueeze(-1) * torch.arange(3, dtype=torch.float64, device=device)
    )
    numerators = coefficients[:, :3].to(torch.complex128) @ powers.T
    denominators = coefficients[:, 3:].to(torch.complex128) @ powers.T
    response = torch.prod(numerators / denominators, dim=0)

    return grid.to(sos.dtype), response
