"""Stability check for cascades of second-order sections."""

import torch
from torch import Tensor

from torchbutter.filter_design._exceptions import SOSNormalizationError


def is_stable_sos(sos: Tensor) -> bool:
    """Return True if every section has its poles strictly inside the unit circle.

    Parameters
    ----------
    sos : Tensor
        Second-order sections, shape (n_sections, 6).

    Returns
    -------
    stable : bool

    Raises
    ------
    SOSNormalizationError
        If any a0 coefficient is zero.

    Notes
    -----
    For the denominator ``1 + a1 z^-1 + a2 z^-2`` both roots lie inside
    the unit circle exactly when ``|a2| < 1`` and ``|a1| < 1 + a2``
    (the Jury conditions for a quadratic). First-order sections have
    ``a2 = 0`` and reduce to ``|a1| < 1``. Non-finite coefficients count
    as unstable.

    Examples
    --------
    >>> is_stable_sos(torch.tensor([[1.0, 0.0, 0.0, 1.0, -0.5, 0.0]]))
    True
    >>> is_stable_sos(torch.tensor([[1.0, 0.0, 0.0, 1.0, -1.0, 0.0]]))
    False
    """
    if sos.numel() == 0:
        return True

    sos = sos.detach().to(torch.float64)
    a0 = sos[:, 3]
    if bool(torch.any(a0 == 0)):
        raise SOSNormalizationError("SOS sections must have non-zero a0")

    a1 = sos[:, 4] / a0
    a2 = sos[:, 5] / a0

    if not bool(torch.all(torch.isfinite(sos))):
        return False

    return bool(torch.all((a2.abs() < 1) & (a1.abs() < 1 + a2)))
