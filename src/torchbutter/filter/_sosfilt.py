"""Second-order sections (SOS) filter implementation."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

import torch
from torch import Tensor

from torchbutter.filter_design._exceptions import (
    InvalidParameterError,
    SOSNormalizationError,
)


def sosfilt(
    sos: Tensor,
    x: Union[Tensor, Sequence[float]],
    dim: int = -1,
    zi: Optional[Tensor] = None,
) -> Union[Tensor, tuple[Tensor, Tensor]]:
    """
    Filter data along one dimension using cascaded second-order sections.

    Parameters
    ----------
    sos : Tensor
        Second-order sections, shape ``(n_sections, 6)``. Each row contains
        ``[b0, b1, b2, a0, a1, a2]`` for one biquad section. Rows are
        divided by their ``a0`` before filtering.
    x : Tensor or sequence of float
        Input signal. Can be batched with arbitrary leading dimensions;
        every channel is filtered independently.
    dim : int, optional
        Dimension along which to filter. Default is -1 (last dimension).
    zi : Tensor, optional
        Initial delays, shape ``(..., n_sections, 2)`` where ``...`` matches
        the batch dimensions of ``x``, or ``(n_sections, 2)`` to share one
        starting state across the batch. If provided, returns ``(y, zf)``.

    Returns
    -------
    y : Tensor
        Filtered signal, same shape as ``x``. Always a new tensor.
    zf : Tensor, optional
        Final delays, shape ``(..., n_sections, 2)`` (only if ``zi`` was
        provided).

    Raises
    ------
    InvalidParameterError
        If ``sos`` or ``zi`` has the wrong shape, or ``x`` is complex.
    SOSNormalizationError
        If any section has ``a0 == 0``.

    Notes
    -----
    Each section runs the Direct Form II Transposed recursion with
    delays :math:`(s_1, s_2)`:

    .. math::
        y[n] &= b_0 x[n] + s_1 \\\\
        s_1 &\\leftarrow b_1 x[n] + s_2 - a_1 y[n] \\\\
        s_2 &\\leftarrow b_2 x[n] - a_2 y[n]

    and its output feeds the next section. Without ``zi`` the delays start
    at zero on every call, so no state survives between calls.

    Fully differentiable with respect to ``sos`` and ``x``.

    Examples
    --------
    >>> import torch
    >>> from torchbutter.filter import sosfilt
    >>> from torchbutter.filter_design import butterworth_design
    >>> sos = butterworth_design(4, 0.2, dtype=torch.float64)
    >>> x = torch.randn(100, dtype=torch.float64)
    >>> y = sosfilt(sos, x)

    >>> # Filter in two blocks, carrying the delays across
    >>> zi = torch.zeros(sos.shape[0], 2, dtype=torch.float64)
    >>> y1, zf = sosfilt(sos, x[:50], zi=zi)
    >>> y2, zf = sosfilt(sos, x[50:], zi=zf)
    """
    sos = _normalize_sos(sos)
    n_sections = sos.shape[0]

    if not isinstance(x, Tensor):
        x = torch.as_tensor(x, dtype=torch.float64)
    if x.is_complex():
        raise InvalidParameterError("sosfilt only filters real signals")
    if x.ndim == 0:
        raise InvalidParameterError("Input signal must have at least one dimension")

    dtype = torch.promote_types(sos.dtype, x.dtype)
    if not dtype.is_floating_point:
        dtype = torch.float64
    sos = sos.to(dtype=dtype, device=x.device)

    x_moved = torch.movedim(x.to(dtype), dim, -1)
    batch_shape = x_moved.shape[:-1]
    n_samples = x_moved.shape[-1]
    batch_size = math.prod(batch_shape)
    x_flat = x_moved.reshape(batch_size, n_samples)

    if zi is None:
        state = torch.zeros(
            batch_size, n_sections, 2, dtype=dtype, device=x.device
        )
    else:
        zi = zi.to(dtype=dtype, device=x.device)
        if zi.shape == (n_sections, 2):
            state = zi.unsqueeze(0).expand(batch_size, n_sections, 2)
        elif zi.shape == batch_shape + (n_sections, 2):
            state = zi.reshape(batch_size, n_sections, 2)
        else:
            raise InvalidParameterError(
                f"zi must have shape {tuple(batch_shape + (n_sections, 2))} "
                f"or {(n_sections, 2)}, got {tuple(zi.shape)}"
            )

    y = x_flat.clone()
    final_states = []
    for i in range(n_sections):
        y, section_state = _biquad(sos[i], y, state[:, i, :])
        final_states.append(section_state)

    y = torch.movedim(y.reshape(batch_shape + (n_samples,)), -1, dim)

    if zi is not None:
        if final_states:
            zf = torch.stack(final_states, dim=1)
        else:
            zf = state
        return y, zf.reshape(batch_shape + (n_sections, 2))

    return y


def _normalize_sos(sos: Tensor) -> Tensor:
    if sos.ndim != 2 or sos.shape[1] != 6:
        raise InvalidParameterError(
            f"sos must be shape (n_sections, 6), got {tuple(sos.shape)}"
        )
    if sos.is_complex():
        raise InvalidParameterError("sos coefficients must be real")

    a0 = sos[:, 3:4]
    if bool(torch.any(a0 == 0)):
        raise SOSNormalizationError(
            f"SOS sections must have non-zero a0, got {a0.flatten().tolist()}"
        )
    return sos / a0


def _biquad(
    section: Tensor,
    x: Tensor,
    state: Tensor,
) -> tuple[Tensor, Tensor]:
    """Run one DF2T section over ``x`` of shape (batch, time)."""
    b0, b1, b2, _, a1, a2 = section
    s1 = state[:, 0]
    s2 = state[:, 1]

    outputs = []
    for n in range(x.shape[-1]):
        x_n = x[:, n]
        y_n = b0 * x_n + s1
        s1 = b1 * x_n + s2 - a1 * y_n
        s2 = b2 * x_n - a2 * y_n
        outputs.append(y_n)

    if outputs:
        y = torch.stack(outputs, dim=-1)
    else:
        y = x.clone()

    return y, torch.stack([s1, s2], dim=-1)
