"""Stateful sample-at-a-time filtering with second-order sections."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import torch
from torch import Tensor

from torchbutter.filter_design._exceptions import InvalidParameterError

from ._sosfilt import _normalize_sos, sosfilt


class SOSFilter:
    """Streaming handle around a cascade of second-order sections.

    The handle owns the per-section delays and carries them from one call
    to the next, so a signal can be fed one sample or one block at a time.
    Feeding a signal in pieces produces the same output as filtering it in
    one ``sosfilt`` call. A handle is meant for a single caller; create one
    per channel group or per thread.

    Parameters
    ----------
    sos : Tensor
        Second-order sections, shape ``(n_sections, 6)``.
    channels : int, optional
        Number of independent channels. If None (default), samples are
        scalars; otherwise each sample is a vector of length ``channels``.
    dtype : torch.dtype, optional
        Working dtype. Defaults to the dtype of ``sos`` promoted to
        floating point.

    Examples
    --------
    >>> import torch
    >>> from torchbutter import Butterworth
    >>> stream = Butterworth(100.0).stream(2, 10.0)
    >>> y0 = stream(1.0)
    >>> y1 = stream(1.0)
    >>> block = stream.process(torch.ones(62, dtype=torch.float64))
    >>> stream.reset()
    """

    def __init__(
        self,
        sos: Tensor,
        *,
        channels: Optional[int] = None,
        dtype: Optional[torch.dtype] = None,
    ):
        sos = _normalize_sos(sos)
        if dtype is None:
            dtype = sos.dtype if sos.dtype.is_floating_point else torch.float64
        if channels is not None and (
            isinstance(channels, bool)
            or not isinstance(channels, int)
            or channels < 1
        ):
            raise InvalidParameterError(
                f"channels must be a positive integer, got {channels!r}"
            )

        self._sos = sos.detach().to(dtype)
        self._channels = channels
        self._batch_shape = () if channels is None else (channels,)
        self.reset()

    @property
    def sos(self) -> Tensor:
        """The (a0-normalized) cascade this handle runs."""
        return self._sos

    @property
    def channels(self) -> Optional[int]:
        return self._channels

    @property
    def n_sections(self) -> int:
        return self._sos.shape[0]

    @property
    def state(self) -> Tensor:
        """Copy of the current delays, shape ``(..., n_sections, 2)``."""
        return self._state.clone()

    def reset(self) -> None:
        """Zero the delays of every section."""
        self._state = torch.zeros(
            self._batch_shape + (self.n_sections, 2),
            dtype=self._sos.dtype,
            device=self._sos.device,
        )

    def filter(self, sample: Union[Tensor, float, Sequence[float]]) -> Tensor:
        """Filter one sample and return one output sample.

        Parameters
        ----------
        sample : Tensor or float or sequence of float
            A scalar, or a vector of length ``channels`` for a
            multi-channel handle.

        Returns
        -------
        output : Tensor
            0-d tensor, or shape ``(channels,)``.
        """
        x = self._as_input(sample)
        if tuple(x.shape) != self._batch_shape:
            raise InvalidParameterError(
                f"Expected a sample of shape {self._batch_shape}, "
                f"got {tuple(x.shape)}"
            )
        y, self._state = sosfilt(self._sos, x.unsqueeze(-1), zi=self._state)
        return y[..., 0]

    __call__ = filter

    def process(self, chunk: Union[Tensor, Sequence[float]]) -> Tensor:
        """Filter a block of samples (time on the last dimension)."""
        x = self._as_input(chunk)
        if x.ndim == 0 or tuple(x.shape[:-1]) != self._batch_shape:
            raise InvalidParameterError(
                f"Expected a block of shape {self._batch_shape + ('n',)}, "
                f"got {tuple(x.shape)}"
            )
        y, self._state = sosfilt(self._sos, x, zi=self._state)
        return y

    def _as_input(self, value: Union[Tensor, float, Sequence[float]]) -> Tensor:
        if not isinstance(value, Tensor):
            value = torch.as_tensor(value, dtype=self._sos.dtype)
        if value.is_complex():
            raise InvalidParameterError("SOSFilter only filters real signals")
        return value.to(dtype=self._sos.dtype, device=self._sos.device)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_sections={self.n_sections}, "
            f"channels={self._channels}, dtype={self._sos.dtype})"
        )
