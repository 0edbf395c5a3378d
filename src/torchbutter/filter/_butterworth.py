"""Butterworth filtering at a fixed sampling frequency."""

from __future__ import annotations

import logging
from typing import Literal, Optional, Sequence, Union

import torch
from torch import Tensor

from torchbutter.filter_design._butterworth_design import butterworth_design
from torchbutter.filter_design._exceptions import InvalidParameterError
from torchbutter.filter_design._validation import validate_sampling_frequency

from ._sos_filter import SOSFilter
from ._sosfilt import sosfilt

logger = logging.getLogger(__name__)

FilterType = Literal["lowpass", "highpass", "bandpass", "bandstop"]
Cutoff = Union[float, Sequence[float], Tensor]


class Butterworth:
    """Low-pass, high-pass, band-pass and band-stop Butterworth filtering.

    Every filtering call designs a fresh cascade of second-order sections
    and runs it over the whole signal from zero state. The instance only
    stores the sampling frequency and dtype/device, so calls never
    influence each other and one instance may be shared between threads.

    Parameters
    ----------
    sampling_frequency : float
        Sampling frequency of the signals in Hz. Must be positive.
    dtype : torch.dtype, optional
        Dtype for coefficients and output. Default is torch.float64.
    device : torch.device, optional
        Device for coefficients and output. Defaults to CPU.

    Raises
    ------
    InvalidSamplingFrequencyError
        If sampling_frequency is not positive and finite.

    Examples
    --------
    >>> import torch
    >>> from torchbutter import Butterworth
    >>> flt = Butterworth(100.0)
    >>> y = flt.lowpass_filter(torch.ones(64), order=2, cutoff=10.0)
    >>> y = flt.bandpass_filter(torch.randn(256), 4, 20.0, 30.0)
    """

    def __init__(
        self,
        sampling_frequency: float,
        *,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ):
        if dtype not in (torch.float32, torch.float64):
            raise InvalidParameterError(f"Unsupported dtype: {dtype}")
        self._sampling_frequency = validate_sampling_frequency(
            sampling_frequency
        )
        self._dtype = dtype
        self._device = torch.device("cpu") if device is None else torch.device(device)

    @property
    def sampling_frequency(self) -> float:
        return self._sampling_frequency

    @property
    def nyquist_frequency(self) -> float:
        return self._sampling_frequency / 2.0

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    @property
    def device(self) -> torch.device:
        return self._device

    def lowpass_filter(
        self,
        signal: Union[Tensor, Sequence[float]],
        order: int,
        cutoff: float,
    ) -> Tensor:
        """Low-pass filter ``signal``.

        Parameters
        ----------
        signal : Tensor or sequence of float
            Samples, time on the last dimension.
        order : int
            Filter order. Must be positive.
        cutoff : float
            -3 dB frequency in Hz, in (0, sampling_frequency / 2).

        Returns
        -------
        Tensor
            Filtered signal of the same shape.

        Raises
        ------
        InvalidParameterError
            If order or cutoff is invalid. Nothing is filtered.
        """
        return self._apply(signal, order, cutoff, "lowpass")

    def highpass_filter(
        self,
        signal: Union[Tensor, Sequence[float]],
        order: int,
        cutoff: float,
    ) -> Tensor:
        """High-pass filter ``signal``; parameters as for ``lowpass_filter``."""
        return self._apply(signal, order, cutoff, "highpass")

    def bandpass_filter(
        self,
        signal: Union[Tensor, Sequence[float]],
        order: int,
        low_cutoff: float,
        high_cutoff: float,
    ) -> Tensor:
        """Band-pass filter ``signal`` between two cutoffs in Hz.

        ``low_cutoff`` must be strictly below ``high_cutoff`` and both must
        lie in (0, sampling_frequency / 2); otherwise an
        InvalidParameterError is raised and nothing is filtered. The
        resulting cascade has ``order`` sections.
        """
        return self._apply(signal, order, (low_cutoff, high_cutoff), "bandpass")

    def bandstop_filter(
        self,
        signal: Union[Tensor, Sequence[float]],
        order: int,
        low_cutoff: float,
        high_cutoff: float,
    ) -> Tensor:
        """Band-stop filter ``signal``; parameters as for ``bandpass_filter``."""
        return self._apply(signal, order, (low_cutoff, high_cutoff), "bandstop")

    def design(
        self,
        order: int,
        cutoff: Cutoff,
        filter_type: FilterType = "lowpass",
    ) -> Tensor:
        """Return the SOS matrix the filtering methods would use."""
        return butterworth_design(
            order,
            cutoff,
            filter_type,
            output="sos",
            sampling_frequency=self._sampling_frequency,
            dtype=self._dtype,
            device=self._device,
        )

    def stream(
        self,
        order: int,
        cutoff: Cutoff,
        filter_type: FilterType = "lowpass",
        *,
        channels: Optional[int] = None,
    ) -> SOSFilter:
        """Return a new streaming handle for sample-at-a-time filtering."""
        return SOSFilter(
            self.design(order, cutoff, filter_type),
            channels=channels,
            dtype=self._dtype,
        )

    def _apply(
        self,
        signal: Union[Tensor, Sequence[float]],
        order: int,
        cutoff: Cutoff,
        filter_type: FilterType,
    ) -> Tensor:
        x = self._as_signal(signal)
        sos = self.design(order, cutoff, filter_type)
        logger.debug(
            "Applying %s filter: order=%d sections=%d samples=%d",
            filter_type,
            order,
            sos.shape[0],
            x.shape[-1],
        )
        return sosfilt(sos, x)

    def _as_signal(self, signal: Union[Tensor, Sequence[float]]) -> Tensor:
        if isinstance(signal, Tensor):
            x = signal
        else:
            try:
                x = torch.as_tensor(signal, dtype=self._dtype)
            except (TypeError, ValueError, RuntimeError) as error:
                raise InvalidParameterError(
                    "Signal must be a tensor or a sequence of real numbers"
                ) from error
        if x.is_complex():
            raise InvalidParameterError("Signal must be real-valued")
        if x.ndim == 0:
            raise InvalidParameterError(
                "Signal must have at least one dimension"
            )
        return x.to(dtype=self._dtype, device=self._device)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sampling_frequency={self._sampling_frequency}, "
            f"dtype={self._dtype})"
        )
