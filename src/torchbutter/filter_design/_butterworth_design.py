"""Butterworth digital filter design function."""

from __future__ import annotations

import logging
import math
from typing import Literal, Optional, Sequence

import torch
from torch import Tensor

from torchbutter.filter_analysis._is_stable_sos import is_stable_sos

from ._bilinear_transform_zpk import bilinear_transform_zpk
from ._butterworth_prototype import butterworth_prototype
from ._exceptions import DesignError, InvalidFilterTypeError
from ._lowpass_to_bandpass_zpk import lowpass_to_bandpass_zpk
from ._lowpass_to_bandstop_zpk import lowpass_to_bandstop_zpk
from ._lowpass_to_highpass_zpk import lowpass_to_highpass_zpk
from ._lowpass_to_lowpass_zpk import lowpass_to_lowpass_zpk
from ._normalize_gain_zpk import normalize_gain_zpk
from ._prewarp_frequency import prewarp_frequency
from ._validation import (
    validate_cutoff,
    validate_filter_type,
    validate_order,
    validate_sampling_frequency,
)
from ._zpk_to_sos import zpk_to_sos

logger = logging.getLogger(__name__)


def butterworth_design(
    order: int,
    cutoff: Tensor | float | Sequence[float],
    filter_type: Literal[
        "lowpass", "highpass", "bandpass", "bandstop"
    ] = "lowpass",
    output: Literal["sos", "zpk"] = "sos",
    sampling_frequency: Optional[float] = None,
    *,
    gain_placement: Literal["first", "distribute"] = "first",
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Tensor | tuple[Tensor, Tensor, Tensor]:
    """Design an Nth-order digital Butterworth filter.

    Parameters
    ----------
    order : int
        The order of the lowpass prototype. Must be positive.
    cutoff : Tensor or float or sequence of float
        The critical frequency or frequencies. For lowpass and highpass,
        this is a scalar. For bandpass and bandstop, this is a length-2
        sequence [low, high] with low < high. Frequencies are expressed as
        a fraction of the Nyquist frequency (0 to 1, exclusive), unless
        sampling_frequency is specified.
    filter_type : {"lowpass", "highpass", "bandpass", "bandstop"}, optional
        The type of filter. Default is "lowpass".
    output : {"sos", "zpk"}, optional
        Type of output:
        - "sos": second-order sections (default, recommended)
        - "zpk": zeros, poles, gain
    sampling_frequency : float, optional
        The sampling frequency of the digital system. If specified, cutoff
        is in the same units (e.g., Hz) and must lie below
        sampling_frequency / 2.
    gain_placement : {"first", "distribute"}, optional
        How ``zpk_to_sos`` spreads the gain over the sections.
    dtype : torch.dtype, optional
        Output dtype, float32 or float64. Defaults to
        torch.get_default_dtype().
    device : torch.device, optional
        Output device. Defaults to CPU.

    Returns
    -------
    sos : Tensor
        Second-order sections (if output="sos"), shape (n_sections, 6),
        each row [b0, b1, b2, a0, a1, a2].
    zeros, poles, gain : tuple of Tensors
        Digital zeros, poles and gain (if output="zpk").

    Raises
    ------
    InvalidParameterError
        For a bad order, cutoff, sampling frequency, filter type or
        output format. Raised before any design work.
    DesignError
        If the design pipeline produces an unstable or non-finite cascade.

    Notes
    -----
    The filter is designed by:
    1. Placing the analog Butterworth lowpass prototype poles
    2. Pre-warping the cutoff(s) and transforming to the desired band
    3. Converting to digital using the bilinear transform
    4. Normalizing the gain to unity at the passband reference: DC for
       lowpass and bandstop, Nyquist for highpass, and the digital image
       of the geometric band centre for bandpass
    5. Factoring into second-order sections

    Examples
    --------
    >>> from torchbutter.filter_design import butterworth_design
    >>> sos = butterworth_design(4, 0.3)
    >>> sos.shape
    torch.Size([2, 6])

    >>> sos = butterworth_design(
    ...     4, [20.0, 30.0], "bandpass", sampling_frequency=100.0
    ... )
    >>> sos.shape
    torch.Size([4, 6])
    """
    order = validate_order(order)
    filter_type = validate_filter_type(filter_type)
    if output not in ("sos", "zpk"):
        raise InvalidFilterTypeError(f"Invalid output format: {output!r}")

    # Normalized cutoffs are Hz at fs = 2, where Nyquist is 1
    if sampling_frequency is None:
        fs = 2.0
    else:
        fs = validate_sampling_frequency(sampling_frequency)

    cutoff_tensor = validate_cutoff(cutoff, filter_type, fs / 2.0)

    z_analog, p_analog, k_analog = butterworth_prototype(
        order, dtype=dtype, device=device
    )

    warped = prewarp_frequency(cutoff_tensor, fs).to(
        dtype=k_analog.dtype, device=k_analog.device
    )

    if filter_type == "lowpass":
        z_transformed, p_transformed, k_transformed = lowpass_to_lowpass_zpk(
            z_analog, p_analog, k_analog, cutoff_frequency=warped
        )
        reference = 0.0
    elif filter_type == "highpass":
        z_transformed, p_transformed, k_transformed = lowpass_to_highpass_zpk(
            z_analog, p_analog, k_analog, cutoff_frequency=warped
        )
        reference = math.pi
    elif filter_type == "bandpass":
        bw = warped[1] - warped[0]
        w0 = torch.sqrt(warped[0] * warped[1])
        z_transformed, p_transformed, k_transformed = lowpass_to_bandpass_zpk(
            z_analog, p_analog, k_analog, center_frequency=w0, bandwidth=bw
        )
        reference = 2.0 * math.atan(float(w0.detach()) / (2.0 * fs))
    else:
        bw = warped[1] - warped[0]
        w0 = torch.sqrt(warped[0] * warped[1])
        z_transformed, p_transformed, k_transformed = lowpass_to_bandstop_zpk(
            z_analog, p_analog, k_analog, center_frequency=w0, bandwidth=bw
        )
        reference = 0.0

    z_digital, p_digital, k_digital = bilinear_transform_zpk(
        z_transformed, p_transformed, k_transformed, sampling_frequency=fs
    )

    z_digital, p_digital, k_digital = normalize_gain_zpk(
        z_digital, p_digital, k_digital, frequency=reference
    )

    if bool(torch.any(p_digital.detach().abs() >= 1.0)):
        raise DesignError(
            f"Digital poles outside the unit circle for order={order}, "
            f"filter_type={filter_type}, cutoff={cutoff_tensor.tolist()}"
        )

    if output == "zpk":
        return z_digital, p_digital, k_digital

    sos = zpk_to_sos(
        z_digital, p_digital, k_digital, gain_placement=gain_placement
    )

    if not is_stable_sos(sos):
        raise DesignError(
            f"Designed cascade is unstable or non-finite for order={order}, "
            f"filter_type={filter_type}, cutoff={cutoff_tensor.tolist()}"
        )

    logger.debug(
        "Designed %s Butterworth: order=%d fs=%s warped=%s sections=%d",
        filter_type,
        order,
        fs,
        warped.detach().tolist(),
        sos.shape[0],
    )

    return sos
