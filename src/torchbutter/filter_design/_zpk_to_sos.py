"""Conversion from zeros-poles-gain to second-order sections."""

from typing import List, Literal, Tuple

import torch
from torch import Tensor

from ._constants import REAL_TOLERANCE, REAL_TOLERANCE_FLOOR
from ._exceptions import DesignError, InvalidParameterError

# (is_complex, values); a complex group holds one pole of a conjugate pair
_Group = Tuple[bool, List[Tensor]]


def zpk_to_sos(
    zeros: Tensor,
    poles: Tensor,
    gain: Tensor,
    gain_placement: Literal["first", "distribute"] = "first",
) -> Tensor:
    """
    Convert zeros, poles, and gain to second-order sections.

    Parameters
    ----------
    zeros : Tensor
        Zeros of the digital filter. At most as many as poles; missing
        zeros are placed at z = -1.
    poles : Tensor
        Poles of the digital filter.
    gain : Tensor
        System gain.
    gain_placement : {"first", "distribute"}
        "first" puts the whole gain into the first section. "distribute"
        scales every numerator by |gain|^(1/n_sections) and puts the sign
        on the first section. Default is "first".

    Returns
    -------
    sos : Tensor
        Second-order sections, shape (n_sections, 6). Each row is
        [b0, b1, b2, a0, a1, a2] with a0 = 1.

    Raises
    ------
    InvalidParameterError
        If there are more zeros than poles or gain_placement is unknown.
    DesignError
        If poles or zeros do not come in complex conjugate pairs.

    Notes
    -----
    Complex conjugate pairs always share a section, so every coefficient
    is real. Two real poles share a section; with an odd count the real
    pole nearest the origin gets a first-order section (b2 = a2 = 0)
    together with one real zero.

    Zeros are matched greedily, poles nearest the unit circle first, each
    taking the closest remaining zeros. Sections are then ordered by pole
    distance from the unit circle, farthest first, so the most resonant
    sections run last.
    """
    if gain_placement not in ("first", "distribute"):
        raise InvalidParameterError(
            f"Invalid gain_placement: {gain_placement!r}. "
            "Must be 'first' or 'distribute'."
        )

    if gain.is_complex():
        gain = gain.real
    real_dtype = gain.dtype
    device = gain.device

    n_poles = poles.numel()
    n_zeros = zeros.numel()

    if n_zeros > n_poles:
        raise InvalidParameterError(
            f"Need at least as many poles as zeros, got {n_zeros} zeros "
            f"and {n_poles} poles"
        )

    if n_poles == 0:
        return torch.zeros((0, 6), dtype=real_dtype, device=device)

    if n_zeros < n_poles:
        padding = -torch.ones(
            n_poles - n_zeros, dtype=poles.dtype, device=device
        )
        zeros = torch.cat([zeros.to(poles.dtype), padding])

    real_poles, complex_poles = _separate_real_complex(poles)
    real_zeros, complex_zeros = _separate_real_complex(zeros)

    for name, real_vals, complex_vals in (
        ("poles", real_poles, complex_poles),
        ("zeros", real_zeros, complex_zeros),
    ):
        if real_vals.numel() + 2 * complex_vals.numel() != n_poles:
            raise DesignError(
                f"Digital {name} do not come in complex conjugate pairs"
            )

    pole_groups = _group_poles(real_poles, complex_poles)
    zero_pool_real = list(real_zeros)
    zero_pool_complex = list(complex_zeros)

    # The first-order section claims its real zero before anyone else
    first_order = [g for g in pole_groups if not g[0] and len(g[1]) == 1]
    second_order = sorted(
        (g for g in pole_groups if g[0] or len(g[1]) == 2),
        key=_distance_from_unit_circle,
    )

    sections = []
    for group in first_order + second_order:
        zero_group = _take_nearest_zeros(
            group, zero_pool_real, zero_pool_complex
        )
        sections.append(
            (
                _distance_from_unit_circle(group),
                _polynomial(zero_group, real_dtype, device)
                + _polynomial(group, real_dtype, device),
            )
        )

    sections.sort(key=lambda item: item[0], reverse=True)
    sos = torch.stack([torch.stack(row) for _, row in sections])
    n_sections = sos.shape[0]

    numerator = sos[:, :3]
    denominator = sos[:, 3:]

    # Avoid in-place ops so gradients flow through the gain
    if gain_placement == "first":
        scale = torch.cat(
            [
                gain.reshape(1),
                torch.ones(n_sections - 1, dtype=real_dtype, device=device),
            ]
        )
    else:
        gain_per_section = gain.abs() ** (1.0 / n_sections)
        sign = torch.ones(n_sections, dtype=real_dtype, device=device)
        if gain < 0:
            sign = torch.cat([-sign[:1], sign[1:]])
        scale = gain_per_section * sign

    numerator = numerator * scale.unsqueeze(-1)

    return torch.cat([numerator, denominator], dim=1)


def _separate_real_complex(x: Tensor) -> Tuple[Tensor, Tensor]:
    """Separate real and complex values, keeping only one of each conjugate pair.

    A value is considered "real" if its imaginary part is negligible
    relative to its real part, or if the whole value is negligible. For
    complex values only the member with positive imaginary part is kept.
    """
    if x.numel() == 0:
        empty_real = x.real if x.is_complex() else x
        return empty_real, x

    if not x.is_complex():
        return x, x[:0]

    rel_tol = REAL_TOLERANCE * x.real.abs() + REAL_TOLERANCE_FLOOR
    is_negligible = x.abs() < REAL_TOLERANCE
    is_real = (x.imag.abs() < rel_tol) | is_negligible

    real_vals = x[is_real].real
    complex_vals = x[~is_real & (x.imag > 0)]

    return real_vals, complex_vals


def _group_poles(real_poles: Tensor, complex_poles: Tensor) -> List[_Group]:
    groups: List[_Group] = [(True, [pole]) for pole in complex_poles]

    reals = sorted(real_poles, key=lambda pole: abs(pole.item()))
    if len(reals) % 2 == 1:
        groups.append((False, [reals.pop(0)]))
    for i in range(0, len(reals), 2):
        groups.append((False, [reals[i], reals[i + 1]]))

    return groups


def _distance_from_unit_circle(group: _Group) -> float:
    return min(1.0 - abs(value.item()) for value in group[1])


def _take_nearest_zeros(
    group: _Group,
    pool_real: List[Tensor],
    pool_complex: List[Tensor],
) -> _Group:
    """Remove and return the zeros closest to the group's dominant pole."""
    anchor = max((value.item() for value in group[1]), key=abs)

    def nearest(pool: List[Tensor]) -> int:
        return min(
            range(len(pool)), key=lambda i: abs(pool[i].item() - anchor)
        )

    if len(group[1]) == 1 and not group[0]:
        if not pool_real:
            raise DesignError("No real zero left for a first-order section")
        return (False, [pool_real.pop(nearest(pool_real))])

    best_real = nearest(pool_real) if pool_real else None
    best_complex = nearest(pool_complex) if pool_complex else None

    use_complex = best_complex is not None and (
        best_real is None
        or len(pool_real) < 2
        or abs(pool_complex[best_complex].item() - anchor)
        <= abs(pool_real[best_real].item() - anchor)
    )

    if use_complex:
        return (True, [pool_complex.pop(best_complex)])
    if best_real is None or len(pool_real) < 2:
        raise DesignError("Ran out of zeros while building sections")

    first = pool_real.pop(best_real)
    second = pool_real.pop(nearest(pool_real))
    return (False, [first, second])


def _polynomial(
    group: _Group,
    dtype: torch.dtype,
    device: torch.device,
) -> List[Tensor]:
    """Coefficients [1, c1, c2] of the monic polynomial with these roots."""
    is_complex, values = group
    one = torch.tensor(1.0, dtype=dtype, device=device)

    if is_complex:
        root = values[0]
        c1 = -2 * root.real
        c2 = root.real**2 + root.imag**2
    elif len(values) == 2:
        c1 = -(values[0] + values[1])
        c2 = values[0] * values[1]
    else:
        c1 = -values[0]
        c2 = torch.tensor(0.0, dtype=dtype, device=device)

    return [one, c1.to(dtype), c2.to(dtype)]
