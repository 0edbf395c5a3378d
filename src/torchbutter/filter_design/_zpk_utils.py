"""Root bookkeeping shared by the analog and bilinear zpk transforms."""

from typing import Union

import torch
from torch import Tensor


def quadratic_root_pairs(half_linear: Tensor, constant: Tensor) -> Tensor:
    """Both roots of ``s^2 - 2*half_linear*s + constant`` for every entry.

    Returns the ``+`` roots followed by the ``-`` roots, so entry ``i`` and
    entry ``i + n`` come from the same input.
    """
    root = torch.sqrt((half_linear * half_linear - constant).to(half_linear.dtype))
    return torch.cat([half_linear + root, half_linear - root])


def repeated_roots(value: Union[complex, Tensor], count: int, like: Tensor) -> Tensor:
    """``count`` copies of ``value`` with the dtype and device of ``like``."""
    if isinstance(value, Tensor):
        return value.to(like.dtype).reshape(-1).repeat(count)
    return torch.full((count,), value, dtype=like.dtype, device=like.device)


def product_ratio(zeros: Tensor, poles: Tensor, at: Union[float, Tensor] = 0.0) -> Tensor:
    """``real(prod(at - zeros) / prod(at - poles))``; empty products are 1."""
    return torch.real(torch.prod(at - zeros) / torch.prod(at - poles))
