"""Filter analysis functions for frequency response and stability."""

from ._frequency_response_sos import frequency_response_sos
from ._is_stable_sos import is_stable_sos

__all__ = [
    "frequency_response_sos",
    "is_stable_sos",
]
