"""Filter application: batch and streaming SOS filtering, Butterworth facade."""

from ._butterworth import Butterworth
from ._sos_filter import SOSFilter
from ._sosfilt import sosfilt

__all__ = [
    "Butterworth",
    "SOSFilter",
    "sosfilt",
]
