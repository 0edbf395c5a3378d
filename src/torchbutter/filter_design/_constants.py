"""Constants for filter design module."""

FILTER_TYPES: tuple[str, ...] = ("lowpass", "highpass", "bandpass", "bandstop")

BAND_FILTER_TYPES: tuple[str, ...] = ("bandpass", "bandstop")

# Relative tolerance under which a pole or zero counts as real
REAL_TOLERANCE: float = 1e-6

# Absolute floor for the real/complex test near the origin
REAL_TOLERANCE_FLOOR: float = 1e-10
