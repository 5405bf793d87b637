"""
Sparse vector and Random Indexing constants.

Defaults follow common Random Indexing practice: a dimensionality in the
low tens of thousands and a few dozen non-zero entries per label.
"""

# Vector Space Configuration
DEFAULT_SIZE = 16000
"""Default label dimensionality. Typical values range from 1,000 to 20,000."""

MIN_SIZE = 1
"""Smallest accepted dimensionality."""

MAX_SIZE = 1_000_000
"""Largest dimensionality accepted by settings validation."""

DEFAULT_NNZ = 48
"""Default number of non-zero entries per label. Odd values are rounded up
to the next even number so that +1 and -1 entries balance exactly."""

# Arithmetic
ROUNDING_ERROR = 1e-6
"""Absolute tolerance used when comparing stored values for equality.
Zero-pruning itself is exact; this only affects equality checks."""

VALUE_FORMAT = "%f"
"""printf-style format for values in the plain-text vector form."""

POINT_SEPARATOR = "|"
"""Separator between index and value in the plain-text vector form."""

# Permutations
PERMUTATION_SEED = 0
"""Seed for the positional permutation pair. Kept constant so that every
process rotates labels identically for a given size."""

# Hilbert Curve
HILBERT_ORDER = 32
"""Bits per coordinate on the Hilbert curve. A key has
HILBERT_ORDER * dimensions bits."""

HILBERT_STRICT = False
"""When True, the Hilbert codec rejects coordinates outside
[0, 2^order) instead of masking them onto the curve."""

# Parallel accumulation
DEFAULT_WORKERS = 4
"""Default thread count for fan-in summation."""
