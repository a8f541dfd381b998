import math
import numpy as np

from pixels import check_non_negative

# sigma used for radius 0 so the exponent never divides by zero
_MIN_SIGMA = 1e-6

def build_gaussian_kernel(radius: float) -> np.ndarray:
    """
    Normalized 1-D Gaussian of length ceil(radius*2 + 1) with sigma = radius/3.
    Returns float64 weights summing to 1.0.
    """
    radius = check_non_negative("radius", radius)
    size = int(math.ceil(radius * 2 + 1))
    sigma = radius / 3 if radius > 0 else _MIN_SIGMA

    x = np.arange(size, dtype=np.float64) - size // 2
    weights = np.exp(-(x * x) / (2 * sigma * sigma))
    return weights / weights.sum()
