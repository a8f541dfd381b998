import logging
import numpy as np
import cv2

from kernel import build_gaussian_kernel
from pixels import as_mask, check_non_negative

def blur_channels(image: np.ndarray, radius: float) -> np.ndarray:
    """
    image: HxW or HxWxC uint8 (C <= 4)
    Separable Gaussian, rows first then columns, with edge-clamped sampling.
    Returns a new uint8 array of the same shape.
    """
    kernel = build_gaussian_kernel(radius)
    if kernel.size == 1:
        return image.copy()

    k = kernel.astype(np.float32)
    # BORDER_REPLICATE clamps sample coordinates to [0, W-1] / [0, H-1]
    blurred = cv2.sepFilter2D(
        image.astype(np.float32), cv2.CV_32F, k, k, borderType=cv2.BORDER_REPLICATE
    )
    blurred = blurred / float(k.sum()) ** 2
    logging.debug("blurred %s with kernel size %d", image.shape, kernel.size)
    return np.clip(np.rint(blurred), 0, 255).astype(np.uint8).reshape(image.shape)

def soften_mask(mask: np.ndarray, radius: float) -> np.ndarray:
    """
    mask: HxW uint8 in [0,255] (or HxWx4 with equal channels)
    returns HxW uint8 with graduated edges
    """
    check_non_negative("radius", radius)
    m = as_mask(mask)
    if m.size == 0:
        return m.copy()
    return blur_channels(m, radius)
