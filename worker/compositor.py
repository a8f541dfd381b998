import logging
import numpy as np
import cv2

from errors import DimensionMismatch, InvalidParameter
from mask_postprocess import blur_channels
from pixels import as_mask, check_buffer, check_non_negative

def resize_mask(mask: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Nearest-neighbour resample of an HxW uint8 mask to height x width.
    """
    m = as_mask(mask)
    if m.size == 0:
        raise DimensionMismatch(
            "Mask is empty and cannot be resampled",
            {"mask_shape": list(m.shape), "width": width, "height": height},
        )
    if m.shape == (height, width):
        return m.copy()
    return cv2.resize(np.ascontiguousarray(m), (width, height), interpolation=cv2.INTER_NEAREST)

def composite(
    original: np.ndarray,
    mask: np.ndarray,
    alpha_threshold: float = 0.5,
    post_blur_radius: float = 0,
) -> np.ndarray:
    """
    original: HxWx4 uint8 RGBA
    mask: HxW uint8, 255 = remove. Resampled to HxW when sizes differ.

    Pixels whose mask value exceeds alpha_threshold*255 get alpha 0, all others
    keep their alpha. With post_blur_radius > 0 the whole RGBA result is blurred.
    """
    check_buffer(original)
    try:
        alpha_threshold = float(alpha_threshold)
    except (TypeError, ValueError):
        raise InvalidParameter("alpha_threshold must be a number", {"alpha_threshold": alpha_threshold})
    if not 0.0 <= alpha_threshold <= 1.0:
        raise InvalidParameter("alpha_threshold must be in [0, 1]", {"alpha_threshold": alpha_threshold})
    post_blur_radius = check_non_negative("post_blur_radius", post_blur_radius)

    h, w = original.shape[:2]
    m = resize_mask(mask, w, h)

    out = original.copy()
    removed = m > alpha_threshold * 255
    out[removed, 3] = 0
    logging.debug(
        "composite %dx%d threshold=%.3f removed=%d px post_blur=%.2f",
        w, h, alpha_threshold, int(np.count_nonzero(removed)), post_blur_radius,
    )

    if post_blur_radius > 0:
        out = blur_channels(out, post_blur_radius)
    return out
