import logging
import numpy as np

from mask_postprocess import soften_mask
from pixels import check_buffer, check_color, check_non_negative, check_point, rgb_distance
from presets import SELECTION_BLUR_PX

def sample_color(buffer: np.ndarray, x: int, y: int) -> tuple:
    """Eyedropper: RGB of the pixel at (x, y)."""
    check_buffer(buffer)
    x, y = check_point(buffer, x, y)
    r, g, b = buffer[y, x, :3]
    return int(r), int(g), int(b)

def color_select(
    buffer: np.ndarray,
    target,
    tolerance: float,
    edge_radius: float = SELECTION_BLUR_PX,
) -> np.ndarray:
    """
    Color picker: selects every pixel within tolerance of target, no connectivity.

    buffer: HxWx4 uint8
    target: (r, g, b)
    returns HxW uint8 mask (255 = selected), softened with edge_radius
    """
    check_buffer(buffer)
    target = check_color(target)
    tolerance = check_non_negative("tolerance", tolerance, allow_inf=True)
    check_non_negative("edge_radius", edge_radius)

    raw = np.where(rgb_distance(buffer, target) <= tolerance, 255, 0).astype(np.uint8)
    logging.debug(
        "color_select target=%s tolerance=%.2f selected=%d px",
        target, tolerance, int(np.count_nonzero(raw)),
    )
    return soften_mask(raw, edge_radius)
