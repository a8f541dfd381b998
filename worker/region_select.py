import logging
from collections import deque

import numpy as np

from mask_postprocess import soften_mask
from pixels import check_buffer, check_non_negative, check_point, rgb_distance
from presets import SELECTION_BLUR_PX

def flood_select(
    buffer: np.ndarray,
    seed_x: int,
    seed_y: int,
    tolerance: float,
    edge_radius: float = SELECTION_BLUR_PX,
) -> np.ndarray:
    """
    Magic wand: 4-connected flood fill from (seed_x, seed_y).

    A pixel joins the selection when its RGB distance to the seed pixel's color
    is <= tolerance and it is reachable from the seed through selected pixels.
    The target color stays the seed's color for the whole fill.

    buffer: HxWx4 uint8
    returns HxW uint8 mask (255 = selected), softened with edge_radius
    """
    check_buffer(buffer)
    tolerance = check_non_negative("tolerance", tolerance, allow_inf=True)
    check_non_negative("edge_radius", edge_radius)
    seed_x, seed_y = check_point(buffer, seed_x, seed_y)

    h, w = buffer.shape[:2]
    target = buffer[seed_y, seed_x, :3]
    # membership is a static per-pixel predicate, so it is computed up front
    # and only read for pixels the frontier reaches
    matches = (rgb_distance(buffer, target) <= tolerance).ravel()

    selected = np.zeros(h * w, dtype=np.uint8)
    visited = np.zeros(h * w, dtype=bool)
    queue = deque([seed_y * w + seed_x])
    visited[seed_y * w + seed_x] = True

    while queue:
        idx = queue.popleft()
        if not matches[idx]:
            continue
        selected[idx] = 255

        y, x = divmod(idx, w)
        if x + 1 < w and not visited[idx + 1]:
            visited[idx + 1] = True
            queue.append(idx + 1)
        if x > 0 and not visited[idx - 1]:
            visited[idx - 1] = True
            queue.append(idx - 1)
        if y + 1 < h and not visited[idx + w]:
            visited[idx + w] = True
            queue.append(idx + w)
        if y > 0 and not visited[idx - w]:
            visited[idx - w] = True
            queue.append(idx - w)

    raw = selected.reshape(h, w)
    logging.debug(
        "flood_select seed=(%d, %d) target=%s tolerance=%.2f selected=%d px",
        seed_x, seed_y, tuple(int(c) for c in target), tolerance, int(np.count_nonzero(raw)),
    )
    return soften_mask(raw, edge_radius)
