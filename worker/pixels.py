import numpy as np

from errors import InvalidCoordinate, InvalidParameter

def check_buffer(buffer: np.ndarray) -> np.ndarray:
    """
    buffer: HxWx4 uint8 RGBA, H,W > 0
    """
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 3 or buffer.shape[2] != 4:
        raise InvalidParameter("buffer must be an HxWx4 RGBA numpy array")
    if buffer.dtype != np.uint8:
        raise InvalidParameter("buffer must be uint8", {"dtype": str(buffer.dtype)})
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        raise InvalidParameter("buffer must not be empty", {"shape": list(buffer.shape)})
    return buffer

def as_mask(mask: np.ndarray) -> np.ndarray:
    """
    Accepts HxW or HxWx4 (all channels equal) and returns the HxW uint8 view.
    Zero-sized masks pass through so callers can decide how to fail.
    """
    if not isinstance(mask, np.ndarray):
        raise InvalidParameter("mask must be a numpy array")
    if mask.ndim == 3 and mask.shape[2] == 4:
        mask = mask[..., 0]
    if mask.ndim != 2:
        raise InvalidParameter("mask must be HxW or HxWx4", {"shape": list(mask.shape)})
    if mask.dtype != np.uint8:
        raise InvalidParameter("mask must be uint8", {"dtype": str(mask.dtype)})
    return mask

def check_non_negative(name: str, value, allow_inf: bool = False) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a number", {name: value})
    if np.isnan(v) or v < 0 or (np.isinf(v) and not allow_inf):
        raise InvalidParameter(f"{name} must be a non-negative number", {name: value})
    return v

def check_color(color) -> tuple:
    try:
        rgb = tuple(int(c) for c in color)
    except (TypeError, ValueError):
        raise InvalidParameter("color must be three integers", {"color": color})
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise InvalidParameter("color must be three integers in [0, 255]", {"color": color})
    return rgb

def check_point(buffer: np.ndarray, x, y) -> tuple:
    """Bounds-checks the raw coordinates, then returns them as integer pixel indices."""
    h, w = buffer.shape[:2]
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        raise InvalidParameter("point coordinates must be numbers", {"x": x, "y": y})
    if not (0 <= x < w and 0 <= y < h):
        raise InvalidCoordinate(
            f"Point ({x}, {y}) is outside the {w}x{h} image",
            {"x": x, "y": y, "width": w, "height": h},
        )
    return int(x), int(y)

def rgb_distance(buffer: np.ndarray, color) -> np.ndarray:
    """Euclidean RGB distance of every pixel to color, HxW float64. Alpha is ignored."""
    rgb = buffer[..., :3].astype(np.float64)
    diff = rgb - np.asarray(color, dtype=np.float64)[None, None, :]
    return np.sqrt(np.sum(diff * diff, axis=2))
