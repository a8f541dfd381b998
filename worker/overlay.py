import numpy as np

def overlay_mask(rgba: np.ndarray, mask: np.ndarray, color=(0, 255, 0), alpha=0.35) -> np.ndarray:
    """
    rgba: HxWx4 uint8
    mask: HxW uint8, 255 = selected
    returns HxWx3 uint8 preview with the selection tinted
    """
    img = rgba[..., :3].astype(np.float32)
    m = (mask.astype(np.float32) / 255.0)[..., None]
    col = np.array(color, dtype=np.float32)[None, None, :]
    img = img * (1.0 - m * alpha) + col * (m * alpha)
    return img.clip(0, 255).astype(np.uint8)
