import numpy as np

def solid(h, w, rgb, alpha=255):
    buf = np.zeros((h, w, 4), dtype=np.uint8)
    buf[..., :3] = rgb
    buf[..., 3] = alpha
    return buf
