import base64
import io
import requests
import numpy as np
from PIL import Image

def load_image_rgba(image_spec: dict) -> np.ndarray:
    t = image_spec.get("type")
    v = image_spec.get("value")
    if t not in ("url", "b64"):
        raise ValueError("image.type must be 'url' or 'b64'")
    if not v:
        raise ValueError("image.value is required")

    if t == "url":
        r = requests.get(v, timeout=30)
        r.raise_for_status()
        data = r.content
    else:
        data = base64.b64decode(v)

    img = Image.open(io.BytesIO(data)).convert("RGBA")
    return np.array(img)

def png_from_rgba(rgba: np.ndarray) -> bytes:
    """
    rgba: HxWx4 uint8. Lossless PNG that keeps the alpha channel.
    """
    img = Image.fromarray(rgba.astype(np.uint8), mode="RGBA")
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()

def png_from_mask(mask: np.ndarray) -> bytes:
    """
    mask: HxW uint8 in [0,255]. Produces RGBA PNG with alpha=mask.
    """
    rgba = np.zeros((mask.shape[0], mask.shape[1], 4), dtype=np.uint8)
    rgba[..., 3] = mask
    return png_from_rgba(rgba)

def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")
