import os
from dataclasses import dataclass

# radius both selection tools soften their raw mask with
SELECTION_BLUR_PX = 2

DEFAULT_TOLERANCE = 32
MIN_TOLERANCE = 1
MAX_TOLERANCE = 100

@dataclass(frozen=True)
class EdgePreset:
    alpha_threshold: float
    post_blur_px: float

PRESETS = {
    "sharp": EdgePreset(
        alpha_threshold=0.5,
        post_blur_px=0,
    ),
    "balanced": EdgePreset(
        alpha_threshold=0.5,
        post_blur_px=1,
    ),
    "soft": EdgePreset(
        alpha_threshold=0.35,
        post_blur_px=3,
    ),
}

def default_quality() -> str:
    quality = (os.environ.get("CUTOUT_DEFAULT_QUALITY") or "balanced").lower()
    return quality if quality in PRESETS else "balanced"
