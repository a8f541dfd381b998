import time
import runpod
import numpy as np

from job_schema import validate_input
from errors import InvalidParameter, UserError, error_response
from presets import PRESETS, SELECTION_BLUR_PX, default_quality
from image_io import load_image_rgba, png_from_rgba, png_from_mask, b64
from region_select import flood_select
from color_select import color_select, sample_color
from compositor import composite
from overlay import overlay_mask

def _get_point(job_input: dict):
    point = job_input.get("point")
    if point is None:
        return None
    # raw values; the selection tools bounds-check before truncating
    if not isinstance(point, dict) or "x" not in point or "y" not in point:
        raise UserError("INVALID_INPUT", "point must be an object with x and y", {"point": point})
    return point["x"], point["y"]

def _get_quality(job_input: dict):
    pp = job_input.get("postprocess") or {}
    quality = (pp.get("quality") or default_quality()).lower()
    custom = pp.get("custom")
    if quality not in ("sharp", "balanced", "soft", "custom"):
        raise UserError("INVALID_INPUT", "postprocess.quality must be one of sharp|balanced|soft|custom")
    if quality == "custom" and not isinstance(custom, dict):
        raise UserError("INVALID_INPUT", "postprocess.custom must be provided when quality=custom")
    if quality != "custom" and custom is not None:
        # ignore, but don't fail
        custom = None
    return quality, custom

def _resolve_postprocess(quality: str, custom: dict | None):
    if quality != "custom":
        return PRESETS[quality]
    # Custom overrides start from balanced
    base = PRESETS["balanced"]
    try:
        return base.__class__(
            alpha_threshold=float(custom.get("alpha_threshold", base.alpha_threshold)),
            post_blur_px=float(custom.get("post_blur_px", base.post_blur_px)),
        )
    except (TypeError, ValueError):
        raise InvalidParameter("postprocess.custom values must be numbers", {"custom": custom})

def _select(rgba: np.ndarray, tool: str, point, color, tolerance: float):
    """Runs the chosen selection tool. Returns (mask, target_color)."""
    if tool == "magic_wand":
        if point is None:
            raise UserError("INVALID_INPUT", "point is required for tool='magic_wand'")
        x, y = point
        target = sample_color(rgba, x, y)
        return flood_select(rgba, x, y, tolerance, edge_radius=SELECTION_BLUR_PX), target

    if color is not None:
        target = color
    elif point is not None:
        target = sample_color(rgba, *point)
    else:
        raise UserError("INVALID_INPUT", "color or point is required for tool='color_picker'")
    return color_select(rgba, target, tolerance, edge_radius=SELECTION_BLUR_PX), tuple(int(c) for c in target)

def handler(job):
    t0 = time.time()
    print(f"Handler called with job: {job.get('id', 'unknown')}")

    try:
        job_input = job.get("input", {})
        print(f"Job input keys: {list(job_input.keys())}")
        validated = validate_input(job_input)
        if "errors" in validated:
            return error_response("INVALID_INPUT", "Validation failed", {"errors": validated["errors"]})
        inp = validated["validated_input"]

        request_id = inp.get("request_id")
        image_spec = inp.get("image")
        tool = inp.get("tool") or "magic_wand"
        tolerance = float(inp.get("tolerance"))
        point = _get_point(inp)
        color = inp.get("color")

        quality, custom = _get_quality(inp)
        pp = _resolve_postprocess(quality, custom)

        out_cfg = inp.get("output") or {}
        return_mask = bool(out_cfg.get("return_mask", False))
        return_debug = bool(out_cfg.get("return_debug", False))

        # --- Load image
        t_img0 = time.time()
        try:
            rgba = load_image_rgba(image_spec)
        except (ValueError, OSError) as e:
            # PIL.UnidentifiedImageError and requests errors are OSErrors
            raise UserError("INVALID_INPUT", f"Could not load image: {e}")
        h, w = rgba.shape[:2]
        t_img1 = time.time()

        # --- Selection
        t_sel0 = time.time()
        mask, target = _select(rgba, tool, point, color, tolerance)
        t_sel1 = time.time()
        selected_px = int(np.count_nonzero(mask > pp.alpha_threshold * 255))
        print(f"{tool}: target={target} tolerance={tolerance} selected={selected_px}px")

        # --- Composite
        t_cmp0 = time.time()
        cutout = composite(rgba, mask, alpha_threshold=pp.alpha_threshold, post_blur_radius=pp.post_blur_px)
        t_cmp1 = time.time()

        # --- Encode outputs
        t_enc0 = time.time()
        cutout_png = png_from_rgba(cutout)
        print(f"Encoded cutout: {w}x{h}, {len(cutout_png) / (1024 * 1024):.2f}MB")

        mask_out = None
        if return_mask:
            mask_out = {"encoding": "png_alpha", "png_b64": b64(png_from_mask(mask))}

        debug = {}
        if return_debug:
            ov = overlay_mask(rgba, mask)
            debug = {"overlay_png_b64": b64(png_from_rgba(np.dstack([ov, np.full((h, w), 255, np.uint8)])))}
        t_enc1 = time.time()

        resp = {
            "ok": True,
            "request_id": request_id,
            "tool": tool,
            "image_size": {"width": int(w), "height": int(h)},
            "cutout": {"encoding": "png_rgba", "png_b64": b64(cutout_png)},
            "debug": debug,
            "meta": {
                "tolerance": tolerance,
                "target_color": list(target),
                "selected_px": selected_px,
                "postprocess_quality": quality,
                "timings_ms": {
                    "download_decode": int((t_img1 - t_img0) * 1000),
                    "select": int((t_sel1 - t_sel0) * 1000),
                    "composite": int((t_cmp1 - t_cmp0) * 1000),
                    "encode": int((t_enc1 - t_enc0) * 1000),
                    "total": int((time.time() - t0) * 1000),
                },
            },
        }
        if mask_out is not None:
            resp["mask"] = mask_out

        print(f"Returning response for request {request_id}")
        return resp

    except UserError as e:
        print(f"UserError: {e.code} - {e.message}")
        if e.details:
            print(f"Error details: {e.details}")
        return error_response(e.code, e.message, e.details)
    except Exception as e:
        import traceback
        error_trace = traceback.format_exc()
        print(f"INTERNAL_ERROR: {str(e)}")
        print(f"Traceback:\n{error_trace}")
        return error_response("INTERNAL_ERROR", str(e), {"traceback": error_trace})

if __name__ == "__main__":
    runpod.serverless.start({"handler": handler})  # required
