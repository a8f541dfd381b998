import base64
import io

import numpy as np
import pytest
from PIL import Image

from conftest import solid
import handler as worker

def _b64_png(rgba):
    out = io.BytesIO()
    Image.fromarray(rgba, mode="RGBA").save(out, format="PNG")
    return base64.b64encode(out.getvalue()).decode("utf-8")

def _decode(png_b64):
    return np.array(Image.open(io.BytesIO(base64.b64decode(png_b64))).convert("RGBA"))

def _job(**inp):
    return {"id": "test", "input": inp}

@pytest.fixture
def red_image():
    return {"type": "b64", "value": _b64_png(solid(3, 3, (255, 0, 0)))}

def test_magic_wand_removes_uniform_image(red_image):
    resp = worker.handler(_job(
        image=red_image,
        tool="magic_wand",
        point={"x": 1, "y": 1},
        tolerance=10,
        postprocess={"quality": "sharp"},
        output={"return_mask": True},
    ))
    assert resp["ok"] is True
    assert resp["image_size"] == {"width": 3, "height": 3}
    assert resp["meta"]["target_color"] == [255, 0, 0]
    assert resp["meta"]["selected_px"] == 9
    cutout = _decode(resp["cutout"]["png_b64"])
    assert cutout.shape == (3, 3, 4)
    assert np.all(cutout[..., 3] == 0)
    assert np.all(_decode(resp["mask"]["png_b64"])[..., 3] == 255)

def test_color_picker_with_explicit_color():
    img = solid(2, 2, (255, 0, 0))
    img[1, :, :3] = (0, 0, 255)
    resp = worker.handler(_job(
        image={"type": "b64", "value": _b64_png(img)},
        tool="color_picker",
        color=[0, 0, 255],
        tolerance=5,
        postprocess={"quality": "custom", "custom": {"alpha_threshold": 0.5, "post_blur_px": 0}},
        output={"return_debug": True},
    ))
    assert resp["ok"] is True
    assert resp["meta"]["target_color"] == [0, 0, 255]
    assert "overlay_png_b64" in resp["debug"]
    cutout = _decode(resp["cutout"]["png_b64"])
    assert np.all(cutout[0, :, 3] == 255)
    assert np.all(cutout[1, :, 3] == 0)

def test_color_picker_samples_point(red_image):
    resp = worker.handler(_job(image=red_image, tool="color_picker", point={"x": 0, "y": 2}))
    assert resp["ok"] is True
    assert resp["meta"]["target_color"] == [255, 0, 0]

def test_out_of_bounds_point(red_image):
    resp = worker.handler(_job(image=red_image, point={"x": 5, "y": 0}))
    assert resp["ok"] is False
    assert resp["error"]["code"] == "INVALID_COORDINATE"

def test_wand_requires_point(red_image):
    resp = worker.handler(_job(image=red_image, tool="magic_wand"))
    assert resp["ok"] is False
    assert resp["error"]["code"] == "INVALID_INPUT"

def test_bad_quality(red_image):
    resp = worker.handler(_job(image=red_image, point={"x": 0, "y": 0}, postprocess={"quality": "ultra"}))
    assert resp["error"]["code"] == "INVALID_INPUT"

def test_bad_color(red_image):
    resp = worker.handler(_job(image=red_image, tool="color_picker", color=[300, 0, 0]))
    assert resp["error"]["code"] == "INVALID_PARAMETER"

def test_missing_image_fails_validation():
    resp = worker.handler(_job(point={"x": 0, "y": 0}))
    assert resp["ok"] is False
    assert resp["error"]["code"] == "INVALID_INPUT"

@pytest.mark.parametrize("point", [{"x": -0.5, "y": 0}, {"x": 0, "y": -0.5}])
def test_negative_fractional_point_is_out_of_bounds(red_image, point):
    for tool in ("magic_wand", "color_picker"):
        resp = worker.handler(_job(image=red_image, tool=tool, point=point))
        assert resp["ok"] is False
        assert resp["error"]["code"] == "INVALID_COORDINATE"

def test_point_missing_y(red_image):
    resp = worker.handler(_job(image=red_image, point={"x": 1}))
    assert resp["error"]["code"] == "INVALID_INPUT"

def test_undecodable_image_is_invalid_input():
    resp = worker.handler(_job(
        image={"type": "b64", "value": base64.b64encode(b"notanimage").decode("utf-8")},
        point={"x": 0, "y": 0},
    ))
    assert resp["ok"] is False
    assert resp["error"]["code"] == "INVALID_INPUT"

@pytest.mark.parametrize("custom", [{"alpha_threshold": "abc"}, {"post_blur_px": None}, {"alpha_threshold": 2}])
def test_bad_custom_postprocess_is_invalid_parameter(red_image, custom):
    resp = worker.handler(_job(
        image=red_image,
        point={"x": 0, "y": 0},
        postprocess={"quality": "custom", "custom": custom},
    ))
    assert resp["ok"] is False
    assert resp["error"]["code"] == "INVALID_PARAMETER"
