from runpod.serverless.utils.rp_validator import validate

from presets import DEFAULT_TOLERANCE, MAX_TOLERANCE, MIN_TOLERANCE

TOOLS = ("magic_wand", "color_picker")

def _one_of(allowed):
    return lambda x: x in allowed

def _in_range(lo, hi):
    return lambda x: lo <= x <= hi

def validate_input(job_input: dict):
    schema = {
        "request_id": {"type": str, "required": False, "default": None},

        "image": {
            "type": dict,
            "required": True,
        },

        "tool": {
            "type": str,
            "required": False,
            "default": "magic_wand",
            "constraints": _one_of(TOOLS),
        },

        # wand seed, or eyedropper position for the color picker
        "point": {"type": dict, "required": False, "default": None},

        "color": {"type": list, "required": False, "default": None},

        "tolerance": {
            "type": float,
            "required": False,
            "default": float(DEFAULT_TOLERANCE),
            "constraints": _in_range(MIN_TOLERANCE, MAX_TOLERANCE),
        },

        "output": {"type": dict, "required": False, "default": {}},

        "postprocess": {"type": dict, "required": False, "default": {}},
    }

    res = validate(job_input, schema)
    return res
