class UserError(Exception):
    def __init__(self, code: str, message: str, details=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

class InvalidCoordinate(UserError):
    """Seed or sample point outside the buffer."""
    def __init__(self, message: str, details=None):
        super().__init__("INVALID_COORDINATE", message, details)

class DimensionMismatch(UserError):
    """Mask cannot be resampled onto the buffer it is composited with."""
    def __init__(self, message: str, details=None):
        super().__init__("DIMENSION_MISMATCH", message, details)

class InvalidParameter(UserError):
    def __init__(self, message: str, details=None):
        super().__init__("INVALID_PARAMETER", message, details)

def error_response(code: str, message: str, details=None):
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }
