# tilelabel/core/error_codes.py
"""
Structured error codes for spline input and geometry loading failures.
Use these keys in return values; map to messages when raising.
"""

# Known error keys (returned e.g. from validate_samples)
TOO_FEW_SAMPLES = "too_few_samples"
LENGTH_MISMATCH = "length_mismatch"
KNOTS_NOT_INCREASING = "knots_not_increasing"
NO_LINE_GEOMETRY = "no_line_geometry"

# Messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    TOO_FEW_SAMPLES: "Spline fitting needs at least two samples.",
    LENGTH_MISMATCH: "x and y sample sequences must have the same length.",
    KNOTS_NOT_INCREASING: "x samples must be strictly increasing.",
    NO_LINE_GEOMETRY: "No LineString(s) found in geometry.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
