"""CSS-style cubic bezier easing presets.

Clips name their easing through the `easing` config option; the store
maps a clip's linear progress through the named curve.
"""


def cubic_bezier_point(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Calculate point on cubic bezier curve at parameter t."""
    mt = 1 - t
    return mt * mt * mt * p0 + 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t * p3


def bezier_easing(x1: float, y1: float, x2: float, y2: float, t: float) -> float:
    """Evaluate the curve (0,0)-(x1,y1)-(x2,y2)-(1,1) at x = t.

    The curve parameter for x = t is found by bisection.
    """
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0

    low, high = 0.0, 1.0
    for _ in range(30):
        mid = (low + high) / 2
        x = cubic_bezier_point(mid, 0, x1, x2, 1)
        if x < t:
            low = mid
        else:
            high = mid

    param = (low + high) / 2
    return cubic_bezier_point(param, 0, y1, y2, 1)


EASING_PRESETS: dict[str, tuple[float, float, float, float]] = {
    "linear": (0.0, 0.0, 1.0, 1.0),
    # Standard CSS
    "ease": (0.25, 0.1, 0.25, 1.0),
    "easeIn": (0.42, 0.0, 1.0, 1.0),
    "easeOut": (0.0, 0.0, 0.58, 1.0),
    "easeInOut": (0.42, 0.0, 0.58, 1.0),
    # Sine
    "easeInSine": (0.12, 0.0, 0.39, 0.0),
    "easeOutSine": (0.61, 1.0, 0.88, 1.0),
    "easeInOutSine": (0.37, 0.0, 0.63, 1.0),
    # Cubic
    "easeInCubic": (0.32, 0.0, 0.67, 0.0),
    "easeOutCubic": (0.33, 1.0, 0.68, 1.0),
    "easeInOutCubic": (0.65, 0.0, 0.35, 1.0),
    # Back (overshoot)
    "easeInBack": (0.36, 0.0, 0.66, -0.56),
    "easeOutBack": (0.34, 1.56, 0.64, 1.0),
    "easeInOutBack": (0.68, -0.6, 0.32, 1.6),
}


def apply_easing(t: float, easing_name: str) -> float:
    """Map linear progress t in [0, 1] through a named preset.

    Raises ValueError for unknown names.
    """
    if easing_name == "linear":
        return t
    if easing_name not in EASING_PRESETS:
        raise ValueError(
            f"Unknown easing: '{easing_name}'. Valid: {list_easings()}"
        )
    x1, y1, x2, y2 = EASING_PRESETS[easing_name]
    return bezier_easing(x1, y1, x2, y2, t)


def ease_clip(alpha: float, config) -> float:
    """Ease a clip's progress with its configured `easing` option."""
    return apply_easing(alpha, config.get("easing", "linear"))


def list_easings() -> list[str]:
    """Get list of available easing names."""
    return sorted(EASING_PRESETS.keys())
