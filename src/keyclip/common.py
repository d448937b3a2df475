"""keyclip.common — shared utilities for manifests and rendering.

Contains: color parsing, time-key parsing, numeric blending.
"""

import math

import numpy as np


# ── Color utilities ────────────────────────────────────────────────

def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple."""
    hex_str = hex_str.lstrip("#")
    if len(hex_str) != 6:
        raise ValueError(f"Invalid hex color: '#{hex_str}'")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


def resolve_color(
    value, palette: dict[str, tuple[int, int, int]],
) -> tuple[int, int, int]:
    """Resolve a color reference — palette key, inline '#RRGGBB' or [r, g, b].

    Palette keys are tried first. If the value starts with '#' or is 6 hex
    chars, it's parsed as inline hex. Otherwise raises ValueError.
    """
    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise ValueError(f"Color list must have 3 channels, got {value!r}")
        return tuple(int(c) for c in value)
    if not isinstance(value, str):
        raise ValueError(f"Unknown color: {value!r}")
    if value in palette:
        return palette[value]
    if value.startswith("#") or (
        len(value) == 6
        and all(c in "0123456789abcdefABCDEF" for c in value)
    ):
        return parse_hex_color(value)
    raise ValueError(
        f"Unknown color: '{value}'. Not in palette and not a hex value."
    )


# ── Time keys ──────────────────────────────────────────────────────

def parse_time_key(key) -> float:
    """Parse a keyframe time key (number or numeric string) to a float.

    Raises ValueError for booleans, non-numeric strings, NaN, infinities
    and negative times. The timeline always starts at 0.
    """
    if isinstance(key, bool):
        raise ValueError(f"Invalid time key: {key!r}")
    try:
        t = float(key)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid time key: {key!r}") from None
    if not math.isfinite(t):
        raise ValueError(f"Time key must be finite, got {key!r}")
    if t < 0:
        raise ValueError(f"Time key must be >= 0, got {key!r}")
    return t


# ── Blending ───────────────────────────────────────────────────────

def lerp(a, b, alpha: float):
    """Linear blend of two scalars or equal-length vectors.

    Scalars come back as float, sequences as a tuple of floats.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(f"Cannot blend values of different shape: {a!r}, {b!r}")
    out = va + (vb - va) * alpha
    if out.ndim == 0:
        return float(out)
    return tuple(float(v) for v in out)
