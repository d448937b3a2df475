"""Field definitions — the pluggable blend/apply capabilities.

A field pairs two functions:
  - interpolate(a, b, alpha, config) -> value   (pure blend)
  - apply(target, a, b, alpha)                  (writes onto a target)

apply gets the raw pair plus alpha so discrete fields can pick a side
instead of blending. The optional config is the field-level layer of
the clip config merge. Discrete fields set eased=False so they
switch exactly when the clip completes, whatever its easing.

The stock fields write target attributes of the same name, so any
object with those attributes (e.g. render.Shape) can be animated.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping

from .common import lerp


@dataclass(frozen=True)
class FieldDefinition:
    apply: Callable[[Any, Any, Any, float], None]
    interpolate: Callable[[Any, Any, float, Mapping], Any]
    config: Mapping | None = None
    # False: the store hands this field linear progress, ignoring easing.
    eased: bool = True


def blended_field(attr: str, blend: Callable[[Any, Any, float], Any], config=None) -> FieldDefinition:
    """Field that blends with `blend` and assigns the result to target.<attr>."""
    def apply(target, a, b, alpha):
        setattr(target, attr, blend(a, b, alpha))

    def interpolate(a, b, alpha, config):
        return blend(a, b, alpha)

    return FieldDefinition(apply=apply, interpolate=interpolate, config=config)


def discrete_field(attr: str, config=None) -> FieldDefinition:
    """Field that holds the start value until the clip completes."""
    def pick(a, b, alpha):
        return b if alpha >= 1.0 else a

    return replace(blended_field(attr, pick, config=config), eased=False)


# ── Stock blends ──────────────────────────────────────────────────

def _blend_opacity(a, b, alpha):
    return min(1.0, max(0.0, lerp(a, b, alpha)))


def _blend_color(a, b, alpha):
    return tuple(int(round(min(255.0, max(0.0, c)))) for c in lerp(a, b, alpha))


DEFAULT_FIELDS = {
    "opacity": blended_field("opacity", _blend_opacity),
    "position": blended_field("position", lerp),
    "scale": blended_field("scale", lerp),
    "rotation": blended_field("rotation", lerp),
    "color": blended_field("color", _blend_color),
    "visible": discrete_field("visible"),
}
