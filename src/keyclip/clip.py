"""Clip and keyframe value types.

A Clip is one interpolation segment for a single field of a single
object: start (time, value) -> end (time, value), plus its resolved
config. A Keyframe is what the caller writes at a point in time.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple


class _Inherit:
    """Sentinel type for the inherit marker."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "INHERIT"

    def __reduce__(self):
        return (_Inherit, ())


# Hold the previous value and only move the next segment's start time.
INHERIT = _Inherit()


class Keyframe(NamedTuple):
    """A keyed value plus its per-frame config layer."""
    value: Any
    config: Mapping | None = None


@dataclass(frozen=True)
class Clip:
    start: tuple[float, Any]
    end: tuple[float, Any]
    config: Mapping = field(default_factory=dict)

    def __post_init__(self):
        if self.start[0] > self.end[0]:
            raise ValueError(
                f"Clip start ({self.start[0]}) must be <= end ({self.end[0]})"
            )
        object.__setattr__(self, "config", MappingProxyType(dict(self.config)))

    @property
    def duration(self) -> float:
        return self.end[0] - self.start[0]

    def progress(self, t: float) -> float:
        """Linear progress through the clip at time t, clamped to [0, 1].

        Zero-duration clips are always complete.
        """
        start_t, end_t = self.start[0], self.end[0]
        if end_t == start_t:
            return 1.0
        alpha = (t - start_t) / (end_t - start_t)
        return min(1.0, max(0.0, alpha))
