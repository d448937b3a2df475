"""Clip store — evaluation of a compiled timeline at arbitrary times.

The store is pull-based: callers supply the time, the store finds the
active clip per field and hands values to the field capabilities. The
compiled keyframes and the base state are frozen on construction; the
only mutable state is the set of target bindings and the last time
passed to apply_all.

Clip lookup: for a query time t, the active clip is the last clip whose
start time is <= t (bisection over start times). Inside an inherit gap
that is the previous clip, clamped at its end value. Before the first
clip, the first clip is used at alpha 0.

Alpha: the clamped linear progress is eased with the clip's `easing`
option, then clamped to [0, 1] again so overshooting curves never leave
the progress range. Fields with eased=False get the linear progress.

Bindings: register() and Binding.detach() may be called at any time on
the thread that drives apply_all, including from inside an apply
callback (apply_all iterates over a snapshot). They must not race with
apply_all from another thread.
"""

from bisect import bisect_right
from itertools import count
from types import MappingProxyType

from .easing import ease_clip


class Binding:
    """Handle returned by ClipStore.register. detach() is idempotent."""

    def __init__(self, store, object_id, binding_id, target):
        self._store = store
        self.object_id = object_id
        self.binding_id = binding_id
        self.target = target

    @property
    def attached(self) -> bool:
        return self._store._bindings.get(self.binding_id) is self

    def detach(self) -> None:
        if self.attached:
            del self._store._bindings[self.binding_id]

    def __repr__(self):
        state = "attached" if self.attached else "detached"
        return f"Binding({self.object_id!r}, {self.binding_id!r}, {state})"


class ClipStore:
    """Compiled timeline plus target bindings.

    Args:
        fields: Capability table, field_id -> FieldDefinition.
        objects: Object ids in timeline order.
        keyframes: Output of compile_keyframes.
        base: The base state the keyframes were compiled from.
        length: Total timeline length.
        ease: (alpha, clip_config) -> eased alpha, applied before the
            field capabilities see alpha.
    """

    def __init__(self, fields, objects, keyframes, base, length, ease=ease_clip):
        self._fields = fields
        self._objects = list(objects)
        self._keyframes = dict(keyframes)
        self._base = MappingProxyType({
            obj: MappingProxyType(dict(state)) for obj, state in base.items()
        })
        self._length = length
        self._ease = ease
        self._bindings = {}
        self._binding_ids = count()
        self.time = None

        # Start times per field for bisection. Built once, read-only after.
        self._starts = {
            obj: {
                field: [clip.start[0] for clip in clips]
                for field, clips in keyframes[obj]["clips"].items()
            }
            for obj in self._objects
        }

    # ── Read access ───────────────────────────────────────────────

    @property
    def objects(self) -> list:
        return list(self._objects)

    @property
    def keyframes(self):
        return MappingProxyType(self._keyframes)

    @property
    def base(self):
        return self._base

    def get_total_length(self) -> float:
        return self._length

    def fields_of(self, object_id) -> list:
        return list(self._object(object_id)["fields"])

    def clips(self, object_id, field_id) -> tuple:
        entry = self._object(object_id)
        if field_id not in entry["clips"]:
            raise KeyError(f"Unknown field '{field_id}' for object '{object_id}'")
        return entry["clips"][field_id]

    def frame_times(self, fps: float) -> list[float]:
        """Sample times 0, 1/fps, 2/fps, ... up to and including the length."""
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        n = int(self._length * fps + 1e-9) + 1
        return [i / fps for i in range(n)]

    # ── Evaluation ────────────────────────────────────────────────

    def sample(self, object_id, field_id, t: float):
        """Return (start_value, end_value, alpha, config) for a field at t.

        alpha is eased and within [0, 1]. A field without clips holds its
        base value.
        """
        clips = self.clips(object_id, field_id)
        if not clips:
            value = self._base[object_id][field_id]
            return value, value, 1.0, MappingProxyType({})

        idx = bisect_right(self._starts[object_id][field_id], t) - 1
        if idx < 0:
            clip = clips[0]
            alpha = 0.0
        else:
            clip = clips[idx]
            alpha = clip.progress(t)

        if getattr(self._fields[field_id], "eased", True):
            alpha = min(1.0, max(0.0, self._ease(alpha, clip.config)))
        return clip.start[1], clip.end[1], alpha, clip.config

    def evaluate(self, object_id, field_id, t: float):
        """Blended value of one field at time t."""
        a, b, alpha, config = self.sample(object_id, field_id, t)
        return self._fields[field_id].interpolate(a, b, alpha, config)

    # ── Targets ───────────────────────────────────────────────────

    def register(self, object_id, target, binding_id=None) -> Binding:
        """Bind a target to receive apply_all results for one object.

        Registering an existing binding_id replaces its target.
        """
        self._object(object_id)
        if binding_id is None:
            binding_id = f"{object_id}#{next(self._binding_ids)}"
        binding = Binding(self, object_id, binding_id, target)
        self._bindings.pop(binding_id, None)
        self._bindings[binding_id] = binding
        return binding

    @property
    def bindings(self) -> list[Binding]:
        return list(self._bindings.values())

    def apply_all(self, t: float) -> None:
        """Apply every field of every bound object at time t."""
        self.time = t
        for binding in list(self._bindings.values()):
            for field_id in self._keyframes[binding.object_id]["fields"]:
                a, b, alpha, _ = self.sample(binding.object_id, field_id, t)
                self._fields[field_id].apply(binding.target, a, b, alpha)

    # ── Internals ─────────────────────────────────────────────────

    def _object(self, object_id):
        try:
            return self._keyframes[object_id]
        except KeyError:
            raise KeyError(f"Unknown object '{object_id}'") from None
