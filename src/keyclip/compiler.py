"""Keyframe compiler — sparse keyframes to contiguous clip lists.

Input shapes:
  base:
    {object_id: {field_id: initial_value, ..., "config": {...}}}
  definition:
    {object_id: {time: {field_id: Keyframe(value, config) | INHERIT}}}

Output (Keyframes, read-only mappings all the way down):
    {object_id: {
        "clips": {field_id: (Clip, ...)},
        "fields": (field_id, ...),
        "config": {...},              # global merged with object config
    }}

Every field starts with an implicit cursor at (0, base value). Walking
the object's keyframes in time order, a real value emits a clip from the
cursor to (time, value) and moves the cursor there; INHERIT only moves
the cursor's time, holding its value. Entries sharing a time key keep
their definition order.
"""

from collections.abc import Mapping
from types import MappingProxyType

from .clip import INHERIT, Clip
from .common import parse_time_key
from .config import DEFAULT_CLIP_CONFIG, resolve_config


# Reserved key in a base-state object holding its object-level config.
CONFIG_KEY = "config"


class KeyframeError(ValueError):
    """Schema violation in a base state or keyframe definition."""

    def __init__(self, message, object_id=None, field_id=None, time=None):
        self.object_id = object_id
        self.field_id = field_id
        self.time = time
        where = []
        if object_id is not None:
            where.append(f"object '{object_id}'")
        if field_id is not None:
            where.append(f"field '{field_id}'")
        if time is not None:
            where.append(f"time {time!r}")
        prefix = ", ".join(where)
        super().__init__(f"{prefix}: {message}" if prefix else message)


def compile_keyframes(
    fields: Mapping,
    base: Mapping,
    definition: Mapping,
    global_config: Mapping | None = None,
    clip_options: Mapping = DEFAULT_CLIP_CONFIG,
) -> tuple[list, dict, float]:
    """Compile a keyframe definition into per-field clip lists.

    Args:
        fields: Capability table, field_id -> FieldDefinition. Its optional
            `config` attribute is the field-level config layer.
        base: Base state (see module docstring). Object order here is the
            object order of the result.
        definition: Sparse keyframes per object. Objects may be omitted.
        global_config: Timeline-wide config layer.
        clip_options: Template of recognized clip options and their
            defaults. Only these keys appear in a clip's config.

    Returns:
        (object_ids, keyframes, last_frame) where last_frame is the largest
        time key seen across all objects.

    Raises:
        KeyframeError: Unknown objects or fields, bad time keys, or entries
            that are neither INHERIT nor a (value, config) pair.
    """
    object_ids = list(base)
    for object_id in definition:
        if object_id not in base:
            raise KeyframeError("keyframes given for an object missing from the base state",
                                object_id=object_id)

    option_keys = list(clip_options)
    last_frame = 0.0
    keyframes = {}

    for object_id in object_ids:
        state = base[object_id]
        if not isinstance(state, Mapping):
            raise KeyframeError(f"base state must be a mapping, got {state!r}",
                                object_id=object_id)

        object_config = state.get(CONFIG_KEY)
        if object_config is not None and not isinstance(object_config, Mapping):
            raise KeyframeError(f"'{CONFIG_KEY}' must be a mapping, got {object_config!r}",
                                object_id=object_id)

        object_fields = [f for f in state if f != CONFIG_KEY]
        for field_id in object_fields:
            if field_id not in fields:
                raise KeyframeError(
                    f"unknown field. Valid: {sorted(fields)}",
                    object_id=object_id, field_id=field_id,
                )

        # Open segment start per field, and the clips built so far.
        cursors = {f: (0.0, state[f]) for f in object_fields}
        clips = {f: [] for f in object_fields}

        for time, frame in _sorted_frames(object_id, definition.get(object_id)):
            last_frame = max(last_frame, time)
            for field_id, entry in frame.items():
                if field_id not in cursors:
                    raise KeyframeError("field is not part of the object's base state",
                                        object_id=object_id, field_id=field_id, time=time)

                if entry is INHERIT:
                    cursors[field_id] = (time, cursors[field_id][1])
                    continue

                value, frame_config = _unpack_entry(entry, object_id, field_id, time)
                config = resolve_config(
                    [
                        clip_options,
                        global_config,
                        object_config,
                        getattr(fields[field_id], "config", None),
                        frame_config,
                    ],
                    option_keys,
                )
                clips[field_id].append(
                    Clip(start=cursors[field_id], end=(time, value), config=config)
                )
                cursors[field_id] = (time, value)

        keyframes[object_id] = MappingProxyType({
            "clips": MappingProxyType({f: tuple(c) for f, c in clips.items()}),
            "fields": tuple(object_fields),
            "config": MappingProxyType(resolve_config([global_config, object_config])),
        })

    return object_ids, keyframes, last_frame


def _sorted_frames(object_id, frames) -> list[tuple[float, Mapping]]:
    """Parse time keys and sort ascending; ties keep definition order."""
    if frames is None:
        return []
    if not isinstance(frames, Mapping):
        raise KeyframeError(f"keyframes must be a mapping of time -> fields, got {frames!r}",
                            object_id=object_id)

    parsed = []
    for key, frame in frames.items():
        try:
            time = parse_time_key(key)
        except ValueError as e:
            raise KeyframeError(str(e), object_id=object_id, time=key) from None
        if not isinstance(frame, Mapping):
            raise KeyframeError(f"frame must be a mapping of field -> value, got {frame!r}",
                                object_id=object_id, time=time)
        parsed.append((time, frame))

    # sorted() is stable: equal times stay in insertion order.
    return sorted(parsed, key=lambda item: item[0])


def _unpack_entry(entry, object_id, field_id, time):
    """Split a keyframe entry into (value, frame_config)."""
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        value, frame_config = entry
    elif isinstance(entry, Mapping) and "value" in entry:
        extra = set(entry) - {"value", "config"}
        if extra:
            raise KeyframeError(f"unexpected keys {sorted(extra)} in keyframe entry",
                                object_id=object_id, field_id=field_id, time=time)
        value, frame_config = entry["value"], entry.get("config")
    else:
        raise KeyframeError(
            f"expected INHERIT or a (value, config) pair, got {entry!r}",
            object_id=object_id, field_id=field_id, time=time,
        )

    if frame_config is not None and not isinstance(frame_config, Mapping):
        raise KeyframeError(f"keyframe config must be a mapping, got {frame_config!r}",
                            object_id=object_id, field_id=field_id, time=time)
    return value, frame_config
