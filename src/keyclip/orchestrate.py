"""Orchestration entry point — base state + keyframes -> ClipStore.

create_orchestrate binds a field capability table once; the returned
function compiles a scene and builds its store. Compile errors propagate,
so a store is either complete or never returned.
"""

from collections.abc import Mapping

from .compiler import compile_keyframes
from .config import DEFAULT_CLIP_CONFIG, DEFAULT_OBJECT_CONFIG, resolve_config
from .fields import DEFAULT_FIELDS
from .store import ClipStore


def create_orchestrate(fields: Mapping, clip_options: Mapping = DEFAULT_CLIP_CONFIG, ease=None):
    """Build an orchestrate(base, definition, config=None) function over `fields`.

    config holds an optional `length` (overrides the computed last frame)
    plus global clip options such as `easing`.
    """
    def orchestrate(base: Mapping, definition: Mapping, config: Mapping | None = None) -> ClipStore:
        config = dict(config or {})
        length = config.pop("length", None)
        if length is not None and (
            isinstance(length, bool) or not isinstance(length, (int, float)) or length < 0
        ):
            raise ValueError(f"Timeline length must be a number >= 0, got {length!r}")

        global_config = resolve_config([DEFAULT_OBJECT_CONFIG, config])
        objects, keyframes, last_frame = compile_keyframes(
            fields, base, definition, global_config, clip_options=clip_options,
        )

        store_kwargs = {} if ease is None else {"ease": ease}
        return ClipStore(
            fields,
            objects,
            keyframes,
            base,
            last_frame if length is None else length,
            **store_kwargs,
        )

    return orchestrate


# Orchestration over the stock fields.
orchestrate = create_orchestrate(DEFAULT_FIELDS)
