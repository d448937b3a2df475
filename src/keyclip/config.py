"""Clip configuration templates and the layered config merge.

A clip's effective configuration comes from four layers, lowest priority
first: global (timeline) -> object -> field -> frame. A layer that leaves
an option unset (missing or None) never erases a value set further down.
"""

from collections.abc import Iterable, Mapping


# Options every clip carries. The keys form the recognized option set;
# the values are the defaults used when no layer sets them.
DEFAULT_CLIP_CONFIG = {
    "easing": "linear",
}

# Object-level defaults. Objects may also carry options that only matter
# to their own renderer; those survive the object merge untouched.
DEFAULT_OBJECT_CONFIG = {
    **DEFAULT_CLIP_CONFIG,
}


def resolve_config(
    layers: Iterable[Mapping | None],
    keys: Iterable[str] | None = None,
) -> dict:
    """Merge config layers left to right, skipping unset values.

    Args:
        layers: Partial configs, lowest priority first. None layers are
            ignored entirely.
        keys: Recognized option names. Only these end up in the result.
            When None, every key seen in any layer is kept (in first-seen
            order).

    Returns:
        New dict: for each key, the last layer value that is not None.
        Keys no layer sets are left out.
    """
    layers = [layer for layer in layers if layer is not None]
    if keys is None:
        keys = []
        for layer in layers:
            for k in layer:
                if k not in keys:
                    keys.append(k)

    resolved = {}
    for key in keys:
        for layer in layers:
            value = layer.get(key)
            if value is not None:
                resolved[key] = value
    return resolved
