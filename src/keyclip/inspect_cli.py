"""CLI for inspecting a compiled timeline.

Prints every object's clips (start -> end, easing) so keyframe ordering
and inherit holds can be checked without rendering. With --at, also
prints each field's evaluated value at that time.

Usage:
    keyclip inspect --manifest scene.yaml
    keyclip inspect --manifest scene.yaml --at 1.5
"""

import argparse

from .manifest import load_scene_manifest
from .orchestrate import orchestrate


def _fmt(value):
    if isinstance(value, float):
        return f"{value:.3g}"
    if isinstance(value, tuple):
        return "(" + ", ".join(_fmt(v) for v in value) + ")"
    return repr(value)


def format_clips(store) -> list[str]:
    """One line per clip, grouped by object and field."""
    lines = [f"Timeline length: {store.get_total_length():.2f}s"]
    for obj_id in store.objects:
        lines.append(f"{obj_id}:")
        for field_id in store.fields_of(obj_id):
            clips = store.clips(obj_id, field_id)
            if not clips:
                base = store.base[obj_id][field_id]
                lines.append(f"  {field_id}: holds {_fmt(base)}")
                continue
            lines.append(f"  {field_id}:")
            for clip in clips:
                (t0, v0), (t1, v1) = clip.start, clip.end
                lines.append(
                    f"    {t0:7.2f}s {_fmt(v0):>16} -> {t1:7.2f}s {_fmt(v1):<16}"
                    f" [{clip.config.get('easing', 'linear')}]"
                )
    return lines


def format_values(store, t: float) -> list[str]:
    lines = [f"Values at t={t:.2f}s:"]
    for obj_id in store.objects:
        for field_id in store.fields_of(obj_id):
            value = store.evaluate(obj_id, field_id, t)
            lines.append(f"  {obj_id}.{field_id} = {_fmt(value)}")
    return lines


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Print the compiled clips of a scene manifest.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML scene manifest",
    )
    parser.add_argument(
        "--at", type=float, default=None,
        help="Also print every field's value at this time (seconds)",
    )
    parsed = parser.parse_args(args)

    config = load_scene_manifest(parsed.manifest)
    store = orchestrate(config["base"], config["definition"], config["timeline"])

    for line in format_clips(store):
        print(line)
    if parsed.at is not None:
        print()
        for line in format_values(store, parsed.at):
            print(line)


if __name__ == "__main__":
    main()
