"""Scene manifest loader — keyframe timelines declared in YAML.

Parses a scene manifest into the base state and keyframe definition the
compiler consumes, plus the video settings and per-object shape info the
preview renderer needs.

Scene manifest schema:
  video:
    fps: 30
    resolution: [640, 360]
    background: "#101014"         # default "#000000"
  colors:
    accent: "#e04c77"             # palette for color fields
  timeline:
    length: 4                     # optional, defaults to the last keyframe
    easing: easeInOut             # global clip options
  objects:
    cube:
      shape: rect                 # "rect" or "ellipse"
      size: [80, 80]
      base: {opacity: 0, position: [100, 100], color: accent}
      config: {easing: linear}    # object-level clip options
  keyframes:
    cube:
      0: {opacity: 1}
      2:
        opacity: {value: 0, easing: easeIn}   # per-frame clip options
        position: inherit
"""

from pathlib import Path

import yaml

from .clip import INHERIT, Keyframe
from .common import parse_hex_color, parse_time_key, resolve_color
from .compiler import CONFIG_KEY
from .easing import EASING_PRESETS


VALID_SHAPES = {"rect", "ellipse"}

DEFAULT_SHAPE_SIZE = (64, 64)

INHERIT_TOKEN = "inherit"


def load_scene_manifest(manifest_path: str | Path) -> dict:
    """Load, validate, and normalize a scene manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Validate video settings (fps, resolution, background).
      3. Parse the color palette.
      4. Validate timeline options (length, easing).
      5. Normalize objects: shape info, base values, object config.
      6. Normalize keyframes: "inherit" -> INHERIT, values -> Keyframe.

    Args:
        manifest_path: Path to the YAML scene manifest.

    Returns:
        Dict with video, colors, timeline, objects, base and definition.
        base/definition are ready for orchestrate(); timeline is its config.

    Raises:
        ValueError: Missing/invalid fields.
        FileNotFoundError: Missing manifest file.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError("Scene manifest: expected a mapping at the top level")

    video = _load_video(raw)

    colors = {}
    for key, value in (raw.get("colors") or {}).items():
        colors[key] = resolve_color(value, {})

    timeline = dict(raw.get("timeline") or {})
    length = timeline.get("length")
    if length is not None and (
        isinstance(length, bool) or not isinstance(length, (int, float)) or length < 0
    ):
        raise ValueError(f"Scene manifest: timeline.length must be >= 0, got {length!r}")
    _validate_options(timeline, "timeline")

    if "objects" not in raw or not isinstance(raw["objects"], dict):
        raise ValueError("Scene manifest: missing required 'objects' mapping")

    objects = {}
    base = {}
    for obj_id, obj in raw["objects"].items():
        objects[obj_id], base[obj_id] = _load_object(obj_id, obj or {}, colors)

    definition = {}
    for obj_id, frames in (raw.get("keyframes") or {}).items():
        if obj_id not in objects:
            raise ValueError(f"Keyframes for unknown object '{obj_id}'")
        definition[obj_id] = _load_frames(obj_id, frames or {}, colors)

    return {
        "video": video,
        "colors": colors,
        "timeline": timeline,
        "objects": objects,
        "base": base,
        "definition": definition,
    }


def _load_video(raw: dict) -> dict:
    if "video" not in raw:
        raise ValueError("Scene manifest: missing required 'video' section")
    video = dict(raw["video"])

    fps = video.get("fps")
    if fps is None:
        raise ValueError("Scene manifest: video.fps is required")
    if isinstance(fps, bool) or not isinstance(fps, (int, float)) or fps <= 0:
        raise ValueError(f"Scene manifest: video.fps must be > 0, got {fps!r}")

    resolution = video.get("resolution")
    if resolution is None:
        raise ValueError("Scene manifest: video.resolution is required")
    if (
        not isinstance(resolution, (list, tuple)) or len(resolution) != 2
        or not all(isinstance(v, int) and v > 0 for v in resolution)
    ):
        raise ValueError(
            f"Scene manifest: video.resolution must be [width, height], got {resolution!r}"
        )
    video["resolution"] = tuple(resolution)
    video["background"] = parse_hex_color(video.get("background", "#000000"))
    return video


def _load_object(obj_id, obj: dict, colors: dict) -> tuple[dict, dict]:
    """Return (shape info, base state) for one object entry."""
    shape = obj.get("shape", "rect")
    if shape not in VALID_SHAPES:
        raise ValueError(
            f"Object '{obj_id}': invalid shape '{shape}'. Valid: {sorted(VALID_SHAPES)}"
        )

    size = obj.get("size", DEFAULT_SHAPE_SIZE)
    if (
        not isinstance(size, (list, tuple)) or len(size) != 2
        or not all(isinstance(v, (int, float)) and v > 0 for v in size)
    ):
        raise ValueError(f"Object '{obj_id}': size must be [width, height], got {size!r}")

    base = {}
    for field, value in (obj.get("base") or {}).items():
        base[field] = _normalize_value(field, value, colors, f"Object '{obj_id}'")

    config = obj.get("config")
    if config is not None:
        if not isinstance(config, dict):
            raise ValueError(f"Object '{obj_id}': config must be a mapping")
        _validate_options(config, f"Object '{obj_id}'")
        base[CONFIG_KEY] = dict(config)

    return {"shape": shape, "size": tuple(size)}, base


def _load_frames(obj_id, frames: dict, colors: dict) -> dict:
    """Normalize one object's keyframes. Time keys are checked, not rewritten."""
    result = {}
    for time_key, frame in frames.items():
        where = f"Object '{obj_id}' at time {time_key!r}"
        try:
            parse_time_key(time_key)
        except ValueError as e:
            raise ValueError(f"Object '{obj_id}': {e}") from None
        if not isinstance(frame, dict):
            raise ValueError(f"{where}: frame must be a mapping of field -> value")

        entries = {}
        for field, entry in frame.items():
            if entry == INHERIT_TOKEN:
                entries[field] = INHERIT
            elif isinstance(entry, dict):
                if "value" not in entry:
                    raise ValueError(f"{where}: field '{field}' is missing 'value'")
                options = {k: v for k, v in entry.items() if k != "value"}
                _validate_options(options, where)
                value = _normalize_value(field, entry["value"], colors, where)
                entries[field] = Keyframe(value, options or None)
            else:
                entries[field] = Keyframe(_normalize_value(field, entry, colors, where))
        result[time_key] = entries
    return result


def _normalize_value(field: str, value, colors: dict, where: str):
    """Resolve palette colors and turn YAML lists into tuples."""
    if field == "color":
        try:
            return resolve_color(value, colors)
        except ValueError as e:
            raise ValueError(f"{where}: {e}") from None
    if field == "visible" and not isinstance(value, bool):
        raise ValueError(f"{where}: 'visible' must be true or false, got {value!r}")
    if isinstance(value, list):
        return tuple(value)
    return value


def _validate_options(options: dict, where: str) -> None:
    easing = options.get("easing")
    if easing is not None and easing not in EASING_PRESETS:
        raise ValueError(
            f"{where}: invalid easing '{easing}'. Valid: {sorted(EASING_PRESETS)}"
        )
