"""Preview renderer — draws a compiled timeline as flat 2D shapes.

Each scene object gets a Shape target registered with the clip store.
Per video frame the store applies every field at time t onto the
shapes, then the shapes are drawn onto a background with Pillow.

Shape attributes share names with the stock fields (position, scale,
rotation, opacity, color, visible), so the stock apply functions write
them directly. position is the shape's center in pixels.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw
from moviepy import VideoClip

from .fields import DEFAULT_FIELDS
from .orchestrate import create_orchestrate


@dataclass
class Shape:
    kind: str = "rect"
    size: tuple = (64, 64)
    position: tuple = (0.0, 0.0)
    scale: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0
    color: tuple = (255, 255, 255)
    visible: bool = True


# ── Scene setup ──────────────────────────────────────────────────


def build_scene(config: dict, fields=DEFAULT_FIELDS):
    """Orchestrate a loaded scene manifest and bind one Shape per object.

    Returns (store, shapes) with shapes already applied at t = 0.
    """
    orchestrate = create_orchestrate(fields)
    store = orchestrate(config["base"], config["definition"], config["timeline"])

    shapes = {}
    for obj_id, info in config["objects"].items():
        shape = Shape(kind=info["shape"], size=info["size"])
        store.register(obj_id, shape, binding_id=obj_id)
        shapes[obj_id] = shape

    store.apply_all(0.0)
    return store, shapes


# ── Frame rendering ──────────────────────────────────────────────


def render_shape_patch(shape: Shape) -> Image.Image | None:
    """Render one shape as an RGBA patch, or None if nothing is visible."""
    if not shape.visible or shape.opacity <= 0:
        return None
    w = int(round(shape.size[0] * shape.scale))
    h = int(round(shape.size[1] * shape.scale))
    if w <= 0 or h <= 0:
        return None

    patch = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(patch)
    fill = (*shape.color, int(round(255 * shape.opacity)))
    if shape.kind == "ellipse":
        draw.ellipse([(0, 0), (w - 1, h - 1)], fill=fill)
    else:
        draw.rectangle([(0, 0), (w - 1, h - 1)], fill=fill)

    if shape.rotation:
        # Pillow rotates counter-clockwise; timeline rotation is clockwise.
        patch = patch.rotate(-shape.rotation, expand=True, resample=Image.BICUBIC)
    return patch


def render_frame(
    shapes,
    resolution: tuple[int, int],
    background: tuple[int, int, int],
) -> np.ndarray:
    """Draw shapes (in order, later on top) onto a solid background.

    Returns:
        numpy array of shape (h, w, 3), dtype uint8.
    """
    canvas = Image.new("RGB", tuple(resolution), tuple(background))
    for shape in shapes:
        patch = render_shape_patch(shape)
        if patch is None:
            continue
        cx, cy = shape.position
        x = int(round(cx - patch.width / 2))
        y = int(round(cy - patch.height / 2))
        # The patch's alpha band is the blend mask.
        canvas.paste(patch, (x, y), patch)
    return np.array(canvas)


# ── Timeline rendering ───────────────────────────────────────────


def render_timeline(store, shapes: dict, video: dict, preview_duration: float | None = None) -> VideoClip:
    """Wrap the store in a moviepy clip that applies and draws each frame.

    A timeline of length 0 still yields a single frame.
    """
    fps = video["fps"]
    duration = store.get_total_length()
    if preview_duration and duration > preview_duration:
        duration = preview_duration
    duration = max(duration, 1.0 / fps)

    def frame_function(t):
        store.apply_all(t)
        return render_frame(shapes.values(), video["resolution"], video["background"])

    return VideoClip(frame_function, duration=duration).with_fps(fps)


def render_still(store, shapes: dict, video: dict, t: float, output_path: str | Path) -> None:
    """Apply the timeline at time t and save a single PNG."""
    store.apply_all(t)
    frame = render_frame(shapes.values(), video["resolution"], video["background"])
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(frame).save(str(output_path))
