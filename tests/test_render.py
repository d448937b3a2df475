"""Tests for the preview renderer."""

import numpy as np
import pytest
from PIL import Image

from keyclip.manifest import load_scene_manifest
from keyclip.render import (
    Shape,
    build_scene,
    render_frame,
    render_shape_patch,
    render_still,
    render_timeline,
)


BLACK = (0, 0, 0)


class TestRenderShapePatch:
    def test_size_follows_scale(self):
        patch = render_shape_patch(Shape(size=(10, 6), scale=2.0))
        assert patch.size == (20, 12)

    def test_invisible_shapes_skipped(self):
        assert render_shape_patch(Shape(visible=False)) is None
        assert render_shape_patch(Shape(opacity=0.0)) is None
        assert render_shape_patch(Shape(scale=0.0)) is None

    def test_rotation_expands_patch(self):
        patch = render_shape_patch(Shape(size=(10, 10), rotation=45))
        assert patch.size[0] > 10


class TestRenderFrame:
    def test_shape_drawn_at_center_position(self):
        shape = Shape(size=(10, 10), position=(20, 10), color=(255, 255, 255))
        frame = render_frame([shape], (40, 20), BLACK)
        assert frame.shape == (20, 40, 3)
        assert frame.dtype == np.uint8
        assert tuple(frame[10, 20]) == (255, 255, 255)
        assert tuple(frame[0, 0]) == (0, 0, 0)
        assert tuple(frame[10, 30]) == (0, 0, 0)

    def test_opacity_blends_with_background(self):
        shape = Shape(size=(10, 10), position=(20, 10), opacity=0.5)
        frame = render_frame([shape], (40, 20), BLACK)
        assert abs(int(frame[10, 20, 0]) - 128) <= 1

    def test_ellipse_leaves_corners(self):
        shape = Shape(kind="ellipse", size=(10, 10), position=(20, 10))
        frame = render_frame([shape], (40, 20), BLACK)
        assert tuple(frame[5, 15]) == (0, 0, 0)
        assert tuple(frame[10, 20]) == (255, 255, 255)

    def test_later_shapes_on_top(self):
        red = Shape(size=(10, 10), position=(20, 10), color=(255, 0, 0))
        blue = Shape(size=(4, 4), position=(20, 10), color=(0, 0, 255))
        frame = render_frame([red, blue], (40, 20), BLACK)
        assert tuple(frame[10, 20]) == (0, 0, 255)
        assert tuple(frame[10, 16]) == (255, 0, 0)

    def test_shapes_off_canvas_are_clipped(self):
        shape = Shape(size=(10, 10), position=(-2, -2))
        frame = render_frame([shape], (40, 20), (9, 9, 9))
        assert tuple(frame[0, 0]) == (255, 255, 255)
        assert tuple(frame[19, 39]) == (9, 9, 9)


class TestBuildScene:
    def test_registers_one_shape_per_object(self, scene_manifest):
        store, shapes = build_scene(load_scene_manifest(scene_manifest))
        assert list(shapes) == ["box"]
        assert [b.binding_id for b in store.bindings] == ["box"]

    def test_shapes_start_at_base_state(self, scene_manifest):
        _, shapes = build_scene(load_scene_manifest(scene_manifest))
        box = shapes["box"]
        assert box.size == (16, 16)
        assert box.opacity == 0
        assert box.position == pytest.approx((32, 24))
        assert box.color == (255, 0, 0)

    def test_length_from_keyframes(self, scene_manifest):
        store, _ = build_scene(load_scene_manifest(scene_manifest))
        assert store.get_total_length() == 2


class TestRenderTimeline:
    def test_frames_follow_timeline(self, scene_manifest):
        config = load_scene_manifest(scene_manifest)
        store, shapes = build_scene(config)
        clip = render_timeline(store, shapes, config["video"])
        assert clip.duration == pytest.approx(2)

        start = clip.get_frame(0)
        assert start.max() == 0

        middle = clip.get_frame(1.0)
        assert tuple(middle[24, 40]) == (255, 0, 0)
        assert tuple(middle[24, 20]) == (0, 0, 0)

    def test_preview_duration_caps(self, scene_manifest):
        config = load_scene_manifest(scene_manifest)
        store, shapes = build_scene(config)
        clip = render_timeline(store, shapes, config["video"], preview_duration=0.5)
        assert clip.duration == pytest.approx(0.5)

    def test_zero_length_still_has_a_frame(self, scene_manifest):
        config = load_scene_manifest(scene_manifest)
        config["timeline"]["length"] = 0
        store, shapes = build_scene(config)
        clip = render_timeline(store, shapes, config["video"])
        assert clip.duration == pytest.approx(0.1)


class TestRenderStill:
    def test_writes_png(self, scene_manifest, tmp_path):
        config = load_scene_manifest(scene_manifest)
        store, shapes = build_scene(config)
        out = tmp_path / "stills" / "frame.png"
        render_still(store, shapes, config["video"], 2.0, out)
        assert out.exists()
        img = Image.open(out)
        assert img.size == (64, 48)
        assert img.getpixel((48, 24)) == (255, 0, 0)
        assert store.time == 2.0
