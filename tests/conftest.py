"""Shared test fixtures for keyclip tests."""

import pytest
import yaml


# A box that fades in by t=1 and slides right by t=2 (red via palette).
SCENE = {
    "video": {"fps": 10, "resolution": [64, 48], "background": "#000000"},
    "colors": {"accent": "#ff0000"},
    "objects": {
        "box": {
            "size": [16, 16],
            "base": {"opacity": 0, "position": [32, 24], "color": "accent"},
        },
    },
    "keyframes": {
        "box": {
            1: {"opacity": 1},
            2: {"position": [48, 24]},
        },
    },
}


@pytest.fixture
def scene_manifest(tmp_path):
    """Write the shared box scene to a YAML manifest, return its path.

    Shared across test_render.py and test_cli.py.
    """
    path = tmp_path / "scene.yaml"
    with open(path, "w") as f:
        yaml.dump(SCENE, f)
    return path
