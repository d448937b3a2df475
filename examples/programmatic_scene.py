#!/usr/bin/env python3
"""Build a timeline in Python (no manifest) and sample it.

Usage:
    python examples/programmatic_scene.py
"""

from keyclip.clip import INHERIT, Keyframe
from keyclip.orchestrate import orchestrate

base = {
    "cube": {"opacity": 0.0, "position": (0.0, 0.0)},
    "label": {"opacity": 1.0, "config": {"easing": "easeOut"}},
}

definition = {
    "cube": {
        0: {"opacity": Keyframe(1.0)},
        1: {"position": INHERIT},
        2: {"opacity": Keyframe(0.0, {"easing": "easeIn"}),
            "position": Keyframe((10.0, 5.0))},
    },
    "label": {
        3: {"opacity": Keyframe(0.0)},
    },
}

store = orchestrate(base, definition, {"easing": "linear"})

for t in store.frame_times(fps=2):
    values = {
        f"{obj}.{field}": store.evaluate(obj, field, t)
        for obj in store.objects
        for field in store.fields_of(obj)
    }
    print(f"t={t:.1f}  {values}")
