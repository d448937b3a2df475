"""keyclip — keyframe timelines compiled to clips.

Compile sparse per-object keyframes into contiguous interpolation clips
and evaluate the timeline at any time. Scenes can be declared in YAML
manifests and previewed as rendered video.
"""
