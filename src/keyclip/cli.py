"""CLI for rendering a scene manifest.

Reads a YAML scene manifest, compiles its keyframes, and renders the
timeline as an mp4 (or a single PNG still).

Usage:
    # Render the full timeline
    keyclip render --manifest scene.yaml --output /tmp/scene.mp4

    # First two seconds only
    keyclip render --manifest scene.yaml --output /tmp/scene.mp4 \
        --preview-duration 2

    # Single frame at t = 1.5s
    keyclip render --manifest scene.yaml --output /tmp/frame.png --still 1.5

    # Validate only (compile, no rendering)
    keyclip render --manifest scene.yaml --validate
"""

import argparse
import time
from pathlib import Path

from .manifest import load_scene_manifest
from .render import build_scene, render_still, render_timeline


def _export_clip(clip, output_path, fps, quiet=False):
    """Write a clip to mp4 with standard encoding settings."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    clip.write_videofile(
        str(output_path),
        fps=fps,
        codec="libx264",
        audio=False,
        preset="medium",
        ffmpeg_params=["-crf", "20", "-pix_fmt", "yuv420p"],
        logger=None if quiet else "bar",
    )


def render(
    manifest_path: str,
    output_path: str,
    preview_duration: float | None = None,
    still: float | None = None,
    quiet: bool = False,
) -> None:
    """Load manifest, compile, render to mp4 (or PNG when `still` is set).

    Args:
        manifest_path: Path to YAML scene manifest.
        output_path: Output mp4 path, or png path with `still`.
        preview_duration: If set, cap the render to this many seconds.
        still: If set, render only the frame at this time.
        quiet: Suppress moviepy's progress bar.
    """
    config = load_scene_manifest(manifest_path)
    store, shapes = build_scene(config)

    video = config["video"]
    resolution = video["resolution"]
    fps = video["fps"]

    if still is not None:
        print(f"Rendering still at t={still:.2f}s")
        render_still(store, shapes, video, still, output_path)
        print(f"\nDone: {output_path}")
        return

    print(f"Rendering {len(shapes)} objects, timeline {store.get_total_length():.2f}s")
    t0 = time.monotonic()
    clip = render_timeline(store, shapes, video, preview_duration=preview_duration)
    print(f"  Duration: {clip.duration:.1f}s")
    print(f"\nResolution: {resolution[0]}x{resolution[1]}, {fps}fps")
    print(f"Writing to: {output_path}")
    _export_clip(clip, output_path, fps, quiet=quiet)
    elapsed = time.monotonic() - t0
    print(f"\nDone: {output_path} ({elapsed:.1f}s wall)")


# ── CLI entry point ───────────────────────────────────────────────


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Render a keyframe scene manifest to mp4.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML scene manifest",
    )
    parser.add_argument(
        "--output",
        help="Output mp4 path (png with --still)",
    )
    parser.add_argument(
        "--preview-duration", type=float, default=None,
        help="Cap the render to N seconds for fast iteration",
    )
    parser.add_argument(
        "--still", type=float, default=None,
        help="Render a single PNG frame at this time (seconds)",
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Suppress the encoding progress bar",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate and compile the manifest only, don't render",
    )
    args = parser.parse_args(args)

    if args.validate:
        config = load_scene_manifest(args.manifest)
        store, _ = build_scene(config)
        print(f"Manifest valid: {len(store.objects)} objects, "
              f"timeline {store.get_total_length():.2f}s")
        for obj_id in store.objects:
            fields = store.fields_of(obj_id)
            n_clips = sum(len(store.clips(obj_id, f)) for f in fields)
            print(f"  {obj_id}: {len(fields)} fields, {n_clips} clips")
        return

    if not args.output:
        parser.error("--output is required (unless using --validate)")

    if args.still is not None and args.preview_duration is not None:
        parser.error("--still and --preview-duration are mutually exclusive")

    render(
        args.manifest, args.output,
        preview_duration=args.preview_duration,
        still=args.still,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    main()
