"""Tests for the render and inspect CLIs."""

import pytest
from moviepy import VideoFileClip
from PIL import Image


class TestRenderCli:
    def test_validate(self, scene_manifest, capsys):
        from keyclip.cli import main

        main(["--manifest", str(scene_manifest), "--validate"])
        out = capsys.readouterr().out
        assert "Manifest valid: 1 objects" in out
        assert "box: 3 fields, 2 clips" in out

    def test_output_required(self, scene_manifest):
        from keyclip.cli import main

        with pytest.raises(SystemExit):
            main(["--manifest", str(scene_manifest)])

    def test_still_and_preview_exclusive(self, scene_manifest, tmp_path):
        from keyclip.cli import main

        with pytest.raises(SystemExit):
            main([
                "--manifest", str(scene_manifest), "--output", str(tmp_path / "x.png"),
                "--still", "1", "--preview-duration", "1",
            ])

    def test_still(self, scene_manifest, tmp_path):
        from keyclip.cli import main

        out = tmp_path / "frame.png"
        main(["--manifest", str(scene_manifest), "--output", str(out), "--still", "1"])
        assert Image.open(out).getpixel((40, 24)) == (255, 0, 0)

    def test_renders_mp4(self, scene_manifest, tmp_path):
        from keyclip.cli import main

        out = tmp_path / "renders" / "scene.mp4"
        main(["--manifest", str(scene_manifest), "--output", str(out), "--quiet"])
        assert out.exists()
        with VideoFileClip(str(out)) as clip:
            assert 1.5 < clip.duration < 2.5
            assert tuple(clip.size) == (64, 48)


class TestInspectCli:
    def test_lists_clips(self, scene_manifest, capsys):
        from keyclip.inspect_cli import main

        main(["--manifest", str(scene_manifest)])
        out = capsys.readouterr().out
        assert "Timeline length: 2.00s" in out
        assert "box:" in out
        assert "color: holds (255, 0, 0)" in out
        assert "[linear]" in out

    def test_values_at_time(self, scene_manifest, capsys):
        from keyclip.inspect_cli import main

        main(["--manifest", str(scene_manifest), "--at", "1"])
        out = capsys.readouterr().out
        assert "box.opacity = 1" in out
        assert "box.position = (40, 24)" in out
