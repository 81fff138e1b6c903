"""Tests for preview clip export using in-memory images."""

import numpy as np
import pytest

from lineguide.clip_exporter import ClipExporter


def make_images(count, shape=(8, 16, 3)):
    return [np.full(shape, i * 40, dtype=np.uint8) for i in range(count)]


class TestClipExporter:
    def test_build_clip_duration_and_size(self):
        clip = ClipExporter().build_clip(make_images(4), fps=2.0)
        assert clip.duration == pytest.approx(2.0)
        assert clip.size == (16, 8)

    def test_clip_frames_follow_images(self):
        clip = ClipExporter().build_clip(make_images(3), fps=1.0)
        assert clip.get_frame(0.5)[0, 0, 0] == 0
        assert clip.get_frame(2.5)[0, 0, 0] == 80

    def test_empty_images_raise(self):
        with pytest.raises(ValueError, match="zero images"):
            ClipExporter().build_clip([])

    def test_mismatched_shapes_raise(self):
        images = make_images(2) + [np.zeros((4, 4, 3), dtype=np.uint8)]
        with pytest.raises(ValueError, match="shapes differ"):
            ClipExporter().build_clip(images)

    def test_dependency_injection(self):
        """Test that a custom clip factory can be injected."""
        calls = []

        def fake_factory(images, fps):
            calls.append((len(images), fps))
            return "clip"

        exporter = ClipExporter(clip_factory=fake_factory)
        assert exporter.build_clip(make_images(5), fps=4.0) == "clip"
        assert calls == [(5, 4.0)]

    def test_export_writes_without_audio(self):
        class RecordingClip:
            def __init__(self):
                self.calls = []

            def write_videofile(self, path, **kwargs):
                self.calls.append((path, kwargs))

        clip = RecordingClip()
        ClipExporter().export(clip, "out.mp4", fps=3.0)
        path, kwargs = clip.calls[0]
        assert path == "out.mp4"
        assert kwargs["fps"] == 3.0
        assert kwargs["codec"] == "libx264"
        assert kwargs["audio"] is False
