"""Preview clip export using MoviePy."""

from typing import Callable, List, Optional

import numpy as np
from moviepy import ImageSequenceClip, VideoClip


class ClipExporter:
    """Turns a sequence of debug composites into a playable clip."""

    def __init__(
        self, clip_factory: Optional[Callable[..., VideoClip]] = None
    ) -> None:
        """
        Initialize exporter with optional custom clip factory.

        Args:
            clip_factory: Called as clip_factory(images, fps=fps) (for testing injection)
        """
        self._make_clip = clip_factory or ImageSequenceClip

    def build_clip(self, images: List[np.ndarray], fps: float = 2.0) -> VideoClip:
        """
        Build a clip showing each image for 1 / fps seconds.

        Args:
            images: RGB images of identical shape (H, W, 3)
            fps: Frames per second

        Returns:
            The clip

        Raises:
            ValueError: If images is empty or the shapes differ
        """
        if not images:
            raise ValueError("Cannot build a clip from zero images")
        shape = images[0].shape
        for image in images[1:]:
            if image.shape != shape:
                raise ValueError(f"Image shapes differ: {shape} vs {image.shape}")
        return self._make_clip(list(images), fps=fps)

    def export(
        self,
        clip: VideoClip,
        output_path: str,
        fps: float = 2.0,
        codec: str = "libx264",
    ) -> None:
        """
        Write the clip to a video file.

        Args:
            clip: Clip to export
            output_path: Output file path
            fps: Frames per second
            codec: Video codec
        """
        clip.write_videofile(output_path, fps=fps, codec=codec, audio=False)
