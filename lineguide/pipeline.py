"""Per-frame classification pipeline."""

from typing import Iterable, List

from .frame_data import Frame, FrameResult
from .guidance_detector import detect_guidance
from .models import DEFAULT_CONFIG, DetectorConfig
from .stop_detector import detect_stop


def classify_frame(frame: Frame, config: DetectorConfig = DEFAULT_CONFIG) -> FrameResult:
    """Run both detectors on one frame."""
    return FrameResult(
        name=frame.name,
        stop=detect_stop(frame, config),
        guidance=detect_guidance(frame, config),
    )


def classify_frames(
    frames: Iterable[Frame], config: DetectorConfig = DEFAULT_CONFIG
) -> List[FrameResult]:
    """
    Classify a batch of frames.

    Frames are processed independently; no state is carried between them,
    so each result depends only on its own frame and the config.
    """
    return [classify_frame(frame, config) for frame in frames]
