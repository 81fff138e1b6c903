"""Stop marking detection.

Counts stop-colored pixels inside a fixed box and compares the count
against a percentage of the box area using integer arithmetic only.
"""

from typing import Optional

import cv2
import numpy as np

from .color_model import decode_pixels, stop_color_mask, track_color_mask
from .frame_data import Frame, StopResult
from .models import DEFAULT_CONFIG, DetectorConfig


def stop_percentage(votes: int, area: int) -> Optional[int]:
    """
    Fraction of a box covered by votes, in hundredths of a percent.

    Example: 42 votes in a 209 pixel box -> 2009 (20.09%).

    Returns:
        votes * 10000 // area, or None if area is 0
    """
    if area <= 0:
        return None
    return (votes * 10000) // area


def is_stop_percentage(percentage: Optional[int], percent_to_stop: int) -> bool:
    """Return True if a stop_percentage() value reaches the stop threshold."""
    if percentage is None:
        return False
    return percentage >= percent_to_stop * 100


def detect_stop(frame: Frame, config: DetectorConfig = DEFAULT_CONFIG) -> StopResult:
    """
    Decide whether the vehicle has reached a stop marking.

    A pixel votes when it is stop-colored, not track-colored and inside
    config.stop_box. The box outline is drawn on the mask after counting
    and does not influence the vote.

    Args:
        frame: Camera frame
        config: Detector configuration

    Returns:
        StopResult with the decision, the vote mask and the vote count
    """
    mask = np.zeros((frame.rows, frame.cols), dtype=np.uint8)
    box = config.stop_box
    area = box.area
    if area == 0:
        return StopResult(is_stop=False, mask=mask, votes=0, percentage=None)

    inside = box.clipped(frame.rows, frame.cols)
    (x1, y1), (x2, y2) = inside.top_left, inside.bottom_right

    votes = 0
    if inside.area > 0:
        region = frame.pixels[y1:y2 + 1, x1:x2 + 1]
        red, green, blue = decode_pixels(region)
        voting = stop_color_mask(red, green, blue, config) & ~track_color_mask(
            red, green, blue, config
        )
        votes = int(np.count_nonzero(voting))
        mask[y1:y2 + 1, x1:x2 + 1][voting] = 255

    cv2.rectangle(mask, box.top_left, box.bottom_right, 255, 1)

    percentage = stop_percentage(votes, area)
    return StopResult(
        is_stop=is_stop_percentage(percentage, config.percent_to_stop),
        mask=mask,
        votes=votes,
        percentage=percentage,
    )
