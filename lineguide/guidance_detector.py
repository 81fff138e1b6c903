"""Guidance line detection.

This module finds the white guidance line in the lower part of a frame,
fits a straight line through two of its boundary extremes and reports how
far that line crosses the crop row from the target column.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

import cv2
import numpy as np

from .color_model import decode_pixels, track_color_mask
from .contours import find_contours, largest_contour
from .frame_data import ExtremePoints, Frame, GuidanceResult
from .models import DEFAULT_CONFIG, DetectorConfig


@dataclass(frozen=True)
class LineFit:
    """A line through two points, y = slope * x + intercept.

    Vertical lines have no slope; vertical_x holds their column instead.
    """
    slope: Optional[Fraction] = None
    intercept: Optional[Fraction] = None
    vertical_x: Optional[int] = None

    @property
    def is_vertical(self) -> bool:
        return self.vertical_x is not None

    def column_at(self, row: int) -> Optional[int]:
        """
        Column where the line crosses a row, truncated toward zero.

        Returns:
            The column, or None for a horizontal line (no single crossing)
        """
        if self.vertical_x is not None:
            return self.vertical_x
        if self.slope == 0:
            return None
        return int((row - self.intercept) / self.slope)


def build_track_mask(frame: Frame, config: DetectorConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Mask of track-colored pixels inside the guidance crop window.

    Only rows >= vertical_crop and columns < horizontal_crop are tested;
    everything else stays 0.
    """
    mask = np.zeros((frame.rows, frame.cols), dtype=np.uint8)
    window = config.crop_box(frame.rows, frame.cols)
    if window.area == 0:
        return mask

    (x1, y1), (x2, y2) = window.top_left, window.bottom_right
    red, green, blue = decode_pixels(frame.pixels[y1:y2 + 1, x1:x2 + 1])
    mask[y1:y2 + 1, x1:x2 + 1][track_color_mask(red, green, blue, config)] = 255
    return mask


def find_extreme_points(points) -> ExtremePoints:
    """
    Find the eight extreme points of a contour.

    For the topmost and bottommost rows the leftmost and rightmost points
    on that row are taken; for the leftmost and rightmost columns the
    topmost and bottommost points on that column. Ties on the extreme
    coordinate are broken by the other coordinate, so the result does not
    depend on point order.

    Args:
        points: (N, 2) array-like of (x, y) points, N >= 1

    Returns:
        ExtremePoints
    """
    pts = np.asarray(points, dtype=np.int64).reshape(-1, 2)
    if len(pts) == 0:
        raise ValueError("Cannot find extreme points of an empty contour")
    xs = pts[:, 0]
    ys = pts[:, 1]

    y_min, y_max = int(ys.min()), int(ys.max())
    x_min, x_max = int(xs.min()), int(xs.max())

    top_xs = xs[ys == y_min]
    bottom_xs = xs[ys == y_max]
    left_ys = ys[xs == x_min]
    right_ys = ys[xs == x_max]

    return ExtremePoints(
        top_left=(int(top_xs.min()), y_min),
        top_right=(int(top_xs.max()), y_min),
        bottom_left=(int(bottom_xs.min()), y_max),
        bottom_right=(int(bottom_xs.max()), y_max),
        left_top=(x_min, int(left_ys.min())),
        left_bottom=(x_min, int(left_ys.max())),
        right_top=(x_max, int(right_ys.min())),
        right_bottom=(x_max, int(right_ys.max())),
    )


def fit_line(top: tuple[int, int], bottom: tuple[int, int]) -> LineFit:
    """
    Fit a line through two points using exact rational arithmetic.

    Args:
        top: (x, y) upper point (left_top of the contour)
        bottom: (x, y) lower point (bottom_left of the contour)

    Returns:
        LineFit, vertical when both points share a column
    """
    dx = bottom[0] - top[0]
    dy = bottom[1] - top[1]
    if dx == 0:
        return LineFit(vertical_x=top[0])
    slope = Fraction(dy, dx)
    intercept = top[1] - slope * top[0]
    return LineFit(slope=slope, intercept=intercept)


def clamp_distance(distance: int, max_dist: int) -> int:
    """Clamp a signed offset to [-max_dist, max_dist]."""
    return max(-max_dist, min(max_dist, distance))


def draw_overlay(
    overlay: np.ndarray,
    extremes: ExtremePoints,
    line: LineFit,
    intersection: tuple[int, int],
    config: DetectorConfig = DEFAULT_CONFIG,
) -> None:
    """
    Annotate a debug mask in place.

    Draws the eight extreme points, the fitted line across the full frame
    height, the intersection point and the center and crop reference lines.
    """
    rows, cols = overlay.shape[:2]

    for point in extremes.as_list():
        cv2.circle(overlay, point, 1, 255)

    first_row, last_row = 0, rows - 1
    first_col = line.column_at(first_row)
    last_col = line.column_at(last_row)
    if first_col is not None and last_col is not None:
        cv2.line(overlay, (first_col, first_row), (last_col, last_row), 255, 1)

    cv2.circle(overlay, intersection, 2, 255)

    # Target column and crop row references
    cv2.line(overlay, (config.center_pos, 0), (config.center_pos, rows - 1), 255, 1)
    cv2.line(overlay, (0, config.vertical_crop), (cols - 1, config.vertical_crop), 255, 1)


def detect_guidance(
    frame: Frame, config: DetectorConfig = DEFAULT_CONFIG
) -> GuidanceResult:
    """
    Locate the guidance line and measure its offset from the target column.

    Steps:
    1. Mask track-colored pixels in the crop window
    2. Take the largest contour; give up if it is smaller than white_min_size
    3. Fit a line through its left_top and bottom_left extremes
    4. Intersect the line with the crop row and subtract center_pos
    5. Clamp the offset to config.max_dist

    Args:
        frame: Camera frame
        config: Detector configuration

    Returns:
        GuidanceResult; distance is None when no line was found
    """
    mask = build_track_mask(frame, config)
    overlay = np.zeros_like(mask)

    contour, area = largest_contour(find_contours(mask))
    if contour is None or area < config.white_min_size:
        return GuidanceResult(found=False, mask=mask, overlay=overlay)

    extremes = find_extreme_points(contour)
    line = fit_line(extremes.left_top, extremes.bottom_left)

    crossing = line.column_at(config.vertical_crop)
    if crossing is None:
        return GuidanceResult(found=False, mask=mask, overlay=overlay, extremes=extremes)

    intersection = (crossing, config.vertical_crop)
    distance = clamp_distance(crossing - config.center_pos, config.max_dist)

    draw_overlay(overlay, extremes, line, intersection, config)

    return GuidanceResult(
        found=True,
        mask=mask,
        overlay=overlay,
        distance=distance,
        extremes=extremes,
        intersection=intersection,
    )
