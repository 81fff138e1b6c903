"""Contour extraction backed by OpenCV.

The detectors only depend on this module's contract: a list of (N, 2)
arrays of (x, y) boundary points, one per connected region, and a
polygon area for each.
"""

from typing import Optional

import cv2
import numpy as np


def find_contours(mask: np.ndarray) -> list[np.ndarray]:
    """
    Find the boundaries of all foreground regions in a binary mask.

    Args:
        mask: (H, W) uint8 mask, non-zero pixels are foreground

    Returns:
        List of (N, 2) int arrays of (x, y) points, in OpenCV's
        enumeration order
    """
    binary = np.ascontiguousarray((mask > 0).astype(np.uint8) * 255)
    contours, _ = cv2.findContours(binary, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    return [c.reshape(-1, 2).astype(np.int32) for c in contours]


def contour_area(contour: np.ndarray) -> float:
    """Polygon area enclosed by a contour (shoelace formula)."""
    if len(contour) < 3:
        return 0.0
    return float(cv2.contourArea(contour.reshape(-1, 1, 2).astype(np.int32)))


def largest_contour(
    contours: list[np.ndarray],
) -> tuple[Optional[np.ndarray], float]:
    """
    Select the contour with the largest area.

    Ties go to the contour that appears first in the list.

    Returns:
        Tuple of (contour, area), or (None, 0.0) if the list is empty
    """
    best = None
    best_area = 0.0
    for contour in contours:
        area = contour_area(contour)
        if best is None or area > best_area:
            best = contour
            best_area = area
    return best, best_area
