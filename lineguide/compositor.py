"""Mask compositing and debug display helpers.

This module turns detector masks into colored layers, stacks them into a
single composite and builds the side-by-side view shown by the CLI.
Images here are RGB; convert to BGR only when handing them to OpenCV I/O.
"""

import sys

import cv2
import numpy as np

from .frame_data import FrameResult

BACKGROUND = (0, 0, 0)
TRACK_COLOR = (255, 255, 255)
OVERLAY_COLOR = (0, 255, 0)
STOP_COLOR = (255, 0, 0)


def colorize(mask: np.ndarray, color: tuple[int, int, int]) -> np.ndarray:
    """
    Paint a single-channel mask with one color.

    Args:
        mask: (H, W) mask, non-zero pixels are foreground
        color: Color for foreground pixels

    Returns:
        (H, W, 3) uint8 image, background pixels are (0, 0, 0)
    """
    image = np.zeros((mask.shape[0], mask.shape[1], 3), dtype=np.uint8)
    image[mask > 0] = color
    return image


def layer(dest: np.ndarray, overlay: np.ndarray) -> bool:
    """
    Copy every non-background pixel of overlay onto dest, in place.

    Args:
        dest: (H, W, 3) image that receives the layer
        overlay: (H, W, 3) image to layer on top

    Returns:
        True on success, False if the shapes differ (dest is left untouched)
    """
    if dest.shape != overlay.shape:
        print(
            f"Warning: cannot layer {overlay.shape} image onto {dest.shape} image",
            file=sys.stderr,
        )
        return False

    visible = np.any(overlay != 0, axis=2)
    dest[visible] = overlay[visible]
    return True


def compose_masks(result: FrameResult) -> np.ndarray:
    """
    Combine a frame's detector masks into one color image.

    Layers, bottom to top: track mask (white), guidance overlay (green),
    stop mask (red).
    """
    base = result.guidance.mask
    combined = np.zeros((base.shape[0], base.shape[1], 3), dtype=np.uint8)
    layer(combined, colorize(result.guidance.mask, TRACK_COLOR))
    layer(combined, colorize(result.guidance.overlay, OVERLAY_COLOR))
    layer(combined, colorize(result.stop.mask, STOP_COLOR))
    return combined


def side_by_side(left: np.ndarray, right: np.ndarray, scale: int = 4) -> np.ndarray:
    """
    Place two equally sized images next to each other, upscaled.

    Nearest-neighbour scaling keeps single-pixel markers sharp.
    """
    if left.shape != right.shape:
        raise ValueError(f"Image shapes differ: {left.shape} vs {right.shape}")
    row = np.hstack([left, right])
    if scale == 1:
        return row
    height, width = row.shape[:2]
    return cv2.resize(row, (width * scale, height * scale), interpolation=cv2.INTER_NEAREST)
