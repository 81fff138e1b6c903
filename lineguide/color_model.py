"""RGB565 pixel decoding and color classification.

Scalar helpers mirror the firmware one pixel at a time; the array helpers
apply the same integer arithmetic to a whole frame with numpy and must
agree with the scalar versions bit for bit.
"""

import numpy as np

from .frame_data import Frame
from .models import DEFAULT_CONFIG, DetectorConfig

RED_MAX = 0x1F
GREEN_MAX = 0x3F
BLUE_MAX = 0x1F


def decode(pixel: int) -> tuple[int, int, int]:
    """
    Convert a packed RGB565 pixel to 8-bit channel intensities.

    Each field is scaled by 255 / field_max with integer truncation,
    so 0x1F maps to 255 and 0x10 maps to 131.

    Args:
        pixel: 16-bit RGB565 value (higher bits are ignored)

    Returns:
        Tuple of (red, green, blue), each in 0..255
    """
    pixel &= 0xFFFF
    red = (pixel >> 11) & RED_MAX
    green = (pixel >> 5) & GREEN_MAX
    blue = pixel & BLUE_MAX
    return (red * 255) // RED_MAX, (green * 255) // GREEN_MAX, (blue * 255) // BLUE_MAX


def encode(red: int, green: int, blue: int) -> int:
    """Pack 8-bit channel intensities into an RGB565 value."""
    r = (red * RED_MAX) // 255
    g = (green * GREEN_MAX) // 255
    b = (blue * BLUE_MAX) // 255
    return (r << 11) | (g << 5) | b


def is_stop_color(
    red: int, green: int, blue: int, config: DetectorConfig = DEFAULT_CONFIG
) -> bool:
    """Return True if a pixel is red enough to be part of a stop marking."""
    return (
        red >= green + config.stop_green_tolerance
        and red >= blue + config.stop_blue_tolerance
    )


def is_track_color(
    red: int, green: int, blue: int, config: DetectorConfig = DEFAULT_CONFIG
) -> bool:
    """Return True if a pixel is white enough to be part of the guidance line."""
    return (
        red >= config.track_red_thresh
        and green >= config.track_green_thresh
        and blue >= config.track_blue_thresh
    )


def decode_pixels(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized decode(): returns int32 red, green and blue arrays."""
    values = pixels.astype(np.int32)
    red = ((values >> 11) & RED_MAX) * 255 // RED_MAX
    green = ((values >> 5) & GREEN_MAX) * 255 // GREEN_MAX
    blue = (values & BLUE_MAX) * 255 // BLUE_MAX
    return red, green, blue


def stop_color_mask(
    red: np.ndarray,
    green: np.ndarray,
    blue: np.ndarray,
    config: DetectorConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Boolean array of pixels satisfying is_stop_color()."""
    return (red >= green + config.stop_green_tolerance) & (
        red >= blue + config.stop_blue_tolerance
    )


def track_color_mask(
    red: np.ndarray,
    green: np.ndarray,
    blue: np.ndarray,
    config: DetectorConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Boolean array of pixels satisfying is_track_color()."""
    return (
        (red >= config.track_red_thresh)
        & (green >= config.track_green_thresh)
        & (blue >= config.track_blue_thresh)
    )


def frame_to_rgb(frame: Frame) -> np.ndarray:
    """
    Convert a frame to an 8-bit RGB image for display.

    Returns:
        Array of shape (rows, cols, 3), dtype uint8, channels in RGB order
    """
    red, green, blue = decode_pixels(frame.pixels)
    return np.stack([red, green, blue], axis=2).astype(np.uint8)
