"""Data structures for camera frames and per-frame detection results.

This module contains the Frame container handed to the detectors and the
dataclasses each detector returns.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class Frame:
    """A single RGB565 camera frame.

    pixels holds one packed 16-bit value per pixel, row-major, with shape
    (rows, cols). Detectors read it but never write to it.
    """
    pixels: np.ndarray
    name: str = ""

    @property
    def rows(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def cols(self) -> int:
        return int(self.pixels.shape[1])

    @classmethod
    def from_bytes(cls, buffer: bytes, rows: int, cols: int, name: str = "") -> "Frame":
        """
        Build a frame from a raw camera buffer.

        Each pixel is two bytes, most significant byte first.

        Raises:
            ValueError: If the buffer is shorter than rows * cols * 2 bytes
        """
        needed = rows * cols * 2
        if len(buffer) < needed:
            raise ValueError(f"Read only {len(buffer)} bytes instead of {needed}")
        words = np.frombuffer(buffer[:needed], dtype=">u2").reshape(rows, cols)
        return cls(pixels=words.astype(np.uint16), name=name)

    @classmethod
    def from_values(cls, values, rows: int, cols: int, name: str = "") -> "Frame":
        """Build a frame from a flat sequence of pixel values."""
        pixels = np.asarray(values, dtype=np.uint32).reshape(rows, cols)
        return cls(pixels=(pixels & 0xFFFF).astype(np.uint16), name=name)

    def to_bytes(self) -> bytes:
        """Serialize the frame back to the camera's big-endian layout."""
        return self.pixels.astype(">u2").tobytes()


@dataclass(frozen=True)
class ExtremePoints:
    """The eight boundary extremes of a contour, each an (x, y) point."""
    top_left: tuple[int, int]
    top_right: tuple[int, int]
    bottom_left: tuple[int, int]
    bottom_right: tuple[int, int]
    left_top: tuple[int, int]
    left_bottom: tuple[int, int]
    right_top: tuple[int, int]
    right_bottom: tuple[int, int]

    def as_list(self) -> list[tuple[int, int]]:
        return [
            self.top_left, self.top_right,
            self.bottom_left, self.bottom_right,
            self.left_top, self.left_bottom,
            self.right_top, self.right_bottom,
        ]


@dataclass
class StopResult:
    """Outcome of stop-marking detection for one frame."""
    is_stop: bool
    mask: np.ndarray  # 0/255 mask of counted pixels plus the box outline
    votes: int  # Stop-colored pixels inside the stop box
    percentage: Optional[int]  # votes/area in hundredths of a percent, None if area is 0


@dataclass
class GuidanceResult:
    """Outcome of guidance-line detection for one frame.

    distance is None whenever found is False; callers must not steer on it.
    """
    found: bool
    mask: np.ndarray  # Track-colored pixels inside the crop window
    overlay: np.ndarray  # Extreme points, fitted line and reference lines
    distance: Optional[int] = None
    extremes: Optional[ExtremePoints] = None
    intersection: Optional[tuple[int, int]] = None  # (x, y) on the crop row


@dataclass
class FrameResult:
    """Both detector outcomes for a single frame."""
    name: str
    stop: StopResult
    guidance: GuidanceResult
