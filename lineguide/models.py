"""Configuration models for lineguide."""

from dataclasses import dataclass, field, replace

MAX_DISTANCE = 127  # Distance is sent to the motor controller as an int8


@dataclass(frozen=True)
class Box:
    """An axis-aligned region of interest with inclusive (x, y) corners."""

    top_left: tuple[int, int]
    bottom_right: tuple[int, int]

    @property
    def area(self) -> int:
        """Number of pixels covered, or 0 if the corners are inverted."""
        tl_x, tl_y = self.top_left
        br_x, br_y = self.bottom_right
        if br_x >= tl_x and br_y >= tl_y:
            return (br_x - tl_x + 1) * (br_y - tl_y + 1)
        return 0

    def clipped(self, rows: int, cols: int) -> "Box":
        """Return the part of the box that lies inside a rows x cols frame."""
        tl_x, tl_y = self.top_left
        br_x, br_y = self.bottom_right
        return Box((max(tl_x, 0), max(tl_y, 0)), (min(br_x, cols - 1), min(br_y, rows - 1)))


@dataclass(frozen=True)
class DetectorConfig:
    """
    Tuning constants shared by the stop and guidance detectors.

    Defaults match the values flashed on the vehicle. Use with_overrides()
    to derive a variant; instances are never mutated.
    """

    frame_rows: int = 96
    frame_cols: int = 96

    # Stop marking
    stop_box: Box = field(default_factory=lambda: Box((15, 75), (40, 85)))
    percent_to_stop: int = 20  # Percent of the stop box that must be red
    stop_green_tolerance: int = 15  # How much more red than green
    stop_blue_tolerance: int = 20  # How much more red than blue

    # Guidance line
    vertical_crop: int = 50  # Rows above this are ignored
    horizontal_crop: int = 75  # Columns at or right of this are ignored
    track_red_thresh: int = 240
    track_green_thresh: int = 240
    track_blue_thresh: int = 240
    white_min_size: int = 50  # Minimum contour area of the guidance line
    center_pos: int = 28  # Column the vehicle keeps the line at

    def __post_init__(self) -> None:
        if self.frame_rows <= 0 or self.frame_cols <= 0:
            raise ValueError(
                f"Frame size must be positive, got {self.frame_rows}x{self.frame_cols}"
            )
        if not 0 <= self.center_pos <= self.frame_cols:
            raise ValueError(
                f"center_pos {self.center_pos} outside frame width {self.frame_cols}"
            )
        if self.vertical_crop < 0 or self.horizontal_crop < 0:
            raise ValueError("Crop bounds must be non-negative")
        if self.max_dist > MAX_DISTANCE:
            raise ValueError(
                f"max_dist {self.max_dist} does not fit a signed 8-bit distance"
            )

    @property
    def max_dist(self) -> int:
        """Largest reportable offset that keeps the target inside the frame."""
        return min(self.center_pos, self.frame_cols - self.center_pos)

    def crop_box(self, rows: int, cols: int) -> Box:
        """Guidance search window inside a rows x cols frame (may be empty)."""
        window = Box((0, self.vertical_crop), (self.horizontal_crop - 1, rows - 1))
        return window.clipped(rows, cols)

    def with_overrides(self, **changes) -> "DetectorConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_CONFIG = DetectorConfig()
