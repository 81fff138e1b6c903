"""Lineguide - Stop and steering signals from a line follower's camera frames."""

from .models import Box, DetectorConfig, DEFAULT_CONFIG
from .frame_data import (
    Frame,
    ExtremePoints,
    StopResult,
    GuidanceResult,
    FrameResult,
)
from .color_model import (
    decode,
    encode,
    is_stop_color,
    is_track_color,
    decode_pixels,
    frame_to_rgb,
)
from .contours import find_contours, contour_area, largest_contour
from .stop_detector import detect_stop, stop_percentage
from .guidance_detector import (
    LineFit,
    detect_guidance,
    find_extreme_points,
    fit_line,
    clamp_distance,
)
from .compositor import colorize, layer, compose_masks, side_by_side
from .pipeline import classify_frame, classify_frames
from .frame_loader import (
    load_frame,
    load_frames,
    find_frame_files,
    detect_format,
    format_compact_hex,
    generate_color_bars,
)
from .results_writer import format_results_csv, write_results_csv
from .clip_exporter import ClipExporter

__all__ = [
    # Configuration
    "Box",
    "DetectorConfig",
    "DEFAULT_CONFIG",
    # Frame data
    "Frame",
    "ExtremePoints",
    "StopResult",
    "GuidanceResult",
    "FrameResult",
    # Color model
    "decode",
    "encode",
    "is_stop_color",
    "is_track_color",
    "decode_pixels",
    "frame_to_rgb",
    # Contours
    "find_contours",
    "contour_area",
    "largest_contour",
    # Detectors
    "detect_stop",
    "stop_percentage",
    "LineFit",
    "detect_guidance",
    "find_extreme_points",
    "fit_line",
    "clamp_distance",
    # Compositing
    "colorize",
    "layer",
    "compose_masks",
    "side_by_side",
    # Pipeline
    "classify_frame",
    "classify_frames",
    # Loading
    "load_frame",
    "load_frames",
    "find_frame_files",
    "detect_format",
    "format_compact_hex",
    "generate_color_bars",
    # Output
    "format_results_csv",
    "write_results_csv",
    "ClipExporter",
]
