"""Loading camera frames from the firmware dump formats.

Supported formats:
- binary: raw pixel buffer, two bytes per pixel, most significant first
- hex: whitespace-separated hex words between START IMAGE / END IMAGE lines
- compact-hex: lines of 4-digit hex words with no separators
- decimal: whitespace-separated decimal pixel values

The firmware prints hex words from a little-endian view of the pixel
buffer, so both hex formats hold each pixel byte-swapped.
"""

import os
import string
from typing import List, Optional, Sequence

from .color_model import encode
from .frame_data import Frame

FORMATS = ("binary", "hex", "compact-hex", "decimal")

IMAGE_START = "START IMAGE"
IMAGE_END = "END IMAGE"

_HEX_TEXT = set(string.hexdigits + string.whitespace)

# Raw pixel buffers can look like hex text, so these skip content sniffing
BINARY_EXTENSIONS = (".raw", ".rgb565")


def swap_bytes(value: int) -> int:
    """Swap the two bytes of a 16-bit word."""
    return ((value & 0xFF) << 8) | ((value >> 8) & 0xFF)


def _to_frame(values: List[int], rows: int, cols: int, name: str) -> Frame:
    needed = rows * cols
    if len(values) < needed:
        raise ValueError(f"{name or 'frame'}: found {len(values)} pixels, expected {needed}")
    return Frame.from_values(values[:needed], rows, cols, name=name)


def parse_hex_content(content: str, rows: int = 96, cols: int = 96, name: str = "") -> Frame:
    """
    Parse a hex dump delimited by START IMAGE / END IMAGE lines.

    Raises:
        ValueError: If a word is not valid hex or too few pixels are present
    """
    values = []
    in_image = False
    for line in content.splitlines():
        stripped = line.strip()
        if stripped == IMAGE_START:
            in_image = True
            continue
        if stripped == IMAGE_END:
            break
        if in_image:
            for word in stripped.split():
                values.append(swap_bytes(int(word, 16)))
    return _to_frame(values, rows, cols, name)


def parse_compact_hex_content(
    content: str, rows: int = 96, cols: int = 96, name: str = ""
) -> Frame:
    """Parse lines of concatenated 4-digit hex words."""
    values = []
    for line in content.splitlines():
        line = line.strip()
        for i in range(0, len(line), 4):
            values.append(swap_bytes(int(line[i:i + 4], 16)))
    return _to_frame(values, rows, cols, name)


def parse_decimal_content(
    content: str, rows: int = 96, cols: int = 96, name: str = ""
) -> Frame:
    """Parse whitespace-separated decimal pixel values."""
    values = [int(token) for token in content.split()]
    return _to_frame(values, rows, cols, name)


def detect_format(data: bytes) -> str:
    """
    Guess the dump format of a file from its contents.

    Returns:
        One of FORMATS
    """
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError:
        return "binary"
    if IMAGE_START in text:
        return "hex"
    if not text.strip() or not set(text) <= _HEX_TEXT:
        return "binary"
    # Decimal values never exceed 65535, compact-hex lines hold a whole row
    tokens = text.split()
    if all(token.isdigit() and len(token) <= 5 for token in tokens):
        return "decimal"
    return "compact-hex"


def load_frame(path: str, fmt: str = "auto", rows: int = 96, cols: int = 96) -> Frame:
    """
    Load a single frame from disk.

    Args:
        path: File to read
        fmt: One of FORMATS, or "auto" to use the extension for raw
            buffers and detect everything else from contents
        rows: Frame height
        cols: Frame width

    Returns:
        Frame named after the file (without extension)

    Raises:
        ValueError: If the format is unknown or the file is malformed
    """
    with open(path, "rb") as f:
        data = f.read()

    name = os.path.splitext(os.path.basename(path))[0]
    if fmt == "auto":
        if os.path.splitext(path)[1].lower() in BINARY_EXTENSIONS:
            fmt = "binary"
        else:
            fmt = detect_format(data)

    if fmt == "binary":
        return Frame.from_bytes(data, rows, cols, name=name)
    if fmt not in FORMATS:
        raise ValueError(f"Unknown frame format: {fmt}")

    text = data.decode("ascii")
    if fmt == "hex":
        return parse_hex_content(text, rows, cols, name)
    if fmt == "compact-hex":
        return parse_compact_hex_content(text, rows, cols, name)
    return parse_decimal_content(text, rows, cols, name)


def load_frames(
    paths: Sequence[str], fmt: str = "auto", rows: int = 96, cols: int = 96
) -> List[Frame]:
    """Load several frames, failing on the first unreadable file."""
    frames = []
    for path in paths:
        try:
            frames.append(load_frame(path, fmt, rows, cols))
        except ValueError as e:
            raise ValueError(f"Failed to load frame {path}: {e}") from e
    return frames


def find_frame_files(directory: str, extensions: Optional[Sequence[str]] = None) -> List[str]:
    """
    List regular files in a directory, optionally filtered by extension.

    Extension matching is case-insensitive. Results are sorted by name.
    """
    wanted = {ext.lower() for ext in extensions} if extensions else None
    paths = []
    for entry in sorted(os.listdir(directory)):
        path = os.path.join(directory, entry)
        if not os.path.isfile(path):
            continue
        if wanted is None or os.path.splitext(entry)[1].lower() in wanted:
            paths.append(path)
    return paths


def format_compact_hex(frame: Frame) -> str:
    """Render a frame in the compact-hex dump format, one image row per line."""
    words = [f"{swap_bytes(int(v)):04x}" for v in frame.pixels.reshape(-1)]
    lines = ["".join(words[i:i + frame.cols]) for i in range(0, len(words), frame.cols)]
    return "\n".join(lines) + "\n"


def generate_color_bars(rows: int = 96, cols: int = 96) -> Frame:
    """
    Build a test frame of six vertical color bars.

    Bars from left to right: red, green, blue, yellow, cyan, magenta.
    Columns past the last full bar repeat magenta.
    """
    colors = [
        encode(255, 0, 0),
        encode(0, 255, 0),
        encode(0, 0, 255),
        encode(255, 255, 0),
        encode(0, 255, 255),
        encode(255, 0, 255),
    ]
    bar_width = max(cols // len(colors), 1)
    row = [colors[min(x // bar_width, len(colors) - 1)] for x in range(cols)]
    return Frame.from_values(row * rows, rows, cols, name="colorbars")
