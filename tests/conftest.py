"""Pytest fixtures for lineguide tests."""

import pytest
import numpy as np

from lineguide.frame_data import Frame

WHITE = 0xFFFF
BLACK = 0x0000
RED = 0xF800
GREEN = 0x07E0


@pytest.fixture
def make_frame():
    """Create a frame filled with one pixel value."""

    def _create(value=BLACK, rows=96, cols=96, name="test"):
        pixels = np.full((rows, cols), value, dtype=np.uint16)
        return Frame(pixels=pixels, name=name)

    return _create


@pytest.fixture
def paint():
    """Return a copy of a frame with a rectangle of pixels set to a value.

    Rows and columns are inclusive, matching the detector boxes.
    """

    def _paint(frame, value, rows, cols):
        pixels = frame.pixels.copy()
        pixels[rows[0]:rows[1] + 1, cols[0]:cols[1] + 1] = value
        return Frame(pixels=pixels, name=frame.name)

    return _paint


@pytest.fixture
def stripe_frame(make_frame, paint):
    """A black frame with a vertical white stripe, rows 60-79, cols 20-29."""
    return paint(make_frame(BLACK), WHITE, (60, 79), (20, 29))


@pytest.fixture
def red_block_frame(make_frame, paint):
    """An all-white frame with a 10x10 red block inside the stop box."""
    return paint(make_frame(WHITE), RED, (76, 85), (20, 29))
