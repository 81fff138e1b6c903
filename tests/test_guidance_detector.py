"""Tests for guidance line detection."""

import random
from fractions import Fraction

import numpy as np
import pytest

from lineguide.guidance_detector import (
    LineFit,
    build_track_mask,
    clamp_distance,
    detect_guidance,
    find_extreme_points,
    fit_line,
)
from lineguide.models import DEFAULT_CONFIG

WHITE = 0xFFFF
BLACK = 0x0000

@pytest.fixture
def stepped_frame(make_frame, paint):
    """
    A stepped white shape whose leftmost column starts below the crop row.

    Rows 50-59 cols 20-29, rows 60-79 cols 10-29, rows 80-89 cols 20-29.
    left_top is (10, 60) and bottom_left is (20, 89).
    """
    frame = paint(make_frame(BLACK), WHITE, (50, 59), (20, 29))
    frame = paint(frame, WHITE, (60, 79), (10, 29))
    return paint(frame, WHITE, (80, 89), (20, 29))


class TestFindExtremePoints:
    def test_square(self):
        ext = find_extreme_points([(10, 10), (10, 20), (20, 20), (20, 10)])
        assert ext.top_left == (10, 10)
        assert ext.top_right == (20, 10)
        assert ext.bottom_left == (10, 20)
        assert ext.bottom_right == (20, 20)
        assert ext.left_top == (10, 10)
        assert ext.left_bottom == (10, 20)
        assert ext.right_top == (20, 10)
        assert ext.right_bottom == (20, 20)

    def test_ties_broken_by_secondary_coordinate(self):
        points = [(3, 0), (7, 0), (5, 0), (0, 4), (0, 2), (9, 9), (2, 9)]
        ext = find_extreme_points(points)
        assert ext.top_left == (3, 0)
        assert ext.top_right == (7, 0)
        assert ext.bottom_left == (2, 9)
        assert ext.bottom_right == (9, 9)
        assert ext.left_top == (0, 2)
        assert ext.left_bottom == (0, 4)
        assert ext.right_top == (9, 9)
        assert ext.right_bottom == (9, 9)

    def test_independent_of_point_order(self):
        points = [(3, 0), (7, 0), (5, 0), (0, 4), (0, 2), (9, 9), (2, 9), (9, 5)]
        expected = find_extreme_points(points)
        rng = random.Random(7)
        for _ in range(10):
            shuffled = points[:]
            rng.shuffle(shuffled)
            assert find_extreme_points(shuffled) == expected

    def test_single_point(self):
        ext = find_extreme_points([(4, 5)])
        assert all(p == (4, 5) for p in ext.as_list())

    def test_accepts_opencv_shaped_array(self):
        contour = np.array([[[10, 10]], [[10, 20]], [[20, 20]]], dtype=np.int32)
        assert find_extreme_points(contour).bottom_right == (20, 20)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            find_extreme_points([])


class TestFitLine:
    def test_slope_and_intercept(self):
        line = fit_line((10, 60), (20, 89))
        assert line.slope == Fraction(29, 10)
        assert line.intercept == 31
        assert not line.is_vertical

    def test_column_truncates(self):
        """(50 - 31) / 2.9 = 6.55 -> 6."""
        assert fit_line((10, 60), (20, 89)).column_at(50) == 6

    def test_column_truncates_toward_zero(self):
        """(50 - 60) / (20 / 3) = -1.5 -> -1."""
        assert fit_line((0, 60), (3, 80)).column_at(50) == -1

    def test_exact_column_not_lost_to_rounding(self):
        """A line through (10, 50) must cross row 50 at column 10 exactly."""
        line = fit_line((10, 50), (20, 89))
        assert line.column_at(50) == 10

    def test_vertical_line(self):
        line = fit_line((12, 50), (12, 90))
        assert line.is_vertical
        assert line.slope is None
        assert line.column_at(50) == 12
        assert line.column_at(0) == 12

    def test_horizontal_line_has_no_crossing(self):
        line = LineFit(slope=Fraction(0), intercept=Fraction(5))
        assert line.column_at(10) is None


class TestClampDistance:
    def test_clamping_law(self):
        max_dist = 28
        for d in range(-100, 101):
            clamped = clamp_distance(d, max_dist)
            assert -max_dist <= clamped <= max_dist
            if -max_dist <= d <= max_dist:
                assert clamped == d

    def test_saturates(self):
        assert clamp_distance(60, 28) == 28
        assert clamp_distance(-60, 28) == -28


class TestBuildTrackMask:
    def test_only_crop_window_is_tested(self, make_frame):
        mask = build_track_mask(make_frame(WHITE))
        assert not mask[:50].any()
        assert not mask[:, 75:].any()
        assert (mask[50:, :75] == 255).all()

    def test_crop_beyond_frame(self, make_frame):
        config = DEFAULT_CONFIG.with_overrides(vertical_crop=200)
        assert not build_track_mask(make_frame(WHITE), config).any()


class TestDetectGuidance:
    def test_vertical_stripe(self, stripe_frame):
        """left_top and bottom_left share column 20, so the line is vertical."""
        result = detect_guidance(stripe_frame)
        assert result.found
        assert result.extremes.left_top == (20, 60)
        assert result.extremes.bottom_left == (20, 79)
        assert result.intersection == (20, 50)
        assert result.distance == 20 - 28

    def test_slanted_fit(self, stepped_frame):
        result = detect_guidance(stepped_frame)
        assert result.found
        assert result.extremes.left_top == (10, 60)
        assert result.extremes.bottom_left == (20, 89)
        assert result.intersection == (6, 50)
        assert result.distance == 6 - 28

    def test_clamped_left(self, stripe_frame):
        config = DEFAULT_CONFIG.with_overrides(center_pos=80)
        result = detect_guidance(stripe_frame, config)
        assert result.found
        assert result.distance == -16

    def test_clamped_right(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (60, 95), (70, 74))
        result = detect_guidance(frame)
        assert result.found
        assert result.intersection == (70, 50)
        assert result.distance == 28

    def test_all_white_frame(self, make_frame):
        result = detect_guidance(make_frame(WHITE))
        assert result.found
        assert result.distance == -28

    def test_no_track_pixels(self, make_frame):
        result = detect_guidance(make_frame(BLACK))
        assert not result.found
        assert result.distance is None
        assert result.extremes is None
        assert not result.mask.any()
        assert not result.overlay.any()

    def test_blob_below_min_size(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (60, 64), (20, 24))
        result = detect_guidance(frame)
        assert not result.found
        assert result.distance is None
        assert result.mask.any()

    def test_min_size_is_configurable(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (60, 64), (20, 24))
        config = DEFAULT_CONFIG.with_overrides(white_min_size=10)
        assert detect_guidance(frame, config).found

    def test_white_above_crop_ignored(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (0, 40), (0, 95))
        result = detect_guidance(frame)
        assert not result.found
        assert not result.mask.any()

    def test_white_right_of_crop_ignored(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (60, 90), (80, 95))
        result = detect_guidance(frame)
        assert not result.found
        assert not result.mask.any()

    def test_largest_contour_wins(self, make_frame, paint):
        frame = paint(make_frame(BLACK), WHITE, (60, 79), (60, 64))
        frame = paint(frame, WHITE, (55, 90), (20, 29))
        result = detect_guidance(frame)
        assert result.found
        assert result.extremes.left_top == (20, 55)
        assert result.distance == -8

    def test_overlay_annotations(self, stripe_frame):
        overlay = detect_guidance(stripe_frame).overlay
        assert overlay[0, 28] == 255 and overlay[95, 28] == 255  # center line
        assert overlay[50, 0] == 255 and overlay[50, 95] == 255  # crop line
        assert overlay[0, 20] == 255 and overlay[95, 20] == 255  # fitted line
        assert set(np.unique(overlay)) <= {0, 255}

    def test_mask_is_raw_track_mask(self, stripe_frame):
        result = detect_guidance(stripe_frame)
        assert np.array_equal(result.mask, build_track_mask(stripe_frame))

    def test_idempotent(self, stepped_frame):
        first = detect_guidance(stepped_frame)
        second = detect_guidance(stepped_frame)
        assert first.found == second.found
        assert first.distance == second.distance
        assert np.array_equal(first.mask, second.mask)
        assert np.array_equal(first.overlay, second.overlay)

    def test_input_not_modified(self, stepped_frame):
        before = stepped_frame.pixels.copy()
        detect_guidance(stepped_frame)
        assert np.array_equal(before, stepped_frame.pixels)
