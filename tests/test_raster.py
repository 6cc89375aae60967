"""Tests for the raster cursor, frame store and resize policy."""

import numpy as np
import pytest

from vgasim.core.frame_buffer import FrameBuffer
from vgasim.core.raster import RasterState
from vgasim.core.types import (
    HORIZONTAL_RETRACE,
    NO_OP,
    VERTICAL_RETRACE,
    Decision,
    Sample,
)


class TestFrameBuffer:

    def test_allocates_black(self):
        fb = FrameBuffer(4, 3)
        assert fb.size == (4, 3)
        assert fb.pixels.shape == (3, 4)
        assert not fb.pixels.any()

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 5)])
    def test_rejects_non_positive_size(self, width, height):
        with pytest.raises(ValueError):
            FrameBuffer(width, height)

    def test_write_and_read(self):
        fb = FrameBuffer(4, 3)
        fb.write_pixel(3, 2, 0x123456)
        assert fb.read_pixel(3, 2) == 0x123456
        assert fb.pixels[2, 3] == 0x123456

    def test_write_keeps_24_bits(self):
        fb = FrameBuffer(1, 1)
        fb.write_pixel(0, 0, 0xFF123456)
        assert fb.read_pixel(0, 0) == 0x123456

    def test_read_out_of_range(self):
        fb = FrameBuffer(2, 2)
        with pytest.raises(IndexError):
            fb.read_pixel(2, 0)

    def test_snapshot_view_is_read_only_and_live(self):
        fb = FrameBuffer(2, 2)
        view = fb.snapshot()
        with pytest.raises(ValueError):
            view[0, 0] = 1
        fb.write_pixel(1, 1, 0xABCDEF)
        assert view[1, 1] == 0xABCDEF

    def test_snapshot_copy_is_frozen(self):
        fb = FrameBuffer(2, 2)
        frozen = fb.snapshot(copy=True)
        fb.write_pixel(0, 0, 0xFFFFFF)
        assert frozen[0, 0] == 0

    def test_clear(self):
        fb = FrameBuffer(2, 2)
        fb.write_pixel(0, 1, 0x010101)
        fb.clear()
        assert not fb.pixels.any()


class TestRetrace:

    def test_vertical_retrace_homes_cursor(self):
        state = RasterState(8, 8)
        state.x, state.y = 5, 6
        state.apply(VERTICAL_RETRACE)
        assert state.cursor == (0, 0)

    @pytest.mark.parametrize("k", [0, 1, 2])
    def test_horizontal_retrace_moves_to_next_line(self, k):
        state = RasterState(8, 4)
        state.x, state.y = 5, k
        state.apply(HORIZONTAL_RETRACE)
        assert state.cursor == (0, k + 1)

    def test_horizontal_retrace_wraps_on_last_line(self):
        state = RasterState(8, 4)
        state.x, state.y = 7, 3
        state.apply(HORIZONTAL_RETRACE)
        assert state.cursor == (0, 0)

    def test_retrace_writes_nothing(self):
        state = RasterState(4, 4)
        state.apply(VERTICAL_RETRACE)
        state.apply(HORIZONTAL_RETRACE)
        assert not state.frame.pixels.any()

    def test_noop_changes_nothing(self):
        state = RasterState(4, 4)
        state.x, state.y = 2, 3
        state.apply(NO_OP)
        assert state.cursor == (2, 3)
        assert not state.frame.pixels.any()


class TestActivePixel:

    def test_line_fill_wraps_to_next_line(self):
        state = RasterState(4, 2)
        colors = [(10, 0, 0), (0, 20, 0), (0, 0, 30), (40, 50, 60)]
        for rgb in colors:
            state.apply(Decision.active_pixel(*rgb))
        assert state.cursor == (0, 1)
        assert [state.frame.read_pixel(x, 0) for x in range(4)] == [
            0x0A0000,
            0x001400,
            0x00001E,
            0x28323C,
        ]
        assert not state.frame.pixels[1].any()

    def test_full_frame_wraps_to_origin(self):
        state = RasterState(2, 2)
        for _ in range(4):
            state.apply(Decision.active_pixel(1, 1, 1))
        assert state.cursor == (0, 0)
        assert (state.frame.pixels == 0x010101).all()

    def test_cursor_stays_in_bounds(self):
        state = RasterState(3, 2)
        decisions = [Decision.active_pixel(1, 2, 3)] * 7 + [HORIZONTAL_RETRACE] * 5
        for decision in decisions:
            state.apply(decision)
            assert 0 <= state.x < state.width
            assert 0 <= state.y < state.height


class TestTick:

    def test_tick_runs_detector_then_applies(self):
        state = RasterState(4, 4)
        assert state.tick(Sample(0xFF, 0, 0, clock=True)) == Decision.active_pixel(0xFF, 0, 0)
        assert state.frame.read_pixel(0, 0) == 0xFF0000
        assert state.cursor == (1, 0)

    def test_held_clock_does_not_write(self):
        state = RasterState(4, 4)
        state.tick(Sample(1, 1, 1, clock=True))
        state.tick(Sample(2, 2, 2, clock=True))
        assert state.cursor == (1, 0)
        assert state.frame.read_pixel(1, 0) == 0


class TestResizePolicy:

    def test_clamps_to_one(self):
        state = RasterState(0, -5)
        assert (state.width, state.height) == (1, 1)
        assert state.frame.size == (1, 1)

    def test_reconcile_same_size_keeps_contents(self):
        state = RasterState(4, 4)
        state.apply(Decision.active_pixel(9, 9, 9))
        frame = state.frame
        assert state.reconcile(4, 4) is False
        assert state.frame is frame
        assert state.cursor == (1, 0)

    def test_reconcile_new_size_resets(self):
        state = RasterState(640, 480)
        state.x, state.y = 600, 400
        state.frame.write_pixel(0, 0, 0xFFFFFF)
        assert state.reconcile(320, 240) is True
        assert state.cursor == (0, 0)
        assert state.frame.size == (320, 240)
        assert state.frame.pixels.shape == (240, 320)
        assert not state.frame.pixels.any()

    def test_reconcile_clamped_values_compare_clamped(self):
        state = RasterState(1, 1)
        assert state.reconcile(0, 0) is False

    def test_writes_after_shrink_stay_in_new_bounds(self):
        state = RasterState(640, 480)
        state.reconcile(320, 240)
        for _ in range(320 * 240 + 5):
            state.apply(Decision.active_pixel(1, 2, 3))
        assert state.frame.pixels.shape == (240, 320)
        assert state.cursor == (5, 0)

    def test_resize_keeps_edge_latches(self):
        state = RasterState(4, 4)
        state.tick(Sample(clock=True))
        state.reconcile(8, 8)
        assert state.detector.prev_clock is True
        assert np.count_nonzero(state.frame.pixels) == 0
