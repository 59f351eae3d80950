"""Tests for the display buffer and sprite drawing (DXYN)."""

import numpy as np
import pytest
from chipcore import create_display, execute, PixelUpdate, MemoryBoundsError, SCREEN_WIDTH, SCREEN_HEIGHT
from conftest import run, set_registers, setup_sprite_in_memory, NEXT_PC


class TestDisplayBuffer:
    """Test Display on its own."""

    def test_new_display_is_blank(self):
        display = create_display()
        assert display.width == SCREEN_WIDTH
        assert display.height == SCREEN_HEIGHT
        assert not display.frame().any()

    def test_set_and_get_pixel(self):
        display = create_display().set_pixel(3, 10, True)
        assert display.get_pixel(3, 10)
        assert not display.get_pixel(10, 3)

    def test_set_pixel_returns_new_display(self):
        display = create_display()
        display.set_pixel(0, 0, True)
        assert not display.get_pixel(0, 0)

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (SCREEN_HEIGHT, 0), (0, SCREEN_WIDTH)])
    def test_out_of_range_pixel(self, row, col):
        with pytest.raises(IndexError):
            create_display().get_pixel(row, col)
        with pytest.raises(IndexError):
            create_display().set_pixel(row, col, True)

    def test_clear(self):
        display = create_display().set_pixel(0, 0, True).set_pixel(31, 63, True)
        display = display.clear()
        for row in range(display.height):
            for col in range(display.width):
                assert not display.get_pixel(row, col)

    def test_too_narrow_display_rejected(self):
        with pytest.raises(ValueError):
            create_display(width=4, height=4)


class TestDraw:
    """Test Display.draw directly."""

    def test_draw_reports_touched_cells(self):
        display, result = create_display().draw(10, 5, [0xC0])
        assert not result.collision
        assert set(result.updates) == {PixelUpdate(5, 10, True), PixelUpdate(5, 11, True)}

    def test_draw_twice_restores_buffer(self):
        before = create_display().set_pixel(5, 12, True)
        once, first = before.draw(10, 5, [0xF0, 0x90])
        twice, second = once.draw(10, 5, [0xF0, 0x90])

        assert np.array_equal(twice.frame(), before.frame())
        assert first.collision
        assert second.collision
        assert all(not update.on for update in second.updates if (update.row, update.col) != (5, 12))

    def test_second_draw_collides_only_if_first_lit_something(self):
        display, first = create_display().draw(0, 0, [0x00])
        display, second = display.draw(0, 0, [0x00])
        assert not first.collision
        assert not second.collision
        assert second.updates == ()

    def test_horizontal_wrap(self):
        display, result = create_display().draw(SCREEN_WIDTH - 1, 0, [0xFF])
        assert display.get_pixel(0, SCREEN_WIDTH - 1)
        for col in range(7):
            assert display.get_pixel(0, col)
        assert not display.get_pixel(0, 7)
        assert not result.collision

    def test_vertical_wrap(self):
        display, _ = create_display().draw(0, SCREEN_HEIGHT - 1, [0x80, 0x80])
        assert display.get_pixel(SCREEN_HEIGHT - 1, 0)
        assert display.get_pixel(0, 0)
        assert not display.get_pixel(1, 0)

    def test_collision_detection(self):
        display = create_display().set_pixel(0, 0, True)
        display, result = display.draw(0, 0, [0x80])
        assert result.collision
        assert result.updates == (PixelUpdate(0, 0, False),)


class TestDrawInstruction:
    """Test DXYN through the instruction path."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0, 0xC0])
        state = set_registers(state, V0=10, V1=5)
        state = run(state, 0xA300, 0xD012)

        assert state.display.get_pixel(5, 10)
        assert state.display.get_pixel(5, 11)
        assert state.display.get_pixel(6, 10)
        assert state.display.get_pixel(6, 11)
        assert not state.display.get_pixel(5, 12)
        assert state.V[15] == 0

    def test_draw_against_existing_pixels(self, fresh_state):
        """Two sprite rows over a partly lit screen."""
        state = setup_sprite_in_memory(fresh_state, 0x000, [0xFF, 0x00])
        display = state.display.set_pixel(0, 0, True).set_pixel(1, 0, True)
        state = set_registers(state.replace(display=display, I=0), V0=0)

        state, result = execute(state, 0xD002)

        assert not state.display.get_pixel(0, 0)
        assert state.display.get_pixel(0, 1)
        assert state.display.get_pixel(1, 0)
        assert not state.display.get_pixel(1, 1)
        assert state.V[15] == 1
        assert state.pc == NEXT_PC
        assert result.draw.collision

    def test_collision_then_erase(self, fresh_state):
        """Drawing twice erases and sets VF."""
        state = setup_sprite_in_memory(fresh_state, 0x400, [0x80])
        state = set_registers(state, V0=20, V1=10)
        state = run(state, 0xA400, 0xD011)
        assert state.display.get_pixel(10, 20)
        assert state.V[15] == 0

        state = run(state, 0xD011)
        assert not state.display.get_pixel(10, 20)
        assert state.V[15] == 1

    def test_coordinate_wrapping(self, fresh_state):
        """Start coordinates past the edge wrap around."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])
        state = set_registers(state, V0=70, V1=37)
        state = run(state, 0xA800, 0xD011)
        assert state.display.get_pixel(5, 6)

    def test_sprite_wraps_horizontally(self, fresh_state):
        """A sprite at x = width - 4 continues at column 0."""
        x = SCREEN_WIDTH - 4
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])
        state = set_registers(state, V0=x, V1=0)
        state = run(state, 0xA600, 0xD011)

        assert not state.display.get_pixel(0, x - 1)
        for col in list(range(x, SCREEN_WIDTH)) + [0, 1, 2, 3]:
            assert state.display.get_pixel(0, col)
        assert not state.display.get_pixel(0, 4)
        assert state.V[15] == 0

    def test_sprite_height_from_n(self, fresh_state):
        """Only N rows are read from memory."""
        state = setup_sprite_in_memory(fresh_state, 0x900, [0x80, 0x40, 0x20, 0x10])
        state = set_registers(state, V0=10, V1=8)
        state = run(state, 0xA900, 0xD013)

        assert state.display.get_pixel(8, 10)
        assert state.display.get_pixel(9, 11)
        assert state.display.get_pixel(10, 12)
        assert not state.display.get_pixel(11, 13)

    def test_vf_cleared_without_collision(self, fresh_state):
        """VF is reset to 0 when nothing collides."""
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])
        state = set_registers(state, VF=1, V0=5, V1=5)
        state = run(state, 0xAB00, 0xD011)
        assert state.V[15] == 0

    def test_font_glyph_draw(self, fresh_state):
        """The built-in font is drawable through FX29."""
        state = set_registers(fresh_state, V0=0, V1=0, V2=0x0)
        state = run(state, 0xF229, 0xD015)
        # Glyph "0" is a 4x5 box
        assert state.display.get_pixel(0, 0)
        assert state.display.get_pixel(0, 3)
        assert not state.display.get_pixel(2, 1)
        assert state.display.get_pixel(4, 3)

    def test_sprite_read_past_memory_raises(self, fresh_state):
        """Reading sprite rows past the last address is a bounds error."""
        state = fresh_state.replace(I=0xFFE)
        with pytest.raises(MemoryBoundsError):
            execute(state, 0xD005)
