"""Tests for frame rendering and the headless driver."""

import numpy as np
import pytest
from PIL import Image
from chipcore import create_display, Processor
from chipcore.rendering import display_to_rgb, display_to_text, create_color_scheme, save_png
from chipcore.cli import main, parse_keys, run


class TestRendering:

    def test_display_to_rgb(self):
        display = create_display().set_pixel(0, 1, True)
        rgb = display_to_rgb(display, scale=1, on_color=(1, 2, 3), off_color=(0, 0, 0))
        assert rgb.shape == (32, 64, 3)
        assert tuple(rgb[0, 1]) == (1, 2, 3)
        assert tuple(rgb[0, 0]) == (0, 0, 0)

    def test_display_to_rgb_scaled(self):
        rgb = display_to_rgb(create_display(), scale=4)
        assert rgb.shape == (128, 256, 3)

    def test_unknown_color_scheme(self):
        with pytest.raises(ValueError):
            create_color_scheme("plaid")

    def test_display_to_text(self):
        display, _ = create_display().draw(0, 0, [0xA0])
        lines = display_to_text(display).splitlines()
        assert len(lines) == 32
        assert lines[0].startswith("#.#.")
        assert set(lines[1]) == {"."}

    def test_save_png(self, tmp_path):
        path = tmp_path / "frame.png"
        save_png(create_display().set_pixel(0, 0, True), str(path), scale=2)
        with Image.open(path) as image:
            assert image.size == (128, 64)


class TestCli:

    def test_parse_keys(self):
        assert parse_keys("5,a,F") == [5, 0xA, 0xF]
        assert parse_keys("") == []

    def test_run_halts_on_unknown_instruction(self):
        processor = Processor(random_byte=lambda: 0)
        processor.load([0x60, 0x01, 0xFF, 0xFF, 0x60, 0x02])
        assert run(processor, 10, halt_on_error=True) == 2
        assert processor.register(0) == 1

    def test_main_prints_frame(self, tmp_path, capsys):
        rom = tmp_path / "glyph.ch8"
        rom.write_bytes(bytes([0x60, 0x0F, 0xF0, 0x29, 0xD1, 0x15, 0x12, 0x06]))
        png = tmp_path / "out.png"

        assert main([str(rom), "--cycles", "5", "--png", str(png)]) == 0

        output = capsys.readouterr().out.splitlines()
        assert output[0].startswith("####.")
        assert output[1].startswith("#....")
        assert png.exists()

    def test_main_reports_bounds_error(self, tmp_path):
        rom = tmp_path / "ret.ch8"
        rom.write_bytes(bytes([0x00, 0xEE]))
        assert main([str(rom), "--cycles", "1", "--no-text"]) == 1
