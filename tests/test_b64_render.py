#!/usr/bin/env python3
'''
Unit tests for text rasterisation and fitting
'''

from pathlib import Path
import sys
import unittest

from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent / 'gui'))

from b64_render import fit_image, fit_size, load_font, render_text, typed_char


class TestFitSize(unittest.TestCase):

    def test_shrinks_wide(self):
        self.assertEqual(fit_size(2048, 40, 1024), (1024, 20))

    def test_truncates_height(self):
        self.assertEqual(fit_size(300, 25, 200), (200, 16))

    def test_never_grows(self):
        self.assertEqual(fit_size(500, 40, 1024), (500, 40))
        self.assertEqual(fit_size(1024, 40, 1024), (1024, 40))


class TestFitImage(unittest.TestCase):

    def test_downscale(self):
        img = Image.new('RGBA', (200, 10), (255, 255, 255, 255))
        out = fit_image(img, 100)
        self.assertEqual(out.size, (100, 5))
        self.assertEqual(out.mode, 'RGBA')
        self.assertEqual(out.getpixel((50, 2)), (255, 255, 255, 255))

    def test_fits_unchanged(self):
        img = Image.new('RGBA', (50, 10))
        self.assertIs(fit_image(img, 100), img)

    def test_flat_result_keeps_one_row(self):
        img = Image.new('RGBA', (1000, 1))
        self.assertEqual(fit_image(img, 10).size, (10, 1))


class TestRenderText(unittest.TestCase):

    def setUp(self):
        self.font = load_font('does/not/exist.ttf', 20)

    def test_missing_font_falls_back(self):
        self.assertIsNotNone(self.font)

    def test_empty_is_none(self):
        self.assertIsNone(render_text(self.font, ''))

    def test_renders_rgba(self):
        img = render_text(self.font, 'Hello')
        self.assertEqual(img.mode, 'RGBA')
        self.assertGreater(img.width, 0)
        self.assertGreater(img.height, 0)
        # something was actually drawn
        self.assertIsNotNone(img.getbbox())

    def test_longer_text_is_wider(self):
        short = render_text(self.font, 'TQ')
        long = render_text(self.font, 'TQ' * 10)
        self.assertGreater(long.width, short.width)


class TestTypedChar(unittest.TestCase):

    def test_accepts_printable(self):
        self.assertEqual(typed_char('a'), 'a')
        self.assertEqual(typed_char('='), '=')

    def test_accepts_altgr_composition(self):
        # AltGr+e on many layouts, reported with the Control bit set
        self.assertEqual(typed_char('€'), '€')
        self.assertEqual(typed_char('é'), 'é')

    def test_rejects_control_chords(self):
        self.assertIsNone(typed_char('\x16'))   # Ctrl+V
        self.assertIsNone(typed_char('\x03'))   # Ctrl+C
        self.assertIsNone(typed_char('\x1b'))
        self.assertIsNone(typed_char(''))


if __name__ == '__main__':
    unittest.main()
