#!/usr/bin/env python3
'''
Unit tests for the icon asset script
'''

from pathlib import Path
import sys
import tempfile
import unittest

from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent / 'scripts'))

from make_icon import build_icon, make_icon


class TestMakeIcon(unittest.TestCase):

    def test_build_icon(self):
        img = build_icon()
        self.assertEqual(img.size, (256, 256))
        self.assertEqual(img.mode, 'RGBA')

    def test_build_small(self):
        self.assertEqual(build_icon(32).size, (32, 32))

    def test_make_icon_writes_ico(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / 'assets' / 'b64preview.ico'
            make_icon(target)
            self.assertTrue(target.exists())
            with Image.open(target) as ico:
                self.assertEqual(ico.format, 'ICO')


if __name__ == '__main__':
    unittest.main()
