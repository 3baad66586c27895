"""
sfntmeta test suite
font loading tests
"""

import io
import asyncio
import unittest

from fontTools.ttLib import TTFont

import sfntmeta
from sfntmeta import Font, TableNotFound, UnsupportedVersion
from .base import (
    BaseTester, ALEGREYA_NAMES, CFF,
    build_font_file, build_sfnt, build_name_table, windows_name, mac_name,
)


class TestLoad(BaseTester, unittest.IsolatedAsyncioTestCase):
    """Test loading sfnt files."""

    def setUp(self):
        super().setUp()
        self.alegreya = build_font_file(
            self.temp_path / 'Alegreya-Black.ttf', ALEGREYA_NAMES
        )

    async def test_family_name(self):
        """Family name of the sample font is read."""
        font = await sfntmeta.load(self.alegreya)
        self.assertEqual(font.family_name, 'Alegreya')

    async def test_name_fields(self):
        """Name fields are copied to the font."""
        font = await sfntmeta.load(str(self.alegreya))
        self.assertEqual(font.copyright_notice, ALEGREYA_NAMES['copyright'])
        self.assertEqual(font.subfamily_name, 'Black')
        self.assertEqual(font.unique_font_identifier, '2.008;HT;Alegreya-Black')
        self.assertEqual(font.full_name, 'Alegreya Black')
        self.assertEqual(font.version, 'Version 2.008')
        self.assertEqual(font.postscript_name, 'Alegreya-Black')
        self.assertEqual(font.manufacturer_name, 'Huerta Tipografica')
        self.assertEqual(font.designer_name, 'Juan Pablo del Peral')
        self.assertEqual(font.vendor_url, 'http://www.huertatipografica.com')
        self.assertEqual(font.license_description, ALEGREYA_NAMES['licenseDescription'])
        self.assertEqual(font.license_url, 'https://scripts.sil.org/OFL')
        self.assertEqual(font.outline_format, 'TrueType')

    async def test_absent_fields_empty(self):
        """Name IDs not in the font become empty strings."""
        font = await sfntmeta.load(self.alegreya)
        self.assertEqual(font.trademark, '')
        self.assertEqual(font.designer_url, '')

    async def test_agrees_with_fonttools(self):
        """Selected names match the English names fontTools reports."""
        font = await sfntmeta.load(self.alegreya)
        name_table = TTFont(str(self.alegreya))['name']
        for field, name_id in sfntmeta.font.FONT_NAME_IDS.items():
            expected = name_table.getDebugName(name_id) or ''
            self.assertEqual(getattr(font, field), expected, field)

    async def test_multilingual(self):
        """English is chosen from multilingual names."""
        names = dict(ALEGREYA_NAMES)
        names['familyName'] = {'de': 'Alegreya Deutsch', 'en': 'Alegreya', 'fr': 'Alegreya Francais'}
        path = build_font_file(self.temp_path / 'multi.ttf', names)
        font = await sfntmeta.load(path)
        self.assertEqual(font.family_name, 'Alegreya')

    async def test_idempotent(self):
        """Loading twice gives identical fonts."""
        first = await sfntmeta.load(self.alegreya)
        second = await sfntmeta.load(self.alegreya)
        self.assertEqual(first, second)
        self.assertEqual(first.as_dict(), second.as_dict())

    async def test_concurrent_loads(self):
        """Fonts can be loaded concurrently."""
        names = dict(ALEGREYA_NAMES, familyName='Alegreya Sans')
        other = build_font_file(self.temp_path / 'AlegreyaSans.ttf', names)
        fonts = await asyncio.gather(
            sfntmeta.load(self.alegreya), sfntmeta.load(other),
            sfntmeta.load(self.alegreya),
        )
        self.assertEqual(
            [_f.family_name for _f in fonts],
            ['Alegreya', 'Alegreya Sans', 'Alegreya']
        )

    async def test_no_name_table(self):
        """Fonts without `name` table cannot be loaded."""
        path = self.temp_path / 'noname.ttf'
        path.write_bytes(build_sfnt(((b'head', bytes(54)), (b'cmap', bytes(4)))))
        with self.assertRaises(TableNotFound):
            await sfntmeta.load(path)

    async def test_missing_file(self):
        """Missing files raise the usual OS error."""
        with self.assertRaises(FileNotFoundError):
            await sfntmeta.load(self.temp_path / 'missing.ttf')


class TestReadFont(BaseTester):
    """Test reading fonts from streams."""

    def _font_data(self, records, **kwargs):
        return build_sfnt(
            ((b'head', bytes(54)), (b'name', build_name_table(records))),
            **kwargs
        )

    def test_read_font(self):
        """Fonts can be read from a binary stream."""
        data = self._font_data((
            mac_name(1, 'Mac Family'),
            windows_name(1, 'Alegreya'),
            windows_name(16, 'Alegreya Typographic'),
            windows_name(17, 'Black Italic'),
        ))
        font = sfntmeta.read_font(io.BytesIO(data))
        self.assertEqual(font.family_name, 'Alegreya')
        self.assertEqual(font.preferred_family, 'Alegreya Typographic')
        self.assertEqual(font.preferred_subfamily, 'Black Italic')
        self.assertEqual(font.copyright_notice, '')

    def test_cff_font(self):
        """OTTO fonts report CFF outlines."""
        data = self._font_data((windows_name(1, 'Alegreya'),), sfnt_version=CFF)
        font = sfntmeta.read_font(io.BytesIO(data))
        self.assertEqual(font.outline_format, 'CFF')
        self.assertEqual(font.family_name, 'Alegreya')

    def test_stream_closed(self):
        """The stream is closed after reading, also on failure."""
        stream = io.BytesIO(self._font_data((windows_name(1, 'Alegreya'),)))
        sfntmeta.read_font(stream)
        self.assertTrue(stream.closed)
        stream = io.BytesIO(build_sfnt(((b'head', bytes(54)),)))
        with self.assertRaises(TableNotFound):
            sfntmeta.read_font(stream)
        self.assertTrue(stream.closed)

    def test_text_stream_refused_and_closed(self):
        """A stream without binary access is refused and still closed."""
        stream = io.StringIO('not a font')
        with self.assertRaises(ValueError):
            sfntmeta.read_font(stream)
        self.assertTrue(stream.closed)

    def test_path_refused(self):
        """Paths are not streams; use load() for those."""
        with self.assertRaises(ValueError):
            sfntmeta.read_font(self.temp_path / 'font.ttf')

    def test_unseekable_stream(self):
        """Unseekable streams are buffered."""
        data = self._font_data((windows_name(1, 'Alegreya'),))

        class Unseekable(io.RawIOBase):
            def __init__(self, data):
                self._data = io.BytesIO(data)
            def readable(self):
                return True
            def readinto(self, buffer):
                chunk = self._data.read(len(buffer))
                buffer[:len(chunk)] = chunk
                return len(chunk)

        font = sfntmeta.read_font(Unseekable(data))
        self.assertEqual(font.family_name, 'Alegreya')

    def test_not_an_sfnt(self):
        """Other files raise UnsupportedVersion."""
        with self.assertRaises(UnsupportedVersion):
            sfntmeta.read_font(io.BytesIO(b'STARTFONT 2.1\n' + bytes(100)))

    def test_font_is_immutable(self):
        """Font fields cannot be changed."""
        font = Font(family_name='Alegreya')
        with self.assertRaises(AttributeError):
            font.family_name = 'Other'


if __name__ == '__main__':
    unittest.main()
