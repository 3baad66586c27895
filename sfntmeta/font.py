"""
sfntmeta.font - font naming metadata

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import asyncio
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .streams import Stream, get_bytesio
from .tag import NAME
from .tables import read_table_directory, read_name_table, NameId


@dataclass(frozen=True)
class Font:
    """Identifying metadata of an sfnt font."""

    copyright_notice: str = ''
    family_name: str = ''
    subfamily_name: str = ''
    unique_font_identifier: str = ''
    full_name: str = ''
    version: str = ''
    postscript_name: str = ''
    trademark: str = ''
    manufacturer_name: str = ''
    designer_name: str = ''
    description: str = ''
    vendor_url: str = ''
    designer_url: str = ''
    license_description: str = ''
    license_url: str = ''
    preferred_family: str = ''
    preferred_subfamily: str = ''
    # 'TrueType' or 'CFF'
    outline_format: str = ''

    @classmethod
    def from_tables(cls, directory, name_table):
        """Copy name fields out of the decoded tables."""
        return cls(
            outline_format=directory.outline_format,
            **{
                _field: name_table.get_string(_name_id)
                for _field, _name_id in FONT_NAME_IDS.items()
            }
        )

    def as_dict(self):
        """Font fields as dict, in declaration order."""
        return {_f.name: getattr(self, _f.name) for _f in fields(self)}


# name ID for each Font field
FONT_NAME_IDS = {
    'copyright_notice': NameId.COPYRIGHT_NOTICE,
    'family_name': NameId.FAMILY_NAME,
    'subfamily_name': NameId.SUBFAMILY_NAME,
    'unique_font_identifier': NameId.UNIQUE_FONT_IDENTIFIER,
    'full_name': NameId.FULL_NAME,
    'version': NameId.VERSION,
    'postscript_name': NameId.POSTSCRIPT_NAME,
    'trademark': NameId.TRADEMARK,
    'manufacturer_name': NameId.MANUFACTURER_NAME,
    'designer_name': NameId.DESIGNER_NAME,
    'description': NameId.DESCRIPTION,
    'vendor_url': NameId.VENDOR_URL,
    'designer_url': NameId.DESIGNER_URL,
    'license_description': NameId.LICENSE_DESCRIPTION,
    'license_url': NameId.LICENSE_URL,
    'preferred_family': NameId.PREFERRED_FAMILY,
    'preferred_subfamily': NameId.PREFERRED_SUBFAMILY,
}


def read_font(instream, *, name=''):
    """
    Read font metadata from a binary stream.
    The stream is closed afterwards.

    Raises TableNotFound if the font has no `name` table.
    Raises ValueError if instream is not a readable binary stream.
    """
    try:
        stream = Stream(instream, name=name)
    except ValueError:
        if hasattr(instream, 'close'):
            instream.close()
        raise
    with stream:
        directory = read_table_directory(stream)
        logging.debug('Table directory of %r: %s', stream, directory)
        name_record = directory[NAME]
        name_table = read_name_table(stream, name_record.offset)
        logging.debug('Name table of %r: %s', stream, name_table)
    return Font.from_tables(directory, name_table)


async def load(path):
    """
    Load font metadata from an sfnt file.

    path: file path to read (.ttf, .otf)
    """
    path = Path(path)
    logging.info("Loading '%s'", path)
    data = await asyncio.to_thread(path.read_bytes)
    return read_font(get_bytesio(data), name=str(path))
