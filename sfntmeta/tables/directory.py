"""
sfntmeta.tables.directory - sfnt table directory

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..struct import big_endian as be
from ..tag import Tag
from ..errors import TableNotFound, UnsupportedVersion


# sfnt versions
TRUETYPE_VERSION = 0x00010000
CFF_VERSION = int.from_bytes(b'OTTO', 'big')
COLLECTION_VERSION = int.from_bytes(b'ttcf', 'big')

OUTLINE_FORMATS = {
    TRUETYPE_VERSION: 'TrueType',
    CFF_VERSION: 'CFF',
}


# table directory header
_SFNT_HEADER = be.Struct(
    name='sfnt header',
    sfnt_version='uint32',
    num_tables='uint16',
    # binary search parameters, derived from num_tables
    search_range='uint16',
    entry_selector='uint16',
    range_shift='uint16',
)

# followed by num_tables table records
_TABLE_RECORD = be.Struct(
    name='table record',
    # read as integer so that any null bytes are preserved
    tag='uint32',
    checksum='uint32',
    # offset and length relative to start of file
    offset='uint32',
    length='uint32',
)


@dataclass(frozen=True)
class TableRecord:
    """Location of a table in the sfnt file."""
    tag: Tag
    checksum: int
    offset: int
    length: int


def search_params(num_tables):
    """Binary search parameters (searchRange, entrySelector, rangeShift) for num_tables."""
    if not num_tables:
        return 0, 0, 0
    entry_selector = num_tables.bit_length() - 1
    search_range = _TABLE_RECORD.size * 2**entry_selector
    range_shift = _TABLE_RECORD.size * num_tables - search_range
    return search_range, entry_selector, range_shift


class TableDirectory(Mapping):
    """Read-only mapping of table tags to table records."""

    def __init__(
            self, sfnt_version, records, *,
            search_range=None, entry_selector=None, range_shift=None,
        ):
        """
        Build table directory from sequence of table records.
        Later records replace earlier ones with the same tag.
        """
        self.sfnt_version = sfnt_version
        records = tuple(records)
        self.num_tables = len(records)
        expected = search_params(self.num_tables)
        self.search_range, self.entry_selector, self.range_shift = (
            expected[0] if search_range is None else search_range,
            expected[1] if entry_selector is None else entry_selector,
            expected[2] if range_shift is None else range_shift,
        )
        table = {}
        for record in records:
            if record.tag in table:
                logging.debug(
                    'Duplicate `%s` table record, using last one.', record.tag
                )
            table[record.tag] = record
        self._records = MappingProxyType(table)

    def __repr__(self):
        return (
            f'<{type(self).__name__} sfnt_version=0x{self.sfnt_version:08x} '
            f"tables={' '.join(str(_t) for _t in self)}>"
        )

    def __getitem__(self, tag):
        """Table record for tag; raise TableNotFound if absent."""
        try:
            tag = Tag(tag)
            return self._records[tag]
        except (KeyError, ValueError):
            raise TableNotFound(tag) from None

    def __iter__(self):
        return iter(self._records)

    def __len__(self):
        return len(self._records)

    @property
    def outline_format(self):
        """Glyph outline format indicated by the sfnt version."""
        return OUTLINE_FORMATS.get(self.sfnt_version, '')

    def search_params_mismatch(self):
        """
        Stored binary search parameters that differ from the values computed
        from the number of tables, as dict of name -> (stored, computed).
        """
        names = ('search_range', 'entry_selector', 'range_shift')
        computed = search_params(self.num_tables)
        return {
            _name: (getattr(self, _name), _value)
            for _name, _value in zip(names, computed)
            if getattr(self, _name) != _value
        }


def read_table_directory(instream, offset=0):
    """Read the sfnt table directory from a seekable binary stream."""
    header = _SFNT_HEADER.read_from(instream, offset)
    if header.sfnt_version == COLLECTION_VERSION:
        raise UnsupportedVersion(
            'sfnt', header.sfnt_version,
            'Font collections (`ttcf`) are not supported.'
        )
    if header.sfnt_version not in OUTLINE_FORMATS:
        raise UnsupportedVersion('sfnt', header.sfnt_version)
    logging.debug('sfnt header: %s', header)
    record_array = _TABLE_RECORD.array(header.num_tables)
    records = record_array.read_from(
        instream, offset + _SFNT_HEADER.size, what='table records'
    )
    directory = TableDirectory(
        header.sfnt_version,
        (
            TableRecord(
                tag=Tag(_rec.tag.to_bytes(4, 'big')),
                checksum=_rec.checksum,
                offset=_rec.offset,
                length=_rec.length,
            )
            for _rec in records
        ),
        search_range=header.search_range,
        entry_selector=header.entry_selector,
        range_shift=header.range_shift,
    )
    mismatch = directory.search_params_mismatch()
    if mismatch:
        logging.debug(
            'Binary search parameters in sfnt header differ from computed: %s',
            ', '.join(
                f'{_name}={_stored} (expected {_computed})'
                for _name, (_stored, _computed) in mismatch.items()
            )
        )
    return directory
