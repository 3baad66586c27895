"""
sfntmeta.tables.name - sfnt `name` table

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from ..struct import big_endian as be
from ..errors import (
    NameRecordNotFound, UnsupportedVersion, TruncatedInput, NameRecordError
)
from .encodings import (
    PlatformId, WindowsEncodingId, decode_name,
    FIRST_LANG_TAG_ID, WINDOWS_ENGLISH, MAC_ENGLISH,
)


# `name` table header
_NAME_HEADER = be.Struct(
    name='name table header',
    version='uint16',
    count='uint16',
    # offset to string storage, from start of table
    storage_offset='uint16',
)

_NAME_RECORD = be.Struct(
    name='name record',
    platform_id='uint16',
    encoding_id='uint16',
    language_id='uint16',
    name_id='uint16',
    # string length in bytes
    length='uint16',
    # string offset from start of storage area
    offset='uint16',
)

# version 1 only: follows the name records
_LANG_TAG_COUNT = be.uint16

_LANG_TAG_RECORD = be.Struct(
    name='language-tag record',
    length='uint16',
    offset='uint16',
)

# language tags are always UTF-16BE
_LANG_TAG_CODEC = 'utf-16-be'


@dataclass(frozen=True)
class NameRecord:
    """Decoded `name` table record."""
    platform_id: int
    encoding_id: int
    language_id: int
    name_id: int
    length: int
    offset: int
    value: str


@dataclass(frozen=True)
class LanguageTagRecord:
    """Version-1 language tag, a BCP 47 string such as `en` or `zh-Hant`."""
    length: int
    offset: int
    tag: Optional[str]


class NameTable(Mapping):
    """Read-only mapping of name IDs to the preferred name record for that ID."""

    def __init__(self, version, storage_offset, records, lang_tags=(), skipped=()):
        """
        Build name table.

        version: `name` table version, 0 or 1
        storage_offset: offset of string storage from start of table
        records: decoded NameRecord objects, in file order
        lang_tags: LanguageTagRecord objects (version 1 only)
        skipped: NameRecordError objects for records that could not be decoded
        """
        self.version = version
        self.storage_offset = storage_offset
        self.records = tuple(records)
        self.lang_tags = tuple(lang_tags)
        self.skipped = tuple(skipped)
        self._names = MappingProxyType(select_names(self.records))

    def __repr__(self):
        return (
            f'<{type(self).__name__} version={self.version} '
            f'records={len(self.records)} names={len(self._names)}>'
        )

    def __getitem__(self, name_id):
        """Preferred record for name ID; raise NameRecordNotFound if absent."""
        try:
            return self._names[name_id]
        except KeyError:
            raise NameRecordNotFound(name_id) from None

    def __iter__(self):
        return iter(self._names)

    def __len__(self):
        return len(self._names)

    def get_string(self, name_id, default=''):
        """String value of preferred record for name ID, or default if absent."""
        try:
            return self[name_id].value
        except NameRecordNotFound:
            return default

    def variants(self, name_id):
        """All decoded records with the given name ID, in file order."""
        return tuple(_rec for _rec in self.records if _rec.name_id == name_id)

    def language_of(self, record):
        """BCP 47 language tag for a record, if it uses a language-tag record."""
        if record.language_id < FIRST_LANG_TAG_ID:
            return None
        index = record.language_id - FIRST_LANG_TAG_ID
        try:
            return self.lang_tags[index].tag
        except IndexError:
            logging.debug(
                'Language ID 0x%04x refers to missing language-tag record.',
                record.language_id
            )
            return None


###############################################################################
# selection of preferred record

def _platform_rank(record):
    """Lower is preferred."""
    if record.platform_id == PlatformId.WINDOWS:
        if record.encoding_id == WindowsEncodingId.UNICODE_BMP:
            return 0
        if record.encoding_id == WindowsEncodingId.UNICODE_FULL:
            return 1
        return 2
    if record.platform_id == PlatformId.UNICODE:
        return 3
    if record.platform_id == PlatformId.MACINTOSH:
        return 4
    return 5


def _preference(record):
    """Sort key for records with the same name ID."""
    english = {
        PlatformId.WINDOWS: WINDOWS_ENGLISH,
        PlatformId.MACINTOSH: MAC_ENGLISH,
    }.get(record.platform_id)
    return (
        _platform_rank(record),
        record.language_id != english,
        record.language_id,
    )


def select_names(records):
    """
    Choose one record per name ID.

    Windows Unicode records go first, then Unicode platform, then Macintosh.
    Within a platform, English goes first, then the lowest language ID;
    on a tie the record that comes first wins.
    """
    names = {}
    # sort is stable so file order breaks ties
    for record in sorted(records, key=_preference):
        names.setdefault(record.name_id, record)
    # present in order of name ID
    return dict(sorted(names.items()))


###############################################################################
# reader

def read_name_table(instream, offset):
    """Read the `name` table starting at offset in a seekable binary stream."""
    header = _NAME_HEADER.read_from(instream, offset)
    if header.version not in (0, 1):
        raise UnsupportedVersion('name table', header.version)
    logging.debug('name table header: %s', header)
    rec_headers = _NAME_RECORD.array(header.count).read_from(
        instream, offset + _NAME_HEADER.size, what='name records'
    )
    storage = offset + header.storage_offset
    lang_tags = ()
    if header.version == 1:
        lang_tags = _read_lang_tags(instream, storage)
    records, skipped = [], []
    for rec_header in rec_headers:
        data = _read_string(instream, storage, rec_header.offset, rec_header.length)
        try:
            value = decode_name(
                data,
                rec_header.platform_id, rec_header.encoding_id,
                rec_header.language_id,
            )
        except NameRecordError as e:
            # only this record is lost
            e.record = rec_header
            logging.warning('Skipping name ID %d record: %s', rec_header.name_id, e)
            skipped.append(e)
            continue
        records.append(NameRecord(
            platform_id=rec_header.platform_id,
            encoding_id=rec_header.encoding_id,
            language_id=rec_header.language_id,
            name_id=rec_header.name_id,
            length=rec_header.length,
            offset=rec_header.offset,
            value=value,
        ))
    return NameTable(
        header.version, header.storage_offset, records,
        lang_tags=lang_tags, skipped=skipped,
    )


def _read_lang_tags(instream, storage):
    """Read version-1 language-tag records; stream must be right after name records."""
    count = _LANG_TAG_COUNT.read_from(instream, what='language-tag count')
    tag_headers = _LANG_TAG_RECORD.array(count).read_from(
        instream, what='language-tag records'
    )
    lang_tags = []
    for tag_header in tag_headers:
        data = _read_string(instream, storage, tag_header.offset, tag_header.length)
        try:
            tag = data.decode(_LANG_TAG_CODEC)
        except UnicodeDecodeError as e:
            # keep the record so that language IDs still index correctly
            logging.warning('Could not decode language tag %r: %s', data, e)
            tag = None
        lang_tags.append(LanguageTagRecord(
            length=tag_header.length, offset=tag_header.offset, tag=tag,
        ))
    return lang_tags


def _read_string(instream, storage, offset, length):
    """Read string bytes from the storage area."""
    instream.seek(storage + offset)
    data = instream.read(length)
    if len(data) < length:
        raise TruncatedInput('name string', storage + offset, length, len(data))
    return data
