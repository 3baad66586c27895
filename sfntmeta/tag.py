"""
sfntmeta.tag - four-byte sfnt tags

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .errors import InvalidTag


TAG_LENGTH = 4
_SPACE = 0x20
_TILDE = 0x7e


class Tag:
    """
    Four-byte identifier of an sfnt table or feature.

    All bytes are printable ASCII; trailing spaces may pad a shorter name,
    but a space may not be followed by anything else.
    """

    __slots__ = ('_bytes',)

    def __init__(self, value):
        """Construct tag object from four bytes or a four-character string."""
        if isinstance(value, Tag):
            value = value._bytes
        elif isinstance(value, str):
            try:
                value = value.encode('ascii')
            except UnicodeEncodeError:
                raise InvalidTag(value, 'non-ASCII characters') from None
        if isinstance(value, int):
            # bytes(int) would give a zero-filled buffer
            raise InvalidTag(value, 'integer given, use int.to_bytes()')
        try:
            value = bytes(value)
        except TypeError:
            raise InvalidTag(value, f'cannot convert {type(value).__name__} to bytes') from None
        _check_tag_bytes(value)
        object.__setattr__(self, '_bytes', value)

    def __setattr__(self, attr, value):
        raise AttributeError(f'{type(self).__name__} is immutable.')

    def __repr__(self):
        """Represent tag."""
        return f"{type(self).__name__}({str(self)!r})"

    def __str__(self):
        """Tag as 4-character string."""
        return self._bytes.decode('ascii')

    def __bytes__(self):
        return self._bytes

    def __hash__(self):
        """Allow use as dictionary key."""
        return hash((Tag, self._bytes))

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return self._bytes == other._bytes


def _check_tag_bytes(value):
    """Raise InvalidTag if the bytes are not a valid tag."""
    if len(value) != TAG_LENGTH:
        raise InvalidTag(value, f'expected {TAG_LENGTH} bytes, got {len(value)}')
    for i, byte in enumerate(value):
        if not _SPACE <= byte <= _TILDE:
            raise InvalidTag(value, f'byte 0x{byte:02x} at position {i} is not printable ASCII')
        if i and value[i-1] == _SPACE and byte != _SPACE:
            raise InvalidTag(value, 'space padding followed by non-space')


# well-known table tags
CFF = Tag(b'CFF ')
CMAP = Tag(b'cmap')
GLYF = Tag(b'glyf')
HEAD = Tag(b'head')
HHEA = Tag(b'hhea')
HMTX = Tag(b'hmtx')
LOCA = Tag(b'loca')
MAXP = Tag(b'maxp')
NAME = Tag(b'name')
OS_2 = Tag(b'OS/2')
POST = Tag(b'post')
