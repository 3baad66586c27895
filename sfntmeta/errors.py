"""
sfntmeta.errors - sfnt decoding errors

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class FileFormatError(Exception):
    """Incorrect file format."""


class TruncatedInput(FileFormatError):
    """Not enough bytes for a declared structure."""

    def __init__(self, what, offset, expected, actual):
        self.what = what
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Truncated input reading {what} at offset {offset}: '
            f'expected {expected} bytes, got {actual}.'
        )


class InvalidTag(FileFormatError, ValueError):
    """Tag bytes are not a valid sfnt tag."""

    def __init__(self, value, reason):
        self.value = value
        self.reason = reason
        super().__init__(f'Invalid tag {value!r}: {reason}.')


class UnsupportedVersion(FileFormatError):
    """Unexpected sfnt or table version."""

    def __init__(self, what, version, message=''):
        self.what = what
        self.version = version
        super().__init__(
            message or f'Unsupported {what} version 0x{version:08x}.'
        )


class TableNotFound(FileFormatError, KeyError):
    """Table tag not present in the table directory."""

    def __init__(self, tag):
        self.tag = tag
        super().__init__(f'No `{tag}` table in font.')

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class NameRecordNotFound(FileFormatError, KeyError):
    """Name ID not present in the `name` table."""

    def __init__(self, name_id):
        self.name_id = name_id
        super().__init__(f'No name record with name ID {name_id}.')

    def __str__(self):
        return self.args[0]


# errors that invalidate only one name record, not the whole table

class NameRecordError(FileFormatError):
    """Name record string could not be decoded."""

    def __init__(self, message, record=None):
        self.record = record
        super().__init__(message)


class StringDecodeError(NameRecordError):
    """Malformed bytes for the selected codec."""


class UnsupportedEncoding(NameRecordError):
    """No known codec for the platform and encoding ID."""
