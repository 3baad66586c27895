"""
sfntmeta.streams - binary input streams

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path


def get_bytesio(bytestring):
    """Seekable binary buffer on bytes data."""
    return io.BufferedReader(io.BytesIO(bytestring))


class Stream:
    """
    Seekable binary input stream.

    Offsets are relative to the position of the wrapped stream at
    construction time, so that an sfnt embedded in a larger file can be
    read with its own offsets. The wrapped stream is closed on exit.
    """

    def __init__(self, file, *, name=''):
        """
        Ensure file is a seekable binary stream, wrap if necessary.

        file: readable stream or file-like object
        name: name to use in messages (default: name of wrapped stream)
        """
        if file is None:
            raise ValueError('No stream provided.')
        if isinstance(file, (str, Path)):
            raise ValueError('Argument `file` must be a Python file or stream-like object.')
        if not file.readable():
            raise ValueError('Expected readable stream, got writable.')
        self._stream = file
        self.name = name or get_name(file)
        self.closed = False
        self._ensure_binary()
        if not self._stream.seekable():
            # we need streams to be seekable - drain to buffer
            # note you can only do this once on the input stream!
            logging.debug('Draining unseekable stream %r to buffer.', self._stream)
            unseekable = self._stream
            self._stream = get_bytesio(unseekable.read())
            unseekable.close()
        self._anchor = self._stream.tell()

    def _ensure_binary(self):
        """Ensure we have a binary stream."""
        if not is_binary(self._stream):
            try:
                self._stream = self._stream.buffer
            except AttributeError as e:
                raise ValueError('Unable to access binary stream.') from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Ensure stream is closed."""
        self.close()

    def __repr__(self):
        """String representation."""
        return (
            f"<{type(self).__name__} name='{self.name}'"
            f"{' [closed]' if self.closed else ''}>"
        )

    def read(self, size=-1, /):
        return self._stream.read(size)

    def seek(self, loc, whence=0, /):
        """Seek relative to anchor."""
        if whence == 0:
            loc += self._anchor
        return self._stream.seek(loc, whence) - self._anchor

    def tell(self):
        """Location relative to anchor."""
        return self._stream.tell() - self._anchor

    def close(self):
        if not self.closed:
            logging.debug('Closing %r', self)
            self._stream.close()
        self.closed = True


def is_binary(stream):
    """Check if readable stream is binary."""
    # read 0 bytes - the return type will tell us if this is a text or binary stream
    return isinstance(stream.read(0), bytes)


def get_name(stream):
    """Get stream name, if available."""
    try:
        return str(stream.name)
    except AttributeError:
        # not all streams have one (e.g. BytesIO)
        return ''
