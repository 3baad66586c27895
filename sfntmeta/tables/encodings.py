"""
sfntmeta.tables.encodings - platform, encoding and name identifiers

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from enum import IntEnum

from fontTools.misc.encodingTools import getEncoding

from ..errors import StringDecodeError, UnsupportedEncoding


class PlatformId(IntEnum):
    """Platform identifiers used in `name` and `cmap`."""
    UNICODE = 0
    MACINTOSH = 1
    # deprecated
    ISO = 2
    WINDOWS = 3
    CUSTOM = 4


class WindowsEncodingId(IntEnum):
    """Encoding identifiers for the Windows platform."""
    SYMBOL = 0
    UNICODE_BMP = 1
    SHIFT_JIS = 2
    PRC = 3
    BIG5 = 4
    WANSUNG = 5
    JOHAB = 6
    UNICODE_FULL = 10


class NameId(IntEnum):
    """Predefined name identifiers."""
    COPYRIGHT_NOTICE = 0
    FAMILY_NAME = 1
    SUBFAMILY_NAME = 2
    UNIQUE_FONT_IDENTIFIER = 3
    FULL_NAME = 4
    VERSION = 5
    POSTSCRIPT_NAME = 6
    TRADEMARK = 7
    MANUFACTURER_NAME = 8
    DESIGNER_NAME = 9
    DESCRIPTION = 10
    VENDOR_URL = 11
    DESIGNER_URL = 12
    LICENSE_DESCRIPTION = 13
    LICENSE_URL = 14
    # 15 is reserved
    PREFERRED_FAMILY = 16
    PREFERRED_SUBFAMILY = 17
    COMPATIBLE_FULL_NAME = 18
    SAMPLE_TEXT = 19
    POSTSCRIPT_CID_FINDFONT_NAME = 20
    WWS_FAMILY_NAME = 21
    WWS_SUBFAMILY_NAME = 22
    LIGHT_BACKGROUND_PALETTE = 23
    DARK_BACKGROUND_PALETTE = 24
    VARIATIONS_POSTSCRIPT_NAME_PREFIX = 25


# name IDs from here up are defined by the font, e.g. for `fvar` instances
FIRST_FONT_SPECIFIC_NAME_ID = 256

# language IDs from here up refer to the language-tag records
FIRST_LANG_TAG_ID = 0x8000

# English (United States)
WINDOWS_ENGLISH = 0x0409
MAC_ENGLISH = 0


def name_id_label(name_id):
    """Descriptive label for a name ID; unlisted IDs are not an error."""
    try:
        return NameId(name_id).name.lower()
    except ValueError:
        pass
    if name_id >= FIRST_FONT_SPECIFIC_NAME_ID:
        return 'font-specific'
    return 'reserved'


###############################################################################
# string decoding

# > All string data for platform 3 must be encoded in UTF-16BE.
# the Unicode platform has no other encoding either
_UTF16_PLATFORMS = (PlatformId.UNICODE, PlatformId.WINDOWS)


def get_codec(platform_id, encoding_id, language_id):
    """
    Python codec name for a name record's platform, encoding and language.
    Raises UnsupportedEncoding if no codec is known.
    """
    if platform_id in _UTF16_PLATFORMS:
        return 'utf-16-be'
    if platform_id in (PlatformId.MACINTOSH, PlatformId.ISO):
        # fontTools knows the Mac script codes and language overrides
        # and registers codecs for the CJK ones
        codec = getEncoding(platform_id, encoding_id, language_id)
        if codec:
            return codec
    raise UnsupportedEncoding(
        f'No codec for platform {platform_id} encoding {encoding_id}.'
    )


def decode_name(data, platform_id, encoding_id, language_id):
    """Decode name string bytes."""
    codec = get_codec(platform_id, encoding_id, language_id)
    try:
        return data.decode(codec)
    except LookupError as e:
        raise UnsupportedEncoding(
            f'Codec `{codec}` for platform {platform_id} encoding {encoding_id} '
            f'not available: {e}'
        ) from e
    except UnicodeDecodeError as e:
        logging.debug('Could not decode %r as `%s`: %s', data, codec, e)
        raise StringDecodeError(
            f'Malformed `{codec}` string for platform {platform_id} '
            f'encoding {encoding_id}: {e.reason} at position {e.start}.'
        ) from e
