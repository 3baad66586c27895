"""
sfntmeta - read identifying metadata from TrueType and OpenType fonts

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .font import Font, load, read_font
from .tag import Tag
from .tables import (
    TableDirectory, TableRecord, read_table_directory,
    NameTable, NameRecord, LanguageTagRecord, read_name_table,
    PlatformId, NameId, name_id_label,
)
from .errors import (
    FileFormatError, TruncatedInput, InvalidTag, UnsupportedVersion,
    TableNotFound, NameRecordNotFound, StringDecodeError, UnsupportedEncoding,
)
