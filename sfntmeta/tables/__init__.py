"""
sfntmeta.tables - sfnt table directory and table readers

(c) 2022--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .directory import TableDirectory, TableRecord, read_table_directory
from .name import NameTable, NameRecord, LanguageTagRecord, read_name_table
from .encodings import PlatformId, NameId, name_id_label
