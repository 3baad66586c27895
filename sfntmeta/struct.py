"""
sfntmeta.struct - big-endian binary structures

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace

from .errors import TruncatedInput


##############################################################################
# binary structs

# sfnt field types
TYPES = {
    'uint16': ctypes.c_uint16,
    'uint32': ctypes.c_uint32,
}


def _parse_type(atype):
    """Convert struct member type specification to ctypes base type."""
    if isinstance(atype, ScalarType):
        return atype._base
    try:
        return TYPES[atype]
    except KeyError:
        pass
    raise ValueError('Field type `{}` not understood'.format(atype))


class _WrappedCType:
    """Wrapper for ctypes type, factory for wrapped values."""

    def from_cvalue(self, cvalue):
        """Instantiate a struct variable from a cvalue."""
        # pylint: disable=no-member
        return self._value_cls.from_cvalue(cvalue, self)

    def from_bytes(self, data, offset=0, what=''):
        """Read value from a bytes buffer."""
        available = max(0, len(data) - offset)
        if available < self.size:
            raise TruncatedInput(
                what or self.name, offset, self.size, available
            )
        # pylint: disable=no-member
        cvalue = self._ctype.from_buffer_copy(data, offset)
        return self.from_cvalue(cvalue)

    def read_from(self, stream, offset=None, what=''):
        """Read value from seekable binary stream."""
        if offset is not None:
            stream.seek(offset, 0)
        else:
            offset = stream.tell()
        data = stream.read(self.size)
        if len(data) < self.size:
            raise TruncatedInput(
                what or self.name, offset, self.size, len(data)
            )
        return self.from_bytes(data, what=what)

    def array(self, count):
        return ArrayType(self, count)

    @property
    def name(self):
        return type(self).__name__

    @property
    def size(self):
        # pylint: disable=no-member
        return ctypes.sizeof(self._ctype)


class ScalarType(_WrappedCType):
    """Big-endian scalar. Used to define structs and read single values."""

    def __init__(self, ctype):
        self._base = ctype
        self._ctype = ctype.__ctype_be__

    def from_cvalue(self, cvalue):
        """Scalars come out as Python ints."""
        return cvalue.value

    @property
    def name(self):
        return self._base.__name__.removeprefix('c_')


class StructValue:
    """Read-only wrapper for ctypes Structure."""

    @classmethod
    def from_cvalue(cls, cvalue, type):
        obj = cls()
        obj._cvalue = cvalue
        obj._type = type
        return obj

    def __getattr__(self, attr):
        if not attr.startswith('_'):
            return getattr(self._cvalue, attr)
        raise AttributeError(attr)

    def __setattr__(self, attr, value):
        if not attr.startswith('_'):
            raise AttributeError(f'Cannot set field `{attr}`: struct values are read-only.')
        return super().__setattr__(attr, value)

    @property
    def __dict__(self):
        return dict(
            (field, getattr(self, field))
            for field, *_ in self._cvalue._fields_
        )

    def __repr__(self):
        props = vars(self)
        return type(self).__name__ + '({})'.format(
            ', '.join(
                '{}={}'.format(_fld, _val)
                for _fld, _val in props.items()
            )
        )


class StructType(_WrappedCType):
    """
    Represent a big-endian structured type.

    mystruct = StructType(first='uint16', second='uint16')
    s = mystruct.from_bytes(b'\\0\\1\\0\\2')

    assert s.first == 1 and s.second == 2

    Fields must be naturally aligned, sfnt structures always are.
    """

    _value_cls = StructValue

    def __init__(self, name='', **description):
        """Create a structured type."""

        class _CStruct(ctypes.BigEndianStructure):
            _fields_ = tuple(
                (_field, _parse_type(_type))
                for _field, _type in description.items()
            )

        packed_size = sum(ctypes.sizeof(_t) for _, _t in _CStruct._fields_)
        if ctypes.sizeof(_CStruct) != packed_size:
            raise ValueError('Struct fields are not naturally aligned.')
        self._ctype = _CStruct
        self._name = name

    @property
    def name(self):
        return self._name or super().name


class ArrayType(_WrappedCType):
    """Wrapper for ctypes array type."""

    def __init__(self, element_type, count):
        self.count = count
        self.element_type = element_type
        self._ctype = element_type._ctype * count

    def from_bytes(self, data, offset=0, what=''):
        """Read array from a bytes buffer."""
        if not self.count:
            return ()
        return super().from_bytes(data, offset, what)

    def from_cvalue(self, cvalue):
        """Arrays come out as tuples of element values."""
        if isinstance(self.element_type, ScalarType):
            # ctypes already gives Python ints for simple-type elements
            return tuple(cvalue)
        return tuple(
            self.element_type.from_cvalue(_elem)
            for _elem in cvalue
        )

    @property
    def name(self):
        return f'{self.count} x {self.element_type.name}'


big_endian = SimpleNamespace(
    Struct=StructType,
    uint16=ScalarType(ctypes.c_uint16),
    uint32=ScalarType(ctypes.c_uint32),
)
