'''
# MAPI property fields

A property starts with a 4 bytes tag (type in the low word, identifier in
the high one), 4 reserved bytes and an 8 bytes union. Static values are
fully contained in the union, so the fields decoding them don't consume the
stream at all: they reinterpret the meaningful prefix of the union bytes.
'''
from .. import fields
from ..common.filetime import filetime_to_datetime
from ..exceptions import UnsupportedPropertyType
from ..properties import Dependency
from .enum import PropertyType


class PropertyTagField(fields.StructField):

    def __init__(self, **kwargs):
        super().__init__('I', **kwargs)

    @property
    def code(self):
        return self.value & 0xffff

    @property
    def type(self):
        '''The PropertyType, or the raw code when it's not a known one'''
        try:
            return PropertyType(self.code)
        except ValueError:
            return self.code

    @property
    def id(self):
        return (self.value >> 16) & 0xffff

    def __repr__(self):
        return f'<{self.__class__.__name__}(id=0x{self.id:04x}, type={self.type!r})>'


class SlotField(fields.StructField):
    '''Reinterpret the first bytes of the union as the given struct format.

    The union is always 8 bytes long, only the first self.width are meaningful,
    what follows is never looked at.'''

    def __init__(self, format, union=Dependency('.union'), **kwargs):
        self._union = union
        super().__init__(format, **kwargs)

    def _get_size(self):
        return 0

    def unpack(self, stream):
        union = self._union.resolve(self)
        self.value = self._unpack(union[:self.width])


class BooleanSlotField(SlotField):

    def __init__(self, **kwargs):
        super().__init__('H', **kwargs)

    def value_from_default(self):
        return False

    def _convert(self, value):
        return value != 0


class FileTimeSlotField(SlotField):

    def __init__(self, **kwargs):
        super().__init__('Q', **kwargs)

    def value_from_default(self):
        return filetime_to_datetime(0)

    def _convert(self, value):
        return filetime_to_datetime(value)


class PropertyValueField(fields.SelectField):
    '''Dispatch on the type code of the tag; there is no default.'''

    def __init__(self, mapping, key='.tag.type', **kwargs):
        super().__init__(key, mapping, **kwargs)

    def missing(self, key):
        raise UnsupportedPropertyType(chain=[], code=int(key))
