'''
# MAPI properties

Each property of the autocomplete stream has the following layout

  .----------------------------.
  | property tag          4    |
  | reserved data         4    |
  | property value union  8    |
  | value data            n    |  only for dynamic values
  '----------------------------'

The type in the tag tells how to interpret the union and if a block of value
data follows it. For static values the union contains the value itself, for
dynamic values its content is irrelevant and the value is read from the data
following it.

Reference <https://learn.microsoft.com/en-us/office/client-developer/outlook/mapi/autocomplete-stream>.
'''
from ..core import Chunk
from ..properties import Dependency
from ..common.guid import GUIDField
from .. import fields
from .property_fields import (
    PropertyTagField,
    SlotField,
    BooleanSlotField,
    FileTimeSlotField,
    PropertyValueField,
)
from .enum import PropertyType


UNION_SIZE = 0x08
STRING8_ENCODING_OPTION = 'string8_encoding'


class PropertyValue(object):
    '''A decoded value together with the type it was decoded as'''
    __slots__ = ('type', 'value')

    def __init__(self, type, value):
        self.type = type
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.type.name}, {self.value!r})>'

    def is_a(self, type):
        return self.type == type


class BinaryValue(Chunk):
    '''PT_BINARY: number of bytes followed by the bytes themselves'''
    length = fields.StructField('I')
    data   = fields.StringField(Dependency('.length'))

    def _get_value(self):
        return self.data.value


class String8Value(Chunk):
    '''PT_STRING8: the count includes the NULL terminator'''
    length = fields.StructField('I')
    text   = fields.TextField(
        Dependency('.length'), encoding='ascii', terminator=1, encoding_option=STRING8_ENCODING_OPTION)

    def _get_value(self):
        return self.text.value


class UnicodeValue(Chunk):
    '''PT_UNICODE: UTF-16LE, the count includes the two bytes of the NULL terminator'''
    length = fields.StructField('I')
    text   = fields.TextField(Dependency('.length'), encoding='utf-16-le', terminator=2)

    def _get_value(self):
        return self.text.value


class MultipleValue(Chunk):
    '''A count followed by that many values of the same kind'''
    count = fields.StructField('I')

    def _get_value(self):
        return [_.value for _ in self.values]


class MultipleBinaryValue(MultipleValue):
    values = fields.ArrayField(BinaryValue(), n=Dependency('.count'))


class MultipleString8Value(MultipleValue):
    values = fields.ArrayField(String8Value(), n=Dependency('.count'))


class MultipleUnicodeValue(MultipleValue):
    values = fields.ArrayField(UnicodeValue(), n=Dependency('.count'))


type2field = {
    # static values
    PropertyType.NULL:       (fields.NullField, (), {}),
    PropertyType.INTEGER16:  (SlotField, ('H',), {}),
    PropertyType.INTEGER32:  (SlotField, ('I',), {}),
    PropertyType.FLOATING32: (SlotField, ('f',), {'default': 0.0}),
    PropertyType.FLOATING64: (SlotField, ('d',), {'default': 0.0}),
    PropertyType.BOOLEAN:    (BooleanSlotField, (), {}),
    PropertyType.TIME:       (FileTimeSlotField, (), {}),
    PropertyType.INTEGER64:  (SlotField, ('Q',), {}),
    PropertyType.ERROR_CODE: (SlotField, ('I',), {}),
    # dynamic values
    PropertyType.STRING8:          (String8Value, (), {}),
    PropertyType.STRING:           (UnicodeValue, (), {}),
    PropertyType.GUID:             (GUIDField, (), {}),
    PropertyType.BINARY:           (BinaryValue, (), {}),
    PropertyType.MULTIPLE_BINARY:  (MultipleBinaryValue, (), {}),
    PropertyType.MULTIPLE_STRING8: (MultipleString8Value, (), {}),
    PropertyType.MULTIPLE_STRING:  (MultipleUnicodeValue, (), {}),
}


class Property(Chunk):
    tag      = PropertyTagField()
    reserved = fields.StructField('I')
    union    = fields.StringField(UNION_SIZE)
    data     = PropertyValueField(type2field)

    @property
    def id(self):
        return self.tag.id

    @property
    def type(self):
        return self.tag.type

    def _get_value(self):
        return self.data.value

    def to_property_value(self):
        return PropertyValue(self.type, self.value)
