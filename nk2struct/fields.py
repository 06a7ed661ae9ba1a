"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from the stream without sub-components.
"""
import logging
import struct
from enum import Flag, auto

from .enum import Compliant
from .meta import FieldBase
from .properties import Dependency, ChunkPhase, PropertyDescriptor
from .exceptions import (
    NK2Exception,
    UnpackException,
    MagicException,
    InvalidTextEncoding,
)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 compliant=Compliant.INHERIT, is_magic=False, options=None):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.compliant = compliant
        self.is_magic = is_magic
        self.options = options or {}

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def is_compliant(self, level):
        '''Walk up the hierarchy until a field decides for the given level'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def get_option(self, name, default=None):
        '''Options are looked up from the field up to the root'''
        instance = self
        while instance is not None:
            if name in instance.options:
                return instance.options[name]
            instance = instance.father

        return default

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers and floats from bytes.

    Subclasses can override _convert() to transform the raw number into something
    with a higher level meaning.
    """

    magic_exception = MagicException

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        value = self.value
        return '<%s(%s)>' % (self.__class__.__name__, hex(value) if isinstance(value, int) else repr(value))

    def get_format(self):
        # everything in the stream is little endian
        return '<%s' % self.format

    @property
    def width(self):
        return struct.calcsize(self.get_format())

    def _get_size(self):
        return self.width

    def _convert(self, value):
        return value

    def _unpack(self, raw: bytes):
        try:
            value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(chain=[], message=str(e))

        if self.is_magic and value != self.default:
            self.logger.warning('the magic doesn\'t correspond: 0x%x', value)
            if self.is_compliant(Compliant.MAGIC):
                raise self.magic_exception(chain=[], actual=value, expected=self.default)

        return self._convert(value)

    def unpack(self, stream):
        self.value = self._unpack(stream.read(self.width))


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n, **kw):
        self.length = n

        super().__init__(**kw)

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return b'' if self.default is None else self.default

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        self.value = stream.read(self.length)


class TextField(StringField):
    """Counted text whose length includes a trailing terminator.

    The terminator is skipped, not checked. When the count is smaller than the
    terminator itself the text is empty and only the bytes counted are consumed.
    """

    def __init__(self, n, encoding='ascii', terminator=1, encoding_option=None, **kw):
        self.encoding = encoding
        self.encoding_option = encoding_option
        self.terminator = terminator
        self._size = 0
        super().__init__(n, **kw)

    def value_from_default(self):
        return '' if self.default is None else self.default

    def _get_size(self):
        return self._size

    def get_encoding(self):
        '''The encoding can be overridden by an option of some father'''
        if self.encoding_option is None:
            return self.encoding
        return self.get_option(self.encoding_option, self.encoding)

    def unpack(self, stream):
        length = self.length
        text_length = max(length - self.terminator, 0)

        raw = stream.read(text_length)
        stream.skip(length - text_length)
        self._size = length

        encoding = self.get_encoding()
        try:
            self.value = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise InvalidTextEncoding(chain=[], encoding=encoding, reason=str(e))


class NullField(Field):
    '''Occupies no space at all, its value is always None'''

    def _get_size(self):
        return 0

    def unpack(self, stream):
        self.value = None


class ArrayField(Field):
    '''Unpack an array of Fields/Chunks.

    You indicate the number of elements via the parameter named "n", a constant
    or a Dependency; each element is a copy of the template "field_cls".

    This class behaves like a (read only) list.
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field_cls, n=0, **kw):
        self.field_cls = field_cls
        self.n = n

        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return []

    def _get_size(self):
        return sum(element.size for element in self.value)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        n = self.n
        self.logger.debug('unpacking %d elements of %s' % (n, self.field_cls.__class__.__name__))

        elements = []
        for idx in range(n):
            element = self.instance_element()
            element.offset = stream.tell()
            try:
                element.unpack(stream)
            except NK2Exception as e:
                e.chain.append(f'[{idx}]')
                raise
            elements.append(element)

        self.value = elements


class SelectField(Field):
    """Allow to select the kind of final field based on a value in the parent chunk.
    You need to pass an expression resolving to the key and a dictionary with the mapping
    between the key and a (field class, args, kwargs) triple. You can use Type.DEFAULT as a default.

    Like in the following example we have a format that uses the first 4 bytes to indicate what
    follows: for value zero you have another 4 bytes, otherwise you have a sixteen bytes string

        type2field = {
            0: (fields.StructField, ('I',), {}),
            1: (fields.StringField, (0x10,), {}),
        }

        class DummyChunk(Chunk):
            type = fields.StructField('I')
            data = fields.SelectField('.type', type2field)
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, *args, **kwargs):
        self._key = key if isinstance(key, Dependency) else Dependency(key)
        self._mapping = mapping
        self._field = None

        super().__init__(*args, **kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    @property
    def field(self):
        return self._field

    def _get_value(self):
        return self._field.value if self._field is not None else None

    def _set_value(self, value):
        if value is not None:
            raise AttributeError(f'{self.__class__.__name__} takes its value from the selected field')

    def _get_size(self):
        return self._field.size if self._field is not None else 0

    def missing(self, key):
        '''Called when the key has no entry in the mapping and there is no default'''
        raise UnpackException(chain=[], message=f'no field for key {key!r}')

    def unpack(self, stream):
        key = self._key.resolve(self)
        self.logger.debug('resolved key \'%s\' to %r' % (self._key.expression, key))

        if key not in self._mapping:
            if SelectField.Type.DEFAULT not in self._mapping:
                self.missing(key)
            key = SelectField.Type.DEFAULT

        field_class, args, kwargs = self._mapping[key]
        self._field = field_class(*args, **kwargs)
        self._field.father = self.father
        self._field.name = self.name
        self._field.offset = stream.tell()
        self.logger.debug(f'unpacking {self._field.__class__.__name__}')

        self._field.unpack(stream)
        self.logger.debug('unpacked %r', self._field)
