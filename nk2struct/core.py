"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import NK2Exception
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is an
    ordered sequence of fields (or other chunks) declared as class attributes,
    unpacked one after the other from the same stream.

    Passing some data to the constructor unpacks it right away, either raw bytes,
    a path, a file object or an already opened Stream (in this case the unpacking
    starts at its current position).
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            stream = data if isinstance(data, Stream) else Stream(data)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return self

    def _set_value(self, value):
        raise AttributeError(f'{self.__class__.__name__} is a container, set the value of its fields')

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_size(self):
        '''the size is derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack(self, stream):
        '''Take the binary data from the stream and build the representation
        given by the class this method is implemented in.

        The fields are unpacked in declaration order starting from the actual
        position of the stream; if a field fails, its name is added to the chain
        of the exception that is then propagated untouched.
        '''
        self._phase = ChunkPhase.UNPACKING
        if self.offset is None:
            self.offset = stream.tell()

        for field_name, field in self.get_fields():
            field.offset = stream.tell()
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, field.offset))

            try:
                field.unpack(stream)
            except NK2Exception as e:
                self._phase = ChunkPhase.ERROR
                e.chain.append(field_name)
                raise

        self._phase = ChunkPhase.DONE
