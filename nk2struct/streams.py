import logging

from bitstring import ConstBitStream, ReadError

from .exceptions import UnexpectedEndOfStream


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file objects to
    uniform the way they are read: the whole content is loaded in a
    ConstBitStream and consumed sequentially through a byte cursor.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a buffer'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            if not hasattr(self.obj, 'read'):
                raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)
            init_method = self.init_file

        init_method()

    def __repr__(self):
        return '<%s(pos=%d, len=%d)>' % (self.__class__.__name__, self.tell(), len(self))

    def __len__(self):
        return len(self.obj) // 8

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = ConstBitStream(bytes=f.read())

    init_PosixPath = init_str
    init_WindowsPath = init_str

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = ConstBitStream(bytes=bytes(self.obj))

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        '''Anything with a read() method: the remaining content is buffered'''
        self.obj = ConstBitStream(bytes=self.obj.read())

    def tell(self):
        return self.obj.bytepos

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.bytepos = offset

    @property
    def remaining(self):
        return len(self) - self.tell()

    def read(self, n):
        '''Read exactly n bytes or raise UnexpectedEndOfStream, leaving the cursor untouched.'''
        if n < 0:
            raise ValueError(f'cannot read a negative amount of bytes ({n})')

        if n == 0:
            return b''

        offset = self.tell()
        try:
            return self.obj.read(f'bytes:{n}')
        except ReadError:
            self.obj.bytepos = offset
            raise UnexpectedEndOfStream(chain=[], offset=offset, requested=n)

    def skip(self, n):
        self.read(n)

    def read_all(self):
        '''Returns all the data from the cursor up to the end'''
        return self.read(self.remaining)
