class NK2Exception(Exception):
    '''Base class to extend in order to throw exception in nk2struct.

    The "chain" argument collects the names of the fields that were being
    unpacked when the error happened, innermost first: every Chunk the exception
    crosses appends its own field name.
    '''

    def __init__(self, chain=None, message=None):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__(message)

    @property
    def path(self):
        '''Dotted path from the root chunk to the field that failed.'''
        return '.'.join(reversed(self.chain)).replace('.[', '[')

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.chain:
            msg = f'{msg} (at {self.path})'
        return msg


class UnpackException(NK2Exception):
    pass


class MagicException(NK2Exception):

    def __init__(self, chain=None, actual=None, expected=None):
        self.actual = actual
        self.expected = expected
        super().__init__(chain=chain, message=f'magic mismatch: expected {expected!r}, found {actual!r}')


class InvalidSignature(MagicException):

    def __init__(self, chain=None, actual=None, expected=None):
        super().__init__(chain=chain, actual=actual, expected=expected)
        self.message = f'invalid signature 0x{actual:08x}' if isinstance(actual, int) else 'invalid signature'


class UnexpectedEndOfStream(UnpackException):

    def __init__(self, chain=None, offset=None, requested=None):
        self.offset = offset
        self.requested = requested
        super().__init__(chain=chain, message=f'stream ended reading {requested} bytes at offset {offset}')


class UnsupportedPropertyType(UnpackException):

    def __init__(self, chain=None, code=None):
        self.code = code
        super().__init__(chain=chain, message=f'unsupported property type 0x{code:04x}')


class InvalidTextEncoding(UnpackException):

    def __init__(self, chain=None, encoding=None, reason=None):
        self.encoding = encoding
        super().__init__(chain=chain, message=f'data is not valid {encoding} text: {reason}')


class InvalidTimestamp(UnpackException):

    def __init__(self, chain=None, ticks=None):
        self.ticks = ticks
        super().__init__(chain=chain, message=f'FILETIME {ticks} is out of range')


class DuplicatePropertyException(UnpackException):
    '''Raised only when the Compliant.DUPLICATES flag is in effect.'''

    def __init__(self, chain=None, prop_id=None):
        self.prop_id = prop_id
        super().__init__(chain=chain, message=f'property 0x{prop_id:04x} appears more than once in the row')
