'''
GUIDs as stored by Windows: Data1 (32 bits), Data2 and Data3 (16 bits each)
little endian, followed by the 8 bytes of Data4 as they are.
'''
import uuid

from .. import fields


GUID_SIZE = 0x10


class GUIDField(fields.StringField):

    def __init__(self, **kwargs):
        super().__init__(GUID_SIZE, **kwargs)

    def value_from_default(self):
        return uuid.UUID(int=0)

    def _get_size(self):
        return GUID_SIZE

    def unpack(self, stream):
        self.value = uuid.UUID(bytes_le=stream.read(GUID_SIZE))
