'''
This module contains the constant values of the MAPI properties as found
in the autocomplete stream.

See <https://learn.microsoft.com/en-us/office/client-developer/outlook/mapi/property-types>.
'''
from enum import Enum, IntEnum


class PropertyType(IntEnum):
    '''Low 16 bits of a property tag'''
    NULL             = 0x0001  # PT_NULL
    INTEGER16        = 0x0002  # PT_I2
    INTEGER32        = 0x0003  # PT_LONG
    FLOATING32       = 0x0004  # PT_R4
    FLOATING64       = 0x0005  # PT_DOUBLE
    ERROR_CODE       = 0x000A  # PT_ERROR
    BOOLEAN          = 0x000B  # PT_BOOLEAN
    INTEGER64        = 0x0014  # PT_I8
    STRING8          = 0x001E  # PT_STRING8
    STRING           = 0x001F  # PT_UNICODE
    TIME             = 0x0040  # PT_SYSTIME
    GUID             = 0x0048  # PT_CLSID
    BINARY           = 0x0102  # PT_BINARY
    MULTIPLE_STRING8 = 0x101E  # PT_MV_STRING8
    MULTIPLE_STRING  = 0x101F  # PT_MV_UNICODE
    MULTIPLE_BINARY  = 0x1102  # PT_MV_BINARY

    @property
    def is_static(self):
        '''The value lives entirely in the 8 bytes union'''
        return self in STATIC_TYPES

    @property
    def is_multiple(self):
        return bool(self.value & 0x1000)


STATIC_TYPES = frozenset([
    PropertyType.NULL,
    PropertyType.INTEGER16,
    PropertyType.INTEGER32,
    PropertyType.FLOATING32,
    PropertyType.FLOATING64,
    PropertyType.ERROR_CODE,
    PropertyType.BOOLEAN,
    PropertyType.INTEGER64,
    PropertyType.TIME,
])


class PropertyId(Enum):
    '''High 16 bits of a property tag: the identifiers usually found in a row
    of the nickname cache. The decoder never needs them, they are only names.'''
    PR_OBJECT_TYPE            = 0x0FFE
    PR_ENTRYID                = 0x0FFF
    PR_RECORD_KEY             = 0x0FF9
    PR_INSTANCE_KEY           = 0x0FF6
    PR_ROWID                  = 0x3000
    PR_DISPLAY_NAME           = 0x3001
    PR_ADDRTYPE               = 0x3002
    PR_EMAIL_ADDRESS          = 0x3003
    PR_SEARCH_KEY             = 0x300B
    PR_DISPLAY_TYPE           = 0x3900
    PR_SEND_RICH_INFO         = 0x3A40
    PR_SEND_INTERNET_ENCODING = 0x3A71
    PR_TRANSMITABLE_DISPLAY_NAME = 0x3A20
    PR_DISPLAY_TYPE_EX        = 0x3905
    PR_SMTP_ADDRESS           = 0x39FE

    @classmethod
    def name_of(cls, prop_id):
        try:
            return cls(prop_id).name
        except ValueError:
            return f'0x{prop_id:04X}'
