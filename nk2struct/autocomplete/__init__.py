'''
# Autocomplete stream (a.k.a. nickname cache, .NK2)

Outlook keeps the addresses suggested while typing a recipient in this
stream, as a file (Outlook 2003/2007) or as an attachment of a hidden
message in the mailbox (Stream_Autocomplete_*.dat).

  .------------------------------------.
  | metadata (0xBAADF00D)      4       |
  | major version              4       |
  | minor version              4       |
  | row-set                    n       |
  |   number of rows           4       |
  |   row 1                            |
  |     number of properties   4       |
  |     property 1 ... N               |
  |   ...                              |
  | extra information length   4       |
  | extra information          EI      |
  | last modification time     8       |
  '------------------------------------'

Reference <https://learn.microsoft.com/en-us/office/client-developer/outlook/mapi/autocomplete-stream>.
'''
from ..core import Chunk
from ..enum import Compliant
from ..exceptions import InvalidSignature, DuplicatePropertyException
from ..properties import Dependency
from ..common.filetime import FileTimeField
from .. import fields
from ..mapi import Property


NK2_SIGNATURE = 0xBAADF00D


def _as_id(prop_id):
    '''Accept both plain integers and PropertyId members'''
    return getattr(prop_id, 'value', prop_id)


class SignatureField(fields.StructField):
    magic_exception = InvalidSignature

    def __init__(self, **kwargs):
        super().__init__('I', default=NK2_SIGNATURE, is_magic=True, **kwargs)


class Row(Chunk):
    '''A recipient: a set of properties indexed by their identifier.

    If an identifier appears more than once the last one wins, unless
    the Compliant.DUPLICATES flag is in effect.'''
    count      = fields.StructField('I')
    properties = fields.ArrayField(Property(), n=Dependency('.count'))

    def __init__(self, *args, **kwargs):
        self._property_values = {}
        super().__init__(*args, **kwargs)

    def unpack(self, stream):
        super().unpack(stream)

        values = {}
        for idx, prop in enumerate(self.properties):
            if prop.id in values:
                if self.is_compliant(Compliant.DUPLICATES):
                    raise DuplicatePropertyException(chain=[f'[{idx}]', 'properties'], prop_id=prop.id)
                self.logger.warning('property 0x%04x is repeated in the row, the last one wins', prop.id)

            values[prop.id] = prop.to_property_value()

        self._property_values = values

    @property
    def property_values(self):
        return dict(self._property_values)

    def get(self, prop_id, expected=None):
        '''Returns the value of the property or None if it's missing or,
        when "expected" is given, if it was not decoded as that type.'''
        property_value = self._property_values.get(_as_id(prop_id))

        if property_value is None:
            return None

        if expected is not None and not property_value.is_a(expected):
            return None

        return property_value.value

    def items(self):
        return self._property_values.items()

    def __getitem__(self, prop_id):
        return self._property_values[_as_id(prop_id)].value

    def __contains__(self, prop_id):
        return _as_id(prop_id) in self._property_values

    def __iter__(self):
        return iter(self._property_values)

    def __len__(self):
        return len(self._property_values)


class RowSet(Chunk):
    count = fields.StructField('I')
    rows  = fields.ArrayField(Row(), n=Dependency('.count'))


class NK2File(Chunk):
    signature     = SignatureField()
    major_version = fields.StructField('I')
    minor_version = fields.StructField('I')
    row_set       = RowSet()
    extra_information_length = fields.StructField('I')
    extra_information        = fields.StringField(Dependency('.extra_information_length'))
    last_modification_time   = FileTimeField()

    def __init__(self, data=None, compliant=Compliant.MAGIC, **kwargs):
        # checking duplicates implies checking the signature
        if compliant & Compliant.DUPLICATES:
            compliant |= Compliant.MAGIC
        super().__init__(data, compliant=compliant, **kwargs)

    def unpack(self, stream):
        super().unpack(stream)
        self.logger.debug('unpacked NK2 file v%d.%d with %d rows' % (
            self.major_version.value, self.minor_version.value, len(self.rows)))

    @property
    def version(self):
        return self.major_version.value, self.minor_version.value

    @property
    def rows(self):
        return list(self.row_set.rows)


def decode(data, **kwargs):
    '''Decode the autocomplete stream from bytes, a path, a file object or
    a Stream positioned at its start.'''
    return NK2File(data, **kwargs)
