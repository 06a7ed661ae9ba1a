import struct
import uuid
from datetime import datetime, timezone

import pytest

from nk2struct.common.filetime import datetime_to_filetime
from nk2struct.exceptions import (
    InvalidTextEncoding,
    UnexpectedEndOfStream,
    UnsupportedPropertyType,
)
from nk2struct.fields import StructField, StringField
from nk2struct.mapi import Property, PropertyValue, STRING8_ENCODING_OPTION
from nk2struct.mapi.property_fields import PropertyTagField, PropertyValueField
from nk2struct.mapi.enum import PropertyType, PropertyId
from nk2struct.streams import Stream

from helpers import (
    u32,
    tag,
    static_property,
    dynamic_property,
    counted_binary,
    counted_string8,
    counted_unicode,
    string8_property,
    unicode_property,
    binary_property,
)


SENTINEL = b'\xde\xad\xbe\xef'


def unpack_property(data):
    """Returns the property and the stream positioned after it"""
    stream = Stream(data + SENTINEL)
    prop = Property(stream)

    return prop, stream


@pytest.mark.parametrize('prop_type,union,expected', [
    (PropertyType.INTEGER16, b'\x34\x12' + b'\xff' * 6, 0x1234),
    (PropertyType.INTEGER16, b'\xff\xff', 0xffff),
    (PropertyType.INTEGER32, b'\x78\x56\x34\x12' + b'\xff' * 4, 0x12345678),
    (PropertyType.INTEGER32, b'\xff\xff\xff\xff', 0xffffffff),
    (PropertyType.FLOATING32, struct.pack('<f', 1.5) + b'\xaa' * 4, 1.5),
    (PropertyType.FLOATING64, struct.pack('<d', -2.25), -2.25),
    (PropertyType.BOOLEAN, b'\x01\x00' + b'\xff' * 6, True),
    (PropertyType.BOOLEAN, b'\x00\x00' + b'\xff' * 6, False),
    (PropertyType.INTEGER64, struct.pack('<Q', 0xffffffffffffffff), 0xffffffffffffffff),
    (PropertyType.ERROR_CODE, struct.pack('<I', 0x80004005) + b'\x01' * 4, 0x80004005),
    (PropertyType.NULL, b'\xff' * 8, None),
])
def test_static_values(prop_type, union, expected):
    """Static values only use the meaningful prefix of the union"""
    prop, stream = unpack_property(static_property(prop_type, 0x3001, union))

    assert prop.id == 0x3001
    assert prop.type == prop_type
    assert prop.value == expected
    assert prop.size == 16
    assert stream.read(4) == SENTINEL


def test_static_time():
    moment = datetime(2020, 10, 27, 12, 0, 0, tzinfo=timezone.utc)
    union = struct.pack('<Q', datetime_to_filetime(moment))

    prop, stream = unpack_property(static_property(PropertyType.TIME, 0x0FFF, union))

    assert prop.value == moment
    assert stream.read(4) == SENTINEL


def test_reserved_is_not_validated():
    prop, _ = unpack_property(static_property(PropertyType.INTEGER32, 0x3900, u32(7), reserved=0xffffffff))

    assert prop.value == 7
    assert prop.reserved.value == 0xffffffff


def test_string8():
    prop, stream = unpack_property(string8_property(0x3001, 'AB'))

    assert prop.type == PropertyType.STRING8
    assert prop.value == 'AB'
    assert stream.read(4) == SENTINEL


def test_string8_encoding():
    data = string8_property(0x3001, 'Caf\xe9', encoding='cp1252')

    with pytest.raises(InvalidTextEncoding) as e:
        unpack_property(data)

    assert e.value.chain == ['text', 'data']

    prop = Property(data, options={STRING8_ENCODING_OPTION: 'cp1252'})

    assert prop.value == 'Caf\xe9'


def test_string8_unknown_encoding():
    data = string8_property(0x3001, 'AB')

    with pytest.raises(InvalidTextEncoding) as e:
        Property(data, options={STRING8_ENCODING_OPTION: 'no-such-codec'})

    assert e.value.path == 'data.text'


def test_unicode_consumes_declared_length():
    """Text and terminator together take exactly the count of bytes"""
    text = 'Hugh Bellamy'
    payload = counted_unicode(text)

    prop, stream = unpack_property(unicode_property(0x3001, text))

    assert struct.unpack('<I', payload[:4])[0] == len(text) * 2 + 2
    assert prop.value == text
    assert prop.size == 16 + len(payload)
    assert stream.read(4) == SENTINEL


def test_unicode_empty():
    prop, stream = unpack_property(dynamic_property(PropertyType.STRING, 0x3001, u32(2) + b'\x00\x00'))

    assert prop.value == ''
    assert stream.read(4) == SENTINEL


def test_unicode_odd_length():
    with pytest.raises(InvalidTextEncoding):
        unpack_property(dynamic_property(PropertyType.STRING, 0x3001, u32(5) + b'A\x00B\x00\x00'))


def test_dynamic_value_ignores_union():
    data = dynamic_property(PropertyType.BINARY, 0x0FFF, counted_binary(b'\x01\x02'), union=b'\xff' * 8)

    prop, _ = unpack_property(data)

    assert prop.union.value == b'\xff' * 8
    assert prop.value == b'\x01\x02'


def test_binary():
    prop, stream = unpack_property(binary_property(0x300B, b'SMTP:A@B.C\x00'))

    assert prop.value == b'SMTP:A@B.C\x00'
    assert stream.read(4) == SENTINEL


def test_binary_empty():
    prop, stream = unpack_property(binary_property(0x300B, b''))

    assert prop.value == b''
    assert stream.read(4) == SENTINEL


def test_guid():
    guid = uuid.UUID('00020329-0000-0000-c000-000000000046')

    prop, stream = unpack_property(dynamic_property(PropertyType.GUID, 0x0FFF, guid.bytes_le))

    assert prop.value == guid
    assert stream.read(4) == SENTINEL


def test_multiple_binary():
    payload = u32(3) + counted_binary(b'\x01') + counted_binary(b'') + counted_binary(b'\x02\x03')

    prop, stream = unpack_property(dynamic_property(PropertyType.MULTIPLE_BINARY, 0x0FFF, payload))

    assert prop.value == [b'\x01', b'', b'\x02\x03']
    assert stream.read(4) == SENTINEL


def test_multiple_string8():
    payload = u32(2) + counted_string8('one') + counted_string8('two')

    prop, stream = unpack_property(dynamic_property(PropertyType.MULTIPLE_STRING8, 0x3001, payload))

    assert prop.value == ['one', 'two']
    assert stream.read(4) == SENTINEL


def test_multiple_unicode():
    payload = u32(2) + counted_unicode('uno') + counted_unicode('due')

    prop, stream = unpack_property(dynamic_property(PropertyType.MULTIPLE_STRING, 0x3001, payload))

    assert prop.value == ['uno', 'due']
    assert stream.read(4) == SENTINEL


def test_multiple_empty():
    prop, stream = unpack_property(dynamic_property(PropertyType.MULTIPLE_STRING, 0x3001, u32(0)))

    assert prop.value == []
    assert stream.read(4) == SENTINEL


@pytest.mark.parametrize('code', [0x0000, 0x0006, 0x0007, 0x000D, 0x1003, 0x1234])
def test_unsupported_type(code):
    data = tag(code, 0x3001) + u32(0) + b'\x00' * 8

    with pytest.raises(UnsupportedPropertyType) as e:
        Property(data)

    assert e.value.code == code
    assert e.value.chain == ['data']


def test_truncated_value():
    data = unicode_property(0x3001, 'Hugh')[:-3]

    with pytest.raises(UnexpectedEndOfStream) as e:
        Property(data)

    assert e.value.path == 'data.text'


def test_truncated_union():
    with pytest.raises(UnexpectedEndOfStream) as e:
        Property(tag(PropertyType.INTEGER32, 0x3900) + u32(0) + b'\x00' * 4)

    assert e.value.chain == ['union']


def test_to_property_value():
    prop, _ = unpack_property(string8_property(0x3001, 'AB'))

    assert prop.to_property_value() == PropertyValue(PropertyType.STRING8, 'AB')
    assert prop.to_property_value().is_a(PropertyType.STRING8)
    assert not prop.to_property_value().is_a(PropertyType.STRING)


def test_property_type_kinds():
    assert PropertyType.INTEGER32.is_static
    assert not PropertyType.BINARY.is_static
    assert PropertyType.MULTIPLE_BINARY.is_multiple
    assert not PropertyType.BINARY.is_multiple


def test_property_id_names():
    assert PropertyId.name_of(0x3001) == 'PR_DISPLAY_NAME'
    assert PropertyId.name_of(0x7777) == '0x7777'


def test_property_declared_fields():
    """The chunk mixes generic fields with the property specific ones"""
    prop = Property()

    assert [_ for _, __ in prop.get_fields()] == ['tag', 'reserved', 'union', 'data']
    assert isinstance(prop.tag, PropertyTagField)
    assert isinstance(prop.reserved, StructField)
    assert isinstance(prop.union, StringField)
    assert isinstance(prop.data, PropertyValueField)
