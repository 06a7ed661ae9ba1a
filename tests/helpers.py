"""Builders for the binary fixtures of the tests."""
import struct
from datetime import datetime, timezone

from nk2struct.mapi.enum import PropertyType


PLACEHOLDER = b'\xcc' * 8  # dynamic values must never look at the union
LAST_MODIFICATION = datetime(2020, 10, 27, 18, 30, 15, tzinfo=timezone.utc)


def u32(value):
    return struct.pack('<I', value)


def tag(prop_type, prop_id):
    return u32((prop_id << 16) | int(prop_type))


def static_property(prop_type, prop_id, union, reserved=0):
    assert len(union) <= 8
    return tag(prop_type, prop_id) + u32(reserved) + union + b'\xee' * (8 - len(union))


def dynamic_property(prop_type, prop_id, payload, union=PLACEHOLDER):
    return tag(prop_type, prop_id) + u32(0) + union + payload


def counted_string8(text, encoding='ascii'):
    raw = text.encode(encoding) + b'\x00'
    return u32(len(raw)) + raw


def counted_unicode(text):
    raw = text.encode('utf-16-le') + b'\x00\x00'
    return u32(len(raw)) + raw


def counted_binary(data):
    return u32(len(data)) + data


def string8_property(prop_id, text, encoding='ascii'):
    return dynamic_property(PropertyType.STRING8, prop_id, counted_string8(text, encoding))


def unicode_property(prop_id, text):
    return dynamic_property(PropertyType.STRING, prop_id, counted_unicode(text))


def binary_property(prop_id, data):
    return dynamic_property(PropertyType.BINARY, prop_id, counted_binary(data))


def row(*properties):
    return u32(len(properties)) + b''.join(properties)


def nk2(*rows, major=1, minor=0, extra=b'', filetime=0, signature=0xBAADF00D):
    return (
        u32(signature) + u32(major) + u32(minor) +
        u32(len(rows)) + b''.join(rows) +
        u32(len(extra)) + extra +
        struct.pack('<Q', filetime)
    )
