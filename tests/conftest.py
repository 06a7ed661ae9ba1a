import struct

import pytest

from nk2struct.common.filetime import datetime_to_filetime
from nk2struct.mapi.enum import PropertyType

from helpers import (
    nk2,
    row,
    unicode_property,
    string8_property,
    binary_property,
    static_property,
    LAST_MODIFICATION,
)


@pytest.fixture
def sample_nk2():
    """Two recipients as Outlook 2007 writes them"""
    return nk2(
        row(
            unicode_property(0x3001, 'Hugh Bellamy'),
            unicode_property(0x3002, 'SMTP'),
            unicode_property(0x3003, 'hugh@example.com'),
            binary_property(0x300B, b'SMTP:HUGH@EXAMPLE.COM\x00'),
            static_property(PropertyType.INTEGER32, 0x3900, struct.pack('<I', 0)),
            static_property(PropertyType.BOOLEAN, 0x3A40, b'\x01\x00'),
        ),
        row(
            string8_property(0x3001, 'Jane Doe'),
            string8_property(0x3003, 'jane@example.org'),
        ),
        major=0x0c,
        minor=0,
        extra=b'\x01\x02\x03\x04',
        filetime=datetime_to_filetime(LAST_MODIFICATION),
    )


@pytest.fixture
def sample_nk2_path(tmp_path, sample_nk2):
    path = tmp_path / 'sample.NK2'
    path.write_bytes(sample_nk2)
    return path
