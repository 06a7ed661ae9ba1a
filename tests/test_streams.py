import io

import pytest

from nk2struct.exceptions import UnexpectedEndOfStream
from nk2struct.streams import Stream


def test_bytes_stream_read_all():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert len(stream) == 5
    assert stream.read(1) == b'\x01'
    assert stream.read(1) == b'\x02'
    assert stream.read_all() == b'\x03\x04\x05'
    assert stream.tell() == 5
    assert stream.remaining == 0


def test_file_stream_read_all(tmp_path):
    path_data = tmp_path / 'auaua'
    path_data.write_bytes(b'\x01\x02\x03\x04\x05')

    for obj in (str(path_data), path_data):
        stream = Stream(obj)

        assert stream.read(1) == b'\x01'
        assert stream.read(1) == b'\x02'
        assert stream.read_all() == b'\x03\x04\x05'
        assert stream.tell() == 5


def test_file_object_stream():
    stream = Stream(io.BytesIO(b'\x01\x02\x03'))

    assert stream.read(3) == b'\x01\x02\x03'


def test_bytearray_stream():
    stream = Stream(bytearray(b'\x01\x02'))

    assert stream.read(2) == b'\x01\x02'


def test_read_zero_bytes():
    stream = Stream(b'')

    assert stream.read(0) == b''
    assert stream.tell() == 0


def test_read_past_the_end():
    stream = Stream(b'\x01\x02\x03')
    stream.read(2)

    with pytest.raises(UnexpectedEndOfStream) as e:
        stream.read(2)

    assert e.value.offset == 2
    assert e.value.requested == 2
    # the cursor is left where it was
    assert stream.tell() == 2


def test_seek():
    stream = Stream(b'\x01\x02\x03')

    stream.seek(2)

    assert stream.read(1) == b'\x03'


def test_wrong_object():
    with pytest.raises(ValueError):
        Stream(42)
