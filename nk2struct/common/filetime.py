'''
Windows FILETIME: a 64 bits little endian count of 100-nanosecond intervals
elapsed since January 1, 1601 (UTC).

See <https://learn.microsoft.com/en-us/windows/win32/api/minwinbase/ns-minwinbase-filetime>.
'''
from datetime import datetime, timedelta, timezone

from .. import fields
from ..exceptions import InvalidTimestamp


FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
TICKS_PER_MICROSECOND = 10


def filetime_to_datetime(ticks: int) -> datetime:
    '''Precision is truncated to the microsecond, the resolution of datetime.'''
    try:
        return FILETIME_EPOCH + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)
    except OverflowError:
        raise InvalidTimestamp(chain=[], ticks=ticks)


def datetime_to_filetime(moment: datetime) -> int:
    delta = moment - FILETIME_EPOCH
    return (delta // timedelta(microseconds=1)) * TICKS_PER_MICROSECOND


class FileTimeField(fields.StructField):
    '''8 bytes read from the stream and converted to a timezone aware datetime'''

    def __init__(self, **kwargs):
        super().__init__('Q', **kwargs)

    def value_from_default(self):
        return FILETIME_EPOCH

    def _convert(self, value):
        return filetime_to_datetime(value)
