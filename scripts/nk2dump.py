#!/usr/bin/env python3
import sys
import os
import logging

from nk2struct.autocomplete import NK2File
from nk2struct.enum import Compliant
from nk2struct.exceptions import NK2Exception
from nk2struct.mapi import STRING8_ENCODING_OPTION
from nk2struct.mapi.enum import PropertyId


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.WARNING)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <nk2 file> [8 bit encoding]' % progname)
    sys.exit(1)


def format_value(value):
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, list):
        return '[%s]' % ', '.join(format_value(_) for _ in value)

    return repr(value)


def dump_header(nk2):
    print(f'''NK2 Header:
  Version:                {nk2.major_version.value}.{nk2.minor_version.value}
  Rows:                   {len(nk2.rows)}
  Extra information:      {len(nk2.extra_information.value)} bytes
  Last modification time: {nk2.last_modification_time.value.isoformat()}''')


def kind_of(prop_type):
    if prop_type.is_static:
        return 'static'
    if prop_type.is_multiple:
        return 'multiple'

    return 'dynamic'


def dump_rows(nk2):
    for idx, row in enumerate(nk2.rows):
        print(f'Row #{idx} ({len(row)} properties):')
        for prop_id, property_value in sorted(row.items()):
            prop_type = property_value.type
            print(f'  0x{prop_id:04X} {PropertyId.name_of(prop_id):<30} {prop_type.name:<16} {kind_of(prop_type):<8} {format_value(property_value.value)}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]
    options = {STRING8_ENCODING_OPTION: sys.argv[2]} if len(sys.argv) > 2 else {}

    try:
        nk2 = NK2File(path, compliant=Compliant.MAGIC, options=options)
    except NK2Exception as e:
        logger.error('error during parsing at field \'%s\': %s' % (e.path, e))
        sys.exit(1)

    dump_header(nk2)
    dump_rows(nk2)
