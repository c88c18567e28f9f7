import re

from datetime import datetime

from edtd.error import DTDValueError
from edtd.objects import Timestamp


UINT64_MAX = (1 << 64) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT32_MAX = (1 << 32) - 1

UINT_RE = re.compile(r'[0-9]+')
INT_RE = re.compile(r'-?[0-9]+')
FLOAT_RE = re.compile(r'[0-9+\-.e]+')
HEX_RE = re.compile(r'[0-9A-Fa-f]+')
DATETIME_RE = re.compile(r'([0-9]{4})([0-9]{2})([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?')

HEX_WHITESPACE = ' \t\r\n'
HEX_DIGITS = '0123456789abcdefABCDEF'


def as_text(data):
    """Raw input bytes become text; undecodable bytes survive as surrogate escapes."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).decode('utf-8', 'surrogateescape')
    return data


def remainder_of(data, text, offset):
    if isinstance(data, str):
        return data[offset:]
    return text[offset:].encode('utf-8', 'surrogateescape')


def parse_uint(s):
    if not UINT_RE.fullmatch(s):
        raise DTDValueError('not an unsigned integer: {!r}'.format(str(s)))
    value = int(s)
    if value > UINT64_MAX:
        raise DTDValueError('{} overflows 64 bits'.format(s))
    return value


def parse_int(s):
    if not INT_RE.fullmatch(s):
        raise DTDValueError('not an integer: {!r}'.format(str(s)))
    value = int(s)
    if not INT64_MIN <= value <= INT64_MAX:
        raise DTDValueError('{} overflows 64 bits'.format(s))
    return value


def parse_float(s):
    if not FLOAT_RE.fullmatch(s):
        raise DTDValueError('not a float: {!r}'.format(str(s)))
    try:
        return float(s)
    except ValueError:
        raise DTDValueError('not a float: {!r}'.format(str(s)))


def parse_hex_u32(s):
    if not HEX_RE.fullmatch(s):
        raise DTDValueError('not a hex number: {!r}'.format(str(s)))
    value = int(s, 16)
    if value > UINT32_MAX:
        raise DTDValueError('0x{} overflows 32 bits'.format(s))
    return value


def parse_datetime(s):
    m = DATETIME_RE.fullmatch(s)
    if m is None:
        raise DTDValueError('not a date: {!r}'.format(str(s)))

    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    fraction = m.group(7) or ''

    try:
        moment = datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        raise DTDValueError('not a date: {!r} ({})'.format(str(s), e))

    return Timestamp(moment, int(fraction[:9].ljust(9, '0')))


def from_hex(s):
    """Decode pairs of hex digits into bytes, skipping embedded whitespace."""
    b = bytearray()
    pending = None

    for c in s:
        if c in HEX_WHITESPACE:
            continue

        if c not in HEX_DIGITS:
            raise DTDValueError('invalid hex digit {!r}'.format(c))
        nibble = int(c, 16)

        if pending is None:
            pending = nibble
        else:
            b.append(pending << 4 | nibble)
            pending = None

    if pending is not None:
        raise DTDValueError('odd number of hex digits')

    return bytes(b)


def to_hex(data):
    return data.hex().upper()


def decode_byte_literal(s):
    """A `0x...` or double-quoted literal as raw bytes."""
    if s.startswith('0x'):
        return from_hex(s[2:])

    if len(s) < 2 or s[0] != '"' or s[-1] != '"':
        raise DTDValueError('not a byte literal: {!r}'.format(str(s)))

    try:
        return s[1:-1].encode('utf-8', 'surrogateescape')
    except UnicodeEncodeError as e:
        raise DTDValueError(str(e))


def decode_text_literal(s):
    """Like decode_byte_literal, but the bytes must be valid UTF-8."""
    try:
        return decode_byte_literal(s).decode('utf-8')
    except UnicodeDecodeError as e:
        raise DTDValueError('not valid utf-8: {}'.format(e))
