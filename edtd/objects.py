from enum import Enum, IntEnum

from dataclasses import dataclass, replace
from dataslots import with_slots
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from edtd.error import DTDValueError


__all__ = [
    'NANOS_PER_SEC', 'REFERENCE_INSTANT', 'MAX_CODEPOINT', 'MAX_BYTE',
    'ScalarKind', 'TypeReference', 'IdClass', 'ElementId', 'Timestamp',
    'Single', 'Bounded', 'From', 'To', 'FloatBounded', 'FloatFrom', 'FloatTo',
    'RangeItem', 'FloatRangeItem', 'to_string_range_item', 'to_binary_range_item',
    'PropertyKind', 'Property', 'TypeDeclaration', 'Level', 'Cardinality',
    'HeaderKind', 'HeaderStatement',
]


NANOS_PER_SEC = 1000000000

# Zero point of integer date literals.
REFERENCE_INSTANT = datetime(2001, 1, 1, 0, 0, 0)


class ScalarKind(IntEnum):
    INT = 0
    UINT = 1
    FLOAT = 2
    STRING = 3
    DATE = 4
    BINARY = 5
    CONTAINER = 6


@with_slots
@dataclass(frozen=True)
class TypeReference:
    name: str


class IdClass(IntEnum):
    """Element id classes, valued by their encoded length in bytes."""
    A = 1
    B = 2
    C = 3
    D = 4

    @property
    def marker(self):
        return 1 << (7 * self.value)

    @property
    def max_data(self):
        # All-ones data is reserved in every class.
        return self.marker - 2


@with_slots
@dataclass(frozen=True)
class ElementId:
    value: int

    def __post_init__(self):
        if self.id_class is None:
            raise DTDValueError('not a valid element id: 0x{:X}'.format(self.value))

    @classmethod
    def from_encoded(cls, value):
        return cls(value)

    @classmethod
    def from_class(cls, id_class, data):
        id_class = IdClass(id_class)
        if not 0 <= data <= id_class.max_data:
            raise DTDValueError('data 0x{:X} does not fit in a class {} id'.format(data, id_class.name))
        return cls(id_class.marker | data)

    @property
    def id_class(self):
        for id_class in IdClass:
            if id_class.marker <= self.value <= id_class.marker + id_class.max_data:
                return id_class
        return None

    @property
    def length(self):
        return int(self.id_class)

    @property
    def data(self):
        return self.value & ~self.id_class.marker

    def __int__(self):
        return self.value

    def __str__(self):
        return '{:X}'.format(self.value)


@with_slots
@dataclass(frozen=True)
class Timestamp:
    moment: datetime
    nanosecond: int = 0

    @classmethod
    def from_offset(cls, nanoseconds):
        seconds, nanosecond = divmod(nanoseconds, NANOS_PER_SEC)
        return cls(REFERENCE_INSTANT + timedelta(seconds=seconds), nanosecond)

    @property
    def offset(self):
        """Signed nanoseconds since REFERENCE_INSTANT."""
        delta = self.moment - REFERENCE_INSTANT
        return (delta.days * 86400 + delta.seconds) * NANOS_PER_SEC + self.nanosecond

    def isoformat(self):
        return '{}.{:09d}'.format(self.moment.isoformat(), self.nanosecond)


@with_slots
@dataclass(frozen=True)
class Single:
    value: object


@with_slots
@dataclass(frozen=True)
class Bounded:
    start: object
    end: object


@with_slots
@dataclass(frozen=True)
class From:
    start: object


@with_slots
@dataclass(frozen=True)
class To:
    end: object


@with_slots
@dataclass(frozen=True)
class FloatBounded:
    start: float
    include_start: bool
    end: float
    include_end: bool


@with_slots
@dataclass(frozen=True)
class FloatFrom:
    start: float
    include_start: bool


@with_slots
@dataclass(frozen=True)
class FloatTo:
    end: float
    include_end: bool


RangeItem = Union[Single, Bounded, From, To]
FloatRangeItem = Union[FloatBounded, FloatFrom, FloatTo]

MAX_CODEPOINT = 0x10FFFF
MAX_BYTE = 0xFF


def _map_range_item(item, convert):
    if isinstance(item, Single):
        return Single(convert(item.value))
    if isinstance(item, Bounded):
        return Bounded(convert(item.start), convert(item.end))
    if isinstance(item, From):
        return From(convert(item.start))
    return To(convert(item.end))


def _to_char(value):
    if value > MAX_CODEPOINT or 0xD800 <= value <= 0xDFFF:
        raise DTDValueError('{} is not a unicode scalar value'.format(value))
    return chr(value)


def _to_byte(value):
    if value > MAX_BYTE:
        raise DTDValueError('{} does not fit in a byte'.format(value))
    return value


def to_string_range_item(item):
    return _map_range_item(item, _to_char)


def to_binary_range_item(item):
    return _map_range_item(item, _to_byte)


class PropertyKind(IntEnum):
    INT_DEFAULT = 0
    UINT_DEFAULT = 1
    FLOAT_DEFAULT = 2
    DATE_DEFAULT = 3
    STRING_DEFAULT = 4
    BINARY_DEFAULT = 5
    INT_RANGE = 6
    UINT_RANGE = 7
    FLOAT_RANGE = 8
    DATE_RANGE = 9
    STRING_RANGE = 10
    BINARY_RANGE = 11
    SIZE = 12
    ORDERED = 13

    @property
    def is_default(self):
        return PropertyKind.INT_DEFAULT <= self <= PropertyKind.BINARY_DEFAULT

    @property
    def is_range(self):
        return PropertyKind.INT_RANGE <= self <= PropertyKind.BINARY_RANGE


@with_slots
@dataclass(frozen=True)
class Property:
    kind: PropertyKind
    value: object

    @property
    def is_default(self):
        return self.kind.is_default

    @property
    def is_range(self):
        return self.kind.is_range


@with_slots
@dataclass(frozen=True)
class TypeDeclaration:
    name: str
    kind: ScalarKind
    default: object = None
    range: Optional[Tuple[RangeItem, ...]] = None

    def updated(self, prop):
        """Fold one bracketed property into the declaration.

        Defaults and ranges occupy separate slots; a later property replaces
        an earlier one in the same slot only.
        """
        if prop.is_default:
            return replace(self, default=prop.value)
        if prop.is_range:
            return replace(self, range=prop.value)
        raise DTDValueError('{} cannot be folded into a type declaration'.format(prop.kind.name))


@with_slots
@dataclass(frozen=True)
class Level:
    start: int
    end: Optional[int] = None

    @property
    def is_open(self):
        return self.end is None

    def __contains__(self, depth):
        return self.start <= depth and (self.end is None or depth <= self.end)


class Cardinality(Enum):
    ZERO_OR_ONE = '?'
    EXACTLY_ONE = '1'
    ZERO_OR_MANY = '*'
    ONE_OR_MANY = '+'

    @classmethod
    def from_symbol(cls, symbol):
        return cls(symbol)


class HeaderKind(IntEnum):
    UINT = 0
    INT = 1
    FLOAT = 2
    DATE = 3
    STRING = 4
    BINARY = 5
    NAMED = 6


@with_slots
@dataclass(frozen=True)
class HeaderStatement:
    kind: HeaderKind
    name: str
    value: object
