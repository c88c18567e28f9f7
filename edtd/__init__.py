"""Parser for the EBML schema definition language."""

from edtd.error import DTDError, DTDParseError, DTDValueError, ParseErrorKind
from edtd.lexer import comment, separator
from edtd.objects import *
from edtd.parser import (
    parse,
    parse_name,
    parse_element_id,
    parse_type,
    parse_type_declaration,
    parse_parent,
    parse_level,
    parse_cardinality,
    parse_ordered,
    parse_size,
    parse_int_default,
    parse_uint_default,
    parse_float_default,
    parse_date_default,
    parse_string_default,
    parse_binary_default,
    parse_int_range,
    parse_uint_range,
    parse_float_range,
    parse_date_range,
    parse_string_range,
    parse_binary_range,
    parse_header_statement,
    parse_header,
)
from edtd.util import from_hex, to_hex

__version__ = '0.1'
