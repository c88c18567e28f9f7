from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedInput

from edtd.objects import *
from edtd.util import (as_text, remainder_of, parse_uint, parse_int, parse_float, parse_hex_u32,
                       parse_datetime, decode_byte_literal, decode_text_literal)

from edtd.error import DTDParseError, DTDValueError, ParseErrorKind

import functools
import logging


logger = logging.getLogger(__name__)


def _value(v):
    return v.value if isinstance(v, Token) else v


class DTDTransformer(Transformer):
    def __init__(self):
        Transformer.__init__(self, visit_tokens=True)

    # Terminal callbacks convert literals as they are shifted; a bad literal stops the parse there.

    def UINT(self, token):
        token.value = parse_uint(token)
        return token

    def INT(self, token):
        token.value = parse_int(token)
        return token

    def HEX_RUN(self, token):
        token.value = parse_hex_u32(token)
        return token

    def DATETIME(self, token):
        token.value = parse_datetime(token)
        return token

    def name(self, args):
        return args[0].value

    def element_id(self, args):
        return ElementId.from_encoded(args[0].value)

    def type_tag(self, args):
        return args[0]

    def int_tag(self, args):
        return ScalarKind.INT

    def uint_tag(self, args):
        return ScalarKind.UINT

    def float_tag(self, args):
        return ScalarKind.FLOAT

    def string_tag(self, args):
        return ScalarKind.STRING

    def date_tag(self, args):
        return ScalarKind.DATE

    def binary_tag(self, args):
        return ScalarKind.BINARY

    def container_tag(self, args):
        return ScalarKind.CONTAINER

    def type_reference(self, args):
        return TypeReference(args[0].value)

    def type_declaration(self, args):
        name, (kind, properties) = args
        return functools.reduce(TypeDeclaration.updated, properties, TypeDeclaration(name.value, kind))

    def int_type(self, args):
        return ScalarKind.INT, args

    def uint_type(self, args):
        return ScalarKind.UINT, args

    def other_type(self, args):
        # Only int and uint take properties; every other tag yields a bare int declaration.
        return ScalarKind.INT, []

    def parent(self, args):
        return tuple(arg.value for arg in args)

    def level(self, args):
        start = args[0].value
        end = args[1].value if len(args) > 1 and args[1] is not None else None
        return Level(start, end)

    def cardinality(self, args):
        return Cardinality.from_symbol(args[0].value)

    def ordered(self, args):
        return Property(PropertyKind.ORDERED, args[0].type == 'YES')

    def size(self, args):
        return Property(PropertyKind.SIZE, tuple(args))

    def int_def(self, args):
        return Property(PropertyKind.INT_DEFAULT, args[0].value)

    def uint_def(self, args):
        return Property(PropertyKind.UINT_DEFAULT, args[0].value)

    def float_def(self, args):
        return Property(PropertyKind.FLOAT_DEFAULT, parse_float(args[0]))

    def date_def(self, args):
        return Property(PropertyKind.DATE_DEFAULT, args[0])

    def string_def(self, args):
        return Property(PropertyKind.STRING_DEFAULT, decode_text_literal(args[0]))

    def binary_def(self, args):
        return Property(PropertyKind.BINARY_DEFAULT, decode_byte_literal(args[0]))

    def int_range(self, args):
        return Property(PropertyKind.INT_RANGE, tuple(args))

    def uint_range(self, args):
        return Property(PropertyKind.UINT_RANGE, tuple(args))

    def float_range(self, args):
        return Property(PropertyKind.FLOAT_RANGE, tuple(args))

    def date_range(self, args):
        return Property(PropertyKind.DATE_RANGE, tuple(args))

    def string_range(self, args):
        return Property(PropertyKind.STRING_RANGE, tuple(to_string_range_item(arg) for arg in args))

    def binary_range(self, args):
        return Property(PropertyKind.BINARY_RANGE, tuple(to_binary_range_item(arg) for arg in args))

    def range_bounded(self, args):
        start, end = args
        return Bounded(_value(start), _value(end))

    def range_from(self, args):
        return From(_value(args[0]))

    def range_to(self, args):
        return To(_value(args[0]))

    def range_single(self, args):
        return Single(_value(args[0]))

    def float_bounded(self, args):
        start, lower, upper, end = args
        return FloatBounded(parse_float(start), lower.endswith('='), parse_float(end), upper.endswith('='))

    def float_to(self, args):
        op, end = args
        return FloatTo(parse_float(end), op.endswith('='))

    def float_from(self, args):
        op, start = args
        return FloatFrom(parse_float(start), op.endswith('='))

    def absolute_date(self, args):
        return args[0].value

    def offset_date(self, args):
        return Timestamp.from_offset(args[0].value)

    def header_statement(self, args):
        name, value = args
        return header_statement_from_token(name.value, value)

    def header(self, args):
        return tuple(args)


def header_statement_from_token(name, token):
    """Resolve the kind of a header value by trying each literal form in turn."""
    if token.type == 'FLOAT':
        for kind, convert in ((HeaderKind.UINT, parse_uint),
                              (HeaderKind.INT, parse_int),
                              (HeaderKind.FLOAT, parse_float)):
            try:
                return HeaderStatement(kind, name, convert(token))
            except DTDValueError:
                pass
        raise DTDValueError('{!r} is not a number'.format(str(token)))

    if token.type == 'DATETIME':
        return HeaderStatement(HeaderKind.DATE, name, token.value)

    if token.type in ('HEX_BYTES', 'QUOTED'):
        try:
            return HeaderStatement(HeaderKind.STRING, name, decode_text_literal(token))
        except DTDValueError:
            return HeaderStatement(HeaderKind.BINARY, name, decode_byte_literal(token))

    return HeaderStatement(HeaderKind.NAMED, name, token.value)


from .lexer import LEXER, START_RULES


@functools.lru_cache(maxsize=None)
def get_parser(debug=False) -> Lark:
    logger.debug('building schema parser (debug=%s)', debug)
    return Lark(LEXER, start=START_RULES, debug=debug, parser='lalr', lexer='contextual',
                transformer=DTDTransformer())


def parse(data, start, debug=False):
    """Parse the longest prefix of data that forms a complete `start`.

    Returns (value, remainder). Raises DTDParseError if no prefix matches.
    """
    text = as_text(data)
    ip = get_parser(debug).parse_interactive(text, start=start)
    tokens = ip.lexer_thread.lex(ip.parser_state)

    checkpoints = []
    offset = 0
    kind = ParseErrorKind.NO_MATCH

    while True:
        accepts = ip.accepts()
        if '$END' in accepts:
            checkpoints.append((ip.copy(), offset))

        try:
            token = next(tokens)
        except StopIteration:
            # Input holding nothing but separators does not start a match.
            if offset or not text:
                kind = ParseErrorKind.INCOMPLETE
            break
        except UnexpectedInput as e:
            logger.debug('%s: lexing stopped at offset %d: %s', start, offset, e)
            break

        # Separators are skipped between tokens, never before the first one.
        if offset == 0 and token.start_pos != 0:
            logger.debug('%s: input starts with a separator', start)
            break

        if token.type not in accepts:
            break

        try:
            ip.feed_token(token)
        except DTDValueError as e:
            logger.debug('%s: rejected %r: %s', start, str(token), e)
            break
        offset = token.end_pos

    matched = bool(checkpoints)
    while checkpoints:
        cursor, end = checkpoints.pop()
        try:
            value = cursor.feed_eof()
        except DTDValueError as e:
            logger.debug('%s: match ending at offset %d rejected: %s', start, end, e)
            continue
        return value, remainder_of(data, text, end)

    if matched:
        # Every complete match was rejected while building its value.
        kind = ParseErrorKind.NO_MATCH
    logger.debug('%s: failed (%s) at offset %d', start, kind.name, offset)
    raise DTDParseError(kind, start, offset)


def parse_name(data, debug=False):
    return parse(data, 'name', debug)


def parse_element_id(data, debug=False):
    return parse(data, 'element_id', debug)


def parse_type(data, debug=False):
    return parse(data, 'type_tag', debug)


def parse_type_declaration(data, debug=False):
    return parse(data, 'type_declaration', debug)


def parse_parent(data, debug=False):
    return parse(data, 'parent', debug)


def parse_level(data, debug=False):
    return parse(data, 'level', debug)


def parse_cardinality(data, debug=False):
    return parse(data, 'cardinality', debug)


def parse_ordered(data, debug=False):
    return parse(data, 'ordered', debug)


def parse_size(data, debug=False):
    return parse(data, 'size', debug)


def parse_int_default(data, debug=False):
    return parse(data, 'int_def', debug)


def parse_uint_default(data, debug=False):
    return parse(data, 'uint_def', debug)


def parse_float_default(data, debug=False):
    return parse(data, 'float_def', debug)


def parse_date_default(data, debug=False):
    return parse(data, 'date_def', debug)


def parse_string_default(data, debug=False):
    return parse(data, 'string_def', debug)


def parse_binary_default(data, debug=False):
    return parse(data, 'binary_def', debug)


def parse_int_range(data, debug=False):
    return parse(data, 'int_range', debug)


def parse_uint_range(data, debug=False):
    return parse(data, 'uint_range', debug)


def parse_float_range(data, debug=False):
    return parse(data, 'float_range', debug)


def parse_date_range(data, debug=False):
    return parse(data, 'date_range', debug)


def parse_string_range(data, debug=False):
    return parse(data, 'string_range', debug)


def parse_binary_range(data, debug=False):
    return parse(data, 'binary_range', debug)


def parse_header_statement(data, debug=False):
    return parse(data, 'header_statement', debug)


def parse_header(data, debug=False):
    return parse(data, 'header', debug)
