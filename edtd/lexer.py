import re

from edtd.error import DTDParseError, ParseErrorKind
from edtd.util import as_text, remainder_of


LEXER = r'''
name: NAME

element_id: HEX_RUN

type_tag: int_tag | uint_tag | other_tag
int_tag: "int"
uint_tag: "uint"
?other_tag: float_tag | string_tag | date_tag | binary_tag | container_tag | type_reference
float_tag: "float"
string_tag: "string"
date_tag: "date"
binary_tag: "binary"
container_tag: "container"
type_reference: NAME

type_declaration: NAME ":=" (int_type | uint_type | other_type)
int_type: "int" ("[" (int_range | int_def)+ "]")? ";"?
uint_type: "uint" ("[" (uint_range | uint_def)+ "]")? ";"?
other_type: other_tag ";"?

parent: "parent" ":" NAME ("," NAME)* ";"
level: "level" ":" UINT ".." [UINT] ";"
cardinality: "card" ":" CARD ";"
ordered: "ordered" ":" (YES | NO) ";"
size: "size" ":" uint_item ("," uint_item)* ";"

int_def: "def" ":" INT ";"
uint_def: "def" ":" UINT ";"
float_def: "def" ":" FLOAT ";"
date_def: "def" ":" date ";"
string_def: "def" ":" byte_literal ";"
binary_def: "def" ":" byte_literal ";"

int_range: "range" ":" int_item ("," int_item)* ";"
uint_range: "range" ":" uint_item ("," uint_item)* ";"
float_range: "range" ":" float_item ("," float_item)* ";"
date_range: "range" ":" date_item ("," date_item)* ";"
string_range: "range" ":" uint_item ("," uint_item)* ";"
binary_range: "range" ":" uint_item ("," uint_item)* ";"

// Alternatives are listed in the order they are tried.
?int_item: INT ".." INT -> range_bounded
    | INT ".." -> range_from
    | ".." INT -> range_to
    | INT -> range_single

?uint_item: UINT ".." UINT -> range_bounded
    | UINT ".." -> range_from
    | UINT -> range_single

?date_item: date ".." date -> range_bounded
    | date ".." -> range_from
    | ".." date -> range_to

?float_item: FLOAT LESS ".." LESS FLOAT -> float_bounded
    | LESS FLOAT -> float_to
    | GREATER FLOAT -> float_from

date: DATETIME -> absolute_date
    | INT -> offset_date

?byte_literal: HEX_BYTES | QUOTED

header: "declare" "header" "{" header_statement+ "}"
header_statement: NAME ":=" header_value ";"
?header_value: FLOAT | DATETIME | HEX_BYTES | QUOTED | NAME


NAME: /[A-Za-z_][A-Za-z0-9_]*/
HEX_RUN: /[0-9A-Fa-f]+/

UINT: /[0-9]+/
INT: /-?[0-9]+/
FLOAT: /[0-9+\-.][0-9+\-.e]*/
DATETIME.2: /[0-9]{8}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?/
HEX_BYTES.2: /0x[0-9A-Fa-f]*/
QUOTED: /"[^"]*"/

CARD: "*" | "?" | "1" | "+"
YES: "yes" | "1"
NO: "no" | "0"

LESS: "<=" | "<"
GREATER: ">=" | ">"


%ignore COMMENT
COMMENT: /\/\/[^\n]*/ | /\/\*(.|\n)*?\*\//

%ignore WHITESPACE
WHITESPACE: /[ \t\r\n]+/
'''

START_RULES = [
    'name', 'element_id', 'type_tag', 'type_declaration',
    'parent', 'level', 'cardinality', 'ordered', 'size',
    'int_def', 'uint_def', 'float_def', 'date_def', 'string_def', 'binary_def',
    'int_range', 'uint_range', 'float_range', 'date_range', 'string_range', 'binary_range',
    'header_statement', 'header',
]


LINE_COMMENT = re.compile(r'//([^\n]*)\n')
BLOCK_COMMENT = re.compile(r'/\*(.*?)\*/', re.S)
SEPARATOR = re.compile(r'(?:[ \t\r\n]+|//[^\n]*\n|/\*.*?\*/)*', re.S)


def comment(data):
    """Match one comment at the start of data, returning (body, remainder)."""
    text = as_text(data)

    for pattern in (LINE_COMMENT, BLOCK_COMMENT):
        m = pattern.match(text)
        if m is not None:
            return m.group(1), remainder_of(data, text, m.end())

    if text in ('', '/') or (text.startswith('/') and text[1] in '/*'):
        raise DTDParseError(ParseErrorKind.INCOMPLETE, 'comment', len(text))
    raise DTDParseError(ParseErrorKind.NO_MATCH, 'comment', 0)


def separator(data):
    """Skip whitespace and comments; always succeeds."""
    text = as_text(data)
    return remainder_of(data, text, SEPARATOR.match(text).end())
