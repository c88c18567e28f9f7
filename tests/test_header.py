import unittest

from datetime import datetime

from edtd.error import DTDParseError, ParseErrorKind
from edtd.objects import HeaderKind, HeaderStatement, Timestamp
from edtd.parser import parse_header_statement, parse_header


HEADER = '''declare header {
    // comments are allowed anywhere
    FooBar := 1;
    Foo1 := 0x74657374;
    FooBaz := 0xFADEF00D;
    FooQux := 20000101T00:00:00; /* block
    comment */
    Kind := Named;
}
'''


class TestHeaderStatement(unittest.TestCase):
    def check(self, text, kind, name, value):
        self.assertEqual(parse_header_statement(text), (HeaderStatement(kind, name, value), ''))

    def test_numbers(self):
        self.check('FooBar := 1;', HeaderKind.UINT, 'FooBar', 1)
        self.check('FooBar := -1;', HeaderKind.INT, 'FooBar', -1)
        self.check('FooBarBaz := 1.25e-2;', HeaderKind.FLOAT, 'FooBarBaz', 1.25e-2)
        self.check('Day := 20170101;', HeaderKind.UINT, 'Day', 20170101)

    def test_number_overflow(self):
        self.check('Big := 18446744073709551616;', HeaderKind.FLOAT, 'Big', 18446744073709551616.0)

    def test_date(self):
        self.check('FooBar := 20140203T00:12:14.5;', HeaderKind.DATE, 'FooBar',
                   Timestamp(datetime(2014, 2, 3, 0, 12, 14), 500000000))

    def test_string(self):
        self.check('FooBar := "any unicode string 隣町";', HeaderKind.STRING, 'FooBar', 'any unicode string 隣町')
        self.check('FooBar := 0x74657374;', HeaderKind.STRING, 'FooBar', 'test')

    def test_binary(self):
        self.check('FooBar := 0xFADEF00D;', HeaderKind.BINARY, 'FooBar', b'\xfa\xde\xf0\x0d')
        self.assertEqual(parse_header_statement(b'Raw := "\xff";'),
                         (HeaderStatement(HeaderKind.BINARY, 'Raw', b'\xff'), b''))

    def test_named(self):
        self.check('DocType := matroska;', HeaderKind.NAMED, 'DocType', 'matroska')

    def test_not_a_number(self):
        with self.assertRaises(DTDParseError) as ctx:
            parse_header_statement('Foo := 1-2;')
        self.assertEqual(ctx.exception.kind, ParseErrorKind.NO_MATCH)

    def test_incomplete(self):
        with self.assertRaises(DTDParseError) as ctx:
            parse_header_statement('Foo := 1')
        self.assertEqual(ctx.exception.kind, ParseErrorKind.INCOMPLETE)


class TestHeader(unittest.TestCase):
    def test_header(self):
        self.assertEqual(parse_header('declare header { Foo := 1; Bar := "x"; }'),
                         ((HeaderStatement(HeaderKind.UINT, 'Foo', 1),
                           HeaderStatement(HeaderKind.STRING, 'Bar', 'x')), ''))

    def test_multiline(self):
        statements, rest = parse_header(HEADER)
        self.assertEqual(statements, (
            HeaderStatement(HeaderKind.UINT, 'FooBar', 1),
            HeaderStatement(HeaderKind.STRING, 'Foo1', 'test'),
            HeaderStatement(HeaderKind.BINARY, 'FooBaz', b'\xfa\xde\xf0\x0d'),
            HeaderStatement(HeaderKind.DATE, 'FooQux', Timestamp(datetime(2000, 1, 1))),
            HeaderStatement(HeaderKind.NAMED, 'Kind', 'Named'),
        ))
        self.assertEqual(rest, '\n')

    def test_remainder(self):
        self.assertEqual(parse_header('declare header { A := 1; } Foo := int;'),
                         ((HeaderStatement(HeaderKind.UINT, 'A', 1),), ' Foo := int;'))

    def test_invalid(self):
        for text in ('declare header { }', 'declare header { Foo := 1 }', 'header { Foo := 1; }'):
            with self.assertRaises(DTDParseError):
                parse_header(text)

    def test_debug_logging(self):
        with self.assertLogs('edtd.parser', 'DEBUG'):
            with self.assertRaises(DTDParseError):
                parse_header('declare header { }')


if __name__ == '__main__':
    unittest.main()
