import unittest

from edtd.error import DTDParseError, ParseErrorKind
from edtd.objects import Level, Cardinality, Property, PropertyKind
from edtd.parser import parse_parent, parse_level, parse_cardinality, parse_ordered


class TestParent(unittest.TestCase):
    def test_parent(self):
        self.assertEqual(parse_parent('parent: name1;'), (('name1',), ''))
        self.assertEqual(parse_parent('parent : name1, name2 ,name3,\n  name4 ;\n'),
                         (('name1', 'name2', 'name3', 'name4'), '\n'))

    def test_comments(self):
        self.assertEqual(parse_parent('parent /* who */ : a, // first\n b;'), (('a', 'b'), ''))

    def test_bad_name(self):
        # The list must end with ";", so a bad name cannot be skipped.
        with self.assertRaises(DTDParseError):
            parse_parent('parent: name1, 2notaname;')

    def test_empty(self):
        with self.assertRaises(DTDParseError):
            parse_parent('parent: ;')


class TestLevel(unittest.TestCase):
    def test_level(self):
        self.assertEqual(parse_level('level: 1..;'), (Level(1), ''))
        self.assertEqual(parse_level('level: 1..3;'), (Level(1, 3), ''))
        self.assertEqual(parse_level('level:4..5 ;'), (Level(4, 5), ''))
        self.assertEqual(parse_level('level: 2341..; card: *;'), (Level(2341), ' card: *;'))

    def test_open(self):
        self.assertTrue(parse_level('level: 1..;')[0].is_open)
        self.assertFalse(parse_level('level: 1..3;')[0].is_open)
        self.assertIn(7, Level(1))
        self.assertNotIn(4, Level(1, 3))

    def test_invalid(self):
        for text in ('level: ..3;', 'level: 1;', 'level: -1..;', 'level: 1..3'):
            with self.assertRaises(DTDParseError):
                parse_level(text)

    def test_incomplete(self):
        with self.assertRaises(DTDParseError) as ctx:
            parse_level('level: 1..')
        self.assertEqual(ctx.exception.kind, ParseErrorKind.INCOMPLETE)
        self.assertEqual(ctx.exception.context, 'level')
        self.assertEqual(ctx.exception.position, 10)


class TestCardinality(unittest.TestCase):
    def test_cardinality(self):
        self.assertEqual(parse_cardinality('card: *;'), (Cardinality.ZERO_OR_MANY, ''))
        self.assertEqual(parse_cardinality('card: ?;'), (Cardinality.ZERO_OR_ONE, ''))
        self.assertEqual(parse_cardinality('card: 1;'), (Cardinality.EXACTLY_ONE, ''))
        self.assertEqual(parse_cardinality('card : + ;'), (Cardinality.ONE_OR_MANY, ''))

    def test_invalid(self):
        for text in ('card: 2;', 'card: 11;', 'card: many;'):
            with self.assertRaises(DTDParseError) as ctx:
                parse_cardinality(text)
            self.assertEqual(ctx.exception.kind, ParseErrorKind.NO_MATCH)


class TestOrdered(unittest.TestCase):
    def test_ordered(self):
        self.assertEqual(parse_ordered('ordered: yes;'), (Property(PropertyKind.ORDERED, True), ''))
        self.assertEqual(parse_ordered('ordered: 1;'), (Property(PropertyKind.ORDERED, True), ''))
        self.assertEqual(parse_ordered('ordered: no;'), (Property(PropertyKind.ORDERED, False), ''))
        self.assertEqual(parse_ordered('ordered: 0;'), (Property(PropertyKind.ORDERED, False), ''))

    def test_invalid(self):
        with self.assertRaises(DTDParseError):
            parse_ordered('ordered: maybe;')


if __name__ == '__main__':
    unittest.main()
