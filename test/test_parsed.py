"""
Parsed arguments behavioral tests (aggregate result accessor).

Scope
- Validate positional()/trail() lookups by label and index.
- Validate flag lookups by every accepted spelling and their typed accessors.
- Validate NotDeclaredError for unknown names and mismatched kinds.
- Validate as_dict() snapshots and equality.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from argline import *


def parse(tokens):
    parser = Parser()
    parser.add_many([
        Arg.positional("foo"),
        Arg.optional_trail("bar"),
        Arg.named_and_short("verbose", "v").switch(),
        Arg.named_and_short("exclude", "x").single(),
        Arg.named_and_short("extra", "e").zero_or_more(),
        Arg.named("add").one_or_more(),
        Arg.separator(),
    ])
    outcome = parser.parse(tokens)
    assert isinstance(outcome, Parsed), outcome
    return outcome.arguments


class TestPositionals(TestCase):
    """Behavioral tests for positional and trail lookups."""

    def testByLabelAndIndex(self):
        parsed = parse(["one"])
        self.assertEqual(parsed.positional("foo"), "one")
        self.assertEqual(parsed.positional(0), "one")

    def testUnknownLabel(self):
        with self.assertRaises(NotDeclaredError):
            parse(["one"]).positional("baz")

    def testIndexOutOfRange(self):
        with self.assertRaises(NotDeclaredError):
            parse(["one"]).positional(1)

    def testNegativeIndex(self):
        parser = Parser()
        parser.add_many([Arg.positional("a"), Arg.positional("b")])
        parsed = parser.parse(["1", "2"]).arguments
        with self.assertRaises(NotDeclaredError) as context:
            parsed.positional(-1)
        self.assertEqual(context.exception.options["index"], -1)

    def testTrail(self):
        self.assertEqual(parse(["one", "two", "three"]).trail(), ["two", "three"])
        self.assertEqual(parse(["one"]).trail(), [])

    def testTrailNotDeclared(self):
        parser = Parser()
        parser.add(Arg.positional("foo"))
        with self.assertRaises(NotDeclaredError):
            parser.parse(["one"]).arguments.trail()

    def testNotDeclaredIsLookupError(self):
        with self.assertRaises(LookupError):
            parse(["one"]).positional("baz")
        with self.assertRaises(AccessError):
            parse(["one"]).positional("baz")


class TestFlags(TestCase):
    """Behavioral tests for optional argument lookups."""

    def testSwitch(self):
        parsed = parse(["one", "-v"])
        self.assertTrue(parsed.named("verbose").switch())
        self.assertTrue(parsed.short("v").switch())
        self.assertFalse(parse(["one"]).named("verbose").switch())

    def testEverySpellingResolves(self):
        parsed = parse(["one", "--exclude", "*.o"])
        for name in ("--exclude", "-x", "exclude", OptionName.of_short_and_long("x", "exclude")):
            self.assertEqual(parsed.by_flag_name(name).single(), "*.o")

    def testSingleAbsentIsNone(self):
        self.assertIsNone(parse(["one"]).named("exclude").single())

    def testMultiple(self):
        parsed = parse(["one", "-e", "a", "b", "--add", "c"])
        self.assertEqual(parsed.short("e").multiple(), ["a", "b"])
        self.assertEqual(parsed.named("add").multiple(), ["c"])

    def testMultiplePresentButEmpty(self):
        self.assertEqual(parse(["one", "-e"]).named("extra").multiple(), [])

    def testMultipleAbsentIsNone(self):
        self.assertIsNone(parse(["one"]).named("extra").multiple())

    def testPassAlong(self):
        parsed = parse(["one", "--", "-v", "x"])
        self.assertEqual(parsed.by_flag_name("--").passalong(), ["-v", "x"])
        self.assertFalse(parsed.named("verbose").switch())
        self.assertIsNone(parse(["one"]).by_flag_name(OptionName.END_OF_OPTIONS).passalong())

    def testUnknownFlag(self):
        with self.assertRaises(NotDeclaredError):
            parse(["one"]).named("colour")
        with self.assertRaises(NotDeclaredError):
            parse(["one"]).by_flag_name(OptionName.of_long("verbose"))

    def testWrongKind(self):
        parsed = parse(["one", "-v"])
        with self.assertRaises(NotDeclaredError):
            parsed.named("verbose").single()
        with self.assertRaises(NotDeclaredError):
            parsed.named("exclude").switch()
        with self.assertRaises(NotDeclaredError):
            parsed.named("add").passalong()

    def testReturnedListsAreCopies(self):
        parsed = parse(["one", "-e", "a"])
        parsed.named("extra").multiple().append("b")
        self.assertEqual(parsed.named("extra").multiple(), ["a"])


class TestSnapshot(TestCase):
    """Behavioral tests for as_dict(), equality and rendering."""

    def testAsDict(self):
        self.assertEqual(parse(["one", "two", "-v", "-x", "p", "--add", "a", "b"]).as_dict(), {
            "foo": "one",
            "bar": ["two"],
            "--verbose": True,
            "--exclude": "p",
            "--extra": None,
            "--add": ["a", "b"],
            "--": None,
        })

    def testAsDictKeepsPositionalAndSameNamedSwitch(self):
        parser = Parser()
        with self.assertWarns(ShortOnlyNameWarning):
            quiet = Arg.short("q").switch()
        parser.add_many([Arg.positional("verbose"), Arg.named("verbose").switch(), quiet])
        parsed = parser.parse(["x", "--verbose"]).arguments
        self.assertEqual(parsed.as_dict(), {"verbose": "x", "--verbose": True, "-q": False})

    def testEquality(self):
        self.assertEqual(parse(["one", "-v"]), parse(["one", "--verbose"]))
        self.assertNotEqual(parse(["one", "-v"]), parse(["one"]))

    def testRichRepr(self):
        console = Console(record=True, width=120, color_system=None)
        console.print(parse(["one", "-v"]))
        self.assertIn("--verbose=True", console.export_text())


if __name__ == "__main__":
    unittest.main()
