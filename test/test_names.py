"""
Name model tests (spellings, option names, token classification).

Scope
- classify(): the four token classes and their precedence.
- Short/Long/OptionName: typed structural equality, hashing, rendering.
- OptionName validation and the END_OF_OPTIONS sentinel.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argline import Short, Long, OptionName, Value, Flag, GroupedShortFlags, classify


class TestClassify(TestCase):
    """Behavioral tests for the tokenizer."""

    def testDoubleDashIsLongFlag(self):
        self.assertEqual(classify("--verbose"), Flag(Long("verbose")))

    def testBareDoubleDashIsEmptyLongFlag(self):
        self.assertEqual(classify("--"), Flag(Long("")))

    def testSingleDashAndOneCharIsShortFlag(self):
        self.assertEqual(classify("-v"), Flag(Short("v")))

    def testSingleDashAndSeveralCharsIsGroup(self):
        self.assertEqual(classify("-abc"), GroupedShortFlags((Short("a"), Short("b"), Short("c"))))

    def testGroupKeepsOrder(self):
        token = classify("-xv")
        self.assertEqual([spelling.char for spelling in token.spellings], ["x", "v"])

    def testLoneDashIsValue(self):
        self.assertEqual(classify("-"), Value("-"))

    def testPlainTextIsValue(self):
        self.assertEqual(classify("file.txt"), Value("file.txt"))

    def testEmptyStringIsValue(self):
        self.assertEqual(classify(""), Value(""))

    def testTripleDashKeepsRemainder(self):
        self.assertEqual(classify("---x"), Flag(Long("-x")))

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            classify(3)

    def testMatchStatement(self):
        match classify("--name"):
            case Flag(Long(name)):
                matched = name
            case _:
                matched = None
        self.assertEqual(matched, "name")


class TestSpellings(TestCase):
    """Behavioral tests for Short/Long."""

    def testShortAndLongNeverEqual(self):
        self.assertNotEqual(Short("a"), Long("a"))

    def testStructuralEquality(self):
        self.assertEqual(Long("help"), Long("help"))
        self.assertEqual(hash(Short("h")), hash(Short("h")))

    def testRendering(self):
        self.assertEqual(str(Short("h")), "-h")
        self.assertEqual(str(Long("help")), "--help")
        self.assertEqual(repr(Long("help")), "Long('help')")

    def testShortNeedsOneCharacter(self):
        with self.assertRaises(ValueError):
            Short("ab")
        with self.assertRaises(ValueError):
            Short("")
        with self.assertRaises(TypeError):
            Short(1)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Short("a").char = "b"


class TestOptionName(TestCase):
    """Behavioral tests for canonical option names."""

    def testVariantsDiffer(self):
        self.assertNotEqual(OptionName.of_long("help"), OptionName.of_short_and_long("h", "help"))
        self.assertNotEqual(OptionName.of_short("h"), OptionName.of_short_and_long("h", "help"))

    def testSpellingsShortFirst(self):
        self.assertEqual(OptionName.of_short_and_long("h", "help").spellings, (Short("h"), Long("help")))
        self.assertEqual(OptionName.of_long("help").spellings, (Long("help"),))
        self.assertEqual(OptionName.of_short("h").spellings, (Short("h"),))

    def testRendering(self):
        self.assertEqual(str(OptionName.of_short_and_long("h", "help")), "-h | --help")
        self.assertEqual(str(OptionName.of_long("version")), "--version")

    def testKey(self):
        self.assertEqual(OptionName.of_short_and_long("h", "help").key, "help")
        self.assertEqual(OptionName.of_short("x").key, "x")

    def testIsLongIsShort(self):
        name = OptionName.of_short_and_long("h", "help")
        self.assertTrue(name.is_long("help"))
        self.assertTrue(name.is_short("h"))
        self.assertFalse(name.is_long("h"))

    def testEmptyLongRejected(self):
        with self.assertRaises(ValueError):
            OptionName.of_long("")

    def testLeadingDashRejected(self):
        with self.assertRaises(ValueError):
            OptionName.of_long("--help")

    def testWhitespaceRejected(self):
        with self.assertRaises(ValueError):
            OptionName.of_long("dry run")

    def testShortDashRejected(self):
        with self.assertRaises(ValueError):
            OptionName.of_short("-")

    def testShortTooLongRejected(self):
        with self.assertRaises(ValueError):
            OptionName.of_short("ab")

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            OptionName.of_long(1)

    def testEndOfOptions(self):
        self.assertEqual(OptionName.END_OF_OPTIONS.spellings, (Long(""),))
        self.assertEqual(str(OptionName.END_OF_OPTIONS), "--")

    def testCopyAndPickleKeepIdentity(self):
        name = OptionName.of_short_and_long("h", "help")
        self.assertIs(copy.copy(name), name)
        self.assertEqual(pickle.loads(pickle.dumps(name)), name)
        self.assertIs(pickle.loads(pickle.dumps(OptionName.END_OF_OPTIONS)), OptionName.END_OF_OPTIONS)


if __name__ == "__main__":
    unittest.main()
