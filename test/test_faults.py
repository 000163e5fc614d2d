"""
Faults module behavioral tests (codes, exceptions, warnings, trigger).

Scope
- Validate the exception taxonomy and the read-only options mapping.
- Validate rich rendering (plain and fancy) through a recording console.
- Validate trigger(): re-raise outside shell mode, render-and-exit inside it.
- Validate getdoc() and FaultCode.normalize() hooks.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import io
import unittest
from types import SimpleNamespace
from unittest import TestCase, mock

from rich.console import Console

from argline import *
from argline import faults


def render(renderable):
    console = Console(record=True, file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestTaxonomy(TestCase):
    """Behavioral tests for the error families."""

    def testFamilies(self):
        self.assertTrue(issubclass(UnknownOptionalArgumentError, ParseError))
        self.assertTrue(issubclass(DuplicateFlagError, DeclarationError))
        self.assertTrue(issubclass(NotDeclaredError, AccessError))
        self.assertTrue(issubclass(AccessError, LookupError))
        self.assertFalse(issubclass(ParseError, DeclarationError))

    def testOptionsAreReadOnly(self):
        error = MissingTrailError("missing values for 'bar'", label="bar")
        with self.assertRaises(TypeError):
            error.options["label"] = "baz"  # type: ignore[index]

    def testStrIsMessage(self):
        self.assertEqual(str(MissingTrailError("missing values for 'bar'")), "missing values for 'bar'")
        self.assertEqual(str(MissingTrailError()), "MissingTrailError")

    def testReplaceMergesOptions(self):
        error = UnexpectedArgumentError("unexpected argument 'b'", token="b")
        replaced = copy.replace(error, shell=True)
        self.assertIsInstance(replaced, UnexpectedArgumentError)
        self.assertEqual(replaced.options["token"], "b")
        self.assertTrue(replaced.options["shell"])
        self.assertNotIn("shell", error.options)


class TestRendering(TestCase):
    """Behavioral tests for rich rendering."""

    def testPlain(self):
        error = UnknownOptionalArgumentError(
            "unknown optional argument '--verbos' at first position",
            title="unknown optional argument",
            code=FaultCode.UNKNOWN_OPTIONAL_ARGUMENT,
            hint="did you mean '--verbose'?",
            prog="tool",
            colorful=False,
        )
        text = render(error)
        self.assertIn("tool", text)
        self.assertIn("21111", text)
        self.assertIn("Unknown Optional Argument", text)
        self.assertIn("at first position", text)
        self.assertIn("did you mean '--verbose'?", text)

    def testFancy(self):
        warning = ShortOnlyNameWarning("optional argument '-e' has no long name", prog="tool", fancy=True)
        text = render(warning)
        self.assertIn("has no long name", text)
        self.assertIn("╭", text)

    def testCodeRemap(self):
        main = SimpleNamespace(__codes__={FaultCode.MISSING_TRAIL: "E-TRAIL"})
        with mock.patch.dict("sys.modules", {"__main__": main}):
            self.assertEqual(FaultCode.MISSING_TRAIL.normalize(), "E-TRAIL")
            self.assertEqual(FaultCode.MISSING_PARAMETER.normalize(), "21113")


class TestTrigger(TestCase):
    """Behavioral tests for trigger() and getdoc()."""

    def testReraisesOutsideShell(self):
        with self.assertRaises(MissingTrailError):
            trigger(MissingTrailError("missing values for 'bar'"))

    def testShellPrintsAndExits(self):
        console = Console(record=True, file=io.StringIO(), color_system=None)
        with mock.patch.object(faults, "console", console):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingTrailError("missing values for 'bar'"), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing values for 'bar'", console.export_text())

    def testWarningIsWarned(self):
        with self.assertWarns(ShortOnlyNameWarning):
            trigger(ShortOnlyNameWarning("optional argument '-e' has no long name"))

    def testWarningInShellOnlyPrints(self):
        console = Console(record=True, file=io.StringIO(), color_system=None)
        with mock.patch.object(faults, "console", console):
            trigger(ShortOnlyNameWarning("optional argument '-e' has no long name"), shell=True)
        self.assertIn("has no long name", console.export_text())

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())

    def testGetdoc(self):
        main = SimpleNamespace(__docs__={FaultCode.MISSING_TRAIL: "a required trail got no values"})
        with mock.patch.dict("sys.modules", {"__main__": main}):
            self.assertEqual(getdoc(FaultCode.MISSING_TRAIL), "a required trail got no values")
            self.assertIsNone(getdoc(FaultCode.MISSING_PARAMETER))
        with self.assertRaises(TypeError):
            getdoc(21122)

    def testParserErrorCarriesCode(self):
        parser = Parser()
        with self.assertRaises(UnexpectedArgumentError) as context:
            parser.parse(["stray"])
        self.assertEqual(context.exception.options["code"], FaultCode.UNEXPECTED_ARGUMENT)


if __name__ == "__main__":
    unittest.main()
