"""
Argline faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ArglineException / ArglineWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- Three error families with distinct meaning for the caller:
  • ParseError: the user typed something the declared surface does not accept.
  • DeclarationError: the program declared an inconsistent surface (raised by Parser.add).
  • AccessError: the program queried a parse result for a name it never declared.
- trigger(): caller-side entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

The parser itself never prints and never exits: it raises. trigger() is what a
program calls when it wants the rendered, exit-on-error behavior.

Integration
- In non-shell mode, trigger() re-raises exceptions and emits warnings via warnings.warn.
- In shell mode, faults are rendered via rich on stderr (errors then exit with status 1).
"""
import copy
import inspect
import os.path
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across argline (stable identifiers).

    grouping (by high-level domain)
    - flags (2111x)
      • UNKNOWN_OPTIONAL_ARGUMENT, GROUPED_NON_SWITCH, MISSING_PARAMETER,
        DUPLICATE_ARGUMENT
    - positionals (2112x)
      • MISSING_POSITIONAL_ARGUMENT, MISSING_TRAIL, UNEXPECTED_ARGUMENT
    - declarations (2121x)
      • DUPLICATE_FLAG, DUPLICATE_POSITIONAL, DUPLICATE_TRAIL, POSITIONAL_AFTER_TRAIL
    - access (2131x)
      • NOT_DECLARED
    - warnings (22xxx)
      • SHORT_ONLY_NAME

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired.
    """
    # --- flag errors (211xx) ---
    UNKNOWN_OPTIONAL_ARGUMENT   = 21111
    GROUPED_NON_SWITCH          = 21112
    MISSING_PARAMETER           = 21113
    DUPLICATE_ARGUMENT          = 21114

    # --- positional errors (211xx) ---
    MISSING_POSITIONAL_ARGUMENT = 21121
    MISSING_TRAIL               = 21122
    UNEXPECTED_ARGUMENT         = 21123

    # --- declaration errors (212xx) ---
    DUPLICATE_FLAG              = 21211
    DUPLICATE_POSITIONAL        = 21212
    DUPLICATE_TRAIL             = 21213
    POSITIONAL_AFTER_TRAIL      = 21214

    # --- access errors (213xx) ---
    NOT_DECLARED                = 21311

    # --- warnings (22xxx) ---
    SHORT_ONLY_NAME             = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    main = __import__("__main__")
    return options.get("prog") or getattr(main, "__prog__", None) or os.path.basename(sys.argv[0]) or "argline"


def _render(fault, palette, title_style, message_style):
    """
    Shared rich layout for errors and warnings.

    Layout
    - header: [ prog — code | Title ]
    - body: the message, then an arrow with the hint (when one exists).
    - fancy: header becomes the title of a Panel wrapping the body.
    """
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(_prog(options), styler("prog-name")),
        " — ",
        text(code.normalize() if code is not None else "-", styler("code")),
        " | ",
        text(options.get("title", type(fault).__name__).title(), styler(title_style)),
        " ]"
    )
    message = text(_message(fault), styler(message_style))
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        try:
            width = int((console.width - 4) * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*parts), title=header, title_align="left", width=width)

    return Group(header, *parts)


def _message(fault):
    return fault.message if fault.message is not Unset else type(fault).__name__


class ArglineException(Exception):
    """
    base of every argline error.

    - message: one lowercased sentence, position-first where a token is involved.
    - options: read-only mapping of rendering hints (title, code, hint, docs) and
      context (token, index, name, ...). rendering flags (shell, fancy, colorful,
      prog) are usually merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "error-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseError(ArglineException): ...
class UnknownOptionalArgumentError(ParseError): ...
class GroupedNonSwitchError(ParseError): ...
class MissingParameterError(ParseError): ...
class MissingPositionalArgumentError(ParseError): ...
class DuplicateArgumentError(ParseError): ...
class MissingTrailError(ParseError): ...
class UnexpectedArgumentError(ParseError): ...


class DeclarationError(ArglineException): ...
class DuplicateFlagError(DeclarationError): ...
class DuplicatePositionalError(DeclarationError): ...
class DuplicateTrailError(DeclarationError): ...
class PositionalAfterTrailError(DeclarationError): ...


class AccessError(ArglineException, LookupError): ...
class NotDeclaredError(AccessError): ...


class ArglineWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "warning-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShortOnlyNameWarning(ArglineWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the stderr rich console; otherwise,
      exceptions are raised and warnings are emitted through the warnings module.

    typical options
    - shell, fancy, colorful, prog, and any other context the reporter may want to show.

    example
        try:
            outcome = parser.parse()
        except ParseError as error:
            trigger(error, shell=True)
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArglineException",
    "ParseError",
    "UnknownOptionalArgumentError",
    "GroupedNonSwitchError",
    "MissingParameterError",
    "MissingPositionalArgumentError",
    "DuplicateArgumentError",
    "MissingTrailError",
    "UnexpectedArgumentError",
    "DeclarationError",
    "DuplicateFlagError",
    "DuplicatePositionalError",
    "DuplicateTrailError",
    "PositionalAfterTrailError",
    "AccessError",
    "NotDeclaredError",
    "ArglineWarning",
    "ShortOnlyNameWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
