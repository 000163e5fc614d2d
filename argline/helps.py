"""
Argline help rendering.

A thin collaborator on top of Parser.declarations: nothing here is needed to
parse, and nothing in the parser depends on it.

Layout (sections appear only when they have entries, in this order)
- usage line: program name, bracketed optionals, positionals, the trail, pass-alongs.
- "Required arguments": positionals and the trail
    foo
    bar [bar, ..]         (one-or-more trail)
    [bar, ..]             (zero-or-more trail)
- "Interrupts": -h | --help
- "Optional arguments": options and switches
    -x | --exclude EXCLUDE
    -e [E, ..]            (zero-or-more)
    -a | --add ADD [ADD, ..]
- "Pass-alongs": -- ARGS...

The parameter shown for a value is the declaration's param, or its name in
upper case when none was given.

Styling follows argline.faults: a palette that __styles__ in __main__ can
override, and colorful=False for plain output.
"""
import io
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from .arguments import Kind
from .names import OptionName
from .utils import *

SECTIONS = (
    ("Required arguments", (Kind.POSITIONAL, Kind.TRAIL_ZERO_OR_MORE, Kind.TRAIL_ONE_OR_MORE)),
    ("Interrupts", (Kind.INTERRUPT,)),
    ("Optional arguments", (Kind.OPTION_SINGLE, Kind.OPTION_ZERO_OR_MORE, Kind.OPTION_ONE_OR_MORE, Kind.SWITCH)),
    ("Pass-alongs", (Kind.PASS_ALONG,)),
)


def _program(prog, /):
    return coalesce(prog, None) or getattr(__import__("__main__"), "__prog__", None) or os.path.basename(sys.argv[0]) or "argline"


def _param(arg, /):
    if arg.param is not None:
        return arg.param
    if arg.kind.labelled:
        return arg.name
    if arg.name is OptionName.END_OF_OPTIONS:
        return "ARGS"
    return arg.name.key.upper()


def _values(arg, /):
    """The value part of an entry: what follows the flag (or stands alone for positionals)."""
    param = _param(arg)
    match arg.kind:
        case Kind.POSITIONAL | Kind.OPTION_SINGLE:
            return param
        case Kind.TRAIL_ONE_OR_MORE | Kind.OPTION_ONE_OR_MORE:
            return f"{param} [{param}, ..]"
        case Kind.TRAIL_ZERO_OR_MORE | Kind.OPTION_ZERO_OR_MORE:
            return f"[{param}, ..]"
        case Kind.PASS_ALONG:
            return f"{param}..."
        case _:
            return ""


def entry(arg, /):
    """Left column of a help row for one declaration, e.g. '-x | --exclude EXCLUDE'."""
    if arg.kind.labelled:
        return _values(arg)
    return " ".join(filter(None, (str(arg.name), _values(arg))))


def usage(parser, /, prog=Unset):
    """
    One-line usage synopsis.

    Example
    - usage: tool [-h | --help] [-v | --verbose] FILE [ARGS, ..] [-- ARGS...]
    """
    optionals = []
    required = []
    passalongs = []
    for arg in parser.declarations:
        if arg.kind.labelled:
            required.append(entry(arg))
        elif arg.kind is Kind.PASS_ALONG:
            passalongs.append(f"[{entry(arg)}]")
        else:
            optionals.append(f"[{entry(arg)}]")
    return " ".join(["usage:", _program(prog), *optionals, *required, *passalongs])


def render_help(parser, /, prog=Unset, *, colorful=True):
    """
    Build a rich renderable for the parser's help screen.

    Parameters
    - parser: a Parser (only its declarations are read).
    - prog: program name for the usage line (defaults to __prog__ or argv[0]).
    - colorful: False drops every style, for logs and plain terminals.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "usage": "#36C5F0",
        "section-title": "bold #FF4DA6",
        "entry": "bold #E6E6F0",
        "help": "#C8C8D0",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    line = usage(parser, prog)
    renders = [Text.assemble(
        ("usage", styler("usage-label")),
        ":",
        (line.removeprefix("usage:"), styler("usage")),
    )]

    for title, kinds in SECTIONS:
        arguments = [arg for arg in parser.declarations if arg.kind in kinds]
        if not arguments:
            continue
        table = Table.grid(padding=(0, 1))
        table.add_column(no_wrap=True)
        table.add_column()
        for arg in arguments:
            table.add_row(Text(entry(arg), styler("entry")), Text(arg.help or "", styler("help")))
        renders.append(Text(""))
        renders.append(Text(f"{title}:", styler("section-title")))
        renders.append(Padding(table, (0, 0, 0, 2)))

    return Group(*renders)


def generate_help(parser, /, prog=Unset, *, width=80):
    """
    Plain-text help, rendered through rich without colors.

    Trailing whitespace is stripped from every line.
    """
    console = Console(record=True, file=io.StringIO(), width=width, color_system=None)
    console.print(render_help(parser, prog, colorful=False))
    return "\n".join(line.rstrip() for line in console.export_text().splitlines()).strip("\n")


__all__ = (
    "render_help",
    "generate_help",
    "usage",
    "entry",
)
