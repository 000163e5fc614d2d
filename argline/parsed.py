"""
Argline parse results (aggregate API).

ParsedArguments is what Parser.parse() wraps in Parsed(...): a finished,
read-only view over one successful parse, queried by the names that were
declared on the parser.

Lookups
- positional(label_or_index) → str
- trail()                    → list[str]
- by_flag_name(name)         → FlagAccess ("--long", "-s", "long", or an OptionName)
- named(long) / short(char)  → FlagAccess
- FlagAccess.switch()        → bool
- FlagAccess.single()        → str | None
- FlagAccess.multiple()      → list[str] | None
- FlagAccess.passalong()     → list[str] | None

Asking for a name that was never declared, or for the wrong kind of value
(single() on a switch, ...), raises NotDeclaredError. That is a programming
error on the caller's side, unrelated to the ParseError family raised for bad
user input.
"""
from .arguments import Kind
from .faults import *
from .names import *
from .utils import *


_DESCRIPTIONS = {
    Kind.OPTION_SINGLE: "a single-value option",
    Kind.OPTION_ZERO_OR_MORE: "a multi-value option",
    Kind.OPTION_ONE_OR_MORE: "a multi-value option",
    Kind.SWITCH: "a switch",
    Kind.INTERRUPT: "an interrupt",
    Kind.PASS_ALONG: "a pass-along",
}


def _not_declared(message, /, **options):
    return NotDeclaredError(
        message,
        title="not declared",
        code=FaultCode.NOT_DECLARED,
        docs=getdoc(FaultCode.NOT_DECLARED),
        **options
    )


class FlagAccess(Record):
    """
    Typed accessor for one optional argument of a finished parse.

    value holds what the parse recorded: a bool for switches, a str or None for
    single-value options, and a tuple or None for multi-value options and
    pass-alongs.
    """
    __slots__ = ("name", "kind", "value")
    __match_args__ = ("name", "kind", "value")

    def __init__(self, name, kind, value, /):
        self._settle(name=name, kind=kind, value=value)

    def _expect(self, wanted, description, /):
        if self.kind not in wanted:
            raise _not_declared(
                "%r is declared as %s, not as %s" % (str(self.name), _DESCRIPTIONS[self.kind], description),
                name=self.name,
                hint="use the accessor that matches how %s was declared" % str(self.name),
            )

    def switch(self):
        self._expect((Kind.SWITCH,), "a switch")
        return self.value

    def single(self):
        self._expect((Kind.OPTION_SINGLE,), "a single-value option")
        return self.value

    def multiple(self):
        self._expect((Kind.OPTION_ZERO_OR_MORE, Kind.OPTION_ONE_OR_MORE), "a multi-value option")
        return None if self.value is None else list(self.value)

    def passalong(self):
        self._expect((Kind.PASS_ALONG,), "a pass-along")
        return None if self.value is None else list(self.value)


class ParsedArguments:
    """
    Result of a successful Parser.parse().

    Built from the parser's declarations and the items of one parse; it keeps no
    reference to the parser, so later additions to the parser do not affect it.
    """

    def __init__(self, parser, items, /):
        self._labels = tuple(parser.positionals)
        self._positionals = {}
        self._trail = parser.trail
        self._trailing = None if parser.trail is None else ()
        self._aliases = dict(parser.aliases)
        self._kinds = {}
        self._values = {}

        for arg in parser.declarations:
            if arg.kind.labelled:
                continue
            self._kinds[arg.name] = arg.kind
            self._values[arg.name] = False if arg.kind in (Kind.SWITCH, Kind.INTERRUPT) else None

        # Local import: parser.py depends on this module.
        from .parser import (
            Positional, Trail, OptionValue, OptionValues, SwitchHit, InterruptHit, PassAlongHit
        )

        for item in items:
            match item:
                case Positional(label, value):
                    self._positionals[label] = value
                case Trail(values):
                    self._trailing = values
                case OptionValue(name, value):
                    self._values[name] = value
                case OptionValues(name, values) | PassAlongHit(name, values):
                    self._values[name] = values
                case SwitchHit(name) | InterruptHit(name):
                    self._values[name] = True
                case _:
                    raise TypeError(f"unexpected parse item {item!r}")

    def positional(self, key, /):
        """Value of a positional, by label or by 0-based declaration index."""
        if isinstance(key, int) and not isinstance(key, bool):
            if not 0 <= key < len(self._labels):
                raise _not_declared(
                    "no positional argument at index %d (%d declared)" % (key, len(self._labels)),
                    index=key,
                    hint="positional indices start at 0",
                )
            key = self._labels[key]
        elif not isinstance(key, str):
            raise TypeError("positional() argument must be a label or an index")
        try:
            return self._positionals[key]
        except KeyError:
            raise _not_declared(
                "no positional argument is labelled %r" % key,
                label=key,
                hint="declared positionals: %s" % (", ".join(map(repr, self._labels)) or "none"),
            ) from None

    def trail(self):
        """Trailing values, in order (possibly empty for an optional trail)."""
        if self._trail is None:
            raise _not_declared(
                "no trail was declared",
                hint="declare one with Arg.optional_trail() or Arg.required_trail()",
            )
        return list(self._trailing)

    def by_flag_name(self, name, /):
        """
        Accessor for an optional argument by any of its spellings.

        Accepts "--long", "-s", a bare long name ("long"), or an OptionName.
        """
        if isinstance(name, OptionName):
            return self._access(name if name in self._kinds else None, name)
        elif isinstance(name, str):
            if name.startswith("--"):
                spelling = Long(name[2:])
            elif name.startswith("-") and len(name) == 2:
                spelling = Short(name[1])
            else:
                spelling = Long(name)
            return self._access(self._aliases.get(spelling), spelling)
        raise TypeError("by_flag_name() argument must be a string or an OptionName")

    def named(self, long, /):
        return self._access(self._aliases.get(spelling := Long(long)), spelling)

    def short(self, char, /):
        return self._access(self._aliases.get(spelling := Short(char)), spelling)

    def _access(self, resolved, shown, /):
        if resolved is None:
            raise _not_declared(
                "no optional argument is declared as %r" % str(shown),
                hint="declared flags: %s" % (", ".join(sorted(map(str, self._aliases))) or "none"),
            )
        return FlagAccess(resolved, self._kinds[resolved], self._values[resolved])

    def as_dict(self):
        """
        Plain snapshot: positional labels, the trail label, and each option keyed by
        its flag spelling ("--long", else "-s"; "--" for the end-of-options separator).
        """
        snapshot = dict(self._positionals)
        if self._trail is not None:
            snapshot[self._trail[0]] = list(self._trailing)
        for name, value in self._values.items():
            snapshot[str(name.spellings[-1])] = list(value) if isinstance(value, tuple) else value
        return snapshot

    def __eq__(self, other, /):
        if not isinstance(other, ParsedArguments):
            return NotImplemented
        return (self._positionals, self._trailing, self._values) == (other._positionals, other._trailing, other._values)

    __hash__ = None

    def __rich_repr__(self):
        yield from self.as_dict().items()

    def __repr__(self):
        return f"ParsedArguments({self.as_dict()!r})"


__all__ = (
    "ParsedArguments",
    "FlagAccess",
)
