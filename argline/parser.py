"""
Argline parser: the declaration registry and the parsing engine.

Scope
- Parser holds the declared argument surface and turns raw tokens into items,
  a queryable result, or an interrupt. It never prints and never exits: every
  problem is raised as an ArglineException subclass (see argline.faults).

Registry
- positional labels (ordered), at most one trail (label, Kind), a map from
  OptionName to value arity, sets of switches / interrupts / pass-alongs, and an
  alias map from every claimed FlagSpelling to its canonical OptionName.
- add() checks everything before touching any state, so a rejected declaration
  leaves the registry unchanged. Rules:
  • a FlagSpelling may be claimed only once (DuplicateFlagError).
  • labels are unique across positionals and the trail (DuplicatePositionalError).
  • at most one trail (DuplicateTrailError).
  • no positional after a trail (PositionalAfterTrailError).

Engine (items/stream/parse)
- Phase 0, interrupt scan: every Flag token is resolved; the first interrupt found
  wins over any other problem in the input, and it is the only item produced.
  The whole input is scanned, including tokens after a pass-along.
- Phase 1, sequential scan:
  • Value → next positional, else the trail buffer, else UnexpectedArgumentError.
  • Flag → switch, pass-along (captures the rest and ends the scan), or a
    value-taking option consuming the contiguous run of Value tokens after it.
  • GroupedShortFlags → one SwitchHit per letter; every letter must be a switch.
  • an optional argument given twice is a DuplicateArgumentError.
- Phase 2, finalization: missing positionals and an empty one-or-more trail are
  errors; a declared trail is always emitted last.

Input
- An iterable of str (program name excluded), a single str split like a shell
  would (shlex), or nothing at all (sys.argv[1:]).

Quick example
    >>> parser = Parser()
    >>> parser.add_many([
    ...     Arg.positional("foo"),
    ...     Arg.named_and_short("verbose", "v").switch(),
    ...     Arg.separator(),
    ... ])
    >>> list(parser.items(["x", "-v", "--", "-y", "z"]))
    [Positional('foo', 'x'), SwitchHit(OptionName('verbose', 'v')), PassAlongHit(..., ('-y', 'z'))]
"""
import difflib
import itertools
import shlex
import sys
from collections.abc import Iterable

from .arguments import *
from .faults import *
from .names import *
from .parsed import ParsedArguments
from .utils import *


class Positional(Record):
    """A value bound to a declared positional label."""
    __slots__ = ("label", "value")
    __match_args__ = ("label", "value")

    def __init__(self, label, value, /):
        self._settle(label=label, value=value)


class Trail(Record):
    """Every value left after the positionals were filled, in order."""
    __slots__ = ("values",)
    __match_args__ = ("values",)

    def __init__(self, values, /):
        self._settle(values=tuple(values))


class OptionValue(Record):
    __slots__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __init__(self, name, value, /):
        self._settle(name=name, value=value)


class OptionValues(Record):
    __slots__ = ("name", "values")
    __match_args__ = ("name", "values")

    def __init__(self, name, values, /):
        self._settle(name=name, values=tuple(values))


class SwitchHit(Record):
    __slots__ = ("name",)
    __match_args__ = ("name",)

    def __init__(self, name, /):
        self._settle(name=name)


class InterruptHit(Record):
    __slots__ = ("name",)
    __match_args__ = ("name",)

    def __init__(self, name, /):
        self._settle(name=name)


class PassAlongHit(Record):
    """A pass-along flag and every raw token that followed it."""
    __slots__ = ("name", "remaining")
    __match_args__ = ("name", "remaining")

    def __init__(self, name, remaining, /):
        self._settle(name=name, remaining=tuple(remaining))


class Structured(Record):
    """Streaming outcome: a single-pass iterator of items."""
    __slots__ = ("items",)
    __match_args__ = ("items",)

    def __init__(self, items, /):
        self._settle(items=items)

    def __iter__(self):
        return iter(self.items)


class Parsed(Record):
    """Aggregate outcome: the finished ParsedArguments."""
    __slots__ = ("arguments",)
    __match_args__ = ("arguments",)

    def __init__(self, arguments, /):
        self._settle(arguments=arguments)


class Interrupted(Record):
    """An interrupt flag was present; nothing else was looked at."""
    __slots__ = ("name",)
    __match_args__ = ("name",)

    def __init__(self, name, /):
        self._settle(name=name)


def _prompt(tokens, /):
    """
    Normalize parse input into a tuple of strings.

    - Unset → sys.argv[1:]
    - str   → shlex.split(tokens)
    - other iterables are copied; every element must be a string.
    """
    if tokens is Unset:
        return tuple(sys.argv[1:])
    if isinstance(tokens, str):
        return tuple(shlex.split(tokens))
    if not isinstance(tokens, Iterable):
        raise TypeError("parser input must be a string or an iterable of strings")
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parser input must contain only strings")
    return tokens


class Parser:
    """
    Registry of declarations and the engine that parses against them.

    Build once with add()/add_many(), then parse any number of times; parsing
    never mutates the registry, so a finished parser can be shared freely.

    Read-only views
    - declarations: every added Arg, in add order (used by argline.helps).
    - positionals: positional labels, in binding order.
    - trail: (label, Kind) or None.
    - aliases: FlagSpelling → OptionName for every claimed spelling.
    """

    declarations = mirror("declarations")
    positionals = mirror("positionals")
    trail = mirror("trail")
    aliases = mirror("aliases")

    def __init__(self):
        self._positionals = []
        self._trail = None
        self._options = {}
        self._switches = set()
        self._interrupts = set()
        self._passalongs = set()
        self._aliases = {}
        self._declarations = []

    def add(self, arg, /):
        """
        Register one declaration.

        Raises a DeclarationError subclass when the declaration conflicts with what
        is already registered; the registry is left untouched in that case.
        """
        if not isinstance(arg, Arg):
            raise TypeError("add() argument must be an Arg (did you forget to finish an OptArg?)")

        if arg.kind.labelled:
            self._check_label(arg)
        else:
            self._check_spellings(arg)

        match arg.kind:
            case Kind.POSITIONAL:
                self._positionals.append(arg.name)
            case Kind.TRAIL_ZERO_OR_MORE | Kind.TRAIL_ONE_OR_MORE:
                self._trail = (arg.name, arg.kind)
            case Kind.OPTION_SINGLE | Kind.OPTION_ZERO_OR_MORE | Kind.OPTION_ONE_OR_MORE:
                self._options[arg.name] = arg.kind
            case Kind.SWITCH:
                self._switches.add(arg.name)
            case Kind.INTERRUPT:
                self._interrupts.add(arg.name)
            case Kind.PASS_ALONG:
                self._passalongs.add(arg.name)

        for spelling in () if arg.kind.labelled else arg.name.spellings:
            self._aliases[spelling] = arg.name
        self._declarations.append(arg)

    def _check_label(self, arg, /):
        label = arg.name
        if arg.kind.trail and self._trail is not None:
            raise DuplicateTrailError(
                "trail %r cannot be declared, %r is already the trail" % (label, self._trail[0]),
                title="duplicate trail",
                code=FaultCode.DUPLICATE_TRAIL,
                label=label,
                hint="a parser accepts at most one trail",
                docs=getdoc(FaultCode.DUPLICATE_TRAIL)
            )
        if label in self._positionals or (self._trail is not None and self._trail[0] == label):
            raise DuplicatePositionalError(
                "positional label %r is already declared" % label,
                title="duplicate positional",
                code=FaultCode.DUPLICATE_POSITIONAL,
                label=label,
                hint="give every positional and the trail a distinct label",
                docs=getdoc(FaultCode.DUPLICATE_POSITIONAL)
            )
        if arg.kind is Kind.POSITIONAL and self._trail is not None:
            raise PositionalAfterTrailError(
                "positional %r cannot be declared after the trail %r" % (label, self._trail[0]),
                title="positional after trail",
                code=FaultCode.POSITIONAL_AFTER_TRAIL,
                label=label,
                hint="add every positional before the trail",
                docs=getdoc(FaultCode.POSITIONAL_AFTER_TRAIL)
            )

    def _check_spellings(self, arg, /):
        for spelling in arg.name.spellings:
            if (owner := self._aliases.get(spelling)) is not None:
                raise DuplicateFlagError(
                    "flag %r is already declared by %r" % (str(spelling), str(owner)),
                    title="duplicate flag",
                    code=FaultCode.DUPLICATE_FLAG,
                    spelling=spelling,
                    name=arg.name,
                    owner=owner,
                    hint="every short and long spelling may be claimed by one declaration only",
                    docs=getdoc(FaultCode.DUPLICATE_FLAG)
                )

    def add_many(self, args, /, *, atomic=False):
        """
        Register several declarations in order, stopping at the first failure.

        By default the declarations added before the failing one stay registered.
        With atomic=True the registry is restored to its state before the call.
        """
        if not atomic:
            for arg in args:
                self.add(arg)
            return

        snapshot = self._snapshot()
        try:
            for arg in args:
                self.add(arg)
        except Exception:
            self._restore(snapshot)
            raise

    def _snapshot(self):
        return (
            list(self._positionals),
            self._trail,
            dict(self._options),
            set(self._switches),
            set(self._interrupts),
            set(self._passalongs),
            dict(self._aliases),
            list(self._declarations),
        )

    def _restore(self, snapshot, /):
        (
            self._positionals,
            self._trail,
            self._options,
            self._switches,
            self._interrupts,
            self._passalongs,
            self._aliases,
            self._declarations,
        ) = snapshot

    def add_default_help_interrupt(self):
        """Declare -h/--help as an interrupt and return the declaration."""
        self.add(arg := Arg.named_and_short("help", "h").interrupt(help="show this help message and exit"))
        return arg

    def add_default_version_interrupt(self):
        """Declare --version as an interrupt and return the declaration."""
        self.add(arg := Arg.named("version").interrupt(help="show the version and exit"))
        return arg

    def items(self, tokens=Unset, /):
        """
        Parse tokens into a single-pass generator of items.

        Input is validated and copied immediately; parse errors are raised while
        the generator is consumed, at the point where the offending token is met.
        """
        return self._items(_prompt(tokens))

    def stream(self, tokens=Unset, /):
        """
        Return Interrupted(name) when an interrupt is present, else Structured(items).

        The first item is computed eagerly (an error there is raised here); the
        remaining ones are produced lazily.
        """
        items = self.items(tokens)
        try:
            first = next(items)
        except StopIteration:
            return Structured(iter(()))
        if isinstance(first, InterruptHit):
            return Interrupted(first.name)
        return Structured(itertools.chain((first,), items))

    def parse(self, tokens=Unset, /):
        """
        Return Parsed(ParsedArguments) or Interrupted(name); raise a ParseError otherwise.
        """
        items = list(self.items(tokens))
        if items and isinstance(items[0], InterruptHit):
            return Interrupted(items[0].name)
        return Parsed(ParsedArguments(self, items))

    def _items(self, tokens, /):
        classified = tuple(map(classify, tokens))

        for token in classified:
            if isinstance(token, Flag):
                name = self._aliases.get(token.spelling)
                if name in self._interrupts:
                    yield InterruptHit(name)
                    return

        seen = {}
        filled = 0
        trail = []
        cursor = 0
        while cursor < len(classified):
            token = classified[cursor]
            index = cursor + 1  # 1-based position for messages
            cursor += 1

            match token:
                case Value(text):
                    if filled < len(self._positionals):
                        yield Positional(self._positionals[filled], text)
                        filled += 1
                    elif self._trail is not None:
                        trail.append(text)
                    else:
                        raise UnexpectedArgumentError(
                            "unexpected argument %r at %s position" % (text, ordinal(index)),
                            title="unexpected argument",
                            code=FaultCode.UNEXPECTED_ARGUMENT,
                            token=text,
                            index=index,
                            hint="every positional is already filled and no trail is declared",
                            docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT)
                        )

                case Flag(spelling):
                    name = self._resolve(spelling, index)
                    self._mark(seen, name, str(spelling), index)

                    if name in self._switches:
                        yield SwitchHit(name)
                    elif name in self._passalongs:
                        yield PassAlongHit(name, tokens[cursor:])
                        break
                    else:
                        kind = self._options[name]
                        run = list(itertools.takewhile(lambda item: isinstance(item, Value), classified[cursor:]))
                        if kind is Kind.OPTION_SINGLE:
                            run = run[:1]
                        if not run and kind is not Kind.OPTION_ZERO_OR_MORE:
                            raise MissingParameterError(
                                "optional argument %r at %s position expects %s" % (
                                    str(spelling),
                                    ordinal(index),
                                    "a value" if kind is Kind.OPTION_SINGLE else "at least one value"
                                ),
                                title="missing parameter",
                                code=FaultCode.MISSING_PARAMETER,
                                token=str(spelling),
                                name=name,
                                index=index,
                                hint="pass the value right after %s (for example: %s <value>)" % (str(spelling), str(spelling)),
                                docs=getdoc(FaultCode.MISSING_PARAMETER)
                            )
                        cursor += len(run)
                        if kind is Kind.OPTION_SINGLE:
                            yield OptionValue(name, run[0].text)
                        else:
                            yield OptionValues(name, (value.text for value in run))

                case GroupedShortFlags(spellings):
                    names = []
                    for spelling in spellings:
                        name = self._aliases.get(spelling)
                        if name not in self._switches:
                            raise GroupedNonSwitchError(
                                "grouped flag %r at %s position contains %r, which is %s" % (
                                    str(token),
                                    ordinal(index),
                                    spelling.char,
                                    "not declared" if name is None else "not a switch"
                                ),
                                title="grouped non-switch",
                                code=FaultCode.GROUPED_NON_SWITCH,
                                token=str(token),
                                letter=spelling.char,
                                name=name,
                                index=index,
                                hint=(
                                    "only switches can be grouped; pass %s on its own" % str(spelling)
                                    if name is not None else "check the spelling of the group"
                                ),
                                docs=getdoc(FaultCode.GROUPED_NON_SWITCH)
                            )
                        self._mark(seen, name, str(spelling), index)
                        names.append(name)
                    for name in names:
                        yield SwitchHit(name)

        if filled < len(self._positionals):
            label = self._positionals[filled]
            raise MissingPositionalArgumentError(
                "missing positional argument %r (%s of %d)" % (label, ordinal(filled + 1), len(self._positionals)),
                title="missing positional argument",
                code=FaultCode.MISSING_POSITIONAL_ARGUMENT,
                label=label,
                hint="expected %d positional argument(s), got %d" % (len(self._positionals), filled),
                docs=getdoc(FaultCode.MISSING_POSITIONAL_ARGUMENT)
            )

        if self._trail is not None:
            label, kind = self._trail
            if kind is Kind.TRAIL_ONE_OR_MORE and not trail:
                raise MissingTrailError(
                    "missing values for %r, at least one is expected" % label,
                    title="missing trail",
                    code=FaultCode.MISSING_TRAIL,
                    label=label,
                    hint="add one or more %s values after the positionals" % label,
                    docs=getdoc(FaultCode.MISSING_TRAIL)
                )
            yield Trail(trail)

    def _resolve(self, spelling, index, /):
        try:
            return self._aliases[spelling]
        except KeyError:
            pass

        suggestions = difflib.get_close_matches(str(spelling), [str(known) for known in self._aliases], 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "check the spelling, or see the help for the accepted options"
        raise UnknownOptionalArgumentError(
            "unknown optional argument %r at %s position" % (str(spelling), ordinal(index)),
            title="unknown optional argument",
            code=FaultCode.UNKNOWN_OPTIONAL_ARGUMENT,
            token=str(spelling),
            index=index,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTIONAL_ARGUMENT)
        )

    @staticmethod
    def _mark(seen, name, token, index, /):
        if name in seen:
            raise DuplicateArgumentError(
                "optional argument %r at %s position was already given at %s position" % (
                    token,
                    ordinal(index),
                    ordinal(seen[name])
                ),
                title="duplicate argument",
                code=FaultCode.DUPLICATE_ARGUMENT,
                token=token,
                name=name,
                index=index,
                hint="give %s only once" % str(name),
                docs=getdoc(FaultCode.DUPLICATE_ARGUMENT)
            )
        seen[name] = index

    def __rich_repr__(self):
        yield "declarations", self.declarations

    def __repr__(self):
        return f"Parser(declarations={self.declarations!r})"


__all__ = (
    # Classes (registry & engine)
    "Parser",

    # Outcomes
    "Structured",
    "Parsed",
    "Interrupted",

    # Items
    "Positional",
    "Trail",
    "OptionValue",
    "OptionValues",
    "SwitchHit",
    "InterruptHit",
    "PassAlongHit",
)
