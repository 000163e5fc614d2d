r"""
Argline argument declarations.

Overview
- Kind
  • the nine declaration kinds: POSITIONAL, TRAIL_ZERO_OR_MORE, TRAIL_ONE_OR_MORE,
    OPTION_SINGLE, OPTION_ZERO_OR_MORE, OPTION_ONE_OR_MORE, SWITCH, INTERRUPT, PASS_ALONG.
  • the first three are identified by a label (str), the rest by an OptionName.

- Arg
  • immutable declaration: kind, name, param, help.
  • positional constructors: Arg.positional(label), Arg.optional_trail(label),
    Arg.required_trail(label).
  • named constructors return an OptArg builder: Arg.named(long),
    Arg.named_and_short(long, short), Arg.short(char).
  • Arg.separator(): pass-along bound to the bare "--" token.
  • add_param(label) / add_help(text) return a new Arg (copy.replace is supported too).

- OptArg
  • partial builder holding an OptionName; single(), zero_or_more(), one_or_more(),
    switch(), interrupt() and passalong() finish the declaration.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ through read-only properties.
  • Arg and OptArg are sealed against subclassing.

Metadata (sanitized on construction)
- label / long names: non-empty strings, no whitespace, no leading dash.
- short names: one character, neither a dash nor whitespace.
- param / help: Unset | str, non-empty after trimming (stored trimmed, None when Unset).

Declarations never refer to a parser; the same Arg may be added to several.

Quick example:
    >>> from argline.arguments import Arg
    >>> Arg.positional("FILE").add_help("file to read")
    >>> Arg.named_and_short("jobs", "j").single(param="N")
    >>> Arg.named("verbose").switch()
    >>> Arg.separator()

Public API
- Enums: Kind
- Classes: Arg, OptArg
"""
import enum
import functools
import operator
import re

from .faults import *
from .names import OptionName
from .utils import *


class Kind(enum.Enum):
    """
    Declaration kind, and through it the name type and the value arity.

    Groups
    - labelled: POSITIONAL and the two trails (name is a str label).
    - trail: TRAIL_ZERO_OR_MORE, TRAIL_ONE_OR_MORE.
    - valued: the three OPTION_* kinds (name is an OptionName, values follow the flag).
    - presence: SWITCH, INTERRUPT (no values).
    - PASS_ALONG: captures every token after the flag verbatim.
    """
    POSITIONAL = "positional"
    TRAIL_ZERO_OR_MORE = "trail-zero-or-more"
    TRAIL_ONE_OR_MORE = "trail-one-or-more"
    OPTION_SINGLE = "option-single"
    OPTION_ZERO_OR_MORE = "option-zero-or-more"
    OPTION_ONE_OR_MORE = "option-one-or-more"
    SWITCH = "switch"
    INTERRUPT = "interrupt"
    PASS_ALONG = "pass-along"

    @property
    def labelled(self):
        return self in (Kind.POSITIONAL, Kind.TRAIL_ZERO_OR_MORE, Kind.TRAIL_ONE_OR_MORE)

    @property
    def trail(self):
        return self in (Kind.TRAIL_ZERO_OR_MORE, Kind.TRAIL_ONE_OR_MORE)

    @property
    def valued(self):
        return self in (Kind.OPTION_SINGLE, Kind.OPTION_ZERO_OR_MORE, Kind.OPTION_ONE_OR_MORE)

    def __repr__(self):
        return f"Kind.{self.name}"


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable, read-only records.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties using
      mirror(), backed by private "_<field>" attributes set at construction.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Seal classes created with sealed=True against subclassing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - arg(kind=Kind.SWITCH, name=OptionName('verbose', None), param=None, help=None)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_label(cls, label, /):
    """
    Internal: validate a positional or trail label.

    Raises
    - TypeError: when the label is not a string.
    - ValueError: when it is empty, contains whitespace, or starts with a dash.
    """
    if not isinstance(label, str):
        raise TypeError(f"{cls.__typename__} label must be a string")
    elif not label:
        raise ValueError(f"{cls.__typename__} label cannot be an empty-string")
    elif re.search(r"\s", label):
        raise ValueError(f"{cls.__typename__} label {label!r} cannot contain whitespace")
    elif label.startswith("-"):
        raise ValueError(f"{cls.__typename__} label {label!r} cannot start with a dash")
    return label


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the 'param' and 'help' fields.

    Both are optional. When provided they must be strings that are non-empty after
    trimming; they are stored trimmed. When Unset they become None.
    """
    for field in ("param", "help"):
        if not isinstance(value := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        metadata[field] = coalesce(value)


def _option_name(long, short, /):
    # names.py raises ValueError/TypeError with the offending name in the message
    match long, short:
        case None, None:
            raise TypeError("an optional argument needs a long name, a short name, or both")
        case _, None:
            return OptionName.of_long(long)
        case None, _:
            return OptionName.of_short(short)
        case _:
            return OptionName.of_short_and_long(short, long)


class Arg(metaclass=ArgumentType, sealed=True):
    """
    Immutable description of one expected argument.

    Properties
    - kind: Kind
    - name: str label for POSITIONAL/trails, OptionName for every other kind
    - param: str | None, the placeholder shown for values in help (e.g., "FILE")
    - help: str | None, one-line description shown in help

    Equality is structural over the four properties; declarations are hashable.
    """

    __introspectable__ = (
        "kind",
        "name",
        "param",
        "help",
    )

    def __new__(cls, kind, name, /, param=Unset, help=Unset):
        """
        Construct a declaration directly from its kind and name.

        The named constructors (positional, named, ...) are the usual entry points;
        this form exists for copy.replace() and for programmatic declaration.
        """
        if not isinstance(kind, Kind):
            raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")
        if kind.labelled:
            name = _sanitize_label(cls, name)
        elif not isinstance(name, OptionName):
            raise TypeError(f"{cls.__typename__} of kind {kind.value!r} must be named by an OptionName")

        metadata = {
            "kind": kind,
            "name": name,
            "param": param,
            "help": help,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @classmethod
    def positional(cls, label, /, *, param=Unset, help=Unset):
        """Exactly one value, bound by position."""
        return cls(Kind.POSITIONAL, label, param, help)

    @classmethod
    def optional_trail(cls, label, /, *, param=Unset, help=Unset):
        """Zero or more values collected after all positionals are filled."""
        return cls(Kind.TRAIL_ZERO_OR_MORE, label, param, help)

    @classmethod
    def required_trail(cls, label, /, *, param=Unset, help=Unset):
        """One or more values collected after all positionals are filled."""
        return cls(Kind.TRAIL_ONE_OR_MORE, label, param, help)

    @classmethod
    def named(cls, long, /):
        return OptArg(_option_name(long, None))

    @classmethod
    def named_and_short(cls, long, short, /):
        return OptArg(_option_name(long, short))

    @classmethod
    def short(cls, char, /):
        """
        Start a declaration known only by a one-character name.

        Short-only options are representable but discouraged (they cannot be
        spelled out in help or scripts); a ShortOnlyNameWarning is emitted.
        """
        name = _option_name(None, char)
        trigger(ShortOnlyNameWarning(
            "optional argument %r has no long name" % str(name),
            title="short-only name",
            code=FaultCode.SHORT_ONLY_NAME,
            name=name,
            hint="prefer Arg.named_and_short(<long>, %r) so the option can be spelled out" % char,
            docs=getdoc(FaultCode.SHORT_ONLY_NAME)
        ))
        return OptArg(name)

    @classmethod
    def separator(cls, *, param=Unset, help=Unset):
        """Pass-along bound to the bare '--' token."""
        return cls(Kind.PASS_ALONG, OptionName.END_OF_OPTIONS, param, help)

    def add_param(self, param, /):
        return self.__replace__(param=param)

    def add_help(self, help, /):
        return self.__replace__(help=help)

    def __replace__(self, /, **changes):
        fields = {name: getattr(self, name) for name in type(self).__introspectable__}
        if unknown := changes.keys() - fields.keys():
            raise TypeError(f"{type(self).__typename__} has no field(s) {", ".join(sorted(unknown))}")
        fields |= changes
        # None clears a field
        return type(self)(
            fields["kind"],
            fields["name"],
            Unset if fields["param"] is None else fields["param"],
            Unset if fields["help"] is None else fields["help"],
        )

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or hasattr(self, name):
            raise AttributeError(f"{type(self).__typename__!r} object is read-only")
        super().__setattr__(name, value)

    def __eq__(self, other, /):
        if not isinstance(other, Arg):
            return NotImplemented
        return (self.kind, self.name, self.param, self.help) == (other.kind, other.name, other.param, other.help)

    def __hash__(self):
        return hash((self.kind, self.name, self.param, self.help))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


class OptArg(metaclass=ArgumentType, sealed=True):
    """
    Partial builder for optional arguments: holds the OptionName until a kind
    is chosen. Every finisher accepts param= and help= keywords.
    """

    __introspectable__ = (
        "name",
    )

    def __new__(cls, name, /):
        if not isinstance(name, OptionName):
            raise TypeError(f"{cls.__typename__} 'name' must be an OptionName")
        self = super().__new__(cls)
        self._name = name
        return self

    def _finish(self, kind, param, help, /):
        return Arg(kind, self.name, param, help)

    def single(self, *, param=Unset, help=Unset):
        """Exactly one value follows the flag."""
        return self._finish(Kind.OPTION_SINGLE, param, help)

    def zero_or_more(self, *, param=Unset, help=Unset):
        """The run of values following the flag, possibly empty."""
        return self._finish(Kind.OPTION_ZERO_OR_MORE, param, help)

    def one_or_more(self, *, param=Unset, help=Unset):
        """The run of values following the flag, at least one."""
        return self._finish(Kind.OPTION_ONE_OR_MORE, param, help)

    def switch(self, *, help=Unset):
        """Presence-only flag."""
        return self._finish(Kind.SWITCH, Unset, help)

    def interrupt(self, *, help=Unset):
        """Presence anywhere in the input short-circuits the whole parse."""
        return self._finish(Kind.INTERRUPT, Unset, help)

    def passalong(self, *, param=Unset, help=Unset):
        """Every token after the flag is captured verbatim."""
        return self._finish(Kind.PASS_ALONG, param, help)

    def __eq__(self, other, /):
        if not isinstance(other, OptArg):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)


__all__ = (
    # Enums
    "Kind",

    # Classes (declarations)
    "Arg",
    "OptArg",
)

# The metaclass is an implementation detail of this module.
del ArgumentType
