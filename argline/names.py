"""
Argline name model: flag spellings, canonical option names, and token classes.

Overview
- Spellings (FlagSpelling)
  • Short("v"): a single-character flag, written -v.
  • Long("verbose"): a word flag, written --verbose.
- OptionName
  • canonical identity of one optional argument, whichever spelling the user typed.
  • variants: long only, short and long, or short only (representable but discouraged).
  • OptionName.END_OF_OPTIONS: dedicated name whose only spelling is the bare "--" token.
- Token classes
  • Value(text): anything that does not start with a dash (a lone "-" included).
  • Flag(spelling): "--name" (name may be empty for "--") or "-x".
  • GroupedShortFlags(spellings): "-abc" → Short("a"), Short("b"), Short("c").
- classify(token): the pure tokenizer mapping one raw string to one token class.

All of these are immutable value objects: equal iff same variant and same payload,
hashable, and usable in match statements.

Quick example
    >>> classify("-vx")
    GroupedShortFlags((Short('v'), Short('x')))
    >>> classify("--")
    Flag(Long(''))
"""
import re

from .utils import Record


def _check_long(name, /):
    if not isinstance(name, str):
        raise TypeError("long flag names must be strings")
    elif not name:
        raise ValueError("long flag names cannot be empty-strings")
    elif name.startswith("-"):
        raise ValueError(f"long flag name {name!r} must be given without leading dashes")
    elif re.search(r"\s", name):
        raise ValueError(f"long flag name {name!r} cannot contain whitespace")
    return name


def _check_short(char, /):
    if not isinstance(char, str):
        raise TypeError("short flag names must be strings")
    elif len(char) != 1:
        raise ValueError(f"short flag name {char!r} must be exactly one character")
    elif char == "-" or char.isspace():
        raise ValueError(f"short flag name {char!r} must not be a dash or whitespace")
    return char


class Short(Record):
    """A one-character flag spelling, written with a single dash (-x)."""
    __slots__ = ("char",)
    __match_args__ = ("char",)

    def __init__(self, char, /):
        if not isinstance(char, str):
            raise TypeError("Short() argument must be a string")
        elif len(char) != 1:
            raise ValueError(f"Short() argument {char!r} must be exactly one character")
        self._settle(char=char)

    def __str__(self):
        return f"-{self.char}"


class Long(Record):
    """A word flag spelling, written with two dashes (--word). The word may be empty."""
    __slots__ = ("name",)
    __match_args__ = ("name",)

    def __init__(self, name, /):
        if not isinstance(name, str):
            raise TypeError("Long() argument must be a string")
        self._settle(name=name)

    def __str__(self):
        return f"--{self.name}"


class OptionName(Record):
    """
    Canonical name of an optional argument.

    Equality is by variant and payload: of_long("help") differs from
    of_short_and_long("h", "help"). Parsers resolve every spelling of a
    declared option to the one OptionName it was declared with.

    Properties
    - long / short: the payload (None when absent).
    - spellings: every FlagSpelling that denotes this option, short first.
    - key: the long name when present, else the short character.
    """
    __slots__ = ("long", "short")
    __match_args__ = ("long", "short")

    END_OF_OPTIONS = None  # Assigned below, after the class exists

    def __init__(self, long=None, short=None, /):
        if long is None and short is None:
            raise TypeError("OptionName() needs a long name, a short name, or both")
        self._settle(
            long=long if long is None else _check_long(long),
            short=short if short is None else _check_short(short),
        )

    @classmethod
    def of_long(cls, long, /):
        return cls(long)

    @classmethod
    def of_short_and_long(cls, short, long, /):
        return cls(long, short)

    @classmethod
    def of_short(cls, short, /):
        return cls(None, short)

    @property
    def spellings(self):
        if self is OptionName.END_OF_OPTIONS:
            return (Long(""),)
        spellings = []
        if self.short is not None:
            spellings.append(Short(self.short))
        if self.long is not None:
            spellings.append(Long(self.long))
        return tuple(spellings)

    @property
    def key(self):
        return self.long if self.long is not None else self.short

    def is_long(self, name, /):
        return self.long == name

    def is_short(self, char, /):
        return self.short == char

    def __str__(self):
        return " | ".join(map(str, self.spellings))

    def __reduce__(self):
        if self is OptionName.END_OF_OPTIONS:
            return "OptionName.END_OF_OPTIONS"
        return super().__reduce__()


# The bare "--" token. Built around the validation that keeps user names non-empty.
OptionName.END_OF_OPTIONS = object.__new__(OptionName)
Record._settle(OptionName.END_OF_OPTIONS, long="", short=None)


class Value(Record):
    """A token that is not flag-shaped; carried through unmodified."""
    __slots__ = ("text",)
    __match_args__ = ("text",)

    def __init__(self, text, /):
        self._settle(text=text)

    def __str__(self):
        return self.text


class Flag(Record):
    """A token naming exactly one flag spelling (-x, --word, or the bare --)."""
    __slots__ = ("spelling",)
    __match_args__ = ("spelling",)

    def __init__(self, spelling, /):
        self._settle(spelling=spelling)

    def __str__(self):
        return str(self.spelling)


class GroupedShortFlags(Record):
    """A token packing several short switches behind one dash (-abc)."""
    __slots__ = ("spellings",)
    __match_args__ = ("spellings",)

    def __init__(self, spellings, /):
        self._settle(spellings=tuple(spellings))

    def __str__(self):
        return "-" + "".join(spelling.char for spelling in self.spellings)


def classify(token, /):
    """
    Classify one raw command-line token.

    Rules, checked in order
    1. starts with "--"             → Flag(Long(rest)); rest may be empty ("--").
    2. "-" plus exactly one char    → Flag(Short(char)).
    3. "-" plus two or more chars   → GroupedShortFlags, one Short per char, left to right.
    4. anything else (including "-") → Value(token), unmodified.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if token.startswith("--"):
        return Flag(Long(token[2:]))
    if token.startswith("-"):
        if len(token) == 2:
            return Flag(Short(token[1]))
        if len(token) > 2:
            return GroupedShortFlags(map(Short, token[1:]))
    return Value(token)


__all__ = (
    "Short",
    "Long",
    "OptionName",
    "Value",
    "Flag",
    "GroupedShortFlags",
    "classify",
)
