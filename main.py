from rich import print
from rich.pretty import pprint

from argline import *

__prog__ = "argline-demo"


def build():
    parser = Parser()
    parser.add_many([
        Arg.positional("foo", help="the first input"),
        Arg.required_trail("bar", help="one or more further inputs"),
        Arg.named_and_short("verbose", "v").switch(help="print more"),
        Arg.named_and_short("exclude", "x").single(param="PATTERN", help="skip inputs matching PATTERN"),
        Arg.named_and_short("extra", "e").zero_or_more(help="extra flags for the run"),
        Arg.named_and_short("add", "a").one_or_more(help="items to add"),
        Arg.separator(help="arguments handed to the child process"),
    ])
    parser.add_default_help_interrupt()
    parser.add_default_version_interrupt()
    return parser


if __name__ == '__main__':
    parser = build()
    try:
        outcome = parser.parse()
    except ParseError as error:
        trigger(error, shell=True)
    else:
        match outcome:
            case Interrupted(name) if name.is_short("h"):
                print(render_help(parser))
            case Interrupted(name) if name.is_long("version"):
                print(f"{__prog__} {__import__('argline').__version__}")
            case Parsed(arguments):
                pprint(arguments)
