"""
argshell definition parser: turn the definition token stream into arguments + settings.

The stream is read once, left to right, until "--" (or its end):

    --bool verbose v --int count c --default 1 --prefix APP_ --export -- "$@"

Kind markers
- --boolean/--bool, --integer/--int, --float/--number, --string/--str, --choice/--pick
  Each is followed by that kind's attributes (see argshell.arguments.build).

Global settings
- --autohelp/--auto-help          render help when the runtime tokens are exactly ["--help"]
- --help-function <fn>            also emit a shell function printing the help text
- --prefix <p>                    prefix every emitted variable name
- --export                        emit "export NAME=..." instead of "NAME=..."
- --debug                         enable the debug trace
- --color/--colour                 render faults on stderr with the styled palette
- --fancy                         render faults on stderr inside a boxed panel
- --columns/--cols <n>            help width
- --program-name <s>, --program-summary <s>, --program-description <s>

Anything else at the top level is a DefinitionError: it is a bug in the script's
definition, not bad runtime input. Once every argument is built, the set is
validated as a whole (unique names, at most one catch-all).
"""
import difflib
import re
from collections import deque

from .arguments import ArgumentType, Kind, build, take
from .faults import *
from .utils import *

_KINDS = {
    "--boolean": Kind.BOOLEAN,
    "--bool": Kind.BOOLEAN,
    "--integer": Kind.INTEGER,
    "--int": Kind.INTEGER,
    "--float": Kind.FLOAT,
    "--number": Kind.FLOAT,
    "--string": Kind.STRING,
    "--str": Kind.STRING,
    "--choice": Kind.CHOICE,
    "--pick": Kind.CHOICE,
}

_MARKERS = (
    *_KINDS,
    "--autohelp",
    "--auto-help",
    "--help-function",
    "--prefix",
    "--export",
    "--debug",
    "--color",
    "--colour",
    "--fancy",
    "--columns",
    "--cols",
    "--program-name",
    "--program-summary",
    "--program-description",
)


class Settings(metaclass=ArgumentType):
    """
    Global settings read from the definition stream.

    None of these take part in resolution; they shape emission, help and tracing.
    columns is None when the help width should be detected from the terminal.
    """

    __introspectable__ = (
        "auto_help",
        "help_function",
        "prefix",
        "export",
        "debug",
        "colorful",
        "fancy",
        "columns",
        "program_name",
        "program_summary",
        "program_description",
    )

    def __new__(
            cls,
            *,
            auto_help=False,
            help_function=None,
            prefix="",
            export=False,
            debug=False,
            colorful=False,
            fancy=False,
            columns=None,
            program_name=None,
            program_summary=None,
            program_description=None,
    ):
        self = super().__new__(cls)
        self._auto_help = bool(auto_help)
        self._help_function = help_function
        self._prefix = prefix or ""
        self._export = bool(export)
        self._debug = bool(debug)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._columns = columns
        self._program_name = program_name
        self._program_summary = program_summary
        self._program_description = program_description
        return self


class Definition(metaclass=ArgumentType):
    """
    Outcome of parsing: the ordered arguments, the global settings and the
    runtime tokens found after "--".
    """

    __introspectable__ = (
        "arguments",
        "settings",
        "tokens",
    )

    def __new__(cls, arguments, settings=Unset, tokens=(), /):
        self = super().__new__(cls)
        self._arguments = tuple(arguments)
        self._settings = coalesce(settings, Settings())
        self._tokens = tuple(tokens)
        return self


def _columns(marker, value):
    if not re.fullmatch(r"\+?[0-9]+", value):
        raise MalformedColumnsError(
            "non-numeric value %r provided for number of columns" % value,
            title="malformed columns",
            code=FaultCode.MALFORMED_COLUMNS,
            hint="use a positive number (for example: %s 80)" % marker,
            marker=marker,
            token=value,
        )
    return int(value)


def verify(arguments, /):
    """
    Check invariants that span the whole definition set.

    - names are unique (DuplicateNameError)
    - at most one catch-all argument (MultipleCatchAllError)
    """
    seen = set()
    for argument in arguments:
        if argument.name in seen:
            raise DuplicateNameError(
                "more than one argument is named %s" % argument.name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="give one of them a distinct --name",
                argument=argument.name,
            )
        seen.add(argument.name)

    if len(catch_alls := [argument.name for argument in arguments if argument.catch_all]) > 1:
        raise MultipleCatchAllError(
            "more than one catch-all argument found: %s" % ", ".join(catch_alls),
            title="multiple catch-all arguments",
            code=FaultCode.MULTIPLE_CATCH_ALL,
            hint="keep --catch-all on a single argument (make it --repeated to collect many values)",
            arguments=tuple(catch_alls),
        )


def parse(tokens, /):
    """
    Parse a full definition stream.

    Parameters
    - tokens: Iterable[str]
      Definition tokens, optionally followed by "--" and the runtime tokens.

    Returns
    - Definition(arguments, settings, runtime tokens)

    Raises
    - DefinitionError subclasses; definitions are parsed completely before any
      runtime token is looked at.
    """
    tokens = deque(tokens)
    arguments = []
    settings = {}

    while tokens:
        match token := tokens.popleft():
            case "--":
                break
            case _ if token in _KINDS:
                arguments.append(build(_KINDS[token], tokens))
            case "--autohelp" | "--auto-help":
                settings["auto_help"] = True
            case "--help-function":
                settings["help_function"] = take(tokens, token, "help function name")
            case "--prefix":
                settings["prefix"] = take(tokens, token, "argument name prefix")
            case "--export":
                settings["export"] = True
            case "--debug":
                settings["debug"] = True
            case "--color" | "--colour":
                settings["colorful"] = True
            case "--fancy":
                settings["fancy"] = True
            case "--columns" | "--cols":
                settings["columns"] = _columns(token, take(tokens, token, "number of columns"))
            case "--program-name":
                settings["program_name"] = take(tokens, token, "program name")
            case "--program-summary":
                settings["program_summary"] = take(tokens, token, "program summary")
            case "--program-description":
                settings["program_description"] = take(tokens, token, "program description")
            case _:
                suggestions = difflib.get_close_matches(token, _MARKERS, 3)
                try:
                    hint = "did you mean %r? markers must come before the '--' separator" % suggestions[0]
                except IndexError:
                    hint = "check the definition; runtime arguments belong after the '--' separator"
                raise UnknownMarkerError(
                    "unrecognized option: %s" % token,
                    title="unknown marker",
                    code=FaultCode.UNKNOWN_MARKER,
                    hint=hint,
                    token=token,
                    suggestions=tuple(suggestions),
                )

    verify(arguments)
    return Definition(arguments, Settings(**settings), tokens)


__all__ = (
    "Settings",
    "Definition",
    "parse",
    "verify",
)
