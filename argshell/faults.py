"""
argshell faults (errors and control signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so messages stay consistent and logs stay searchable.
- Fault: base type that carries message + options and knows how to render itself
  in a friendly, lowercased and actionable way.
- DefinitionError / UserError: the two fault families. Each maps to a distinct
  process exit code so scripts can tell "the definition is broken" apart from
  "the invoker typed something wrong".
- HelpRequested: not an error; a control signal meaning "render help and exit".
- trigger(): central entry point to surface any fault (respecting shell/deferred/colorful/fancy).

UX goals
- Position-first messages for runtime input: every message about a runtime token
  includes its ordinal position ("extra argument 'x' at third position").
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The definition parser and the resolution engine raise faults directly.
- The front end catches them and calls trigger(fault, shell=True, ...) to render
  them with rich on stderr; the --color and --fancy settings turn on the styled
  palette and the boxed panel."""
import copy
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)

HELP_EXIT = 1
DEFINITION_EXIT = 2
USER_EXIT = 3

STYLES = {
    "prog-name": "bold #D7DAE0",
    "code": "bold #5FD7FF",
    "error-title": "bold #FF5F87",
    "error-message": "#BCC0C8",
    "hint-arrow": "dim #87D787",
    "hint": "italic #87D787",
}


class FaultCode(IntEnum):
    """
    canonical fault codes used across argshell (stable identifiers).

    grouping (by high-level domain)
    - definition errors (2xxxx): the script author wrote an invalid definition.
      • attribute values (2110x): MISSING_ATTRIBUTE_VALUE, MALFORMED_ORDINAL, MALFORMED_COLUMNS
      • markers (2111x): UNKNOWN_MARKER
      • argument shape (2112x): UNNAMED_ARGUMENT, UNREACHABLE_ARGUMENT, FORBIDDEN_ATTRIBUTE
      • definition set (2113x): DUPLICATE_NAME, MULTIPLE_CATCH_ALL
    - user errors (3xxxx): the invoker supplied bad runtime input.
      • values (3110x/3111x): MISSING_VALUE, INVALID_BOOLEAN, INVALID_INTEGER,
        INVALID_FLOAT, INVALID_CHOICE
      • tokens (3112x): EXTRA_ARGUMENT
      • multiplicity (3113x): MULTIPLE_VALUES, MISSING_REQUIRED

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- definition errors (2xxxx) ---
    MISSING_ATTRIBUTE_VALUE     = 21101
    MALFORMED_ORDINAL           = 21102
    MALFORMED_COLUMNS           = 21103
    UNKNOWN_MARKER              = 21111
    UNNAMED_ARGUMENT            = 21121
    UNREACHABLE_ARGUMENT        = 21122
    FORBIDDEN_ATTRIBUTE         = 21123
    DUPLICATE_NAME              = 21131
    MULTIPLE_CATCH_ALL          = 21132

    # --- user errors (3xxxx) ---
    MISSING_VALUE               = 31101
    INVALID_BOOLEAN             = 31111
    INVALID_INTEGER             = 31112
    INVALID_FLOAT               = 31113
    INVALID_CHOICE              = 31114
    EXTRA_ARGUMENT              = 31121
    MULTIPLE_VALUES             = 31131
    MISSING_REQUIRED            = 31132

    def normalize(self):
        """
        label shown in fault headers: the number, unless __main__.__codes__ maps
        this member to something friendlier.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Fault(Exception):
    """
    base fault: a message plus read-only rendering/context options.

    options commonly carried
    - title, code, hint: header and guidance lines.
    - argument: the Argument (or name) the fault is about.
    - token/index: the offending runtime token and its 1-based position.
    - shell, colorful, fancy, deferred, program: surfacing options merged by trigger().
    """
    exit_code = 1

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        styles = STYLES | getattr(main, "__styles__", {})
        colorful = self.options.get("colorful", False)

        def part(fragment, role):
            return Text(str(fragment), styles.get(role, "") if colorful else "")

        code = self.options.get("code")
        program = self.options.get("program", getattr(main, "__prog__", "argshell"))
        title = self.options.get("title", type(self).__name__)

        header = Text.assemble(
            "[ ",
            part(program, "prog-name"),
            " — ",
            part(code.normalize() if code else "?", "code"),
            " | ",
            part(title.title(), "error-title"),
            " ]",
        )
        body = [part(self, "error-message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(part(" → ", "hint-arrow"), part(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(self.exit_code)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DefinitionError(Fault):
    """the argument author wrote an invalid definition (always fatal, reported before resolution)."""
    exit_code = DEFINITION_EXIT


class UserError(Fault):
    """the invoker supplied bad runtime input."""
    exit_code = USER_EXIT


class MissingAttributeValueError(DefinitionError): ...
class MalformedOrdinalError(DefinitionError): ...
class MalformedColumnsError(DefinitionError): ...
class UnknownMarkerError(DefinitionError): ...
class UnnamedArgumentError(DefinitionError): ...
class UnreachableArgumentError(DefinitionError): ...
class ForbiddenAttributeError(DefinitionError): ...
class DuplicateNameError(DefinitionError): ...
class MultipleCatchAllError(DefinitionError): ...

class MissingValueError(UserError): ...
class InvalidBooleanError(UserError): ...
class InvalidIntegerError(UserError): ...
class InvalidFloatError(UserError): ...
class InvalidChoiceError(UserError): ...
class ExtraArgumentError(UserError): ...
class MultipleValuesError(UserError): ...
class MissingRequiredError(UserError): ...


class HelpRequested(Exception):
    """
    control signal: the invoker asked for help, render it and exit.

    carries the parsed definition so the caller can hand it to the help renderer.
    """
    exit_code = HELP_EXIT

    def __init__(self, definition, /):
        super().__init__("help requested")
        self.definition = definition


def trigger(fault, /, **options):
    """
    surface a fault after merging runtime options into it.

    the fault is re-created through copy.replace() with `options` (shell, deferred,
    colorful, fancy, program) and then asked to __trigger__ itself: outside shell
    mode it is raised, inside it is printed on stderr and, unless deferred, ends
    the process with the fault's exit code.
    """
    if not all(callable(getattr(fault, hook, None)) for hook in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "HELP_EXIT",
    "DEFINITION_EXIT",
    "USER_EXIT",
    "FaultCode",
    "Fault",
    "DefinitionError",
    "UserError",
    "MissingAttributeValueError",
    "MalformedOrdinalError",
    "MalformedColumnsError",
    "UnknownMarkerError",
    "UnnamedArgumentError",
    "UnreachableArgumentError",
    "ForbiddenAttributeError",
    "DuplicateNameError",
    "MultipleCatchAllError",
    "MissingValueError",
    "InvalidBooleanError",
    "InvalidIntegerError",
    "InvalidFloatError",
    "InvalidChoiceError",
    "ExtraArgumentError",
    "MultipleValuesError",
    "MissingRequiredError",
    "HelpRequested",
    "trigger",
)
