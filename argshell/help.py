"""
argshell help renderer: a man-page-like page built from a parsed definition.

Layout
    NAME                      "<program-name> - <program-summary>" (or SUMMARY alone)
           ...
    DESCRIPTION
           ...
    OPTIONS
           --count <count>, -c <count>
               Number of runs.

               When this option is not provided it will default to '1'.

Paragraph text is normalized before wrapping: single newlines join lines,
blank lines separate paragraphs. Wrapping is delegated to rich at
settings.columns, or at the width rich detects for stderr.
Secret arguments are left out.
"""
import io
import re

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from .arguments import Kind

SHALLOW = " " * 7
DEEP = " " * 11
BULLET = DEEP + "•   "
HANGING = " " * 15

_terminal = Console(stderr=True)


def paragraphs(text, /):
    """Split free text into paragraphs, joining the lines inside each one."""
    return [
        " ".join(line.strip() for line in chunk.splitlines() if line.strip())
        for chunk in re.split(r"\n\s*\n", text.strip())
        if chunk.strip()
    ]


def _fill(console, text, initial, subsequent=None):
    subsequent = initial if subsequent is None else subsequent
    width = max(console.width - cell_len(initial), 1)
    lines = []
    for paragraph in paragraphs(text):
        if lines:
            lines.append("")
        for number, line in enumerate(Text(paragraph).wrap(console, width)):
            lines.append((subsequent if number else initial) + line.plain.rstrip())
    return lines


def flags(argument, /):
    """Help spellings of one argument: flags, negative flags and positional labels."""
    label = argument.name.lower()
    match argument.kind:
        case Kind.BOOLEAN:
            spellings = ["%s[=<true|false>]" % flag for flag in argument.flags]
            spellings.extend(argument.negatives)
        case _:
            spellings = ["%s <%s>" % (flag, label) for flag in argument.flags]
    if argument.ordinals:
        spellings.append("<%s>" % label)
    if argument.catch_all:
        spellings.append("<%s>..." % label)
    return spellings


def details(argument, /):
    """(text, bullet?) pairs describing one argument, in display order."""
    yield argument.description or "No details available.", False
    if argument.kind is Kind.CHOICE and argument.options:
        yield "The possible options are:", False
        for option in argument.options:
            if option.target is not None:
                yield "%s - Identical to '%s'" % (option.literal, option.target), True
            else:
                yield "%s - %s" % (option.literal, option.description or "No details available."), True
    match argument.kind:
        case Kind.BOOLEAN:
            yield (
                "When this option is not provided it will default to false. "
                "If provided without a value it will be set to true."
            ), False
        case _ if argument.default is not None:
            yield "When this option is not provided it will default to '%s'." % argument.default, False


def _heading(console, title, text):
    return [title, *_fill(console, text, SHALLOW), ""]


def render(definition, /, *, width=None):
    """
    Render the help page of a definition as plain text.

    width overrides settings.columns; when both are None the width rich detects
    for stderr is used.
    """
    settings = definition.settings
    if width is None:
        width = settings.columns if settings.columns is not None else _terminal.width
    console = Console(file=io.StringIO(), width=max(width, 1), color_system=None, highlight=False)

    lines = []
    if settings.program_name is not None and settings.program_summary is not None:
        lines += _heading(console, "NAME", "%s - %s" % (settings.program_name, settings.program_summary))
    elif settings.program_name is not None:
        lines += _heading(console, "NAME", settings.program_name)
    elif settings.program_summary is not None:
        lines += _heading(console, "SUMMARY", settings.program_summary)

    if settings.program_description is not None:
        lines += _heading(console, "DESCRIPTION", settings.program_description)

    if definition.arguments:
        lines.append("OPTIONS")
        for argument in definition.arguments:
            if argument.secret:
                continue
            line = ""
            for spelling in flags(argument):
                if not line:
                    line = SHALLOW + spelling
                elif cell_len(line) + cell_len(spelling) + 4 > console.width:
                    lines.append(line + ",")
                    line = SHALLOW + spelling
                else:
                    line += ", " + spelling
            lines.append(line)
            for text, bullet in details(argument):
                lines += _fill(console, text, BULLET, HANGING) if bullet else _fill(console, text, DEEP)
                lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


__all__ = (
    "paragraphs",
    "flags",
    "details",
    "render",
)
