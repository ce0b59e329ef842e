"""
argshell shell emitter: turn resolved values, help pages and faults into shell code
for the caller to eval.

Every function yields source lines without trailing newlines.

Assignments
- non-repeated:  NAME=value
- repeated:      NAME=<count>, then NAME_0=value, NAME_1=value, ...
- names carry settings.prefix; lines start with "export " when settings.export.
- values are quoted with shlex.quote, so they survive eval unchanged.

Help
- help_script(text) runs in a subshell and pipes a quoted here-document through
  ${PAGER:-less -R}; nothing inside the text is expanded by the shell.
- help_function(name, text) wraps the same script in a shell function.

Faults
- failure(fault) echoes the message and sets the exit status with ( exit <code> ).
"""
import logging
import shlex

logger = logging.getLogger(__name__)

DELIMITER = "ARGSHELL_HELP"


def _assign(settings, name, value, secret=False):
    name = settings.prefix + name
    logger.debug("Setting %s = %s", name, "<secret>" if secret else repr(value))
    return "%s%s=%s" % ("export " if settings.export else "", name, shlex.quote(value))


def assignments(arguments, values, settings, /):
    """
    Yield one assignment line per variable, in declaration order.

    values is the mapping returned by validate(): defaults are already applied
    and arguments without any value are absent.
    """
    for argument in arguments:
        if (found := values.get(argument.name)) is None:
            continue
        if argument.repeated:
            yield _assign(settings, argument.name, str(len(found)), False)
            for number, value in enumerate(found):
                yield _assign(settings, "%s_%d" % (argument.name, number), value, argument.secret)
        else:
            yield _assign(settings, argument.name, found[0], argument.secret)


def help_script(text, /):
    """Yield a subshell that pages the given help text."""
    yield "("
    yield 'HELP_PAGER="${PAGER:-less -R}"'
    yield "$HELP_PAGER <<'%s'" % DELIMITER
    yield from text.rstrip("\n").split("\n")
    yield DELIMITER
    yield ")"


def help_function(name, text, /):
    """Yield a shell function named `name` that pages the given help text."""
    logger.debug("Defining help function %s", name)
    yield "%s () {" % name
    yield from help_script(text)
    yield "}"


def failure(fault, /, *, program="argshell"):
    """Yield the lines reporting a fault to the eval'ing shell and setting its exit status."""
    yield 'echo ""'
    yield "echo %s" % shlex.quote("!!! %s error: %s !!!" % (program, fault))
    yield 'echo ""'
    yield "( exit %d )" % fault.exit_code


def status(code, /):
    """Yield the line that leaves `code` as the exit status of the eval."""
    yield "( exit %d )" % code


__all__ = (
    "assignments",
    "help_script",
    "help_function",
    "failure",
    "status",
)
