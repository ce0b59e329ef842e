"""
argshell command line front end.

    eval "$(argshell --bool verbose v --int count c --default 1 -- "$@")"

stdout receives shell code only (assignments, help pages, failure reports);
diagnostics and the --debug trace go to stderr through rich.

Exit codes: 0 success, 1 help shown, 2 broken definition, 3 bad runtime input.
The same code is left as the status of the eval'd script.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from . import help, shell
from .definitions import parse
from .faults import *
from .resolution import evaluate

logger = logging.getLogger(__package__)


def configure(debug, /):
    """Route the package loggers to a rich handler on stderr when tracing is enabled."""
    if not debug or any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return
    logger.addHandler(RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG)


def emit(lines, /):
    for line in lines:
        print(line)


def report(fault, /, *, program="argshell", colorful=False, fancy=False):
    """Write a fault both as shell code (stdout) and as a rich render (stderr); return its exit code."""
    emit(shell.failure(fault, program=program))
    trigger(fault, shell=True, deferred=True, program=program, colorful=colorful, fancy=fancy)
    return fault.exit_code


def main(argv=None, /):
    argv = sys.argv[1:] if argv is None else list(argv)

    try:
        definition = parse(argv)
    except DefinitionError as fault:
        return report(fault)

    settings = definition.settings
    configure(settings.debug)
    program = settings.program_name or "argshell"

    try:
        values = evaluate(definition)
    except HelpRequested as signal:
        emit(shell.help_script(help.render(signal.definition)))
        emit(shell.status(signal.exit_code))
        return signal.exit_code
    except Fault as fault:
        return report(fault, program=program, colorful=settings.colorful, fancy=settings.fancy)

    emit(shell.assignments(definition.arguments, values, settings))
    if settings.help_function is not None:
        emit(shell.help_function(settings.help_function, help.render(definition)))
    logger.debug("argshell completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
