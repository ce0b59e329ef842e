"""
argshell resolution engine: match runtime tokens against the argument definitions.

Algorithm (resolve)
- The runtime queue is processed strictly left to right. Each popped token goes
  through up to three passes, stopping at the first success:
  1. flag pass: every argument, in declaration order, is offered the token via
     consume(token, rest). A bare value-bearing flag pulls its value from `rest`.
  2. ordinal pass: the first argument whose ordinals contain the current ordinal
     counter takes the token as an explicit value.
  3. catch-all pass: the first catch-all argument that is repeated, or has no value
     yet, takes the token as an explicit value.
- No pass matched → ExtraArgumentError.
- The ordinal counter numbers every non-flag token: it advances after an ordinal
  pass success and after a catch-all pass success; flag pass matches leave it alone.
- Every match appends to that argument's value list, in arrival order. Multiplicity
  is not enforced here.

Validation (validate)
- more than one value and not repeated → MultipleValuesError
- no value and required → MissingRequiredError
- no value and a default → [default]
- no value and no default → absent from the result

evaluate(definition) chains the auto-help check, resolve and validate.
"""
import logging
from collections import deque

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


def resolve(arguments, tokens, /):
    """
    Resolve runtime tokens into raw values.

    Parameters
    - arguments: Sequence[Argument] in declaration order.
    - tokens: Iterable[str], the runtime tokens.

    Returns
    - dict[str, list[str]] mapping argument names to values in arrival order;
      arguments that matched nothing are absent.

    Raises
    - UserError subclasses (bad values, extra arguments).
    """
    tokens = deque(tokens)
    values = {}
    counter = 0
    index = 0

    while tokens:
        token = tokens.popleft()
        index += 1
        before = len(tokens)
        argument, value, via = _resolve_token(arguments, token, tokens, counter, values, index)
        if via != "flag":
            counter += 1
        logger.debug("Parsed argument %s = %s (%s)", argument.name, "<secret>" if argument.secret else repr(value), via)
        values.setdefault(argument.name, []).append(value)
        index += before - len(tokens)

    return values


def _resolve_token(arguments, token, tokens, counter, values, index):
    # Flag pass
    for argument in arguments:
        if (value := argument.consume(token, tokens, index=index)) is not None:
            return argument, value, "flag"

    # Ordinal pass
    for argument in arguments:
        if counter in argument.ordinals:
            return argument, argument.consume(Unset, deque([token]), index=index), "ordinal"

    # Catch-all pass
    for argument in arguments:
        if argument.catch_all and (argument.repeated or argument.name not in values):
            return argument, argument.consume(Unset, deque([token]), index=index), "catch-all"

    raise ExtraArgumentError(
        "extra argument %r at %s position, no catch-all available" % (token, ordinal(index)),
        title="extra argument",
        code=FaultCode.EXTRA_ARGUMENT,
        hint="remove it, or check the spelling of the flag it was meant for",
        token=token,
        index=index,
    )


def validate(arguments, values, /):
    """
    Enforce multiplicity/required constraints and apply defaults.

    Returns
    - a new dict[str, list[str]] in declaration order.

    Raises
    - MultipleValuesError, MissingRequiredError.
    """
    result = {}
    for argument in arguments:
        found = values.get(argument.name, [])
        if len(found) > 1 and not argument.repeated:
            raise MultipleValuesError(
                "multiple values for %s (%s)" % (argument.name, ", ".join(map(repr, found))),
                title="multiple values",
                code=FaultCode.MULTIPLE_VALUES,
                hint="pass %s only once" % argument.name,
                argument=argument.name,
            )
        if found:
            result[argument.name] = list(found)
        elif argument.required:
            raise MissingRequiredError(
                "missing value for %s" % argument.name,
                title="missing required argument",
                code=FaultCode.MISSING_REQUIRED,
                hint="pass %s" % (" or ".join(argument.flags) if argument.flags else "a value for %s" % argument.name),
                argument=argument.name,
            )
        elif argument.default is not None:
            logger.debug("Defaulted argument %s = %r", argument.name, argument.default)
            result[argument.name] = [argument.default]
    return result


def evaluate(definition, /):
    """
    Run a parsed definition: help check, resolution, validation.

    Raises
    - HelpRequested when auto-help is on and the runtime tokens are exactly ["--help"].
    - UserError subclasses.
    """
    settings = definition.settings
    logger.debug("Arguments %s exported to child processes", "are" if settings.export else "are not")
    if settings.prefix:
        logger.debug("All variables will be prefixed with %r", settings.prefix)
    if settings.auto_help:
        logger.debug("Help text will be printed if '--help' is found in arguments")
    for argument in definition.arguments:
        logger.debug("Definition - %s", argument.describe())

    if settings.auto_help and definition.tokens == ("--help",):
        raise HelpRequested(definition)

    logger.debug("Parsing argument values")
    return validate(definition.arguments, resolve(definition.arguments, definition.tokens))


__all__ = (
    "resolve",
    "validate",
    "evaluate",
)
