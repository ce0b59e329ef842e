r"""
argshell argument specifications, attribute parsing and value coercion.

Overview
- Kind: the closed set of argument kinds (boolean, integer, float, string, choice).
  Behavior is dispatched with `match` over the kind; there is no subclass per kind.
- Choice: one entry of a choice table (literal, alias target, description).
- Draft: mutable builder that parses the shared attribute grammar from a token
  queue, then finalizes into an immutable Argument.
- Argument: immutable specification; consume(token, tokens) matches a runtime
  token and returns the coerced value string.
- build(kind, tokens): per-kind constructor loop (shared attributes plus the
  kind-specific ones: --option/--map/--options for choices, --negative-flag for
  booleans).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__/__displayable__.

Shared attribute grammar (Draft.parse)
- --required, --secret, --repeated/--repeat, --catch-all
- --ordinal/--order/--ord <n>   position among non-flag tokens (0..65535)
- --name <n>, --default <v>, --description/--desc <v>
- --flag <f>                    flag recorded verbatim
- bare token                    implicit flag: "v" → "-v", "verbose" → "--verbose"
- any other "-..." token        not consumed, handed back to the caller

Validation highlights (DefinitionError)
- An argument needs a name: an explicit --name or at least one flag.
- An argument must be reachable: a flag, an ordinal, or catch-all.
- Boolean arguments cannot be repeated, catch-all or ordinal.

Quick example:
    >>> from collections import deque
    >>> from argshell.arguments import build
    >>> count = build("integer", deque(["count", "c", "--default", "1"]))
    >>> count.consume("-c", deque(["5"]))
    '5'
    >>> count.consume("--count=+07", deque())
    '7'

Public API
- Classes: Kind, Choice, Draft, Argument
- Functions: build, flagify
"""
import enum
import functools
import math
import operator
import re
from collections import namedtuple
from decimal import Decimal

from .faults import *
from .utils import *


class Kind(enum.Enum):
    """The five argument kinds; fixed and closed."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    CHOICE = "choice"


Choice = namedtuple("Choice", ("literal", "target", "description"), defaults=(None, None))
Choice.__doc__ = """
One entry of a choice table.

- literal: the spelling the invoker types.
- target: None when the literal itself is accepted; otherwise the canonical value
  the literal is an alias for.
- description: optional help text for accepted literals.
"""

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf|infinity|nan)", re.IGNORECASE)


def flagify(token, /):
    """
    Normalize a bare definition token into a flag spelling.

    Tokens already starting with "-" are kept verbatim; single characters get a
    short prefix ("v" → "-v"); anything longer gets a long prefix ("verbose" → "--verbose").
    """
    if token.startswith("-"):
        return token
    return ("-" if len(token) == 1 else "--") + token


def take(tokens, marker, what, /):
    """
    Pop the value that must follow a definition marker.

    Raises MissingAttributeValueError when the queue is exhausted.
    """
    try:
        return tokens.popleft()
    except IndexError:
        raise MissingAttributeValueError(
            "%s must be provided after %s" % (what, marker),
            title="missing attribute value",
            code=FaultCode.MISSING_ATTRIBUTE_VALUE,
            hint="add a value right after %s (for example: %s <value>)" % (marker, marker),
            marker=marker,
        ) from None


def _where(index):
    return " at %s position" % ordinal(index) if index else ""


class ArgumentType(type):
    """
    Metaclass that turns argument specs into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and debug output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='VERBOSE', kind=<Kind.BOOLEAN: 'boolean'>, flags=('--verbose', '-v'), ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_shape(cls, metadata, /):
    """
    Internal: enforce the structural invariants of one argument.

    - name: non-empty string made of [A-Z0-9_] (already constantized by the builder).
    - reachability: at least one flag (or negative flag), an ordinal, or catch-all.
    - boolean arguments cannot be repeated, catch-all or ordinal.
    - negative flags belong to boolean arguments only. build() never hands them to
      another kind (it stops at --negative-flag there), so this check guards
      direct Argument(...) construction.
    - ordinals fit an unsigned 16-bit integer.
    """
    name = metadata["name"]
    if not isinstance(name, str) or not re.fullmatch(r"[A-Z0-9_]+", name):
        raise UnnamedArgumentError(
            "%s name %r is not a usable variable name" % (cls.__typename__, name),
            title="unnamed argument",
            code=FaultCode.UNNAMED_ARGUMENT,
            hint="use --name with letters or digits (for example: --name COUNT)",
        )

    if not (metadata["flags"] or metadata["negatives"] or metadata["catch_all"] or metadata["ordinals"]):
        raise UnreachableArgumentError(
            "%s argument can not be set - no flags, no ordinal, and not a catch-all argument" % name,
            title="unreachable argument",
            code=FaultCode.UNREACHABLE_ARGUMENT,
            hint="add a flag, an --ordinal <n> or --catch-all to %s" % name,
            argument=name,
        )

    if metadata["kind"] is Kind.BOOLEAN:
        for attribute, marker in (("repeated", "--repeated"), ("catch_all", "--catch-all"), ("ordinals", "--ordinal")):
            if metadata[attribute]:
                raise ForbiddenAttributeError(
                    "boolean argument %s cannot use %s" % (name, marker),
                    title="forbidden attribute",
                    code=FaultCode.FORBIDDEN_ATTRIBUTE,
                    hint="remove %s from %s or declare it with another kind" % (marker, name),
                    argument=name,
                )
    elif metadata["negatives"]:
        raise ForbiddenAttributeError(
            "only boolean arguments can declare negative flags (%s)" % name,
            title="forbidden attribute",
            code=FaultCode.FORBIDDEN_ATTRIBUTE,
            hint="remove --negative-flag from %s" % name,
            argument=name,
        )

    for position in metadata["ordinals"]:
        if not isinstance(position, int) or not 0 <= position <= 0xFFFF:
            raise MalformedOrdinalError(
                "ordinal position must be an integer between 0 and 65,535",
                title="malformed ordinal",
                code=FaultCode.MALFORMED_ORDINAL,
                hint="use a small non-negative number (for example: --ordinal 0)",
                argument=name,
            )


class Argument(metaclass=ArgumentType):
    """
    Immutable specification of one declared argument.

    Fields (read-only properties)
    - name: unique key, also the shell variable name (before prefixing).
    - kind: Kind member; immutable after construction.
    - flags: flag spellings in declaration order.
    - negatives: boolean-only flags that resolve to "false".
    - options: choice-only tuple of Choice entries, in declaration order.
    - default / description: optional strings.
    - required / secret / repeated / catch_all: independent switches.
    - ordinals: frozenset of positions among non-flag tokens.
    """

    __introspectable__ = (
        "name",
        "kind",
        "flags",
        "negatives",
        "options",
        "default",
        "description",
        "required",
        "secret",
        "repeated",
        "catch_all",
        "ordinals",
    )

    __displayable__ = (
        "name",
        "kind",
        "flags",
        "default",
        "required",
        "repeated",
        "catch_all",
        "ordinals",
    )

    def __new__(
            cls,
            name,
            kind,
            /,
            flags=(),
            *,
            negatives=(),
            options=(),
            default=None,
            description=None,
            required=False,
            secret=False,
            repeated=False,
            catch_all=False,
            ordinals=(),
    ):
        metadata = {
            "name": name,
            "kind": Kind(kind),
            "flags": tuple(flags),
            "negatives": tuple(negatives),
            "options": tuple(Choice(*option) for option in options),
            "default": default,
            "description": description,
            "required": bool(required),
            "secret": bool(secret),
            "repeated": bool(repeated),
            "catch_all": bool(catch_all),
            "ordinals": frozenset(ordinals),
        }
        _sanitize_shape(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def describe(self):
        """Terse one-line summary used by the debug trace."""
        parts = ["type: %s" % self._kind.value.title(), "name: %s" % self._name, "flags: %s" % ", ".join(self._flags)]
        if self._negatives:
            parts.append("negative flags: %s" % ", ".join(self._negatives))
        if self._ordinals:
            parts.append("ordinals: %s" % ", ".join(map(str, sorted(self._ordinals))))
        parts.extend(label for label, enabled in (
            ("required", self._required),
            ("repeated", self._repeated),
            ("secret", self._secret),
            ("catch-all", self._catch_all),
        ) if enabled)
        if self._default is not None:
            parts.append("default: %s" % self._default)
        if self._description is not None:
            parts.append("description: %s" % self._description)
        if self._options:
            parts.append("options: %s" % ", ".join(
                option.literal if option.target is None else "%s -> %s" % (option.literal, option.target)
                for option in self._options
            ))
        return "; ".join(parts)

    def _match(self, token):
        # (flag, inline value or None) when the name part of the token is one of our flags
        flag, separator, value = token.partition("=")
        if flag in self._flags or flag in self._negatives:
            return flag, value if separator else None
        return None

    def _pop(self, tokens, flag, index):
        try:
            return tokens.popleft()
        except IndexError:
            raise MissingValueError(
                "no value provided for argument %s%s" % (self._name, _where(index)),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value after %s (for example: %s <value> or %s=<value>)" % (flag, flag, flag)
                if flag else "pass a value for %s" % self._name,
                argument=self._name,
                token=flag,
                index=index,
            ) from None

    def consume(self, token, tokens, /, *, index=Unset):
        """
        Try to consume a runtime token.

        Parameters
        - token: str | Unset
          A candidate token ("--count", "--count=5", "-v"), or Unset for the
          explicit-value form used by the ordinal and catch-all passes, in which
          case the value is the next item of `tokens`.
        - tokens: deque[str]
          The rest of the runtime queue; a bare value-bearing flag pops its value from it.
        - index: Unset | int
          1-based position of `token`, only used to word fault messages.

        Returns
        - None when the token is not one of this argument's flags.
        - The coerced value string otherwise.

        Raises
        - UserError subclasses when a value is missing or cannot be coerced.
        """
        if token is Unset:
            flag, inline = None, self._pop(tokens, None, index)
        elif (matched := self._match(token)) is None:
            return None
        else:
            flag, inline = matched

        match self._kind:
            case Kind.BOOLEAN:
                value = "true" if inline is None else self._coerce(inline, index)
                if flag in self._negatives:
                    value = "false" if value == "true" else "true"
                return value
            case _:
                if inline is None:
                    # spaced form: the value is the next token
                    if index:
                        index += 1
                    inline = self._pop(tokens, flag, index)
                return self._coerce(inline, index)

    def _coerce(self, raw, index):
        match self._kind:
            case Kind.BOOLEAN:
                if raw in ("true", "false"):
                    return raw
                raise InvalidBooleanError(
                    "non-boolean value %r provided for argument %s%s" % (raw, self._name, _where(index)),
                    title="invalid boolean",
                    code=FaultCode.INVALID_BOOLEAN,
                    hint="use %s=true or %s=false" % (self._flags[0], self._flags[0]) if self._flags else "use true or false",
                    argument=self._name,
                    token=raw,
                    index=index,
                )
            case Kind.INTEGER:
                if _INTEGER.fullmatch(raw) and -2 ** 63 <= (number := int(raw)) < 2 ** 63:
                    return str(number)
                raise InvalidIntegerError(
                    "non-integer value %r provided for argument %s%s" % (raw, self._name, _where(index)),
                    title="invalid integer",
                    code=FaultCode.INVALID_INTEGER,
                    hint="use a whole number between -9223372036854775808 and 9223372036854775807",
                    argument=self._name,
                    token=raw,
                    index=index,
                )
            case Kind.FLOAT:
                if _FLOAT.fullmatch(raw):
                    return _format_float(float(raw))
                raise InvalidFloatError(
                    "non-numeric value %r provided for argument %s%s" % (raw, self._name, _where(index)),
                    title="invalid number",
                    code=FaultCode.INVALID_FLOAT,
                    hint="use a number such as 3, -0.5 or 1e3",
                    argument=self._name,
                    token=raw,
                    index=index,
                )
            case Kind.STRING:
                return raw
            case Kind.CHOICE:
                for option in self._options:
                    if option.literal == raw:
                        return option.literal if option.target is None else option.target
                raise InvalidChoiceError(
                    "value %r not recognized for argument %s%s" % (raw, self._name, _where(index)),
                    title="invalid choice",
                    code=FaultCode.INVALID_CHOICE,
                    hint="choose one of: %s" % ", ".join(repr(option.literal) for option in self._options)
                    if self._options else "%s accepts no values" % self._name,
                    argument=self._name,
                    token=raw,
                    index=index,
                )


def _format_float(number):
    """Render a float in plain positional notation without a trailing ".0"."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Draft:
    """
    Mutable builder for the attributes every kind shares.

    parse() consumes attribute tokens in place; build() finalizes the draft into an
    immutable Argument. A Draft is used once, by build(kind, tokens).
    """

    def __init__(self):
        self.name = None
        self.flags = []
        self.default = None
        self.description = None
        self.required = False
        self.secret = False
        self.repeated = False
        self.catch_all = False
        self.ordinals = []

    def parse(self, tokens, /):
        """
        Consume shared attribute tokens from the front of `tokens`.

        Returns
        - None when the queue is exhausted.
        - The first "-..." token that is not a shared attribute (already popped);
          the caller either handles it as a kind-specific attribute or pushes it back.

        Raises
        - MissingAttributeValueError / MalformedOrdinalError.
        """
        while tokens:
            match token := tokens.popleft():
                case "--required":
                    self.required = True
                case "--secret":
                    self.secret = True
                case "--repeated" | "--repeat":
                    self.repeated = True
                case "--catch-all":
                    self.catch_all = True
                case "--ordinal" | "--order" | "--ord":
                    value = take(tokens, token, "ordinal position")
                    if not re.fullmatch(r"\+?[0-9]+", value) or int(value) > 0xFFFF:
                        raise MalformedOrdinalError(
                            "ordinal position must be an integer between 0 and 65,535, got %r" % value,
                            title="malformed ordinal",
                            code=FaultCode.MALFORMED_ORDINAL,
                            hint="use a small non-negative number (for example: %s 0)" % token,
                            marker=token,
                            token=value,
                        )
                    self.ordinals.append(int(value))
                case "--name":
                    self.name = take(tokens, token, "name")
                case "--default":
                    self.default = take(tokens, token, "default value")
                case "--description" | "--desc":
                    self.description = take(tokens, token, "description")
                case "--flag":
                    self.flags.append(take(tokens, token, "flag name"))
                case _ if token.startswith("-"):
                    return token
                case _:
                    self.flags.append(flagify(token))
        return None

    def build(self, kind, /, *, options=(), negatives=()):
        """
        Finalize into an Argument.

        The name is the explicit --name when given, otherwise the first flag (or
        negative flag); either way it is normalized with constantize().
        """
        source = self.name if self.name is not None else next(iter([*self.flags, *negatives]), None)
        if source is None:
            raise UnnamedArgumentError(
                "no name or flags provided for %s argument" % Kind(kind).value,
                title="unnamed argument",
                code=FaultCode.UNNAMED_ARGUMENT,
                hint="add a flag or a --name to the argument",
            )
        return Argument(
            constantize(source),
            kind,
            self.flags,
            negatives=negatives,
            options=options,
            default=self.default,
            description=self.description,
            required=self.required,
            secret=self.secret,
            repeated=self.repeated,
            catch_all=self.catch_all,
            ordinals=self.ordinals,
        )


def build(kind, tokens, /):
    """
    Build one argument of `kind` from the front of the definition queue.

    Shared attributes are parsed by Draft.parse; the kind-specific attributes are
    handled here:
    - choice: --option <literal> [<description>], --map <from> <to>,
      --options <literal>... (until the next "-..." token)
    - boolean: --negative-flag/--negative <flag>

    The first token that belongs to neither grammar is pushed back onto the queue
    and building stops.
    """
    kind = Kind(kind)
    draft = Draft()
    options = []
    negatives = []

    while (token := draft.parse(tokens)) is not None:
        match kind, token:
            case Kind.CHOICE, "--option":
                literal = take(tokens, token, "option")
                description = None
                if tokens and not tokens[0].startswith("-"):
                    description = tokens.popleft()
                options.append(Choice(literal, None, description))
            case Kind.CHOICE, "--map":
                source = take(tokens, token, "pair of values (from, to)")
                target = take(tokens, token, "pair of values (from, to)")
                options.append(Choice(source, target))
            case Kind.CHOICE, "--options":
                options.append(Choice(take(tokens, token, "at least one option")))
                while tokens and not tokens[0].startswith("-"):
                    options.append(Choice(tokens.popleft()))
            case Kind.BOOLEAN, "--negative-flag" | "--negative":
                negatives.append(flagify(take(tokens, token, "negative flag name")))
            case _:
                tokens.appendleft(token)
                break

    return draft.build(kind, options=options, negatives=negatives)


__all__ = (
    "Kind",
    "Choice",
    "Draft",
    "Argument",
    "build",
    "flagify",
)
