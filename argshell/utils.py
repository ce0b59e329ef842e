"""
argshell utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the definition, resolution and rendering layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support arguments/definitions/resolution.

Overview
- UnsetType / Unset
  • Singleton sentinel meaning "nothing was passed", distinct from None.
  • Argument.consume(Unset, tokens) is the explicit-value form used by the ordinal
    and catch-all passes.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; None/0/""/[] are kept.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated methods for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an
    immutable snapshot (tuple/frozenset/mapping proxy).

- constantize(text)
  • Derive a shell variable name from a flag: alphanumeric runs joined by "_", upper-cased.

- ordinal(number)
  • Human-friendly position labels ("first", "second", ..., "21st") for messages.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> constantize("--dry-run")
    'DRY_RUN'
    >>> ordinal(3)
    'third'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel for "nothing was passed".

    argshell uses None for absent defaults and descriptions, so a second marker
    is needed where None is a legitimate argument. Unset is the only instance;
    it is falsey, prints as "Unset" and survives copying unchanged.
    """

    def __or__(self, other, /):
        # `str | Unset` builds the same union as `str | UnsetType`
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    __ror__ = __or__

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` itself.

    Only Unset is replaced: coalesce(None, "x") is None and coalesce(0, 5) is 0.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Give a generated callable a readable __name__/__qualname__.

    rename(function, "name") renames in place and returns the function;
    rename("name") returns a decorator doing the same.
    """
    match parameters:
        case (str() as name,):
            def decorator(callable):
                return rename(callable, name)

            return decorator
        case (callable, str() as name) if builtins.callable(callable):
            callable.__name__ = callable.__qualname__ = name
            return callable
        case (_,) | (_, _):
            raise TypeError("rename() expects a callable and a string name")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively snapshot container values into immutable counterparts.

    - Sequence (non-string): tuple
    - Mapping: read-only MappingProxyType over a fresh dict
    - Set: frozenset
    - Named tuples and anything else: returned as-is
    """
    if isinstance(object, tuple) and hasattr(object, "_fields"):
        return object
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(_immortalize, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns an
    immutable snapshot for container types.

    Example
    - Given self._flags, declare flags = mirror("flags") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def constantize(text, /):
    """
    Derive a shell variable name from a flag or an explicit name.

    Alphanumeric (ASCII) runs are joined with "_" and the result is upper-cased;
    every other character only separates runs.

    Examples
    - constantize("--verbose")        -> "VERBOSE"
    - constantize("kinda----rainy")   -> "KINDA_RAINY"
    - constantize("-u")               -> "U"
    - constantize("---")              -> ""
    """
    if not isinstance(text, str):
        raise TypeError("constantize() argument must be a string")
    return "_".join(re.findall(r"[a-zA-Z0-9]+", text)).upper()


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    1..10 are spelled out ("first"…"tenth"); anything else gets a numeric
    suffix ("11th", "21st", "112th").
    """
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


Unset = UnsetType()

__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "constantize",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
