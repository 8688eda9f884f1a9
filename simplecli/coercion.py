r"""
simplecli type coercion: turn raw tokens into typed values.

Overview
- coerce(token, kind): convert one token for one kind; the single entry point
  used by both the option store and operation invocation.
- converter(kind): decorator registering a conversion function for a kind.
  Built-ins cover str, int and bool; hosts may register more.

Policy
- str is the identity.
- int is base 10 only: an optional sign followed by ASCII digits, and the value
  must fit a signed 32-bit integer. Whitespace, underscores, non-ASCII digits
  and prefixes such as 0x are rejected. No radix option on a command object
  changes this; operations that want another base read their own option and
  reinterpret the value themselves.
- bool accepts exactly: 1 t T TRUE true True / 0 f F FALSE false False.
- Enum kinds accept a member name (case-insensitive, '-' read as '_') or the
  string form of a member value, unless a converter is registered for them.
- kinds are matched exactly first (bool is not promoted to int, int is not
  widened to float); a kind without its own converter uses the converter of
  its nearest registered base class (PosixPath uses the one of Path). A kind
  without any converter fails with UnsupportedKindError.

Converter contract
- a converter receives the raw token and returns the typed value.
- it raises ValueError for a malformed token; coerce() turns that into a
  ConversionError carrying the token and the kind.
"""
import enum
import logging
import re

from .faults import *
from .utils import freeze, normalize, rename

logger = logging.getLogger(__name__)

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

_TRUTHS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSITIES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_converters = {}


def converter(kind, /):
    """
    register the decorated function as the converter for 'kind'.

    returns the function unchanged, so it stays usable on its own:

        @converter(float)
        def _decimal(token):
            return float(token)

    registering a kind twice replaces the previous converter.
    """
    if not isinstance(kind, type):
        raise TypeError("converter() argument must be a type")

    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@converter() must be applied to a callable")
        _converters[kind] = function
        return function

    return rename(wrapper, "converter")


def converters():
    """return a read-only view of the registered converters (kind -> function)."""
    return freeze(_converters)


def kindname(kind, /):
    """human-readable name of a kind for help and messages."""
    return getattr(kind, "__name__", None) or repr(kind)


@converter(str)
def _string(token):
    return token


@converter(int)
def _integer(token):
    if not re.fullmatch(r"[+-]?[0-9]+", token):
        raise ValueError("not a base-10 integer")
    if not INT_MIN <= (value := int(token)) <= INT_MAX:
        raise ValueError("integer out of range")
    return value


@converter(bool)
def _boolean(token):
    if token in _TRUTHS:
        return True
    if token in _FALSITIES:
        return False
    raise ValueError("not a boolean")


def _enumeration(kind, /):
    """converter for an Enum kind: a member name (read like a command name) or its value."""

    def convert(token):
        for member in kind:
            if normalize(token) == normalize(member.name) or token == str(member.value):
                return member
        raise ValueError("not a member of %s" % kind.__name__)

    return convert


def _lookup(kind, /):
    try:
        return _converters[kind]
    except (KeyError, TypeError):  # TypeError: unhashable annotation objects
        pass
    if not isinstance(kind, type):
        return None
    if issubclass(kind, enum.Enum):
        return _enumeration(kind)
    # nearest registered base, e.g. PosixPath -> Path
    for base in kind.__mro__[1:-1]:
        if base in _converters:
            return _converters[base]
    return None


def convertible(kind, /):
    """tell whether tokens can be coerced to 'kind' (a registered converter or an Enum)."""
    return _lookup(kind) is not None


def _hint(kind, /):
    if isinstance(kind, type) and issubclass(kind, enum.Enum):
        return "pass one of: %s" % ", ".join(normalize(member.name) for member in kind)
    return _HINTS.get(kind, "pass a valid %s literal" % kindname(kind))


def coerce(token, kind, /):
    """
    convert a raw token into a value of the given kind.

    raises
    - UnsupportedKindError: no converter is registered for kind.
    - ConversionError: the converter rejected the token.
    """
    if (function := _lookup(kind)) is None:
        trigger(UnsupportedKindError(
            "values of kind %r are not supported" % kindname(kind),
            title="unsupported kind",
            code=FaultCode.UNSUPPORTED_KIND,
            kind=kind,
            hint="use str, int, bool or an Enum, or register a converter for %s" % kindname(kind),
        ))

    try:
        value = function(token)
    except ValueError as exception:
        logger.debug("token %r rejected as %s: %s", token, kindname(kind), exception)
        trigger(ConversionError(
            "%r is not a valid %s" % (token, kindname(kind)),
            title="invalid value",
            code=FaultCode.CONVERSION_ERROR,
            token=token,
            kind=kind,
            hint=_hint(kind),
        ))
    return value


_HINTS = {
    int: "pass a base-10 integer between %d and %d (for example: 42)" % (INT_MIN, INT_MAX),
    bool: "pass one of: true, false, 1, 0, t, f",
}


__all__ = (
    "INT_MIN",
    "INT_MAX",
    "converter",
    "converters",
    "kindname",
    "convertible",
    "coerce",
)
