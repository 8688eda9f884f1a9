import functools
import types
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    intent
    - used by the internal API to distinguish "not provided" from a user‑supplied
      value (including None or other falsy values).
    - although this class is importable, it is intended for internal use only.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in isinstance checks (internal convenience only).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in isinstance checks (internal convenience only).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(*objects):
    """
    return the first object that is not Unset, or None when all of them are.

    typical use is layering a user override over an inherited value over a default:
        coalesce(colorful, getattr(main, "__colorful__", Unset), False)
    """
    for object in objects:
        if object is not Unset:
            return object
    return None


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    parameters
    - x: callable | str
      • callable → rename in place.
      • str      → desired name; returns a callable that will rename a future function.
    - name: str | None
      target name to assign.

    errors
    - TypeError if a callable is given and the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


def freeze(value, /):
    """
    return a shallow read-only view of a container.

    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is
    """
    if isinstance(value, Sequence) and not isinstance(value, str):
        return tuple(value)
    if isinstance(value, Mapping):
        return MappingProxyType(value)
    if isinstance(value, Set):
        return frozenset(value)
    return value


def view(name):
    """
    build a read-only property over the private attribute '_' + name.

    containers are exposed through freeze(), so callers cannot mutate the
    registries a group builds at construction.
    """

    @rename(name)
    def getter(self):
        return freeze(getattr(self, "_" + name))

    return property(getter)


# values that can never address a command group, even when they carry a __dict__
_PRIMITIVES = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    bool,
    type(None),
    list,
    tuple,
    dict,
    set,
    frozenset,
    types.ModuleType,
)


def iscomposite(object, /):
    """
    tell whether an object can act as a command object.

    a command object is a mutable instance of a user class: it exposes
    attribute storage (__dict__ or __slots__) so option parsing can write
    into it, and it is neither a primitive, a collection, a module nor a
    callable (classes and functions included).
    """
    if isinstance(object, _PRIMITIVES) or callable(object):
        return False
    return hasattr(object, "__dict__") or hasattr(type(object), "__slots__")


def normalize(name, /):
    """
    normalize a command name (operation or group) for lookup and display.

    lookups are case-insensitive and read '_' and '-' alike:
        normalize("Dry_Run") == normalize("dry-run") == "dry-run"
    """
    return name.lower().replace("_", "-")


def titlecase(name, /):
    """
    normalize an option name to its lookup key: first letter upper case,
    hyphens read as underscores (so '--dry-run' reaches a 'dry_run' field).
    """
    name = name.replace("-", "_")
    return name[:1].upper() + name[1:]


@functools.cache  # Memoize to avoid recomputing common ordinals in messages
def ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "freeze",
    "view",
    "iscomposite",
    "normalize",
    "titlecase",
    "ordinal",
)
