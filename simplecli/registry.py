"""
simplecli command registry: discover what a command object exposes.

What this module provides
- discover(object): walk an object's shape once and return a Registry with
  • operations: normalized command name -> Operation (bound public methods),
  • nested: normalized command name -> (field name, command object) for every
    field that holds another command object (the group layer builds children
    from it),
  • fields: title-cased option key -> Field for every other public field.
- Field: one option; reads the live value and writes through a setter closure
  bound to the object.
- Operation: one subcommand; checks arity, coerces every token, then calls the
  bound method exactly once.

Shape rules
- fields come from the class annotations (typing.get_type_hints, base classes
  first, ClassVar skipped), then from plain class-level defaults, then from the
  instance attributes and __slots__. Names starting with '_', callable values
  and descriptors (methods, properties) are ignored.
- a field whose kind can be coerced (a registered converter or an Enum) is an
  option; any other field holding a command object is a nested group.
- a field's kind is its annotation (Annotated and Optional are unwrapped) or the
  type of its current value. The first string in Annotated metadata is the
  field's description.
- operations are the public functions defined on the object's class and its
  bases, in definition order. Parameter kinds come from the annotations; an
  unannotated parameter is a str. Only positional parameters count towards the
  arity.

Discovery is pure: it reads attributes and signatures, never assigns.
"""
import functools
import inspect
import logging
import types
import typing
from collections import namedtuple
from inspect import Parameter
from typing import Annotated, ClassVar, Union

from .coercion import coerce, convertible, kindname
from .faults import *
from .utils import Unset, iscomposite, normalize, titlecase, ordinal

logger = logging.getLogger(__name__)

Registry = namedtuple("Registry", ("operations", "nested", "fields"))


def _unwrap(hint, /):
    """
    reduce an annotation to (kind, descr).

    - Annotated[T, "text", ...] -> T with "text" as description
    - Optional[T] / T | None    -> T
    """
    descr = None
    if typing.get_origin(hint) is Annotated:
        descr = next((item for item in hint.__metadata__ if isinstance(item, str)), None)
        hint = hint.__origin__
    if typing.get_origin(hint) in (Union, types.UnionType):
        arguments = [argument for argument in typing.get_args(hint) if argument is not type(None)]
        if len(arguments) == 1:
            hint = arguments[0]
    return hint, descr


def _hints(cls, /):
    """class annotations with Annotated kept; raw annotations when some name cannot be resolved."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except NameError:
        hints = {}
        for klass in reversed(inspect.getmro(cls)):
            hints.update(inspect.get_annotations(klass))
        return hints


class Field:
    """
    a public, non-group attribute of a command object, exposed as an option.

    attributes
    - name: the attribute name as written in the class.
    - kind: the type tokens are coerced to.
    - descr: optional description (from Annotated metadata).
    - value: the live attribute value (read on every access).
    """
    __slots__ = ("name", "kind", "descr", "_object", "_setter")

    def __init__(self, object, name, kind, descr=None):
        self.name = name
        self.kind = kind
        self.descr = descr
        self._object = object
        self._setter = functools.partial(setattr, object, name)

    @property
    def value(self):
        return getattr(self._object, self.name, None)

    @property
    def flag(self):
        """True when the option is boolean and can be given without a value."""
        return self.kind is bool

    def assign(self, value, /):
        self._setter(value)

    def __repr__(self):
        return "field(name=%r, kind=%s, value=%r)" % (self.name, kindname(self.kind), self.value)


class Operation:
    """
    a public method of a command object, exposed as a subcommand.

    attributes
    - name: the normalized command name (lower-case, '-' for '_').
    - parameters: ordered (name, kind) pairs of the positional parameters.
    - arity: the exact number of tokens the operation takes.
    - descr: first line of the method docstring, or None.
    """
    __slots__ = ("name", "parameters", "descr", "_callback")

    def __init__(self, name, callback, parameters, descr=None):
        self.name = name
        self.parameters = tuple(parameters)
        self.descr = descr
        self._callback = callback

    @property
    def arity(self):
        return len(self.parameters)

    def __call__(self, tokens, /, *, index=1):
        """
        coerce 'tokens' against the parameters and invoke the method once.

        index is the 1-based position of the first token in the whole prompt,
        used in messages. nothing is invoked unless every token converts.
        """
        tokens = list(tokens)
        if len(tokens) != self.arity:
            trigger(ArityMismatchError(
                "%s requires %d argument(s), got %d" % (self.name, self.arity, len(tokens)),
                title="wrong number of arguments",
                code=FaultCode.ARITY_MISMATCH,
                input=self.name,
                expected=self.arity,
                got=len(tokens),
                hint="usage: %s" % " ".join((self.name, *("<%s:%s>" % (name, kindname(kind)) for name, kind in self.parameters))),
            ))

        arguments = []
        for offset, (token, (name, kind)) in enumerate(zip(tokens, self.parameters)):
            try:
                arguments.append(coerce(token, kind))
            except ConversionError as fault:
                trigger(
                    fault,
                    index=index + offset,
                    input=name,
                    hint="%s (argument %r at %s position)" % (fault.hint, name, ordinal(index + offset)),
                )

        logger.debug("invoking %s with %r", self.name, arguments)
        self._callback(*arguments)

    def __repr__(self):
        return "operation(name=%r, parameters=%r)" % (self.name, tuple(
            "%s:%s" % (name, kindname(kind)) for name, kind in self.parameters
        ))


def _signature(callback, /):
    """signature with evaluated annotations; raw annotations when some name cannot be resolved."""
    try:
        return inspect.signature(callback, eval_str=True)
    except NameError:
        logger.debug("unresolved annotation on %r, keeping raw annotations", callback)
        return inspect.signature(callback)


def _parameters(callback, /):
    """ordered (name, kind) pairs of the positional parameters of a bound callable."""
    parameters = []
    for parameter in _signature(callback).parameters.values():
        if parameter.kind not in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD):
            continue
        if parameter.annotation is Parameter.empty:
            kind = str
        else:
            kind, _ = _unwrap(parameter.annotation)
        parameters.append((parameter.name, kind))
    return parameters


def _members(cls, /):
    """public functions of a class and its bases, in definition order (bases first)."""
    members = {}
    for klass in reversed(inspect.getmro(cls)):
        for name, member in vars(klass).items():
            if name.startswith("_"):
                continue
            if inspect.isfunction(member) or isinstance(member, staticmethod | classmethod):
                members.setdefault(name, member)
            else:
                # a subclass attribute shadows an inherited method
                members.pop(name, None)
    return list(members)


def _classvars(hints, /):
    return {name for name, hint in hints.items() if typing.get_origin(hint) is ClassVar or hint is ClassVar}


def _attributes(object, hints, /):
    """
    public attribute names, in order: annotated, then plain class-level
    defaults (bases first), then instance storage.
    """
    classvars = _classvars(hints)
    names = dict.fromkeys(name for name in hints if name not in classvars)
    for klass in reversed(inspect.getmro(type(object))):
        for name, value in vars(klass).items():
            # functions, properties and slot members are descriptors
            if name in classvars or callable(value) or hasattr(type(value), "__get__"):
                continue
            names.setdefault(name)
    names.update(dict.fromkeys(getattr(object, "__dict__", {})))
    for klass in inspect.getmro(type(object)):
        slots = getattr(klass, "__slots__", ())
        names.update(dict.fromkeys((slots,) if isinstance(slots, str) else slots))
    return [name for name in names if not name.startswith("_")]


def discover(object, /):
    """
    build the Registry of a command object.

    raises
    - InvalidRootObjectError: object is not a mutable composite.
    - DuplicateOperationError: two methods normalize to the same command name.
    - DuplicateGroupError: two group fields normalize to the same command name.
    - DuplicateOptionError: two option fields title-case to the same option key.
    """
    if not iscomposite(object):
        trigger(InvalidRootObjectError(
            "a %s cannot be used as a command object" % type(object).__name__,
            title="invalid command object",
            code=FaultCode.INVALID_ROOT_OBJECT,
            object=object,
            hint="pass an instance of your own class (for example: handle(App()))",
        ))

    operations = {}
    for name in _members(type(object)):
        if not callable(callback := getattr(object, name, None)):
            continue  # shadowed by an instance attribute
        if (key := normalize(name)) in operations:
            trigger(DuplicateOperationError(
                "operation %r collides with %r" % (name, operations[key].name),
                title="duplicate operation",
                code=FaultCode.DUPLICATE_OPERATION,
                input=key,
                hint="rename one of the methods; command names are case-insensitive",
            ))
        operations[key] = Operation(
            key,
            callback,
            _parameters(callback),
            (inspect.getdoc(callback) or "").strip().partition("\n")[0] or None,
        )

    hints = _hints(type(object))
    nested = {}
    fields = {}
    for name in _attributes(object, hints):
        if (value := getattr(object, name, Unset)) is Unset:
            continue  # annotated, never assigned

        if name in hints:
            kind, descr = _unwrap(hints[name])
        else:
            kind, descr = type(value), None

        # a value with a converter is an option even when it carries attributes
        if not convertible(kind) and iscomposite(value):
            if (key := normalize(name)) in nested:
                trigger(DuplicateGroupError(
                    "group %r collides with %r" % (name, nested[key][0]),
                    title="duplicate group",
                    code=FaultCode.DUPLICATE_GROUP,
                    input=key,
                    hint="rename one of the fields; command names are case-insensitive",
                ))
            nested[key] = (name, value)
            continue

        if callable(value):
            continue

        if (key := titlecase(name)) in fields:
            trigger(DuplicateOptionError(
                "option %r collides with %r" % (name, fields[key].name),
                title="duplicate option",
                code=FaultCode.DUPLICATE_OPTION,
                input=key,
                hint="rename one of the fields; option names ignore the case of their first letter",
            ))
        fields[key] = Field(object, name, kind, descr)

    logger.debug(
        "discovered %s: operations=%s groups=%s options=%s",
        type(object).__name__, list(operations), list(nested), list(fields),
    )
    return Registry(operations, nested, fields)


__all__ = (
    "Registry",
    "Field",
    "Operation",
    "discover",
)
