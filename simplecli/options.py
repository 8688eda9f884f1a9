"""
simplecli option store: bind '--name[=value]' tokens onto command object fields.

Syntax
- '--name'        → boolean fields become True (presence implies true; there is
                    no '--no-name' negation form); any other kind is an error.
- '--name=value'  → value is coerced to the field's kind and assigned.
- '--name='       → treated like '--name' (an empty value is no value).

Lookup
- names are matched through titlecase(): '--port' reaches a field 'port' or
  'Port'; '--dry-run' reaches 'dry_run'.
- a bare '--help' is reserved unless the object has its own 'help' field; it raises
  the benign HelpRequested notice.

Writes happen in place on the user's object: the operation invoked afterwards
reads its configuration from its own attributes. A failed coercion leaves the
field unchanged; options applied before a failing token stay applied.
"""
import difflib
import logging

from .coercion import coerce, kindname
from .faults import *
from .utils import titlecase, ordinal, freeze

logger = logging.getLogger(__name__)

PREFIX = "--"
HELP = "help"


def split(token, /):
    """
    split a prefix-stripped option token into its (name, value) pair.

    value is None when the token carries no '=' (the split happens once, so
    the value may itself contain '=').
    """
    name, sep, value = token.partition("=")
    return name, value if sep else None


class OptionStore:
    """
    the options of one command group.

    parameters
    - fields: mapping of title-cased option key -> Field (from the registry).
    - route: names from the root group to the owning group, used in hints.
    """

    def __init__(self, fields, route=()):
        self._fields = dict(fields)
        self._route = tuple(route)

    @property
    def fields(self):
        return freeze(self._fields)

    def __contains__(self, name):
        return titlecase(name) in self._fields

    def __len__(self):
        return len(self._fields)

    def __iter__(self):
        return iter(self._fields.values())

    def apply(self, token, /, *, index=1):
        """
        apply one option token (already stripped of PREFIX) to its field.

        index is the 1-based position of the token in the whole prompt.

        raises
        - HelpRequested: reserved '--help' without a 'help' field.
        - UnknownOptionError: no field matches the name.
        - MissingOptionValueError: non-boolean field without a value.
        - ConversionError / UnsupportedKindError: from coercion.
        """
        name, value = split(token)
        route = " ".join(self._route)

        try:
            field = self._fields[titlecase(name)]
        except KeyError:
            if name == HELP and value is None:
                trigger(HelpRequested(
                    "help requested for %r" % route,
                    title="help",
                    code=FaultCode.HELP_REQUESTED,
                    index=index,
                ))
            suggestions = difflib.get_close_matches(
                PREFIX + name, [PREFIX + field.name.replace("_", "-") for field in self._fields.values()], 5
            )
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], route)
            except IndexError:
                hint = "run '%s --help' to see all available options" % route
            trigger(UnknownOptionError(
                "unknown option %r at %s position" % (PREFIX + name, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                input=name,
                index=index,
                suggestions=suggestions,
                hint=hint,
            ))

        if value:
            try:
                converted = coerce(value, field.kind)
            except ConversionError as fault:
                trigger(fault, input=name, index=index, hint="%s (option %r at %s position)" % (
                    fault.hint, PREFIX + name, ordinal(index)
                ))
        elif field.flag:
            converted = True
        else:
            trigger(MissingOptionValueError(
                "no value passed for option %r at %s position" % (PREFIX + name, ordinal(index)),
                title="missing option value",
                code=FaultCode.MISSING_OPTION_VALUE,
                input=name,
                index=index,
                hint="use the inline form: %s%s=<%s>" % (PREFIX, name, kindname(field.kind)),
            ))

        logger.debug("option %s: %r -> %r", field.name, field.value, converted)
        field.assign(converted)


__all__ = (
    "PREFIX",
    "split",
    "OptionStore",
)
