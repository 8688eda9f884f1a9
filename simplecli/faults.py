"""
simplecli faults (errors and notices) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- CommandNotice: benign outcomes (empty invocation, explicit --help) that end a
  dispatch cleanly; they are exceptions so they unwind the recursive resolution
  like any other fault, but the entry point exits with a success status.
- trigger(): central entry point to raise any fault with merged context.

UX goals
- Position-first messages: when a token has a position, the message names it
  ("at second position") so users learn by trying.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The dispatch engine raises faults; handle() catches CommandException, prints
  it through rich together with the help of the group recorded under the
  'tool' option, and terminates the process.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - construction (2110x): INVALID_ROOT_OBJECT, DUPLICATE_OPERATION,
      DUPLICATE_GROUP, CYCLIC_GROUP, DUPLICATE_OPTION
    - routing (2111x): UNKNOWN_COMMAND, ARITY_MISMATCH
    - options (2112x): UNKNOWN_OPTION, MISSING_OPTION_VALUE
    - coercion (2113x): CONVERSION_ERROR, UNSUPPORTED_KIND
    - notices (2210x): NO_COMMAND, HELP_REQUESTED

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- construction errors (21xxx) ---
    INVALID_ROOT_OBJECT  = 21101
    DUPLICATE_OPERATION  = 21102
    DUPLICATE_GROUP      = 21103
    CYCLIC_GROUP         = 21104
    DUPLICATE_OPTION     = 21105

    # --- routing errors (21xxx) ---
    UNKNOWN_COMMAND      = 21111
    ARITY_MISMATCH       = 21112

    # --- option errors (21xxx) ---
    UNKNOWN_OPTION       = 21121
    MISSING_OPTION_VALUE = 21122

    # --- coercion errors (21xxx) ---
    CONVERSION_ERROR     = 21131
    UNSUPPORTED_KIND     = 21132

    # --- notices (22xxx) ---
    NO_COMMAND           = 22101
    HELP_REQUESTED       = 22102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_STYLES = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "error-title": "bold #FF4DA6",  # friendly pinky title
    "notice-title": "bold #9CE19C",  # calm green title for benign outcomes

    # body
    "error-message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text
}


class CommandException(Exception):
    """
    base class of every fault raised by the dispatch engine.

    state
    - message: the one-sentence, lowercased diagnostic.
    - options: read-only mapping of context; common keys are
      • title, code, hint: rendering copy.
      • tool: the Group where the fault happened (help is rendered for it).
      • colorful, fancy: rendering switches.
      • payload keys documented on each subclass (input, token, kind, ...).

    options are also reachable as attributes (fault.input, fault.expected, ...)
    so callers can inspect a fault without knowing the mapping layout.
    """
    __title__ = "command error"
    __style__ = "error-title"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    @property
    def tool(self):
        return self.options.get("tool")

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")

        styles = _STYLES | getattr(main, "__styles__", {})
        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles.get(style, ""))

        tool = self.options.get("tool")
        prog = getattr(main, "__prog__", " ".join(tool.route) if tool is not None else "")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.code.normalize() if self.code is not None else "-", "code"),
            " | ",
            text(self.options.get("title", type(self).__title__).title(), type(self).__style__),
            " ]"
        )
        message = text(self.message, "error-message")

        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandNotice(CommandException):
    """
    benign outcome: the dispatch stopped on purpose and the process should
    render help and exit with a success status.
    """
    __title__ = "command notice"
    __style__ = "notice-title"


class InvalidRootObjectError(CommandException):
    """the root value is not a mutable composite object (payload: object)."""


class DuplicateOperationError(CommandException):
    """two operations normalize to the same command name (payload: input)."""


class DuplicateGroupError(CommandException):
    """two nested group fields normalize to the same command name (payload: input)."""


class CyclicGroupError(CommandException):
    """a nested group field points back to an ancestor object (payload: input)."""


class DuplicateOptionError(CommandException):
    """two option fields title-case to the same option key (payload: input)."""


class UnknownCommandError(CommandException):
    """no child group nor operation matches the token (payload: input, index, suggestions)."""


class ArityMismatchError(CommandException):
    """wrong number of positional tokens for an operation (payload: input, expected, got)."""


class UnknownOptionError(CommandException):
    """no field matches the option name (payload: input, index, suggestions)."""


class MissingOptionValueError(CommandException):
    """a non-boolean option was given without a value (payload: input, index)."""


class ConversionError(CommandException):
    """a token is not a valid literal of the target kind (payload: token, kind)."""


class UnsupportedKindError(CommandException):
    """the target kind has no registered converter (payload: kind)."""


class NoCommandError(CommandNotice):
    """the token stream ran out before any command was named."""


class HelpRequested(CommandNotice):
    """the reserved --help option was given."""


def trigger(fault, /, **options):
    """
    raise a fault with the given context merged into its options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "CommandNotice",
    "InvalidRootObjectError",
    "DuplicateOperationError",
    "DuplicateGroupError",
    "CyclicGroupError",
    "DuplicateOptionError",
    "UnknownCommandError",
    "ArityMismatchError",
    "UnknownOptionError",
    "MissingOptionValueError",
    "ConversionError",
    "UnsupportedKindError",
    "NoCommandError",
    "HelpRequested",
    "trigger",
)
