"""
simplecli command groups: build the dispatch tree and run it.

What this module provides
- Group: the live dispatch node of one command object. It owns the object's
  operations, its option store and one child Group per nested command object.
- dispatch(object, prompt): build the tree and resolve a prompt; faults are
  raised (embedding, tests).
- handle(object, prompt): the process entry point; faults and help are printed
  through rich and the process exits.

Quick start
    from simplecli import handle

    class Database:
        path: str = ""

        def create(self):
            print("creating database at", self.path)

    class App:
        port: int = 8080

        def __init__(self):
            self.database = Database()

        def start(self):
            print("listening on", self.port)

    if __name__ == "__main__":
        handle(App())   # app --port=9090 start | app database --path=/tmp create

Resolution (per group, recursive)
- scanning options: while the next token starts with '--', apply it to this
  group's options.
- resolving path: no token left → NoCommandError (benign). Otherwise the next
  token names a child group (checked first, then recurse) or an operation;
  anything else → UnknownCommandError.
- invoking: the operation takes exactly its arity in tokens, coerces them all,
  then runs once.

Every fault aborts the whole dispatch. The first group a fault crosses records
itself under the fault's 'tool' option, so handle() shows the help of the
deepest group reached.
"""
import difflib
import inspect
import logging
import os.path
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .help import show
from .options import PREFIX, OptionStore
from .registry import discover
from .utils import Unset, coalesce, normalize, ordinal, view

logger = logging.getLogger(__name__)


def _describe(object):
    """first docstring line of the object's class, ignoring generated dataclass signatures."""
    doc = inspect.getdoc(type(object)) or ""
    if doc.startswith(type(object).__name__ + "("):
        return None
    return doc.strip().partition("\n")[0] or None


class Group:
    """
    the dispatch node of one command object.

    attributes (read-only)
    - name: how the parent addresses this group (the program name at the root).
    - route: names from the root to this group, e.g. ('app', 'database').
    - descr: first docstring line of the object's class, or None.
    - operations: mapping of command name -> Operation.
    - children: mapping of command name -> Group.
    - options: the OptionStore (iterable of Field, sized, supports 'in').
    - object: the wrapped command object.

    construction raises
    - InvalidRootObjectError, DuplicateOperationError, DuplicateGroupError
      (from discovery) and CyclicGroupError when a nested field points back
      to an ancestor.

    children are owned top-down; a child keeps the route as plain names and no
    reference to its parent.
    """
    name = view("name")
    route = view("route")
    descr = view("descr")
    operations = view("operations")
    children = view("children")
    options = view("options")
    object = view("object")

    def __init__(self, object, /, name=Unset, *, route=(), ancestors=()):
        self._object = object
        self._name = coalesce(name, os.path.basename(sys.argv[0]) or "cli")
        self._route = (*route, self._name)
        self._descr = _describe(object)

        registry = discover(object)
        self._operations = registry.operations
        self._options = OptionStore(registry.fields, self._route)

        self._children = {}
        ancestry = (*ancestors, id(object))
        for key, (field, value) in registry.nested.items():
            if id(value) in ancestry:
                trigger(CyclicGroupError(
                    "field %r of %r refers back to one of its ancestors" % (field, " ".join(self._route)),
                    title="cyclic group",
                    code=FaultCode.CYCLIC_GROUP,
                    input=key,
                    hint="nested command objects must form a tree; drop the back-reference or prefix it with '_'",
                ))
            self._children[key] = Group(value, key, route=self._route, ancestors=ancestry)

        logger.debug("group %r built with %d operation(s), %d group(s), %d option(s)",
                     " ".join(self._route), len(self._operations), len(self._children), len(self._options))

    def __repr__(self):
        return "group(name=%r, operations=%r, children=%r, options=%r)" % (
            self._name, list(self._operations), list(self._children), [field.name for field in self._options]
        )

    def resolve(self, tokens, /, *, index=1):
        """
        run the resolution algorithm on 'tokens'.

        parameters
        - tokens: iterable of str; consumed left to right.
        - index: 1-based position of the first token in the whole prompt,
          used in messages.

        raises
        - any CommandException; the fault's 'tool' option names the group
          where it happened.
        """
        tokens = deque(tokens)
        try:
            # scanning options
            while tokens and tokens[0].startswith(PREFIX):
                self._options.apply(tokens.popleft().removeprefix(PREFIX), index=index)
                index += 1

            # resolving path
            if not tokens:
                trigger(NoCommandError(
                    "no command given to %r" % " ".join(self._route),
                    title="no command",
                    code=FaultCode.NO_COMMAND,
                    index=index,
                ))

            candidate = tokens.popleft()
            key = normalize(candidate)

            if key in self._children:
                logger.debug("%r: entering group %r", " ".join(self._route), key)
                return self._children[key].resolve(tokens, index=index + 1)

            if key in self._operations:
                # invoking
                logger.debug("%r: resolved operation %r with %d token(s)", " ".join(self._route), key, len(tokens))
                return self._operations[key](tokens, index=index + 1)

            route = " ".join(self._route)
            suggestions = difflib.get_close_matches(key, [*self._children, *self._operations], 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available commands" % (suggestions[0], route)
            except IndexError:
                hint = "run '%s --help' to see available commands" % route
            trigger(UnknownCommandError(
                "unknown command %r at %s position" % (candidate, ordinal(index)),
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                input=candidate,
                index=index,
                suggestions=suggestions,
                hint=hint,
            ))
        except CommandException as fault:
            if fault.tool is not None:
                raise
            trigger(fault, tool=self)


def _tokenize(prompt):
    """
    normalize a prompt into a list of tokens.

    - Unset: the current process arguments (sys.argv[1:]).
    - str: a shell-like string, split with shlex.split.
    - Iterable[str]: pre-tokenized arguments, kept verbatim.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("prompt must be a string or an iterable of strings")


def dispatch(object, prompt=Unset, /, *, prog=Unset):
    """
    build the group tree of 'object' and resolve 'prompt' against it.

    parameters
    - object: the root command object (a mutable instance of a user class).
    - prompt: Unset (sys.argv[1:]), a shell-like string or an iterable of str.
    - prog: program name used as the root group name (default: basename of sys.argv[0]).

    the matched operation runs exactly once; its return value is discarded.
    every fault propagates as a CommandException (NoCommandError and
    HelpRequested are CommandNotice subclasses).
    """
    tokens = _tokenize(prompt)
    root = Group(object, prog)
    logger.debug("dispatching %r on %r", tokens, root.name)
    root.resolve(tokens)


def handle(object, prompt=Unset, /, *, prog=Unset, colorful=Unset, fancy=Unset):
    """
    run 'object' as a command line program and terminate the process.

    outcomes
    - an operation ran: returns normally.
    - NoCommandError / HelpRequested: help of the group reached on stdout, exit 0.
    - any other fault: the fault then the help of the deepest group reached on
      stderr, exit 1 (construction faults have no group; only the fault is shown).

    colorful and fancy default to __colorful__ / __fancy__ in __main__, then False.
    """
    main = __import__("__main__")
    colorful = bool(coalesce(colorful, getattr(main, "__colorful__", Unset), False))
    fancy = bool(coalesce(fancy, getattr(main, "__fancy__", Unset), False))

    try:
        dispatch(object, prompt, prog=prog)
    except CommandNotice as notice:
        if notice.tool is not None:
            show(notice.tool, colorful=colorful, fancy=fancy)
        sys.exit(0)
    except CommandException as fault:
        Console(stderr=True).print(fault.__replace__(colorful=colorful, fancy=fancy))
        if fault.tool is not None:
            show(fault.tool, stderr=True, colorful=colorful, fancy=fancy)
        sys.exit(1)


__all__ = (
    "Group",
    "dispatch",
    "handle",
)
