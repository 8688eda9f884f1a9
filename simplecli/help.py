"""
simplecli help renderer.

render(group) builds the help of one command group as a rich Text, reading
only the live state of the group tree:

    usage: app [options] <command>

    commands:
      kill                  stop the app.
      start
      database ...

    options:
      --port=<int>          port to listen on (8080)
      --verbose[=<bool>]    (False)

- the usage line names the route from the root group; '[options]' appears only
  when the group has at least one option.
- one line per operation with its typed placeholders, then one line per child
  group followed by '...'.
- the options block lists each option with its kind, its description and its
  current value.

Rendering is pure: it never fails on a well-formed group and never mutates it,
so rendering twice yields the same text. show() prints the result.

Palette keys (override any of them with a __styles__ mapping in __main__)
- usage-label, program-name, usage-section
- group-label, command-name, group-name, metavar, option-name,
  description, value
- panel-title
"""
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .coercion import kindname
from .options import PREFIX

_STYLES = {
    # === Head section ===
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

    # === Blocks ===
    "group-label": "bold #FFFFFF",  # Pure white headers
    "command-name": "bold #36C5F0",  # Sky-blue subcommands
    "group-name": "bold #22C55E",  # GREEN for nested groups
    "metavar": "bold #FFD600",  # AMBER for parameters
    "option-name": "bold #00E6FF",  # CYAN for options
    "description": "#9CA3AF",  # Muted gray
    "value": "italic #737373",  # Dim current value

    # === Fancy panel ===
    "panel-title": "bold #FF4D94",
}

PADDING = 2  # Leading spaces before the first column
INDENT = 15  # Minimum column for descriptions


def _palette(colorful):
    styles = _STYLES | getattr(__import__("__main__"), "__styles__", {})

    def styler(style):
        # Honor the palette only when colorful=True
        return styles.get(style, "") if colorful else ""

    return styler


def _styler(colorful):
    styler = _palette(colorful)

    def text(fragment, style=""):
        return Text(str(fragment), styler(style))

    return text


def _block(text, label, rows):
    """
    lay out (left, descr) rows under a label, aligning descriptions in one column.
    """
    column = max(INDENT, max(len(left) for left, _ in rows) + PADDING * 2)
    lines = [Text.assemble(text(label, "group-label"), ":")]
    for left, descr in rows:
        line = Text(" " * PADDING).append_text(left)
        if descr:
            line.append(" " * (column - PADDING - len(left))).append_text(descr)
        lines.append(line)
    return Text("\n").join(lines)


def render(group, /, *, colorful=False):
    """
    return the help of 'group' as a rich Text (use .plain for the bare string).
    """
    text = _styler(colorful)
    sections = []

    usage = Text.assemble(text("usage", "usage-label"), ": ", text(" ".join(group.route), "program-name"))
    if len(group.options):
        usage.append(" ").append_text(text("[options]", "usage-section"))
    usage.append(" ").append_text(text("<command>", "usage-section"))
    sections.append(usage)

    rows = []
    for operation in group.operations.values():
        left = text(operation.name, "command-name")
        for name, kind in operation.parameters:
            left.append(" ").append_text(text("<%s:%s>" % (name, kindname(kind)), "metavar"))
        rows.append((left, text(operation.descr or "", "description")))
    for name, child in group.children.items():
        rows.append((Text.assemble(text(name, "group-name"), " ..."), text(child.descr or "", "description")))
    if rows:
        sections.append(_block(text, "commands", rows))

    rows = []
    for field in group.options:
        left = text(PREFIX + field.name.replace("_", "-"), "option-name")
        metavar = text("<%s>" % kindname(field.kind), "metavar")
        if field.flag:
            left.append("[=").append_text(metavar).append("]")
        else:
            left.append("=").append_text(metavar)
        descr = Text.assemble(*((text(field.descr, "description"), " ") if field.descr else ()), text("(%r)" % (field.value,), "value"))
        rows.append((left, descr))
    if rows:
        sections.append(_block(text, "options", rows))

    return Text("\n\n").join(sections)


def show(group, /, *, stderr=False, colorful=False, fancy=False, console=None):
    """
    print the help of 'group'.

    parameters
    - stderr: print to the error stream (used when a fault is being reported).
    - colorful: apply the palette.
    - fancy: frame the help in a panel titled after the route.
    - console: print on this console instead of a fresh one (tests capture output this way).
    """
    console = console or Console(stderr=stderr)
    renderable = render(group, colorful=colorful)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{' '.join(group.route)} HELP".upper(), " ]", style=_palette(colorful)("panel-title")),
            title_align="left",
        )
    console.print(renderable)


__all__ = (
    "render",
    "show",
)
