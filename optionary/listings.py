"""
Optionary listings: render option descriptors as a help table.

listing(descriptors, **options) returns a rich Table with one row per descriptor, in the
descriptors' order: the option (`--name`), its argument type, the currently available
values, and its description. Available values are computed while rendering, so dynamic
values reflect the target's state at that moment.

Palette keys
- listing-title, listing-table, option-name, flag-name, type-name, choice,
  description, no-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .elements import OptionElement


def listing(descriptors, /, **options):
    """
    Build the help table of the given descriptors.

    Recognized options
    - colorful (default True): apply the palette.
    - title (default "options"): table title.
    - width: fixed table width (rich picks one when omitted).
    """
    colorful = options.get("colorful", True)

    styles = defaultdict(str, {
        "listing-title": "bold #FFFFFF",  # Pure white headers
        "listing-table": "#4B5563",  # Slate border
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "type-name": "bold #FFD600",  # AMBER for argument types
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
        "description": "#9CA3AF",  # Muted gray
        "no-description": "italic #737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    table = Table(
        "option", "type", "values", "description",
        title=text(options.get("title", "options"), styler("listing-title")),
        width=options.get("width"),
        box=ROUNDED,
        style=styler("listing-table"),
        header_style=styler("listing-title"),
    )

    for descriptor in descriptors:
        if isinstance(element := descriptor.element, OptionElement):
            flag = element.flag
        else:
            flag = descriptor.type is bool
        table.add_row(
            text("--" + descriptor.name, styler("flag-name" if flag else "option-name")),
            text("" if flag else descriptor.type.__name__.lower(), styler("type-name")),
            Text(",").join(text(value, styler("choice")) for value in descriptor.available_values()),
            text(descriptor.descr, styler("description")) or text("no description", styler("no-description")),
        )

    return table


__all__ = (
    "listing",
)
