"""
Optionary faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by domain to keep logs/searches predictable.
- OptionException / OptionWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- identity: an option applied to an object other than the one its descriptor is bound to.
  This is a caller defect.
- validation: a target type declares its options or values providers in a way that cannot
  work (malformed provider, duplicated provider, duplicated option). These are configuration
  defects of the target type, never transient conditions.
- usage: unknown option names and values that cannot be converted to the option type.

Integration
- Core code raises faults where they are detected and never catches them.
- Outer layers (readers.configure, readers.OptionReader) call trigger(fault, **options):
  in non-shell mode exceptions are raised, in shell mode they are rendered via rich.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across optionary (stable identifiers).

    grouping (by high-level domain)
    - identity (2110x)
      • OPTION_IDENTITY_MISMATCH
    - validation of target types (2111x)
      • MALFORMED_VALUES_PROVIDER, DUPLICATED_VALUES_PROVIDER, DUPLICATED_OPTION
    - usage (2112x)
      • UNKNOWN_OPTION, INVALID_OPTION_VALUE
    - warnings (22xxx)
      • UNUSED_VALUES_PROVIDER
    """
    # --- identity errors (21xxx) ---
    OPTION_IDENTITY_MISMATCH    = 21101

    # --- validation errors (21xxx) ---
    MALFORMED_VALUES_PROVIDER   = 21111
    DUPLICATED_VALUES_PROVIDER  = 21112
    DUPLICATED_OPTION           = 21113

    # --- usage errors (21xxx) ---
    UNKNOWN_OPTION              = 21121
    INVALID_OPTION_VALUE        = 21122

    # --- warnings (22xxx) ---
    UNUSED_VALUES_PROVIDER      = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    Recognized options
    - colorful (default True): apply the palette; otherwise plain text.
    - fancy (default False): wrap the body in a Panel titled by the header.
    - prog: program name shown in the header (falls back to __prog__ in __main__).
    - ratio: fraction of the console width used by the panel.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

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

    kind = "error" if isinstance(fault, BaseException) and not isinstance(fault, Warning) else "warning"

    prog = text(options.get("prog", getattr(main, "__prog__", "optionary")), styler("prog-name"))
    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(fault.code.normalize() if fault.code else "-", styler("code")),
        " | ",
        text(options.get("title", fault.title).title(), styler(f"{kind}-title")),
        " ]"
    )
    message = text(coalesce(fault.message, ""), styler(f"{kind}-message"))
    hint = Text.assemble(
        text(" → ", styler("hint-arrow")),
        text(options.get("hint", fault.hint), styler("hint"))
    )

    if fancy:
        try:
            width = int((console.width - 4) * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class OptionException(Exception):
    """
    Base class of every optionary error.

    Class attributes `code`, `title` and `hint` give the default rendering; runtime
    options passed at construction (or merged by trigger()) may override title/hint.
    """
    code = Unset
    title = "option error"
    hint = "check how the option is declared and used"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OptionIdentityError(OptionException):
    code = FaultCode.OPTION_IDENTITY_MISMATCH
    title = "foreign object"
    hint = "apply the option to the object its descriptor was built for"


class OptionValidationError(OptionException):
    """
    A target type declares its options or values providers in a way that cannot work.
    """
    title = "invalid declaration"


class MalformedValuesProviderError(OptionValidationError):
    code = FaultCode.MALFORMED_VALUES_PROVIDER
    title = "malformed values provider"
    hint = "a values provider must take no parameters and return a collection"


class DuplicatedValuesProviderError(OptionValidationError):
    code = FaultCode.DUPLICATED_VALUES_PROVIDER
    title = "duplicated values provider"
    hint = "keep a single @values method per option across the class hierarchy"


class DuplicatedOptionError(OptionValidationError):
    code = FaultCode.DUPLICATED_OPTION
    title = "duplicated option"
    hint = "an option name can be declared by a single method"


class UnknownOptionError(OptionException):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class InvalidOptionValueError(OptionException):
    code = FaultCode.INVALID_OPTION_VALUE
    title = "invalid value"


class OptionWarning(ABC, Warning):
    """
    Base class of every optionary warning (same shape as OptionException).
    """
    code = Unset
    title = "option warning"
    hint = "check how the option is declared"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnusedValuesProviderWarning(OptionWarning):
    code = FaultCode.UNUSED_VALUES_PROVIDER
    title = "unused values provider"
    hint = "declare the option or drop its name from @values"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, exceptions are
      raised and warnings are issued through the warnings module.

    typical options
    - shell, deferred, fancy, colorful, prog, title, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "OptionException",
    "OptionIdentityError",
    "OptionValidationError",
    "MalformedValuesProviderError",
    "DuplicatedValuesProviderError",
    "DuplicatedOptionError",
    "UnknownOptionError",
    "InvalidOptionValueError",
    "OptionWarning",
    "UnusedValuesProviderWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
