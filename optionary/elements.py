r"""
Optionary option elements: where an option is declared on a target type.

Overview
- @option(name, descr=...) marks a method of a target type as the declaration site of
  a command-line option. The method receives the converted value when the option is
  applied, so it behaves like a setter:

      class Deploy:
          @option("mode", descr="deployment strategy")
          def setMode(self, mode: Strategy): ...

          @option("dry-run", descr="print the plan only")
          def setDryRun(self): ...

- OptionElement records the declaration (name, descr, declaring function) and derives
  everything that can be known statically:
  • type: the semantic argument type, read from the setter annotation.
  • values: legal values that are fixed by the type (Enum member names).
  • apply(target, values): convert textual values and invoke the setter on target.

Shapes accepted for the setter
- def f(self)                      → flag, type bool, takes no values.
- def f(self, value: bool)         → flag, invoked with True.
- def f(self, value)               → single value, type str.
- def f(self, value: T)            → single value converted with T.
- def f(self, values: list[T])     → one or more values, each converted with T.
  (tuple[T, ...] and Sequence[T] are accepted as well; the option type is T.)

Conversion
- str: value as-is.
- Enum subclasses: member by name, case-insensitive.
- bool (list[bool] members): true/yes/on/1 or false/no/off/0, case-insensitive.
- anything else: T(value); ValueError/TypeError become InvalidOptionValueError.

Name rules
- r"[^\W\d_](-?[^\W_]+)*": starts with a letter, segments joined by single hyphens
  (e.g. "mode", "dry-run"); unicode letters are allowed, underscores are not.
"""
import builtins
import inspect
import re
import typing
from collections.abc import Sequence
from enum import Enum

from rich.text import Text

from .faults import InvalidOptionValueError
from .utils import *


def _sanitize_name(name, /):
    if not isinstance(name, str):
        raise TypeError("option name must be a string")
    elif not (name := name.strip()):
        raise ValueError("option name cannot be empty")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"option name {name!r} must be a valid shell-style name (unicodes are allowed)")
    return name


def _sanitize_descr(descr, /):
    if not isinstance(descr, str | Text | Unset):
        raise TypeError("option 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError("option 'descr' cannot be empty")
    return coalesce(descr)


_BOOLEANS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


def _parameters(function, /):
    """
    Return the setter parameters of `function`, the receiver excluded.
    """
    parameters = list(inspect.signature(function).parameters.values())
    if not parameters or parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        raise TypeError(f"@option() must be applied to a method, {function.__qualname__!r} has no receiver")
    return parameters[1:]


class OptionElement:
    """
    Declaration site of a single option.

    Instances are created by the @option(...) marker and stored on the marked function
    under __option__. The function is kept as declared: calling it directly keeps working.

    Properties
    - name, descr: the sanitized marker arguments.
    - function: the marked (setter) function.
    - type: semantic argument type (resolved lazily so forward references work).
    - multiple: whether the option accepts more than one value.
    - flag: whether the option is presence-only.
    - values: statically known legal values (Enum member names), as a tuple.
    """

    name = mirror("name")
    descr = mirror("descr")
    function = mirror("function")

    def __init__(self, function, name, /, descr=Unset):
        if not callable(function):
            raise TypeError("@option() must be applied to a callable")
        self._function = function
        self._name = _sanitize_name(name)
        self._descr = _sanitize_descr(descr)

        # Validate the shape eagerly; annotations are only resolved on first use.
        if len(parameters := _parameters(function)) > 1:
            raise TypeError(f"option {self._name!r} setter {function.__qualname__!r} must take at most one value")
        if parameters and parameters[0].kind not in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            raise TypeError(f"option {self._name!r} setter {function.__qualname__!r} must take its value positionally")
        self._arity = len(parameters)
        self._resolved = Unset

    def _resolve(self):
        """
        Resolve (once) the argument type and the multiplicity from the setter annotation.
        """
        if self._resolved is not Unset:
            return self._resolved

        if self._arity == 0:
            self._resolved = (bool, False)
            return self._resolved

        parameter = _parameters(self._function)[0]
        annotation = typing.get_type_hints(self._function).get(parameter.name, Unset)

        if annotation is Unset:
            self._resolved = (str, False)
        elif annotation in (list, tuple) or annotation is Sequence:
            self._resolved = (str, True)
        elif (origin := typing.get_origin(annotation)) in (list, tuple) or origin is Sequence:
            match typing.get_args(annotation):
                case (member,) | (member, builtins.Ellipsis):
                    self._resolved = (member, True)
                case _:
                    raise TypeError(f"option {self._name!r} must declare a homogeneous collection type")
        elif isinstance(annotation, type):
            self._resolved = (annotation, False)
        else:
            raise TypeError(f"option {self._name!r} annotation {annotation!r} is not a supported argument type")

        if not isinstance(self._resolved[0], type):
            raise TypeError(f"option {self._name!r} annotation {annotation!r} is not a supported argument type")
        return self._resolved

    @property
    def type(self):
        return self._resolve()[0]

    @property
    def multiple(self):
        return self._resolve()[1]

    @property
    def flag(self):
        return self.type is bool and not self.multiple

    @property
    def values(self):
        if isinstance(self.type, type) and issubclass(self.type, Enum):
            return tuple(member.name for member in self.type)
        return ()

    def _convert(self, value, /):
        type = self.type
        if issubclass(type, str):
            return type(value)
        if issubclass(type, Enum):
            for member in type:
                if member.name.lower() == value.lower():
                    return member
            raise InvalidOptionValueError(
                f"cannot convert {value!r} to {type.__name__} for option {self._name!r}",
                hint=f"expected one of: {', '.join(self.values)}",
            )
        if issubclass(type, bool):
            try:
                return _BOOLEANS[value.strip().lower()]
            except KeyError:
                raise InvalidOptionValueError(
                    f"cannot convert {value!r} to bool for option {self._name!r}",
                    hint="expected one of: true, false, yes, no, on, off, 1, 0",
                ) from None
        try:
            return type(value)
        except (TypeError, ValueError):
            raise InvalidOptionValueError(
                f"cannot convert {value!r} to {type.__name__} for option {self._name!r}",
                hint=f"pass a value {type.__name__}() accepts",
            ) from None

    def apply(self, target, values, /):
        """
        Convert the parsed textual values and invoke the setter on `target`.

        Raises
        - InvalidOptionValueError: wrong number of values or unconvertible value.
        """
        values = list(values)

        if self.flag:
            if values:
                raise InvalidOptionValueError(
                    f"flag option {self._name!r} does not take values",
                    hint=f"use '--{self._name}' alone",
                )
            return self._function(target) if self._arity == 0 else self._function(target, True)

        if not values:
            raise InvalidOptionValueError(
                f"option {self._name!r} requires a value",
                hint=f"use '--{self._name} <value>'",
            )

        if self.multiple:
            return self._function(target, [self._convert(value) for value in values])

        if len(values) > 1:
            raise InvalidOptionValueError(
                f"option {self._name!r} takes a single value, got {len(values)}",
                hint=f"use '--{self._name}' once",
            )
        return self._function(target, self._convert(values[0]))

    def __repr__(self):
        return f"option-element(name={self._name!r}, function={self._function.__qualname__!r})"


def option(name, /, descr=Unset):
    """
    Mark a method as the declaration site of the option `name`.

    Usage
        @option("mode", descr="deployment strategy")
        def setMode(self, mode: Strategy): ...

    Behavior
    - Builds an OptionElement (sanitizing name/descr and validating the setter shape).
    - Stores it on the function under __option__ and returns the function unchanged.
    - A function can be marked only once.
    """
    name = _sanitize_name(name)
    # Validated eagerly; OptionElement keeps the sanitized form.
    _sanitize_descr(descr)

    @rename("option")
    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@option() must be applied to a callable")
        if hasattr(function, "__option__"):
            raise TypeError("@option() must be applied only once")
        function.__option__ = OptionElement(function, name, descr)
        return function

    return wrapper


def element(object, /):
    """
    Return the OptionElement attached to a class member, or Unset when it declares no option.

    Only plain functions are option setters; staticmethod/classmethod wrappers are not unwrapped.
    """
    return getattr(object, "__option__", Unset)


__all__ = (
    "OptionElement",
    "option",
    "element",
)
