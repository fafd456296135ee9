"""
Optionary readers: discover the options of a target object and apply parsed arguments.

What this module provides
- OptionReader: collects every @option declared along a target's class hierarchy and
  hands out one InstanceOptionDescriptor per option, bound to that target.
- configure(target, arguments): apply a parsed `{name: [values]}` mapping to a target,
  validating names and textual values against the descriptors.

Runtime options (forwarded to trigger())
- shell: render faults on the console instead of raising them.
- deferred: in shell mode, keep going after a fault instead of exiting.
- fancy, colorful, prog: rendering preferences (see faults).
- strict (configure only, default True): reject textual values that are not listed by a
  non-empty available_values().
"""
import difflib

from .descriptors import InstanceOptionDescriptor, StaticOptionDescriptor
from .elements import element
from .faults import *
from .providers import marker
from .utils import *


class OptionReader:
    """
    Discover the options a target object declares.

    Discovery rules
    - Classes are visited from type(target) up to (not including) `object`.
    - A method name is resolved like attribute lookup does: the most derived definition
      wins, so an unmarked override hides the option its parent declared.
    - Two different methods declaring the same option name are a DuplicatedOptionError.
    - @values names that match no declared option are reported with an
      UnusedValuesProviderWarning.
    """

    def elements(self, target, /, **options):
        """
        Return {name: OptionElement} for the options declared along the target's hierarchy.
        """
        seen = set()
        elements = {}
        for cls in hierarchy(target):
            for attribute, member in vars(cls).items():
                if attribute in seen:
                    continue
                seen.add(attribute)
                if (declared := element(member)) is Unset:
                    continue
                if declared.name in elements:
                    trigger(DuplicatedOptionError(
                        f"option {declared.name!r} linked to multiple methods in class {cls.__qualname__!r}"
                    ), **options)
                    continue
                elements[declared.name] = declared
        return elements

    def descriptors(self, target, /, **options):
        """
        Return the sorted descriptors of every option the target declares.
        """
        elements = self.elements(target, **options)

        for cls in hierarchy(target):
            for attribute, member in vars(cls).items():
                for name in sorted(coalesce(marker(member), ())):
                    if name not in elements:
                        trigger(UnusedValuesProviderWarning(
                            f"@values method {attribute!r} in class {cls.__qualname__!r} "
                            f"names {name!r}, which is not an option"
                        ), **options)

        return sorted(
            InstanceOptionDescriptor(target, StaticOptionDescriptor(declared))
            for declared in elements.values()
        )

    def descriptor(self, target, name, /, **options):
        """
        Return the descriptor of option `name`, raising UnknownOptionError when it is not declared.
        """
        for descriptor in self.descriptors(target, **options):
            if descriptor.name == name:
                return descriptor
        raise UnknownOptionError(f"unknown option {name!r} for {type(target).__qualname__!r}")


def configure(target, arguments, /, **options):
    """
    Apply parsed arguments to `target` through its option descriptors.

    Parameters
    - target: the object the options are declared on.
    - arguments: Mapping[str, Iterable[str]] of option name to parsed textual values
      (an empty iterable for flags).
    - options: runtime options (see module docstring).

    Returns
    - target, once every argument has been applied.

    Faults
    - UnknownOptionError: name not declared (with a close-match hint when one exists).
    - InvalidOptionValueError: value outside the available values (strict mode) or
      rejected by the option itself.
    - MalformedValuesProviderError, DuplicatedValuesProviderError: the target declares its
      values providers wrongly (surfaced while computing the available values).
    """
    strict = options.pop("strict", True)
    descriptors = {descriptor.name: descriptor for descriptor in OptionReader().descriptors(target, **options)}

    for name, values in arguments.items():
        values = list(values)

        if (descriptor := descriptors.get(name, Unset)) is Unset:
            matches = difflib.get_close_matches(name, descriptors, n=1)
            trigger(UnknownOptionError(
                f"unknown option {name!r} for {type(target).__qualname__!r}",
                hint=f"did you mean {matches[0]!r}?" if matches else "list the available options with --help",
            ), **options)
            continue

        try:
            if strict and issubclass(descriptor.type, str) and (available := descriptor.available_values()):
                if rejected := [value for value in values if value not in available]:
                    raise InvalidOptionValueError(
                        f"invalid value {rejected[0]!r} for option {name!r}",
                        hint=f"expected one of: {', '.join(available)}",
                    )
            descriptor.apply(target, values)
        except (InvalidOptionValueError, OptionValidationError) as fault:
            trigger(fault, **options)

    return target


__all__ = (
    "OptionReader",
    "configure",
)
