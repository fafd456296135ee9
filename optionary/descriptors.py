"""
Optionary option descriptors.

What this module provides
- OptionDescriptor: the uniform surface every option representation exposes to the
  command-line layer (listing, validation, help/completion and application).
- StaticOptionDescriptor: the descriptor of a declared option (an OptionElement); its
  legal values are the ones fixed by the option type.
- InstanceOptionDescriptor: decorates another descriptor for one live target object,
  appending the values the target's values provider supplies at call time.

Typical flow
    >>> descriptor = InstanceOptionDescriptor(deploy, StaticOptionDescriptor(element))
    >>> descriptor.available_values()   # static values, then provider values
    >>> descriptor.apply(deploy, ["eu-west-1"])

Descriptors are cheap, built per command invocation and discarded afterwards; nothing
they compute is cached.
"""
from abc import ABC, abstractmethod

from .elements import OptionElement
from .faults import OptionIdentityError
from .providers import lookup


class OptionDescriptor(ABC):
    """
    Contract of an option representation.

    Members
    - element: the declaration site of the option (opaque to consumers).
    - name: unique option name within a command.
    - type: semantic argument type; textual options (str subclasses) may carry
      dynamic values.
    - descr: display text, or None.
    - available_values(): a new list of the currently legal textual values; empty means
      unconstrained/unknown.
    - apply(target, values): bind parsed textual values onto `target`.
    - ordering: descriptors sort by the relation `<` for stable listings.
    """

    @property
    @abstractmethod
    def element(self): ...

    @property
    @abstractmethod
    def name(self): ...

    @property
    @abstractmethod
    def type(self): ...

    @property
    @abstractmethod
    def descr(self): ...

    @abstractmethod
    def available_values(self): ...

    @abstractmethod
    def apply(self, target, values, /): ...

    @abstractmethod
    def __lt__(self, other, /): ...

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r}, type={self.type.__name__})"


class StaticOptionDescriptor(OptionDescriptor):
    """
    Descriptor of a declared option, driven by its OptionElement.
    """

    def __init__(self, element, /):
        if not isinstance(element, OptionElement):
            raise TypeError("StaticOptionDescriptor() argument must be an option element")
        self._element = element

    @property
    def element(self):
        return self._element

    @property
    def name(self):
        return self._element.name

    @property
    def type(self):
        return self._element.type

    @property
    def descr(self):
        return self._element.descr

    def available_values(self):
        return list(self._element.values)

    def apply(self, target, values, /):
        self._element.apply(target, values)

    def __lt__(self, other, /):
        if not isinstance(other, OptionDescriptor):
            return NotImplemented
        return self.name < other.name


class InstanceOptionDescriptor(OptionDescriptor):
    """
    Bind a descriptor to a live target object and add the target's dynamic values.

    Every member forwards to the delegate, except:
    - available_values(): for textual options, the delegate's values are followed by the
      values of the target's values provider for this option (see providers.lookup).
      The hierarchy is scanned on every call.
    - apply(target, values): refuses any object but the bound target.

    Raises (from available_values)
    - MalformedValuesProviderError, DuplicatedValuesProviderError: the target type
      declares its values providers wrongly.
    """

    def __init__(self, target, delegate, /):
        if target is None:
            raise TypeError("InstanceOptionDescriptor() target cannot be None")
        if not isinstance(delegate, OptionDescriptor):
            raise TypeError("InstanceOptionDescriptor() delegate must be an option descriptor")
        self._target = target
        self._delegate = delegate

    @property
    def target(self):
        return self._target

    @property
    def delegate(self):
        return self._delegate

    @property
    def element(self):
        return self._delegate.element

    @property
    def name(self):
        return self._delegate.name

    @property
    def type(self):
        return self._delegate.type

    @property
    def descr(self):
        return self._delegate.descr

    def available_values(self):
        values = list(self._delegate.available_values())
        if issubclass(self.type, str):
            values.extend(lookup(self._target, self.name))
        return values

    def apply(self, target, values, /):
        if target is not self._target:
            raise OptionIdentityError(
                f"object {target!r} not applicable to option {self.name!r}, expecting {self._target!r}"
            )
        self._delegate.apply(target, values)

    def __lt__(self, other, /):
        return self._delegate.__lt__(other)


__all__ = (
    "OptionDescriptor",
    "StaticOptionDescriptor",
    "InstanceOptionDescriptor",
)
