"""
Optionary utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the elements, providers and descriptors layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- hierarchy(object)
  • Classes of an object's type, most derived first, without the universal root `object`.

- stringify(values)
  • Textual view of a collection of values (the form available values are listed in).
"""
import builtins
import functools
from collections.abc import Collection, Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - final: subclassing is forbidden to preserve semantics.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("mode", "fallback") -> "mode"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute "_{name}".

    Containers are handed out as copies or immutable views (tuple, dict copy,
    frozenset) so the public API cannot mutate the backing state.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        object = getattr(self, "_" + name)
        if isinstance(object, Sequence) and not isinstance(object, str):
            return tuple(object)
        if isinstance(object, Mapping):
            return dict(object)
        if isinstance(object, Set):
            return frozenset(object)
        return object

    return property(getter)


def hierarchy(object, /):
    """
    Yield the classes of `object`'s runtime type from most derived to least derived.

    The walk follows the method resolution order and stops before the universal root
    `object`, so only user-declared classes are visited.
    """
    for cls in type(object).__mro__:
        if cls is builtins.object:
            return
        yield cls


def iscollection(object, /):
    """
    Tell whether `object` (an instance or a class) is a collection of values.

    Strings and bytes are collections to Python, but to an option they are a single value.
    """
    if isinstance(object, type):
        return issubclass(object, Collection) and not issubclass(object, (str, bytes, bytearray))
    return isinstance(object, Collection) and not isinstance(object, (str, bytes, bytearray))


def stringify(values, /):
    """
    Return the values of a collection as a new list of strings, keeping their iteration order.
    """
    return [str(value) for value in values]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "hierarchy",
    "iscollection",
    "stringify",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
