"""
Optionary values providers: legal option values supplied by the target object itself.

A values provider is a zero-argument method of a target type marked with the option
names it serves:

    class Deploy:
        @option("region", descr="where to deploy")
        def setRegion(self, region): ...

        @values("region")
        def regions(self) -> list[str]:
            return self.cloud.regions()

lookup(target, name) scans the target's class hierarchy on every call (providers may
legitimately answer differently over time) and returns the provider's values as strings.

Rules enforced by the scan
- every marked member must take no parameters and return a collection, whether or not
  its names are the one being looked up (MalformedValuesProviderError);
- at most one marked member per option name across the whole hierarchy; a subclass
  provider does not shadow an ancestor provider, they conflict
  (DuplicatedValuesProviderError).
"""
import functools
import inspect
import typing

from .faults import DuplicatedValuesProviderError, MalformedValuesProviderError
from .utils import *


def _sanitize_names(names, /):
    sanitized = []
    if not names:
        raise TypeError("@values() must specify at least one option name")
    for name in names:
        if not isinstance(name, str):
            raise TypeError("@values() option names must be strings")
        elif not (name := name.strip()):
            raise ValueError("@values() option names cannot be empty-strings")
        elif name in sanitized:
            raise ValueError("@values() option names cannot contain duplicates")
        sanitized.append(name)
    return frozenset(sanitized)


def values(*names):
    """
    Mark a zero-argument method as the values provider of the named options.

    Behavior
    - Stores the sanitized names on the function under __values__ and returns the function
      unchanged. The shape of the method is checked when the hierarchy is scanned.
    - staticmethod/classmethod may wrap the marked function (apply @values first).
    """
    names = _sanitize_names(names)

    @rename("values")
    def wrapper(function, /):
        if not callable(function):
            raise TypeError("@values() must be applied to a callable")
        if hasattr(function, "__values__"):
            raise TypeError("@values() must be applied only once")
        function.__values__ = names
        return function

    return wrapper


def marker(object, /):
    """
    Return the option names a class member provides values for, or Unset when unmarked.

    staticmethod/classmethod (__func__) and property/cached_property getters are looked
    through, so a marked getter is found and reported as malformed by the scan.
    """
    match object:
        case property():
            object = object.fget
        case functools.cached_property():
            object = object.func
    return getattr(getattr(object, "__func__", object), "__values__", Unset)


def _malformed(attribute, cls, /):
    return MalformedValuesProviderError(
        f"@values not supported on method {attribute!r} in class {cls.__qualname__!r}: "
        f"a values provider must return a collection and take no parameters"
    )


def _bind(member, attribute, cls, target, /):
    """
    Bind a marked class member to `target` and check it can be called without arguments.

    The member is bound through the descriptor protocol, so plain functions receive the
    target, classmethods its type, and staticmethods nothing.
    """
    if isinstance(member, property | functools.cached_property):
        raise _malformed(attribute, cls)
    if not hasattr(member, "__get__"):
        raise _malformed(attribute, cls)
    if not callable(bound := member.__get__(target, type(target))):
        raise _malformed(attribute, cls)

    signature = inspect.signature(bound)
    if signature.parameters:
        raise _malformed(attribute, cls)

    # String annotations may not be resolvable here; the returned object is checked anyway.
    if (annotation := signature.return_annotation) is not inspect.Signature.empty and not isinstance(annotation, str):
        if not iscollection(typing.get_origin(annotation) or annotation):
            raise _malformed(attribute, cls)
    return bound


def lookup(target, name, /):
    """
    Return the values the target's values provider for option `name` supplies, as strings.

    Walks type(target) and its ancestors (most derived first, `object` excluded), checking
    every marked member, invoking the single one that serves `name`. Returns an empty list
    when no provider serves `name`.

    Raises
    - MalformedValuesProviderError: a marked member takes parameters or does not return a
      collection (checked for every marked member, not only matching ones).
    - DuplicatedValuesProviderError: a second marked member serves `name`.
    """
    found = Unset
    for cls in hierarchy(target):
        for attribute, member in vars(cls).items():
            if not (names := marker(member)):
                continue
            provider = _bind(member, attribute, cls, target)
            if name not in names:
                continue
            if found is not Unset:
                raise DuplicatedValuesProviderError(
                    f"@values for option {name!r} cannot be attached to multiple methods in class {cls.__qualname__!r}"
                )
            if not iscollection(result := provider()):
                raise _malformed(attribute, cls)
            found = stringify(result)
    return coalesce(found, [])


__all__ = (
    "values",
    "marker",
    "lookup",
)
