"""
Confline helpers shared by the descriptor, table and loader modules.

- Unset / UnsetType: the "not given" default for optional descriptor fields
  (a missing short flag, replacement or text), resolved with coalesce().
- rename(): stable names on generated accessors.
- mirror(): read-only properties over "_<name>" fields, returning frozen views
  of containers (tuple, MappingProxyType, frozenset).
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: "no value given", kept apart from None.

    Unset is falsy, prints as "Unset", cannot be subclassed, and is the only
    instance UnsetType() ever returns. It also joins type unions, so
    isinstance(value, str | Unset) reads like the annotation it checks.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    __or__ = __ror__

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("Unset has a single, final type")


def coalesce(object, default=None, /):
    """
    object, unless it is Unset; then default. None and other falsy values pass through.
    """
    return default if object is Unset else object


def _retitle(callable, name):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() target does not accept a new name") from None
    return callable


def rename(*parameters):
    """
    Give a generated callable a stable name for reprs and tracebacks.

    - rename(callable, name) renames callable in place and returns it.
    - rename(name) returns a decorator doing the same.
    """
    match parameters:
        case (callable, name):
            return _retitle(callable, name)
        case (name,):
            if not isinstance(name, str):
                raise TypeError("rename() name must be a string")

            def decorator(callable):
                return _retitle(callable, name)

            return _retitle(decorator, "rename")
        case _:
            raise TypeError("rename() takes 1 or 2 arguments (%d given)" % len(parameters))


def _freeze(object):
    """
    Shallow read-only view of a container value.

    - Sequence (non-string) → tuple
    - Mapping              → MappingProxyType
    - Set                  → frozenset
    - anything else        → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a
    read-only view for container types to discourage accidental mutation.

    Example
    - Given self._items, declare items = mirror("items") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
