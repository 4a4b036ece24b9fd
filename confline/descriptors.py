"""
Confline option descriptors and the descriptor index.

Overview
- Kind: the value kind of a configuration option (text kinds, INTEGER, FLOAT,
  KEY, BOOL) plus HINT for descriptive-only entries that never reach a table.
- OptionDescriptor: one registered configuration option (name, short flag,
  kind, deprecation pointer). Immutable once built; fields are exposed through
  read-only properties declared in __introspectable__.
- Component: a named group of descriptors contributed by one loaded module.
- DescriptorIndex: a per-call snapshot of the registry with the counts needed
  to size the option tables, an ordered traversal over non-hint descriptors,
  and exact lookups by name and by short flag.

Metadata (sanitized on construction)
- name: non-empty string without whitespace.
- short: Unset | single character whose code fits in a byte; '-' and ':' are
  reserved by the short-option grammar and rejected.
- kind: a Kind member.
- replacement: Unset | non-empty string naming the option that supersedes this one.
- strict: bool, the option was removed outright (its values are discarded).
- text: Unset | non-empty string, short human description.

Quick example:
    >>> from confline.descriptors import OptionDescriptor, Kind, DescriptorIndex
    >>> index = DescriptorIndex([
    ...     OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
    ...     OptionDescriptor("verbose", Kind.INTEGER, short="v"),
    ... ])
    >>> index.options, index.booleans
    (2, 1)
"""
import functools
import operator
import re
from enum import IntEnum
from typing import NamedTuple

from .utils import *


class Kind(IntEnum):
    """
    value kinds understood by the loader.

    text kinds are stored verbatim; INTEGER and FLOAT are coerced leniently;
    KEY goes through a key-name translator; BOOL is presence-only; HINT marks
    descriptive entries (categories, sections, usage) that have no value.
    """
    STRING          = 0x10
    PASSWORD        = 0x11
    FILE            = 0x20
    DIRECTORY       = 0x21
    MODULE          = 0x30
    MODULE_LIST     = 0x31
    MODULE_LIST_CAT = 0x32
    MODULE_CAT      = 0x33
    INTEGER         = 0x40
    FLOAT           = 0x50
    KEY             = 0x60
    BOOL            = 0x70
    HINT            = 0x80

    @property
    def textual(self):
        """
        whether values of this kind are stored as raw text.
        """
        return self in _TEXTUAL_KINDS

    @property
    def takes_argument(self):
        """
        whether the option consumes an argument on the command line.
        """
        return self is not Kind.BOOL and self is not Kind.HINT


_TEXTUAL_KINDS = frozenset({
    Kind.STRING,
    Kind.PASSWORD,
    Kind.FILE,
    Kind.DIRECTORY,
    Kind.MODULE,
    Kind.MODULE_LIST,
    Kind.MODULE_LIST_CAT,
    Kind.MODULE_CAT,
})


class DescriptorType(type):
    """
    Metaclass giving descriptors stable, readable reprs and read-only fields.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (see mirror()).
    - Provide __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name (camel-case split with hyphens).
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option-descriptor(name='fullscreen', short='f', kind=<Kind.BOOL: 112>, ...)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize descriptor metadata in place.

    Raises
    - TypeError: wrong field types.
    - ValueError: empty names, malformed short flags, reserved characters.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace")
    metadata["name"] = name

    if not isinstance(kind := metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str):
        if len(short) != 1:
            raise ValueError(f"{cls.__typename__} 'short' must be a single character")
        elif ord(short) > 0xFF:
            raise ValueError(f"{cls.__typename__} 'short' must fit in a single byte")
        elif short in "-:" or short.isspace():
            raise ValueError(f"{cls.__typename__} 'short' cannot be {short!r}")
        elif kind is Kind.HINT:
            raise ValueError(f"hint {cls.__typename__} cannot have a short flag")
    metadata["short"] = coalesce(short)

    if not isinstance(replacement := metadata["replacement"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'replacement' must be a string")
    elif isinstance(replacement, str) and not (replacement := replacement.strip()):
        raise ValueError(f"{cls.__typename__} 'replacement' cannot be empty")
    metadata["replacement"] = coalesce(replacement)

    if not isinstance(text := metadata["text"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'text' must be a string")
    elif isinstance(text, str) and not (text := text.strip()):
        raise ValueError(f"{cls.__typename__} 'text' cannot be empty")
    metadata["text"] = coalesce(text)


class OptionDescriptor(metaclass=DescriptorType):
    """
    One registered configuration option.

    Descriptors are owned by the registry that contributed them; the loader only
    reads them for the duration of one call. A descriptor with a replacement is
    deprecated: its values are redirected to the replacement, or discarded when
    strict is set.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "name",
        "short",
        "kind",
        "replacement",
        "strict",
        "text",
    )

    def __init__(
            self,
            name,
            kind=Kind.STRING,
            /,
            short=Unset,
            replacement=Unset,
            strict=False,
            text=Unset,
    ):
        metadata = {
            "name": name,
            "kind": kind,
            "short": short,
            "replacement": replacement,
            "strict": bool(strict),
            "text": text,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def deprecated(self):
        return self._replacement is not None

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or name[1:] not in type(self).__introspectable__:
            raise AttributeError(f"{type(self).__typename__} is read-only")
        if name in self.__dict__:
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)


class Component(NamedTuple):
    """
    A named group of descriptors contributed by one loaded module.
    """
    name: str
    descriptors: tuple = ()


class DescriptorIndex:
    """
    Per-call, read-only snapshot of the descriptor registry.

    Contract
    - options: count of non-hint descriptors (one long entry each).
    - booleans: count of BOOL descriptors (two extra negation entries each).
    - iteration visits every non-hint descriptor exactly once, in registration order.
    - find(name): exact, case-sensitive lookup; the first registration of a name
      wins and hints are never returned.
    - shorts(): flag → descriptor; later registrations of a flag silently win.

    An empty registry is valid and yields an empty command-line surface.
    """

    options = mirror("options")
    booleans = mirror("booleans")

    def __init__(self, descriptors=(), /):
        self._descriptors = []
        self._names = {}
        self._options = self._booleans = 0

        for descriptor in descriptors:
            if not isinstance(descriptor, OptionDescriptor):
                raise TypeError("descriptor index items must be option descriptors")
            self._descriptors.append(descriptor)
            if descriptor.kind is Kind.HINT:
                continue
            self._options += 1
            self._booleans += descriptor.kind is Kind.BOOL
            self._names.setdefault(descriptor.name, descriptor)

    @classmethod
    def from_components(cls, components, /):
        """
        Flatten components, in order, into a single index.

        Components without descriptors contribute nothing.
        """
        def descriptors():
            for component in components:
                if not isinstance(component, Component):
                    raise TypeError("from_components() items must be components")
                if not component.descriptors:
                    continue
                yield from component.descriptors
        return cls(descriptors())

    def __iter__(self):
        for descriptor in self._descriptors:
            if descriptor.kind is not Kind.HINT:
                yield descriptor

    def __len__(self):
        return self._options

    def __contains__(self, name, /):
        return name in self._names

    def find(self, name, /):
        """
        Return the settable descriptor registered under name, or None.
        """
        return self._names.get(name)

    def shorts(self):
        shorts = {}
        for descriptor in self:
            if descriptor.short is not None:
                shorts[descriptor.short] = descriptor
        return shorts

    def __repr__(self):
        return "descriptor-index(options=%d, booleans=%d)" % (self._options, self._booleans)


__all__ = (
    "Kind",
    "OptionDescriptor",
    "Component",
    "DescriptorIndex",
)
