"""
Confline option tables: long-option slots and the packed short-option spec.

What this module provides
- LongOptionEntry: one long option as seen on the command line (external name,
  argument policy, negation marker).
- LongOptionTable: a fixed-capacity slot array sized up front from the
  descriptor index (options + 2 * booleans + 1). Live entries are followed by an
  empty terminator slot; iteration stops at the terminator.
- ShortOptionTable: a 256-slot direct-address table (flags are single bytes)
  plus the packed specification string consumed by the scanner:
    "c"    → no argument (BOOL)
    "c:"   → required argument
    "v::"  → optional argument (verbosity flag with an INTEGER kind)
- build_long_options(index) / build_short_options(index): per-call builders.

Naming rules
- every non-hint descriptor contributes "--name".
- every BOOL descriptor also contributes "--noname" and "--no-name", placed right
  after the primary entry, argument-less and marked as negations.
- a name that can never be matched on a command line (contains '=' or starts
  with '-') is skipped on its own; the rest of the table is still built.

Lifetime
- tables live for one load call and are released on every exit path.
"""
from collections.abc import Sequence
from enum import IntEnum
from typing import NamedTuple

from .descriptors import Kind

# Short flag whose INTEGER option accumulates (-v, -vv, -v2).
VERBOSITY_FLAG = "v"


class Argument(IntEnum):
    NONE     = 0
    REQUIRED = 1
    OPTIONAL = 2


class LongOptionEntry(NamedTuple):
    name: str
    argument: Argument
    negated: bool = False

    @property
    def base(self):
        """
        name of the descriptor this entry stands for ("no-foo"/"nofoo" → "foo").
        """
        if not self.negated:
            return self.name
        return self.name[3:] if self.name[2:3] == "-" else self.name[2:]


def _materialize(prefix, name, /):
    if "=" in name or name.startswith("-"):
        raise ValueError("option name %r cannot be used on a command line" % name)
    return prefix + name


class LongOptionTable(Sequence):
    """
    Fixed-capacity long-option table.

    The capacity is reserved when the table is created; append() fills slots in
    order and always keeps at least one trailing slot empty as the terminator.
    Lookups are exact and case-sensitive; if two entries share an external name,
    the first one wins.
    """

    def __init__(self, capacity, /):
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError("long option table needs at least the terminator slot")
        self._slots = [None] * capacity
        self._count = 0
        self._lookup = {}

    @property
    def capacity(self):
        return len(self._slots)

    @property
    def terminator(self):
        """
        the slot right after the last live entry (always empty).
        """
        return self._slots[self._count]

    def append(self, entry, /):
        if not isinstance(entry, LongOptionEntry):
            raise TypeError("long option table items must be long option entries")
        if self._count + 1 >= len(self._slots):
            raise OverflowError("long option table is full")
        self._slots[self._count] = entry
        self._lookup.setdefault(entry.name, self._count)
        self._count += 1

    def lookup(self, name, /):
        """
        Return (index, entry) for an exact external name, or None.
        """
        try:
            index = self._lookup[name]
        except KeyError:
            return None
        return index, self._slots[index]

    def __getitem__(self, index):
        return self._slots[:self._count][index]

    def __iter__(self):
        for entry in self._slots:
            if entry is None:
                return
            yield entry

    def __len__(self):
        return self._count

    def release(self):
        self._slots.clear()
        self._lookup.clear()
        self._count = 0
        self._slots.append(None)

    def __repr__(self):
        return "long-option-table(entries=%d, capacity=%d)" % (self._count, len(self._slots))


class ShortOptionTable:
    """
    Direct-address short-option table and its packed specification.

    Registration appends the flag (plus ':' markers) to the spec and records the
    descriptor in the slot addressed by the flag's byte value. A later claim on
    the same flag overwrites the earlier one without complaint.
    """

    def __init__(self):
        self._slots = [None] * 256
        self._spec = []

    @property
    def spec(self):
        return "".join(self._spec)

    def register(self, descriptor, /):
        flag = descriptor.short
        self._slots[ord(flag)] = descriptor
        self._spec.append(flag)
        if descriptor.kind is not Kind.BOOL:
            self._spec.append(":")
            if flag == VERBOSITY_FLAG and descriptor.kind is Kind.INTEGER:
                self._spec.append(":")

    def get(self, flag, default=None, /):
        if not isinstance(flag, str) or len(flag) != 1 or ord(flag) > 0xFF:
            return default
        descriptor = self._slots[ord(flag)]
        return default if descriptor is None else descriptor

    def __getitem__(self, flag):
        if (descriptor := self.get(flag)) is None:
            raise KeyError(flag)
        return descriptor

    def __contains__(self, flag):
        return self.get(flag) is not None

    def release(self):
        self._slots = [None] * 256
        self._spec.clear()

    def __repr__(self):
        return "short-option-table(spec=%r)" % self.spec


def parse_spec(spec, /):
    """
    Decode a packed short-option spec into {flag: Argument}.

    Later occurrences of a flag override earlier ones, in line with the table's
    last-writer-wins registration.
    """
    arities = {}
    index = 0
    while index < len(spec):
        flag = spec[index]
        index += 1
        colons = 0
        while index < len(spec) and spec[index] == ":" and colons < 2:
            colons += 1
            index += 1
        arities[flag] = (Argument.NONE, Argument.REQUIRED, Argument.OPTIONAL)[colons]
    return arities


def build_long_options(index, /):
    """
    Build the long-option table for every non-hint descriptor of the index.

    Returns
    - LongOptionTable with capacity index.options + 2 * index.booleans + 1.
      Entries appear in traversal order; negation forms follow their primary.

    Notes
    - failing to materialize one external name skips that entry only.
    - MemoryError while reserving the slots propagates: it is fatal to the call.
    """
    table = LongOptionTable(index.options + 2 * index.booleans + 1)

    for descriptor in index:
        argument = Argument.REQUIRED if descriptor.kind.takes_argument else Argument.NONE
        forms = [("", argument, False)]
        if descriptor.kind is Kind.BOOL:
            forms.append(("no", Argument.NONE, True))
            forms.append(("no-", Argument.NONE, True))

        for prefix, argument, negated in forms:
            try:
                name = _materialize(prefix, descriptor.name)
            except ValueError:
                continue
            table.append(LongOptionEntry(name, argument, negated))

    return table


def build_short_options(index, /):
    """
    Build the short-option table from the index's flag claims.

    Only the last descriptor claiming a flag is registered, so every flag
    appears once in the packed spec, with that descriptor's arity.
    """
    table = ShortOptionTable()
    for descriptor in index.shorts().values():
        table.register(descriptor)
    return table


__all__ = (
    "VERBOSITY_FLAG",
    "Argument",
    "LongOptionEntry",
    "LongOptionTable",
    "ShortOptionTable",
    "parse_spec",
    "build_long_options",
    "build_short_options",
)
