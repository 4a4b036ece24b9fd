"""
Confline scanner: a GNU-style, single pass over argv.

What the scanner recognizes
- long options, matched exactly and case-sensitively against the long table:
    --name           (argument-less entries)
    --name=value     (value attached)
    --name value     (value taken from the next argument, whatever it looks like)
- short options, looked up in the packed short spec:
    -a -b / -ab      (clusters of argument-less flags)
    -cvalue / -c value
    -v / -vvv / -v2  (optional argument: only an attached value is taken)
- "--" ends option scanning; a lone "-" is an operand.

Events
- LongMatch(index, entry, value): a long entry matched (index is its slot).
- ShortMatch(flag, value): a flag from the short spec matched.
- Unknown(token, flag): nothing matched, an argument-less long option received
  a value, or a required argument is missing. flag is set for short failures,
  None for long ones.

State
- Scanner keeps its cursor explicitly (optind, optarg, optopt, index) and is
  created fresh for every load call, so nothing leaks between calls.

Permutation
- options are classified while scanning; once the scan is exhausted, argv is
  partitioned in place as [argv[0], options..., "--"?, operands...] and optind
  points at the first operand. Callers that need their original ordering must
  hand the scanner a copy.
"""
from typing import NamedTuple

from .tables import *


class LongMatch(NamedTuple):
    index: int
    entry: LongOptionEntry
    value: str | None


class ShortMatch(NamedTuple):
    flag: str
    value: str | None


class Unknown(NamedTuple):
    token: str
    flag: str | None = None


class Recognition(NamedTuple):
    descriptor: object
    value: str | None
    negated: bool


class ParseOutcome(NamedTuple):
    recognized: tuple = ()
    unknown: tuple = ()


class Scanner:
    """
    Iterator of scan events over an argv-like mutable sequence.

    parameters
    - argv: MutableSequence[str], argv[0] is the program name and is never scanned.
    - longopts: LongOptionTable used for exact long-name lookups.
    - shortopts: packed short spec (see confline.tables).

    attributes
    - optind: index of the next argument to scan (first operand after exhaustion).
    - optarg: argument of the last match, or None.
    - optopt: flag of the last failing short option, or None.
    - index: slot of the last matched long entry, or None.
    """

    def __init__(self, argv, longopts, shortopts, /):
        self._argv = argv
        self._longopts = longopts
        self._arities = parse_spec(shortopts)
        self.reset()

    def reset(self):
        self.optind = 1
        self.optarg = None
        self.optopt = None
        self.index = None
        self._token = None
        self._cluster = ""
        self._options = []
        self._operands = []
        self._terminator = None
        self._tail = []
        self._done = False

    @property
    def done(self):
        return self._done

    @property
    def operands(self):
        """
        operands left after a completed scan (empty while scanning).
        """
        if not self._done:
            return []
        return list(self._argv[self.optind:])

    def __iter__(self):
        return self

    def __next__(self):
        if self._done:
            raise StopIteration
        self.optarg = None
        self.optopt = None
        if (event := self._step()) is None:
            self._partition()
            raise StopIteration
        return event

    def _step(self):
        if self._cluster:
            return self._short()

        argv = self._argv
        while self.optind < len(argv):
            token = argv[self.optind]
            if token == "--":
                self._terminator = self.optind
                self._tail = list(range(self.optind + 1, len(argv)))
                self.optind = len(argv)
                break
            if token.startswith("-") and token != "-":
                self._options.append(self.optind)
                self.optind += 1
                self._token = token
                if token.startswith("--"):
                    return self._long(token)
                self._cluster = token[1:]
                return self._short()
            self._operands.append(self.optind)
            self.optind += 1
        return None

    def _consume(self):
        self.optarg = self._argv[self.optind]
        self._options.append(self.optind)
        self.optind += 1

    def _long(self, token):
        name, separator, value = token[2:].partition("=")
        if (match := self._longopts.lookup(name)) is None:
            return Unknown(token)

        self.index, entry = match
        if separator:
            if entry.argument is Argument.NONE:
                return Unknown(token)
            self.optarg = value
        elif entry.argument is Argument.REQUIRED:
            if self.optind >= len(self._argv):
                return Unknown(token)
            self._consume()
        return LongMatch(self.index, entry, self.optarg)

    def _short(self):
        flag, self._cluster = self._cluster[0], self._cluster[1:]

        if (arity := self._arities.get(flag)) is None:
            self.optopt = flag
            return Unknown(self._token, flag)
        if arity is Argument.NONE:
            return ShortMatch(flag, None)

        if self._cluster:
            # the rest of the cluster is the argument (-cvalue, -vvv, -v2)
            self.optarg, self._cluster = self._cluster, ""
        elif arity is Argument.REQUIRED:
            if self.optind >= len(self._argv):
                self.optopt = flag
                return Unknown(self._token, flag)
            self._consume()
        return ShortMatch(flag, self.optarg)

    def _partition(self):
        self._done = True
        argv = self._argv
        if len(argv) < 2:
            self.optind = len(argv)
            return

        order = [0, *self._options]
        if self._terminator is not None:
            order.append(self._terminator)
        self.optind = len(order)
        order.extend(self._operands)
        order.extend(self._tail)

        if order != list(range(len(argv))):
            argv[:] = [argv[position] for position in order]


def survey(index, argv, /):
    """
    Dry-run scan of argv against the tables built from index.

    The scan runs on a private copy of argv and never touches a store. Long
    matches are resolved by name against the index, without deprecation
    redirection; short failures are reported as "-<flag>".

    returns
    - ParseOutcome(recognized=((descriptor, value, negated), ...), unknown=(token, ...))
    """
    longopts = build_long_options(index)
    shortopts = build_short_options(index)
    recognized = []
    unknown = []
    try:
        for event in Scanner(list(argv), longopts, shortopts.spec):
            match event:
                case LongMatch(entry=entry, value=value):
                    if (descriptor := index.find(entry.base)) is None:
                        unknown.append("--" + entry.name)
                        continue
                    recognized.append(Recognition(descriptor, value, entry.negated))
                case ShortMatch(flag=flag, value=value):
                    recognized.append(Recognition(shortopts[flag], value, False))
                case Unknown(token=token, flag=None):
                    unknown.append(token)
                case Unknown(flag=flag):
                    unknown.append("-" + flag)
    finally:
        longopts.release()
        shortopts.release()
    return ParseOutcome(tuple(recognized), tuple(unknown))


__all__ = (
    "LongMatch",
    "ShortMatch",
    "Unknown",
    "Recognition",
    "ParseOutcome",
    "Scanner",
    "survey",
)
