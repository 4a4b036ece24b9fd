"""
Confline command-line loader: the policy controller.

What this module provides
- CommandLine: binds a descriptor registry to a configuration store and loads
  argument vectors into it, under one of two policies:
  • strict (ignore_errors=False): the first unknown option or deprecated
    option aborts the call with a one-line diagnostic and status -1.
  • permissive (ignore_errors=True): unknown options are skipped, deprecated
    options are redirected to their replacement with a warning.
- load_command_line(...): one-shot convenience wrapper around CommandLine.
- strip_platform_arguments(argv): optional pre-processing for argument vectors
  carrying a platform-injected argument.

Per call
1. snapshot the registry into a DescriptorIndex.
2. build the long and short option tables (running out of memory here is fatal
   in both modes).
3. scan argv with a fresh Scanner; permissive mode scans a private copy so the
   caller's list keeps its order and length, strict mode permutes the caller's
   list in place.
4. resolve every event (deprecation, coercion, store write).
5. release the tables on every exit path and return 0 or -1.

Store writes are incremental: a strict-mode failure leaves every write made
before it in place.

Quick start
    from confline import CommandLine, ConfigStore, OptionDescriptor, Kind

    store = ConfigStore()
    loader = CommandLine([
        OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
        OptionDescriptor("verbose", Kind.INTEGER, short="v"),
        OptionDescriptor("zoom", Kind.FLOAT),
    ], store)

    if loader.load(["player", "-vv", "--no-fullscreen", "--zoom=1.5", "movie.mkv"]):
        raise SystemExit(1)
    # store == {"verbose": 2, "fullscreen": 0, "zoom": 1.5}; loader.operands == ["movie.mkv"]
"""
import os.path
import shlex
import sys
from collections.abc import MutableSequence, Sequence

from .descriptors import DescriptorIndex
from .faults import *
from .keys import string_to_key
from .resolution import Resolver
from .scanner import LongMatch, ShortMatch, Unknown, Scanner
from .tables import build_long_options, build_short_options
from .utils import *


def strip_platform_arguments(argv, /, platform=Unset):
    """
    Drop the process serial number argument ("-psn_0_9306113") that macOS adds
    when an application bundle is launched from the Finder.

    The list is edited in place; the remaining argument count is returned. This
    is a pre-processing step: CommandLine.load never calls it.
    """
    if coalesce(platform, sys.platform) == "darwin" and len(argv) > 1 and argv[1].startswith("-psn"):
        del argv[1]
    return len(argv)


class CommandLine:
    """
    Loader binding a descriptor registry to a configuration store.

    parameters
    - descriptors: Iterable[OptionDescriptor] | DescriptorIndex. Iterated again
      on every load, so a live registry sequence picks up newly registered options.
    - store: object with put_string/put_int/put_float (see confline.store).
    - translator: Callable[[str], int] for KEY options.
    - prog: program name used in diagnostics; defaults to __main__.__prog__,
      then to the basename of argv[0].
    - colorful: render diagnostics with colors.

    attributes
    - faults: every error and warning triggered so far, oldest first.
    - operands: non-option arguments left by the last successful load.
    """

    faults = mirror("faults")
    operands = mirror("operands")

    def __init__(self, descriptors, store, /, *, translator=string_to_key, prog=Unset, colorful=False):
        if not callable(translator):
            raise TypeError("translator must be callable")
        if not isinstance(prog, str | Unset):
            raise TypeError("prog must be a string")
        self._descriptors = descriptors
        self._store = store
        self._translator = translator
        self._prog = prog
        self._colorful = bool(colorful)
        self._faults = []
        self._operands = []

    @property
    def store(self):
        return self._store

    def trigger(self, fault, /, **options):
        fault = trigger(fault, **options, colorful=self._colorful)
        self._faults.append(fault)
        return fault

    def _progname(self, argv):
        if self._prog is not Unset:
            return self._prog
        fallback = os.path.basename(argv[0]) if argv and argv[0] else "confline"
        return getattr(__import__("__main__"), "__prog__", fallback)

    def _index(self):
        if isinstance(self._descriptors, DescriptorIndex):
            return self._descriptors
        return DescriptorIndex(self._descriptors)

    def load(self, argv=Unset, /, *, ignore_errors=False):
        """
        Load an argument vector into the store.

        parameters
        - argv:
          • Unset: sys.argv.
          • str: shell-like string, split with shlex.split (program name prepended).
          • MutableSequence[str]: argv[0] is the program name.
          • any other iterable of str: materialized into a list first.
        - ignore_errors: permissive mode when True.

        returns
        - 0 on success, -1 on failure (diagnostic already printed on stderr).
        """
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = [coalesce(self._prog, getattr(__import__("__main__"), "__prog__", "confline")), *shlex.split(argv)]
        elif not isinstance(argv, Sequence):
            argv = list(argv)
        prog = self._progname(argv)

        index = self._index()
        longopts = shortopts = None
        try:
            try:
                longopts = build_long_options(index)
                shortopts = build_short_options(index)
                # the scan permutes its input, so permissive mode works on a copy
                if ignore_errors or not isinstance(argv, MutableSequence):
                    argv = list(argv)
            except MemoryError:
                self.trigger(TableAllocationError("out of memory", code=FaultCode.TABLE_ALLOCATION))
                return -1

            scanner = Scanner(argv, longopts, shortopts.spec)
            resolver = Resolver(
                index,
                self._store,
                translator=self._translator,
                ignore_errors=ignore_errors,
                trigger=self.trigger,
            )
            try:
                for event in scanner:
                    match event:
                        case LongMatch(entry=entry, value=value):
                            resolver.resolve_long(entry, value)
                        case ShortMatch(flag=flag, value=value):
                            if (descriptor := shortopts.get(flag)) is None:
                                resolver.reject("-" + flag, flag)
                                continue
                            resolver.resolve_short(descriptor, flag, value)
                        case Unknown(token=token, flag=flag):
                            resolver.reject(token, flag)
            except UnknownOptionError as fault:
                self.trigger(fault, label=prog, hint="Try `%s --help' for more information." % prog)
                return -1
            except CommandException as fault:
                self.trigger(fault)
                return -1

            self._operands = scanner.operands
            return 0
        finally:
            if longopts is not None:
                longopts.release()
            if shortopts is not None:
                shortopts.release()


def load_command_line(descriptors, argv=Unset, ignore_errors=False, /, *, store, translator=string_to_key, prog=Unset, colorful=False):
    """
    One-shot loader: CommandLine(descriptors, store, ...).load(argv, ignore_errors=...).

    returns
    - 0 on success, -1 on failure.
    """
    return CommandLine(
        descriptors,
        store,
        translator=translator,
        prog=prog,
        colorful=colorful,
    ).load(argv, ignore_errors=ignore_errors)


__all__ = (
    "CommandLine",
    "load_command_line",
    "strip_platform_arguments",
)
