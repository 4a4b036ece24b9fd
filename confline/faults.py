"""
Confline faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while loading the command line.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves as a one-line diagnostic with an optional hint.
- trigger(): central entry point to surface any fault on standard error.

Diagnostics shape
- errors:    "<label>: <message>" followed by an optional hint line.
- warnings:  "<label>: <message>".
  The label is the program name for unknown options, "Error"/"Warning" for
  deprecations, so output stays greppable and matches classic CLI tools.

Integration
- the loader raises CommandException subclasses while resolving tokens; the
  policy controller catches them at the boundary, calls trigger(fault, **ctx)
  and turns them into a -1 status. warnings are triggered in place and parsing
  continues.
- colors are opt-in (colorful=True). a host can restyle output through a
  __styles__ mapping read from __main__.
"""
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the loader (stable identifiers).

    grouping (by high-level domain)
    - tables (110xx)
      • TABLE_ALLOCATION
    - options (111xx)
      • UNKNOWN_OPTION, DEPRECATED_OPTION
    - warnings (121xx)
      • DEPRECATED_ALIAS, REMOVED_OPTION
    """
    # --- table errors (110xx) ---
    TABLE_ALLOCATION  = 11001

    # --- option errors (111xx) ---
    UNKNOWN_OPTION    = 11112
    DEPRECATED_OPTION = 11151

    # --- warnings (121xx) ---
    DEPRECATED_ALIAS  = 12112
    REMOVED_OPTION    = 12113


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _render(fault, styles, label_style, message_style):
    def text(fragment, style=""):
        if not fault.options.get("colorful", False):
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    lines = Text.assemble(
        text(fault.options.get("label", type(fault).__label__), label_style),
        ": ",
        text(fault.message, message_style),
    )
    if hint := fault.options.get("hint"):
        lines.append("\n")
        lines.append_text(text(hint, "hint"))
    return lines


class CommandException(Exception):
    __label__ = "Error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = _styles({
            "label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "#C8C8D0",  # soft light gray message
            "hint": "italic #9CE19C",  # gentle green hint text
        })
        return _render(self, styles, "label", "error-message")

    def __str__(self):
        return str(self.message)

    def __trigger__(self) -> None:
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class TableAllocationError(CommandException): ...
class UnknownOptionError(CommandException): ...
class DeprecatedOptionError(CommandException): ...


class CommandWarning(ABC, Warning):
    __label__ = "Warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = _styles({
            "label": "bold #FFB400",  # amber label for warnings
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint": "italic #B8EFAF",  # softer green hint text
        })
        return _render(self, styles, "label", "warning-message")

    def __str__(self):
        return str(self.message)

    def __trigger__(self) -> None:
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeprecatedOptionWarning(CommandWarning): ...
class RemovedOptionWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.

    typical options
    - label, code, hint, colorful, and any other context the reporter may
      want to keep (e.g., token/flag/name).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault = fault.__replace__(**options)
    fault.__trigger__()
    return fault


__all__ = (
    "CommandException",
    "TableAllocationError",
    "UnknownOptionError",
    "DeprecatedOptionError",
    "CommandWarning",
    "DeprecatedOptionWarning",
    "RemovedOptionWarning",
    "FaultCode",
    "trigger",
)
