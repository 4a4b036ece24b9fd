"""
Confline resolution: from scan events to typed store writes.

Responsibilities
- resolve a matched long entry back to its descriptor by name (against the
  index, not the table), so deprecation redirection can take place.
- apply the deprecation policy, one level deep:
  • removed (replacement + strict): warn, drop the value, in both modes.
  • deprecated (replacement only): error out in strict mode; warn and continue
    with the replacement's name and kind in permissive mode.
- coerce raw text to the descriptor's kind and write it through to the store.
- accumulate the verbosity counter across -v, -vv..., -vN occurrences.
- turn unknown tokens into UnknownOptionError (strict) or nothing (permissive).

Coercion
    text kinds → verbatim
    INTEGER    → base-agnostic integer ("0x10" → 16, "010" → 8)
    FLOAT      → decimal float
    KEY        → translator(text)
    BOOL       → 1, or 0 for a negation form
Malformed numbers become zero and are never reported.
"""
import re

from .descriptors import Kind
from .faults import *
from .keys import string_to_key
from .tables import VERBOSITY_FLAG

_INTEGER = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))")
_DECIMAL = re.compile(r"\s*([+-]?)([0-9]+)")
_FLOAT = re.compile(r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))", re.IGNORECASE)

# strtol-style saturation bounds
_MAXIMUM = 2 ** 63 - 1
_MINIMUM = -2 ** 63


def _saturate(sign, digits, base):
    # runs longer than 32 digits overflow 64 bits in every base
    magnitude = _MAXIMUM + 1 if len(digits) > 32 else int(digits or "0", base)
    if sign == "-":
        return max(-magnitude, _MINIMUM)
    return min(magnitude, _MAXIMUM)


# Malformed text yields zero instead of an error in the three parsers below;
# whether that should be tightened into a validation error is still open.
def to_integer(text, /):
    """
    parse the leading integer of text, detecting the radix from its prefix.

    examples
    - "42" → 42, "0x10" → 16, "010" → 8, "12abc" → 12, "notanumber" → 0
    - out-of-range values saturate at the signed 64-bit bounds
    """
    if text is None or (match := _INTEGER.match(text)) is None:
        return 0
    sign, hexadecimal, octal, decimal = match.groups()
    if hexadecimal is not None:
        digits, base = hexadecimal.lstrip("0"), 16
    elif octal is not None:
        digits, base = octal.lstrip("0"), 8
    else:
        digits, base = decimal, 10
    return _saturate(sign, digits, base)


def to_decimal(text, /):
    if text is None or (match := _DECIMAL.match(text)) is None:
        return 0
    sign, digits = match.groups()
    return _saturate(sign, digits.lstrip("0"), 10)


def to_float(text, /):
    if text is None or (match := _FLOAT.match(text)) is None:
        return 0.0
    return float(match[1])


def coerce(kind, value, /, *, negated=False, translator=string_to_key):
    """
    Convert a raw command-line value into the Python value stored for kind.

    parameters
    - kind: Kind of the destination descriptor (HINT is rejected).
    - value: str | None, the raw argument (None when the option had none).
    - negated: bool, whether a --no form matched (BOOL only).
    - translator: Callable[[str], int] for KEY values.
    """
    if kind.textual:
        return value
    match kind:
        case Kind.INTEGER:
            return to_integer(value)
        case Kind.FLOAT:
            return to_float(value)
        case Kind.KEY:
            return 0 if value is None else translator(value)
        case Kind.BOOL:
            return int(not negated)
    raise ValueError("%s values cannot be stored" % kind.name.lower())


def verbosity_increment(value, /):
    """
    How much one occurrence of the verbosity flag adds to the counter.

    - "-v"   (no argument)  → 1
    - "-vvv" (argument "vv") → 1 + 2
    - "-v2"  (argument "2") → 2
    """
    if value is None:
        return 1
    if value.startswith(VERBOSITY_FLAG):
        return 1 + len(value) - len(value.lstrip(VERBOSITY_FLAG))
    return to_decimal(value)


def put(store, name, kind, value, /):
    """
    Write an already coerced value through the store's typed interface.
    """
    if kind.textual:
        store.put_string(name, value)
    elif kind is Kind.FLOAT:
        store.put_float(name, value)
    else:
        store.put_int(name, value)


class Resolver:
    """
    Per-call resolution state.

    parameters
    - index: DescriptorIndex used for name lookups and redirection.
    - store: object with put_string/put_int/put_float.
    - translator: key-name translator for KEY values.
    - ignore_errors: permissive mode when True.
    - trigger: callable surfacing warnings (defaults to confline.faults.trigger).

    The verbosity counter starts at zero for every Resolver, i.e. every call.
    """

    def __init__(self, index, store, /, *, translator=string_to_key, ignore_errors=False, trigger=trigger):
        self._index = index
        self._store = store
        self._translator = translator
        self._ignore_errors = bool(ignore_errors)
        self._trigger = trigger
        self._verbosity = 0

    @property
    def verbosity(self):
        return self._verbosity

    @property
    def ignore_errors(self):
        return self._ignore_errors

    def reject(self, token, flag=None, /):
        """
        Handle a token nothing could be resolved for.

        raises
        - UnknownOptionError in strict mode; returns None in permissive mode.
        """
        if self._ignore_errors:
            return None
        culprit = "-" + flag if flag is not None else token
        raise UnknownOptionError(
            "unknown option or missing mandatory argument `%s'" % culprit,
            code=FaultCode.UNKNOWN_OPTION,
            token=token,
            flag=flag,
        )

    def redirect(self, descriptor, /):
        """
        Apply the deprecation policy to descriptor.

        returns
        - the descriptor itself when it is current,
        - its replacement (permissive mode),
        - None when the value must be dropped.
        """
        if descriptor.replacement is None:
            return descriptor

        if descriptor.strict:
            self._trigger(RemovedOptionWarning(
                "option --%s no longer exists." % descriptor.name,
                code=FaultCode.REMOVED_OPTION,
                name=descriptor.name,
            ))
            return None

        message = "option --%s is deprecated. Use --%s instead." % (descriptor.name, descriptor.replacement)
        if not self._ignore_errors:
            raise DeprecatedOptionError(
                message,
                code=FaultCode.DEPRECATED_OPTION,
                name=descriptor.name,
                replacement=descriptor.replacement,
            )
        self._trigger(DeprecatedOptionWarning(
            message,
            code=FaultCode.DEPRECATED_ALIAS,
            name=descriptor.name,
            replacement=descriptor.replacement,
        ))

        # one level only: a replacement that is itself deprecated is used as-is
        if (replacement := self._index.find(descriptor.replacement)) is None:
            return self.reject("--" + descriptor.replacement)
        return replacement

    def resolve_long(self, entry, value, /):
        if (descriptor := self._index.find(entry.base)) is None:
            return self.reject("--" + entry.name)
        if (descriptor := self.redirect(descriptor)) is None:
            return None
        return self._write(descriptor, coerce(
            descriptor.kind,
            value,
            negated=entry.negated,
            translator=self._translator,
        ))

    def resolve_short(self, descriptor, flag, value, /):
        if (descriptor := self.redirect(descriptor)) is None:
            return None
        if flag == VERBOSITY_FLAG and descriptor.kind is Kind.INTEGER:
            self._verbosity += verbosity_increment(value)
            return self._write(descriptor, self._verbosity)
        return self._write(descriptor, coerce(
            descriptor.kind,
            value,
            translator=self._translator,
        ))

    def _write(self, descriptor, value):
        put(self._store, descriptor.name, descriptor.kind, value)
        return value


__all__ = (
    "to_integer",
    "to_decimal",
    "to_float",
    "coerce",
    "verbosity_increment",
    "put",
    "Resolver",
)
