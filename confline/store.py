"""
In-memory configuration store.

The loader only needs three typed writers (put_string, put_int, put_float)
keyed by option name; any object providing them can be used instead. This
implementation keeps the latest value per name and the ordered history of
writes, which is what tests and dry runs inspect.
"""
from collections.abc import Mapping


class ConfigStore(Mapping):
    def __init__(self, defaults=(), /):
        self._values = dict(defaults)
        self._writes = []

    @property
    def writes(self):
        """
        every (name, value) pair written, oldest first.
        """
        return tuple(self._writes)

    def _put(self, name, value, type):
        if not isinstance(name, str):
            raise TypeError("configuration names must be strings")
        if value is not None and not isinstance(value, type):
            raise TypeError("configuration value for %r must be %s" % (name, type.__name__))
        self._values[name] = value
        self._writes.append((name, value))

    def put_string(self, name, value, /):
        self._put(name, value, str)

    def put_int(self, name, value, /):
        self._put(name, value, int)

    def put_float(self, name, value, /):
        self._put(name, value, float)

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return "config-store(%r)" % self._values


__all__ = (
    "ConfigStore",
)
