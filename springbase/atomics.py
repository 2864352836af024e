"""Thread-safe holders for single values, each read and written atomically."""

from __future__ import annotations

import json
import math
import struct
import threading
from datetime import timedelta
from decimal import Decimal
from typing import Any, Callable

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_MICROSECOND = timedelta(microseconds=1)


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _bits32(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _bits64(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _shortest32(value: float) -> str:
    for precision in range(1, 10):
        text = format(value, f".{precision}g")
        if _to_float32(float(text)) == value:
            return text
    return repr(value)


def _json_float(value: float, shortest: str) -> str:
    if not math.isfinite(value):
        name = "NaN" if math.isnan(value) else ("+Inf" if value > 0 else "-Inf")
        raise ValueError(f"json: unsupported value: {name}")
    number = Decimal(shortest).normalize()
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        sign, digits, exponent = number.as_tuple()
        exp10 = exponent + len(digits) - 1
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(map(str, digits[1:]))
        exp_text = f"+{exp10:02d}" if exp10 >= 0 else f"-{-exp10}"
        return ("-" if sign else "") + mantissa + "e" + exp_text
    return format(number, "f")


class _Atomic:
    """Common lock-guarded load/store/swap/compare-and-swap behaviour."""

    _default: Any = None

    def __init__(self, val: Any = None) -> None:
        self._lock = threading.Lock()
        self._value = self._coerce(self._default if val is None else val)

    def _coerce(self, val: Any) -> Any:
        return val

    def _same(self, a: Any, b: Any) -> bool:
        return a == b

    def _update(self, fn: Callable[[Any], Any]) -> Any:
        with self._lock:
            self._value = fn(self._value)
            return self._value

    def _load(self) -> Any:
        with self._lock:
            return self._value

    def _store(self, val: Any) -> None:
        val = self._coerce(val)
        with self._lock:
            self._value = val

    def _swap(self, new: Any) -> Any:
        new = self._coerce(new)
        with self._lock:
            old, self._value = self._value, new
            return old

    def _compare_and_swap(self, old: Any, new: Any) -> bool:
        old, new = self._coerce(old), self._coerce(new)
        with self._lock:
            if not self._same(self._value, old):
                return False
            self._value = new
            return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._load()!r})"


class Bool(_Atomic):
    """An atomic boolean, false by default."""

    _default = False

    def _coerce(self, val: Any) -> bool:
        return bool(val)

    def load(self) -> bool:
        """Return the stored value."""
        return self._load()

    def store(self, val: bool) -> None:
        """Replace the stored value with ``val``."""
        self._store(val)

    def swap(self, new: bool) -> bool:
        """Store ``new`` and return the previous value."""
        return self._swap(new)

    def compare_and_swap(self, old: bool, new: bool) -> bool:
        """Store ``new`` only if the current value is ``old``; report success."""
        return self._compare_and_swap(old, new)

    def marshal_json(self) -> str:
        """Return the JSON encoding of the value."""
        return json.dumps(self.load())


class Int32(_Atomic):
    """An atomic signed 32-bit integer; additions wrap around."""

    _default = 0

    def _coerce(self, val: Any) -> int:
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(f"expected an int, got {type(val).__name__}")
        if not _INT32_MIN <= val <= _INT32_MAX:
            raise OverflowError(f"{val} does not fit in 32 bits")
        return val

    def add(self, delta: int) -> int:
        """Add ``delta`` and return the new value."""
        delta = self._coerce(delta)
        return self._update(
            lambda v: (v + delta - _INT32_MIN) % 2**32 + _INT32_MIN
        )

    def load(self) -> int:
        """Return the stored value."""
        return self._load()

    def store(self, val: int) -> None:
        """Replace the stored value with ``val``."""
        self._store(val)

    def swap(self, new: int) -> int:
        """Store ``new`` and return the previous value."""
        return self._swap(new)

    def compare_and_swap(self, old: int, new: int) -> bool:
        """Store ``new`` only if the current value is ``old``; report success."""
        return self._compare_and_swap(old, new)

    def marshal_json(self) -> str:
        """Return the JSON encoding of the value."""
        return str(self.load())


class Float32(_Atomic):
    """An atomic single-precision float; equality in swaps is bitwise."""

    _default = 0.0

    def _coerce(self, val: Any) -> float:
        return _to_float32(float(val))

    def _same(self, a: float, b: float) -> bool:
        return _bits32(a) == _bits32(b)

    def add(self, delta: float) -> float:
        """Add ``delta`` and return the new value."""
        delta = self._coerce(delta)
        return self._update(lambda v: _to_float32(v + delta))

    def load(self) -> float:
        """Return the stored value."""
        return self._load()

    def store(self, val: float) -> None:
        """Replace the stored value with ``val``."""
        self._store(val)

    def swap(self, new: float) -> float:
        """Store ``new`` and return the previous value."""
        return self._swap(new)

    def compare_and_swap(self, old: float, new: float) -> bool:
        """Store ``new`` only if the current value is ``old``; report success."""
        return self._compare_and_swap(old, new)

    def marshal_json(self) -> str:
        """Return the JSON encoding of the value."""
        value = self.load()
        return _json_float(value, _shortest32(value))


class Float64(_Atomic):
    """An atomic double-precision float; equality in swaps is bitwise."""

    _default = 0.0

    def _coerce(self, val: Any) -> float:
        return float(val)

    def _same(self, a: float, b: float) -> bool:
        return _bits64(a) == _bits64(b)

    def add(self, delta: float) -> float:
        """Add ``delta`` and return the new value."""
        delta = self._coerce(delta)
        return self._update(lambda v: v + delta)

    def load(self) -> float:
        """Return the stored value."""
        return self._load()

    def store(self, val: float) -> None:
        """Replace the stored value with ``val``."""
        self._store(val)

    def swap(self, new: float) -> float:
        """Store ``new`` and return the previous value."""
        return self._swap(new)

    def compare_and_swap(self, old: float, new: float) -> bool:
        """Store ``new`` only if the current value is ``old``; report success."""
        return self._compare_and_swap(old, new)

    def marshal_json(self) -> str:
        """Return the JSON encoding of the value."""
        value = self.load()
        return _json_float(value, repr(value))


class Duration(_Atomic):
    """An atomic time span, zero by default."""

    _default = timedelta(0)

    def _coerce(self, val: Any) -> timedelta:
        if not isinstance(val, timedelta):
            raise TypeError(f"expected a timedelta, got {type(val).__name__}")
        return val

    def add(self, delta: timedelta) -> timedelta:
        """Add ``delta`` and return the new value."""
        delta = self._coerce(delta)
        return self._update(lambda v: v + delta)

    def load(self) -> timedelta:
        """Return the stored value."""
        return self._load()

    def store(self, val: timedelta) -> None:
        """Replace the stored value with ``val``."""
        self._store(val)

    def swap(self, new: timedelta) -> timedelta:
        """Store ``new`` and return the previous value."""
        return self._swap(new)

    def compare_and_swap(self, old: timedelta, new: timedelta) -> bool:
        """Store ``new`` only if the current value is ``old``; report success."""
        return self._compare_and_swap(old, new)

    def marshal_json(self) -> str:
        """Return the JSON encoding of the value as whole nanoseconds."""
        return str((self.load() // _MICROSECOND) * 1000)