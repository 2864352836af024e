"""Assertion helpers that report failures through a minimal test reporter."""

from __future__ import annotations

import abc
import dataclasses
import json
import math
import re
from typing import Any, Callable

_BUILTIN_NAMES: dict[type, str] = {
    str: "string",
    bool: "bool",
    int: "int",
    float: "float64",
    complex: "complex128",
    bytes: "[]uint8",
    type(None): "<nil>",
}

_IMMUTABLE = (int, float, complex, str, bytes, bool, type(None), frozenset, tuple)


class T:
    """Minimal test reporter that records every failure it is given."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.helper_calls = 0

    def helper(self) -> None:
        """Mark the caller as a helper; the marks are counted."""
        self.helper_calls += 1

    def error(self, *args: Any) -> None:
        """Record one failure built from ``args``."""
        self.errors.append(" ".join(str(arg) for arg in args))


def _fail(t: T, text: str, msgs: tuple[str, ...]) -> None:
    t.helper()
    t.error("; ".join((text, *msgs)))


def _class_name(cls: type) -> str:
    return _BUILTIN_NAMES.get(cls, cls.__qualname__)


def _common_type(items: Any) -> str:
    names = {_type_name(item) for item in items}
    return names.pop() if len(names) == 1 else "any"


def _type_name(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[]" + _common_type(value)
    if isinstance(value, dict):
        return f"map[{_common_type(value.keys())}]{_common_type(value.values())}"
    return _class_name(type(value))


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        pairs = (f"{_format_value(k)}:{_format_value(v)}" for k, v in value.items())
        return "map[" + " ".join(pairs) + "]"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = (_format_value(getattr(value, f.name)) for f in dataclasses.fields(value))
        return "{" + " ".join(fields) + "}"
    return str(value)


def _describe(value: Any) -> str:
    return f"({_type_name(value)}) {_format_value(value)}"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _deep_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if dataclasses.is_dataclass(a) and not isinstance(a, type):
        return all(
            _deep_equal(getattr(a, f.name), getattr(b, f.name))
            for f in dataclasses.fields(a)
        )
    return a == b


def _identical(a: Any, b: Any) -> bool:
    """Identity, or plain equality for values of the same immutable type."""
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _IMMUTABLE):
        return False
    return a == b


def _matches(t: T, got: str, expr: str, msgs: tuple[str, ...]) -> None:
    t.helper()
    try:
        found = re.search(expr, got)
    except re.error:
        _fail(t, "invalid pattern", msgs)
        return
    if found is None:
        _fail(t, f"got {_quote(got)} which does not match {_quote(expr)}", msgs)


def true(t: T, got: bool, *args: str) -> None:
    """Fail when ``got`` is false."""
    t.helper()
    if not got:
        _fail(t, "got false but expect true", args)


def false(t: T, got: bool, *args: str) -> None:
    """Fail when ``got`` is true."""
    t.helper()
    if got:
        _fail(t, "got true but expect false", args)


def nil(t: T, got: Any, *args: str) -> None:
    """Fail when ``got`` is not None."""
    t.helper()
    if got is not None:
        _fail(t, f"got {_describe(got)} but expect nil", args)


def not_nil(t: T, got: Any, *args: str) -> None:
    """Fail when ``got`` is None."""
    t.helper()
    if got is None:
        _fail(t, "got nil but expect not nil", args)


def equal(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``got`` and ``expect`` are not deeply equal, types included."""
    t.helper()
    if not _deep_equal(got, expect):
        _fail(t, f"got {_describe(got)} but expect {_describe(expect)}", args)


def not_equal(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``got`` and ``expect`` are deeply equal."""
    t.helper()
    if _deep_equal(got, expect):
        _fail(t, f"got {_describe(got)} but expect not {_describe(expect)}", args)


def json_equal(t: T, got: str, expect: str, *args: str) -> None:
    """Fail when two JSON documents do not decode to equal values."""
    t.helper()
    try:
        got_value = json.loads(got, parse_int=float)
        expect_value = json.loads(expect, parse_int=float)
    except json.JSONDecodeError as exc:
        _fail(t, str(exc), args)
        return
    if not _deep_equal(got_value, expect_value):
        _fail(t, f"got {_describe(got)} but expect {_describe(expect)}", args)


def same(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``got`` and ``expect`` are not the same value."""
    t.helper()
    if not _identical(got, expect):
        _fail(t, f"got {_describe(got)} but expect {_describe(expect)}", args)


def not_same(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``got`` and ``expect`` are the same value."""
    t.helper()
    if _identical(got, expect):
        _fail(t, f"expect not {_describe(expect)}", args)


def panic(t: T, fn: Callable[[], Any], expr: str, *args: str) -> None:
    """Fail when ``fn`` does not raise, or its error does not match ``expr``."""
    t.helper()
    try:
        fn()
    except Exception as exc:
        text = _format_value(exc.args[0]) if len(exc.args) == 1 else str(exc)
        _matches(t, text, expr, args)
        return
    _fail(t, "did not panic", args)


def matches(t: T, got: str, expr: str, *args: str) -> None:
    """Fail when ``got`` does not match the regular expression ``expr``."""
    t.helper()
    _matches(t, got, expr, args)


def error(t: T, got: BaseException | None, expr: str, *args: str) -> None:
    """Fail when ``got`` is None or its message does not match ``expr``."""
    t.helper()
    if got is None:
        _fail(t, "expect not nil error", args)
        return
    _matches(t, str(got), expr, args)


def type_of(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``got`` is not an instance of the type ``expect``."""
    t.helper()
    expect_type = expect if isinstance(expect, type) else type(expect)
    if not isinstance(got, expect_type):
        text = f"got type ({_type_name(got)}) but expect type ({_class_name(expect_type)})"
        _fail(t, text, args)


def implements(t: T, got: Any, expect: Any, *args: str) -> None:
    """Fail when ``expect`` is not an abstract interface or ``got`` lacks it."""
    t.helper()
    if not isinstance(expect, abc.ABCMeta):
        _fail(t, "expect should be interface", args)
        return
    try:
        ok = isinstance(got, expect)
    except TypeError:
        _fail(t, "expect should be interface", args)
        return
    if not ok:
        text = f"got type ({_type_name(got)}) but expect type ({_class_name(expect)})"
        _fail(t, text, args)


@dataclasses.dataclass
class StringAssertion:
    """Chainable assertions on a single string."""

    t: T
    v: str

    def equal_fold(self, s: str, *args: str) -> StringAssertion:
        """Fail when the value differs from ``s`` ignoring case."""
        self.t.helper()
        if self.v.casefold() != s.casefold():
            _fail(self.t, f"'{self.v}' doesn't equal fold to '{s}'", args)
        return self

    def has_prefix(self, prefix: str, *args: str) -> StringAssertion:
        """Fail when the value does not start with ``prefix``."""
        self.t.helper()
        if not self.v.startswith(prefix):
            _fail(self.t, f"'{self.v}' doesn't have prefix '{prefix}'", args)
        return self

    def has_suffix(self, suffix: str, *args: str) -> StringAssertion:
        """Fail when the value does not end with ``suffix``."""
        self.t.helper()
        if not self.v.endswith(suffix):
            _fail(self.t, f"'{self.v}' doesn't have suffix '{suffix}'", args)
        return self

    def contains(self, substr: str, *args: str) -> StringAssertion:
        """Fail when the value does not contain ``substr``."""
        self.t.helper()
        if substr not in self.v:
            _fail(self.t, f"'{self.v}' doesn't contain substr '{substr}'", args)
        return self


def that_string(t: T, v: str) -> StringAssertion:
    """Return assertions for the string ``v``."""
    return StringAssertion(t, v)