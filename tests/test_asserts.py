import io
from collections.abc import Hashable, Iterable, Iterator, Sized
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import pytest

from springbase import asserts
from springbase.asserts import T, that_string


@dataclass
class Text:
    text: str


@dataclass
class Msg:
    msg: str


@runtime_checkable
class Closer(Protocol):
    def close(self) -> None: ...


def _raise(exc):
    def fn():
        raise exc

    return fn


@pytest.fixture
def t():
    return T()


def test_true(t):
    asserts.true(t, True)
    assert t.errors == []
    asserts.true(t, False)
    asserts.true(t, False, "param (index=0)")
    assert t.errors == [
        "got false but expect true",
        "got false but expect true; param (index=0)",
    ]


def test_false(t):
    asserts.false(t, False)
    assert t.errors == []
    asserts.false(t, True)
    asserts.false(t, True, "param (index=0)")
    assert t.errors == [
        "got true but expect false",
        "got true but expect false; param (index=0)",
    ]


def test_nil(t):
    asserts.nil(t, None)
    assert t.errors == []
    asserts.nil(t, 3)
    asserts.nil(t, 3, "param (index=0)")
    assert t.errors == [
        "got (int) 3 but expect nil",
        "got (int) 3 but expect nil; param (index=0)",
    ]


def test_not_nil(t):
    asserts.not_nil(t, 3)
    asserts.not_nil(t, [])
    asserts.not_nil(t, {})
    assert t.errors == []
    asserts.not_nil(t, None)
    asserts.not_nil(t, None, "param (index=0)")
    assert t.errors == [
        "got nil but expect not nil",
        "got nil but expect not nil; param (index=0)",
    ]


def test_equal_passes(t):
    asserts.equal(t, 0, 0)
    asserts.equal(t, ["a"], ["a"])
    asserts.equal(t, Text("a"), Text("a"))
    assert t.errors == []


@pytest.mark.parametrize(
    "got, expect, msgs, message",
    [
        (Text("a"), Msg("a"), (), "got (Text) {a} but expect (Msg) {a}"),
        (0, "0", (), "got (int) 0 but expect (string) 0"),
        (0, "0", ("param (index=0)",), "got (int) 0 but expect (string) 0; param (index=0)"),
        (1, True, (), "got (int) 1 but expect (bool) true"),
    ],
)
def test_equal_fails(t, got, expect, msgs, message):
    asserts.equal(t, got, expect, *msgs)
    assert t.errors == [message]


def test_not_equal(t):
    asserts.not_equal(t, "0", 0)
    assert t.errors == []
    asserts.not_equal(t, ["a"], ["a"])
    asserts.not_equal(t, "0", "0")
    asserts.not_equal(t, "0", "0", "param (index=0)")
    assert t.errors == [
        "got ([]string) [a] but expect not ([]string) [a]",
        "got (string) 0 but expect not (string) 0",
        "got (string) 0 but expect not (string) 0; param (index=0)",
    ]


def test_json_equal(t):
    asserts.json_equal(t, '{"a":0,"b":1}', '{"b":1,"a":0}')
    assert t.errors == []
    asserts.json_equal(t, "this is an error", '[{"b":1},{"a":0}]')
    asserts.json_equal(t, '{"a":0,"b":1}', "this is an error")
    asserts.json_equal(t, '{"a":0,"b":1}', '[{"b":1},{"a":0}]')
    asserts.json_equal(t, '{"a":0}', '{"a":1}', "param (index=0)")
    assert t.errors == [
        "Expecting value: line 1 column 1 (char 0)",
        "Expecting value: line 1 column 1 (char 0)",
        'got (string) {"a":0,"b":1} but expect (string) [{"b":1},{"a":0}]',
        'got (string) {"a":0} but expect (string) {"a":1}; param (index=0)',
    ]


def test_json_equal_int_and_float_agree(t):
    asserts.json_equal(t, '{"a":1}', '{"a":1.0}')
    assert t.errors == []


def test_same(t):
    asserts.same(t, "0", "0")
    assert t.errors == []
    asserts.same(t, 0, "0")
    asserts.same(t, 0, "0", "param (index=0)")
    asserts.same(t, [1], [1])
    assert t.errors == [
        "got (int) 0 but expect (string) 0",
        "got (int) 0 but expect (string) 0; param (index=0)",
        "got ([]int) [1] but expect ([]int) [1]",
    ]


def test_not_same(t):
    asserts.not_same(t, "0", 0)
    assert t.errors == []
    asserts.not_same(t, "0", "0")
    asserts.not_same(t, "0", "0", "param (index=0)")
    assert t.errors == [
        "expect not (string) 0",
        "expect not (string) 0; param (index=0)",
    ]


def test_panic(t):
    asserts.panic(t, _raise(RuntimeError("this is an error")), "an error")
    assert t.errors == []
    asserts.panic(t, lambda: None, "an error")
    asserts.panic(t, _raise(RuntimeError("this is an error")), "an error \\")
    asserts.panic(t, _raise(RuntimeError("there's no error")), "an error")
    asserts.panic(t, _raise(RuntimeError("there's no error")), "an error", "param (index=0)")
    asserts.panic(t, _raise(ValueError(["there's no error"])), "an error")
    assert t.errors == [
        "did not panic",
        "invalid pattern",
        'got "there\'s no error" which does not match "an error"',
        'got "there\'s no error" which does not match "an error"; param (index=0)',
        'got "[there\'s no error]" which does not match "an error"',
    ]


def test_matches(t):
    asserts.matches(t, "this is an error", "this is an error")
    assert t.errors == []
    asserts.matches(t, "this is an error", "an error \\")
    asserts.matches(t, "there's no error", "an error")
    asserts.matches(t, "there's no error", "an error", "param (index=0)")
    assert t.errors == [
        "invalid pattern",
        'got "there\'s no error" which does not match "an error"',
        'got "there\'s no error" which does not match "an error"; param (index=0)',
    ]


def test_error(t):
    asserts.error(t, RuntimeError("this is an error"), "an error")
    assert t.errors == []
    asserts.error(t, RuntimeError("there's no error"), "an error \\")
    asserts.error(t, None, "an error")
    asserts.error(t, None, "an error", "param (index=0)")
    asserts.error(t, RuntimeError("there's no error"), "an error")
    asserts.error(t, RuntimeError("there's no error"), "an error", "param (index=0)")
    assert t.errors == [
        "invalid pattern",
        "expect not nil error",
        "expect not nil error; param (index=0)",
        'got "there\'s no error" which does not match "an error"',
        'got "there\'s no error" which does not match "an error"; param (index=0)',
    ]


def test_type_of(t):
    asserts.type_of(t, 5, int)
    asserts.type_of(t, "string", Sized)
    assert t.errors == []
    asserts.type_of(t, "string", Iterator)
    assert t.errors == ["got type (string) but expect type (Iterator)"]


def test_implements(t):
    asserts.implements(t, ValueError("error"), Hashable)
    asserts.implements(t, io.StringIO(), Closer)
    assert t.errors == []
    asserts.implements(t, 5, int)
    asserts.implements(t, 5, Iterable)
    assert t.errors == [
        "expect should be interface",
        "got type (int) but expect type (Iterable)",
    ]


def test_string_equal_fold(t):
    that_string(t, "hello, world!").equal_fold("Hello, World!")
    assert t.errors == []
    that_string(t, "hello, world!").equal_fold("xxx")
    that_string(t, "hello, world!").equal_fold("xxx", "param (index=0)")
    assert t.errors == [
        "'hello, world!' doesn't equal fold to 'xxx'",
        "'hello, world!' doesn't equal fold to 'xxx'; param (index=0)",
    ]


def test_string_has_prefix(t):
    that_string(t, "hello, world!").has_prefix("hello")
    assert t.errors == []
    that_string(t, "hello, world!").has_prefix("xxx")
    that_string(t, "hello, world!").has_prefix("xxx", "param (index=0)")
    assert t.errors == [
        "'hello, world!' doesn't have prefix 'xxx'",
        "'hello, world!' doesn't have prefix 'xxx'; param (index=0)",
    ]


def test_string_has_suffix(t):
    that_string(t, "hello, world!").has_suffix("world!")
    assert t.errors == []
    that_string(t, "hello, world!").has_suffix("xxx")
    that_string(t, "hello, world!").has_suffix("xxx", "param (index=0)")
    assert t.errors == [
        "'hello, world!' doesn't have suffix 'xxx'",
        "'hello, world!' doesn't have suffix 'xxx'; param (index=0)",
    ]


def test_string_contains(t):
    that_string(t, "hello, world!").contains("hello")
    assert t.errors == []
    that_string(t, "hello, world!").contains("xxx")
    that_string(t, "hello, world!").contains("xxx", "param (index=0)")
    assert t.errors == [
        "'hello, world!' doesn't contain substr 'xxx'",
        "'hello, world!' doesn't contain substr 'xxx'; param (index=0)",
    ]


def test_string_chaining_collects_each_failure(t):
    that_string(t, "abc").has_prefix("x").has_suffix("y").contains("b")
    assert t.errors == [
        "'abc' doesn't have prefix 'x'",
        "'abc' doesn't have suffix 'y'",
    ]