# springbase

Two small building blocks for Python code and its tests. The package has no
dependencies outside the standard library.

## Assertions that report instead of raising

`springbase.asserts` holds checks that never raise. Each check reports a failure
to a reporter object that you pass in. The reporter needs two methods, `helper()`
and `error(*args)`.

`asserts.T` is a ready-made reporter:

- It appends each failure message to its `errors` list.
- It counts calls to `helper()` in `helper_calls`.

A failed check calls `error` once, with a single message. Any extra strings you
pass to the check are appended to that message, joined with `"; "`.

```python
from springbase import asserts

t = asserts.T()
asserts.true(t, False, "param (index=0)")
asserts.equal(t, [1, 2], [1, 2])
asserts.json_equal(t, '{"a":0,"b":1}', '{"b":1,"a":0}')
asserts.matches(t, "there's no error", "an error")
asserts.panic(t, lambda: 1 / 0, "division")

asserts.that_string(t, "hello, world!").has_prefix("hello").contains("world")

print(t.errors)
# ['got false but expect true; param (index=0)',
#  'got "there\'s no error" which does not match "an error"']
```

### Checks

| Check | Fails when |
| --- | --- |
| `true`, `false` | the value has the wrong truth value |
| `nil` | the value is not `None` |
| `not_nil` | the value is `None` |
| `equal` | the values are not deeply equal; values of different types never count as equal |
| `not_equal` | the values are deeply equal |
| `json_equal` | the two JSON texts do not decode to equal data; a text that cannot be decoded is reported as a failure |
| `same` | the values are not identical; equal immutable values of the same type count as identical |
| `not_same` | the values are identical, in the same sense as `same` |
| `matches` | the string has no match for the regular expression, which is applied with `re.search`; an invalid pattern is reported as `invalid pattern` |
| `error` | the exception is `None`, or its message does not match the pattern |
| `panic` | the callable does not raise, or its error message does not match the pattern |
| `type_of` | the value is not an instance of the expected type |
| `implements` | the expected type is not an abstract base class, or the value does not implement it |

### String checks

`that_string(t, v)` returns a `StringAssertion`. Its methods can be chained, and
each one returns the assertion:

- `equal_fold(s)` compares case-insensitively.
- `has_prefix(prefix)` checks the start of the string.
- `has_suffix(suffix)` checks the end of the string.
- `contains(substr)` checks for a substring.

### Using the checks with pytest

The checks do not fail a pytest test on their own. To make a test fail, assert on
what the reporter has recorded:

```python
assert t.errors == []
```

## Thread-safe values

`springbase.atomics` provides five holders. Each keeps one value behind a lock.
You can pass a starting value to the constructor.

| Class | Default | Notes |
| --- | --- | --- |
| `Bool` | `False` | |
| `Int32` | `0` | Values must be ints that fit in 32 bits, or `TypeError` or `OverflowError` is raised. `add` wraps around on overflow. |
| `Float32` | `0.0` | Values are rounded to single precision. |
| `Float64` | `0.0` | |
| `Duration` | `timedelta(0)` | Values must be `datetime.timedelta`. |

Every holder has these methods:

- `load()`
- `store(val)`
- `swap(new)`, which returns the old value.
- `compare_and_swap(old, new)`, which returns whether the value was swapped.
- `marshal_json()`, which returns the value as JSON text.

The numeric types also have `add(delta)`, which returns the new value.

On `Float32` and `Float64`, `compare_and_swap` compares bit patterns rather than
using `==`.

Some `marshal_json` behaviour depends on the type:

- `Float32` and `Float64` raise `ValueError` when the value is NaN or infinite.
- `Duration` gives the value as a whole number of nanoseconds.

```python
from datetime import timedelta
from springbase.atomics import Duration, Int32

counter = Int32()
counter.add(5)
counter.compare_and_swap(5, 6)
print(counter.load(), counter.marshal_json())  # 6 6

d = Duration()
d.add(timedelta(seconds=1))
print(d.marshal_json())  # 1000000000
```

## Running the tests

```
pip install -e .[test]
pytest
```