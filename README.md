# jsonvalue

A small library for building, copying, comparing and checking JSON values
in memory. It uses nothing outside the standard library.

## Installation

```
pip install jsonvalue
```

To run the tests:

```
pip install "jsonvalue[test]"
pytest
```

## The value model (`jsonvalue.values`, `jsonvalue.objects`)

- `JsonString` holds UTF-8 bytes (`.data`) and gives them back as text
  (`.value`); `len()` is the length in bytes. Strings may contain NUL.
- `JsonInteger` holds a signed 64-bit integer; values outside that range
  raise `OverflowError`.
- `JsonReal` holds a finite float; NaN and infinity raise `ValueError`.
- `JsonArray` is a sequence: `len`, iteration, indexing, item assignment,
  `append`, `insert` (the index may equal the length), `remove(index)`,
  `clear` and `extend(other_array)`. Out-of-range indices raise `IndexError`.
- `JsonObject` is an insertion-ordered mapping: `len`, iteration over keys,
  `in`, indexing, `get` (None when absent), item assignment, `del`,
  `items()` and `clear()`. Keys may be `str` or UTF-8 `bytes` and are
  reported as `str`. Assigning under a key that is not valid UTF-8 raises
  `JsonError`; `set_nocheck` stores it without that check.
- `json_true()`, `json_false()` and `json_null()` return shared singletons;
  each has a `.type` of `JsonType.TRUE`, `FALSE` or `NULL`.

Every value has a `.type` member from `JsonType`. An array or object cannot
be made to contain itself directly; that raises `ValueError`.

```python
from jsonvalue.values import JsonArray, JsonInteger, JsonReal, string, json_null
from jsonvalue.objects import JsonObject

numbers = JsonArray([JsonInteger(5), JsonInteger(7)])
numbers.append(JsonReal(1.5))
numbers.insert(0, json_null())

config = JsonObject({"name": string("demo"), "values": numbers})
config["enabled"] = string("yes")
```

Helper functions in `jsonvalue.values`:

- `string(value)` checks UTF-8 and raises `JsonError` if it is invalid;
  `string_nocheck(value)` does not check.
- `sprintf(fmt, *args)` makes a string with `%`-style formatting.
- `number_value(value)` gives an integer or real as a float, 0.0 otherwise.
- `equal(a, b)` compares by type and content (an integer never equals a
  real); anything that is not a JSON value is unequal.
- `copy(value)` makes a new container sharing its members; literals are
  returned as they are.
- `deep_copy(value)` copies containers all the way down and raises
  `ValueError` on a circular reference.

### Merging objects

- `update(other)` copies every member of `other`.
- `update_existing(other)` overwrites only keys already present.
- `update_missing(other)` adds only keys not yet present.
- `update_recursive(other)` merges nested objects member by member and
  raises `ValueError` if `other` contains a circular reference.

## Pack (`jsonvalue.pack`)

`pack(fmt, *args, flags=...)` builds a value from a format string, taking
arguments in order:

| Format | Produces |
|--------|----------|
| `s` | string from a `str` or `bytes` argument; `s#` / `s%` take a following length; `s+` joins with the next string; `s?` gives null for `None`; `s*` omits the member for `None` |
| `n` | null |
| `b` | true or false, by truth of the argument |
| `i`, `I` | integer |
| `f` | real |
| `o`, `O` | the given JSON value itself; `?` gives null for `None`, `*` omits it |
| `[...]` | array of the enclosed values |
| `{...}` | object; each member is `s` followed by a value |

Spaces, tabs, newlines, `,` and `:` in the format are ignored.

```python
from jsonvalue.pack import pack

value = pack("{s:i, s:[s, b]}", "a", 1, "b", "x", True)
```

## Unpack (`jsonvalue.unpack`)

`unpack(root, fmt, flags=...)` checks a value against a format and returns
the extracted values as a list, in order. `fmt` is the format string, or a
sequence whose first item is the format string and whose other items are
the object keys named by the format's `s` entries.

- `s` yields the text; `s%` yields the text and its length in bytes.
- `i` yields the integer wrapped to 32 bits; `I` the full integer.
- `b` yields a bool, `f` a float from a real, `F` a float from an integer
  or real, `o` / `O` the value itself; `n` checks for null and yields nothing.
- In objects, `s?` marks an optional key; a missing optional value yields
  `None`. A trailing `!` requires every member to be matched, `*` allows
  extras; arrays accept the same two marks.
- `UnpackFlag.STRICT` applies `!` wherever neither mark is given;
  `UnpackFlag.VALIDATE_ONLY` checks without extracting (the list is empty).

```python
from jsonvalue.unpack import unpack

unpack(config, ("{s:s, s?i}", "name", "count"))   # ["demo", None]
```

## Errors (`jsonvalue.errors`)

Pack and unpack failures raise `JsonError`, carrying `text`, a `code` from
`ErrorCode`, a `source` (`<format>`, `<args>`, `<validation>`, `<root>`)
and the `line`, `column` and `position` within the format string (-1 when
unknown). The format tokenizer is available as `jsonvalue.scanner.Scanner`.

## Lower-level helpers

- `jsonvalue.utf`: `utf8_encode`, `check_first`, `check_full`, `iterate`
  and `check_string`, which reject overlong encodings, surrogate halves and
  code points beyond U+10FFFF.
- `jsonvalue.strconv`: `strtod(text)` parses a decimal number (raising
  `ValueError` or `OverflowError`); `dtostr(value, precision=0)` formats a
  finite float, giving the shortest text that reads back the same when the
  precision is 0, and always including a `.` or an exponent.

## What it does not do

The package works on values in memory only: it does not parse JSON text
into values, and it does not serialize values to JSON text or files.