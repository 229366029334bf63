import math

import pytest

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.values import (
    JsonArray,
    JsonInteger,
    JsonReal,
    JsonString,
    JsonType,
    JsonValue,
    copy,
    deep_copy,
    equal,
    json_false,
    json_null,
    json_true,
    number_value,
    sprintf,
    string,
    string_nocheck,
)


def test_array_misc():
    array = JsonArray()
    five = JsonInteger(5)
    seven = JsonInteger(7)
    assert len(array) == 0

    with pytest.raises(TypeError):
        array.append(None)

    array.append(five)
    assert len(array) == 1
    assert array[0] is five

    array.append(seven)
    assert len(array) == 2
    assert array[1] is seven

    array[0] = seven
    with pytest.raises(TypeError):
        array[0] = None
    assert len(array) == 2
    assert array[0] is seven

    with pytest.raises(IndexError):
        array[2]
    with pytest.raises(IndexError):
        array[2] = seven

    for i in range(2, 30):
        array.append(seven)
        assert len(array) == i + 1
    assert all(item is seven for item in array)
    assert len(list(array)) == 30

    array[15] = JsonInteger(123)
    assert array[15].type is JsonType.INTEGER
    assert array[15].value == 123

    array.append(JsonInteger(321))
    assert array[len(array) - 1].value == 321


def test_array_insert():
    array = JsonArray()
    five, seven, eleven = JsonInteger(5), JsonInteger(7), JsonInteger(11)

    with pytest.raises(IndexError):
        array.insert(1, five)

    array.insert(0, five)
    assert array[0] is five
    assert len(array) == 1

    array.insert(1, seven)
    assert array[0] is five
    assert array[1] is seven
    assert len(array) == 2

    array.insert(1, eleven)
    assert [array[0], array[1], array[2]] == [five, eleven, seven]
    assert array[1] is eleven
    assert len(array) == 3

    array.insert(2, JsonInteger(123))
    assert array[2].value == 123
    assert len(array) == 4

    for _ in range(20):
        array.insert(0, seven)
    assert all(array[i] is seven for i in range(20))
    assert len(array) == 24


def test_array_remove():
    array = JsonArray()
    five, seven = JsonInteger(5), JsonInteger(7)

    with pytest.raises(IndexError):
        array.remove(0)

    array.append(five)
    with pytest.raises(IndexError):
        array.remove(1)
    array.remove(0)
    assert len(array) == 0

    for item in (five, seven, five, seven):
        array.append(item)
    array.remove(2)
    assert len(array) == 3
    assert array[0] is five and array[1] is seven and array[2] is seven

    full = JsonArray()
    for _ in range(4):
        full.append(five)
        full.append(seven)
    assert len(full) == 8
    full.remove(5)
    assert len(full) == 7
    assert full[5] is five


def test_array_clear():
    array = JsonArray()
    for _ in range(10):
        array.append(JsonInteger(5))
    for _ in range(10):
        array.append(JsonInteger(7))
    assert len(array) == 20
    array.clear()
    assert len(array) == 0


def test_array_extend():
    five, seven = JsonInteger(5), JsonInteger(7)
    array1 = JsonArray([five] * 10)
    array2 = JsonArray([seven] * 10)
    assert len(array1) == 10 and len(array2) == 10

    array1.extend(array2)
    assert len(array1) == 20
    assert all(array1[i] is five for i in range(10))
    assert all(array1[i] is seven for i in range(10, 20))
    assert len(array2) == 10


def test_array_circular_simple_cases():
    array = JsonArray()
    with pytest.raises(ValueError):
        array.append(array)
    with pytest.raises(ValueError):
        array.insert(0, array)
    array.append(json_true())
    with pytest.raises(ValueError):
        array[0] = array
    assert array[0] is json_true()


def test_deep_copy_detects_circular_reference():
    array1 = JsonArray()
    array2 = JsonArray()
    array1.append(array2)
    array2.append(array1)
    with pytest.raises(ValueError):
        deep_copy(array1)


def test_array_foreach():
    array1 = JsonArray(
        [string("foo"), JsonInteger(1), string("bar"), JsonInteger(2), string("baz"), JsonInteger(3)]
    )
    array2 = JsonArray()
    for value in array1:
        array2.append(value)
    assert equal(array1, array2)


def test_array_bad_args():
    array = JsonArray()
    num = JsonInteger(1)
    with pytest.raises(TypeError):
        array.append(5)
    with pytest.raises(TypeError):
        array.insert(0, "x")
    with pytest.raises(TypeError):
        array.extend(num)
    with pytest.raises(TypeError):
        array.extend(None)
    assert len(array) == 0


def test_literals_are_singletons():
    assert json_true() is json_true()
    assert json_false().type is JsonType.FALSE
    assert json_null().type is JsonType.NULL
    assert copy(json_null()) is json_null()
    assert deep_copy(json_true()) is json_true()
    assert json_true() != json_false()
    assert JsonValue("true") == json_true()


def test_string_validation():
    assert string("héllo").value == "héllo"
    assert len(string("héllo")) == 6
    with pytest.raises(JsonError) as info:
        string(b"\xff\xfe")
    assert info.value.code is ErrorCode.INVALID_UTF8
    with pytest.raises(JsonError):
        string("\ud800")
    assert string_nocheck(b"\xff").data == b"\xff"


def test_string_with_nul_byte():
    value = JsonString(b"nul byte \0 in string")
    assert len(value) == 20
    assert value.value == "nul byte \x00 in string"


def test_string_set_value():
    value = string("a")
    value.value = "bcd"
    assert value.data == b"bcd"
    with pytest.raises(JsonError):
        value.value = b"\xc0\x80"
    assert value.value == "bcd"
    value.set_nocheck(b"\xc0\x80")
    assert value.data == b"\xc0\x80"


def test_sprintf():
    assert sprintf("%s-%d", "a", 3).value == "a-3"
    assert sprintf("").value == ""
    assert sprintf("100%%").value == "100%"
    with pytest.raises(JsonError):
        sprintf("%s", "\udc80")


def test_integer_and_real():
    assert JsonInteger(2**63 - 1).value == 2**63 - 1
    with pytest.raises(OverflowError):
        JsonInteger(2**63)
    value = JsonInteger(3)
    value.value = -4
    assert int(value) == -4
    assert JsonReal(1.5).value == 1.5
    with pytest.raises(ValueError):
        JsonReal(math.nan)
    with pytest.raises(ValueError):
        JsonReal(math.inf)
    real = JsonReal(2.0)
    with pytest.raises(ValueError):
        real.value = -math.inf
    assert real.value == 2.0


def test_number_value():
    assert number_value(JsonInteger(7)) == 7.0
    assert number_value(JsonReal(2.5)) == 2.5
    assert number_value(string("x")) == 0.0
    assert number_value(None) == 0.0


def test_equal():
    assert equal(JsonInteger(1), JsonInteger(1))
    assert not equal(JsonInteger(1), JsonReal(1.0))
    assert equal(JsonReal(1.0), JsonReal(1.0))
    assert not equal(string("a"), string("b"))
    assert equal(string("a"), string("a"))
    assert not equal(None, json_null())
    assert not equal(json_null(), None)
    assert equal(JsonArray([JsonInteger(1)]), JsonArray([JsonInteger(1)]))
    assert not equal(JsonArray([JsonInteger(1)]), JsonArray([JsonInteger(1), json_null()]))


def test_shallow_copy_shares_items():
    inner = JsonArray([JsonInteger(1)])
    outer = JsonArray([inner, string("s")])
    dup = copy(outer)
    assert dup is not outer
    assert equal(dup, outer)
    assert dup[0] is inner


def test_deep_copy_shares_nothing():
    inner = JsonArray([JsonInteger(1)])
    outer = JsonArray([inner, inner, string("s")])
    dup = deep_copy(outer)
    assert equal(dup, outer)
    assert dup[0] is not inner
    assert dup[2] is not outer[2]
    inner.append(JsonInteger(2))
    assert len(dup[0]) == 1


def test_copy_rejects_non_values():
    with pytest.raises(TypeError):
        copy(None)
    with pytest.raises(TypeError):
        deep_copy(5)