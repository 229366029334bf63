import pytest

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.scanner import Scanner, Token, UnpackFlag


def _tokens(fmt):
    scanner = Scanner(fmt)
    result = []
    scanner.next_token()
    while scanner.token:
        result.append(scanner.token)
        scanner.next_token()
    return result


def test_flag_values():
    validate = Scanner("i", UnpackFlag.VALIDATE_ONLY)
    strict = Scanner("i", UnpackFlag.STRICT)
    assert validate.flags == 0x1
    assert strict.flags == 0x2


def test_flags_are_stored():
    scanner = Scanner("i", UnpackFlag.STRICT | UnpackFlag.VALIDATE_ONLY)
    assert UnpackFlag.STRICT in scanner.flags
    assert UnpackFlag.VALIDATE_ONLY in scanner.flags


def test_separators_are_skipped():
    assert _tokens("{s:i, s:[s]}") == list("{si s[s]}".replace(" ", ""))
    assert _tokens(" \t,:") == []


def test_initial_token_is_empty():
    scanner = Scanner("i")
    assert scanner.current == Token()
    assert scanner.token == ""


def test_columns_follow_characters_on_one_line():
    fmt = "{s:i}"
    scanner = Scanner(fmt)
    scanner.next_token()
    while scanner.token:
        assert scanner.current.line == 1
        assert scanner.current.column == fmt.index(scanner.token) + 1
        assert scanner.current.pos == fmt.index(scanner.token) + 1
        scanner.next_token()


def test_newline_moves_to_next_line():
    scanner = Scanner("[\ni]")
    scanner.next_token()
    scanner.next_token()
    assert scanner.token == "i"
    assert scanner.current.line == 2
    assert scanner.current.column == 1


def test_end_is_sticky():
    scanner = Scanner("n")
    scanner.next_token()
    scanner.next_token()
    assert scanner.token == ""
    end = scanner.current
    scanner.next_token()
    assert scanner.token == ""
    assert scanner.current == end


def test_prev_token_pushes_back_one():
    scanner = Scanner("ab")
    scanner.next_token()
    scanner.next_token()
    assert scanner.token == "b"
    second = scanner.current
    scanner.prev_token()
    assert scanner.token == "a"
    scanner.next_token()
    assert scanner.current == second
    scanner.next_token()
    assert scanner.token == ""


def test_error_is_located_at_current_token():
    fmt = "[i x]"
    scanner = Scanner(fmt)
    while scanner.token != "x":
        scanner.next_token()
    error = scanner.error("<format>", ErrorCode.INVALID_FORMAT, "bad")
    assert isinstance(error, JsonError)
    assert error.text == "bad"
    assert error.code is ErrorCode.INVALID_FORMAT
    assert error.source == "<format>"
    assert error.column == fmt.index("x") + 1
    assert error.position == fmt.index("x") + 1
    assert error.line == 1


def test_error_can_be_raised():
    scanner = Scanner("i")
    scanner.next_token()
    error = scanner.error("<args>", ErrorCode.NULL_VALUE, "NULL string")
    assert error.code is ErrorCode.NULL_VALUE
    assert error.text == "NULL string"
    assert (error.line, error.column) == (1, 1)
    with pytest.raises(JsonError, match="NULL string") as info:
        raise error
    assert info.value is error
    assert info.value.source == "<args>"