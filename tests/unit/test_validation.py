import pytest

from inkblog.core.validation import (
    MAX_CATEGORY_LENGTH,
    MAX_COMMENT_LENGTH,
    MAX_CONTENT_LENGTH,
    MAX_TITLE_LENGTH,
    is_valid_device_id,
    sanitize_input,
    validate_category,
    validate_comment,
    validate_content,
    validate_search_query,
    validate_title,
)


@pytest.mark.unit
def test_sanitize_strips_control_chars_but_keeps_newlines():
    assert sanitize_input("a\0b\x01c\nd") == "abc\nd"
    assert sanitize_input("  tab\there\r\n ") == "tab\there"
    assert sanitize_input("del\x7f") == "del"


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, 42, b"bytes", ["x"]])
def test_sanitize_non_string_returns_empty(value):
    assert sanitize_input(value) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    ("device_id", "expected"),
    [
        ("device_123_abc", True),
        ("device_1700000000000_k3j9x2", True),
        ("device_abc_123", False),
        ("device_123_ABC", False),
        ("device_123_", False),
        ("xdevice_1_a", False),
        ("device_1_a\n", False),
        ("", False),
        (None, False),
        (123, False),
    ],
)
def test_device_id_format(device_id, expected):
    assert is_valid_device_id(device_id) is expected


@pytest.mark.unit
def test_title_rules():
    assert validate_title("Hello").valid
    assert validate_title("x" * MAX_TITLE_LENGTH).valid

    empty = validate_title("   ")
    assert not empty.valid
    assert empty.error == "Title is required"

    too_long = validate_title("x" * (MAX_TITLE_LENGTH + 1))
    assert not too_long.valid
    assert str(MAX_TITLE_LENGTH) in too_long.error

    assert not validate_title(None).valid
    assert not validate_title(12).valid


@pytest.mark.unit
def test_content_and_comment_bounds():
    assert validate_content("body").valid
    assert not validate_content("").valid
    assert not validate_content("x" * (MAX_CONTENT_LENGTH + 1)).valid

    assert validate_comment("nice post").valid
    assert not validate_comment(" \n ").valid
    assert not validate_comment("x" * (MAX_COMMENT_LENGTH + 1)).valid


@pytest.mark.unit
def test_category_is_optional():
    assert validate_category(None).valid
    assert validate_category("").valid
    assert validate_category("tech").valid
    assert not validate_category("x" * (MAX_CATEGORY_LENGTH + 1)).valid
    assert not validate_category(5).valid


@pytest.mark.unit
def test_search_query_rules():
    assert validate_search_query("python").valid
    assert not validate_search_query("   ").valid
    assert not validate_search_query("q" * 101).valid
    assert not validate_search_query(None).valid
