"""Input validation and sanitization for untrusted user input.

Every function here is total: given any value it returns a result instead of
raising, so services can use them as a gate before touching the database.
"""

from dataclasses import dataclass
import re

MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 50000
MAX_COMMENT_LENGTH = 2000
MAX_CATEGORY_LENGTH = 50
MAX_SEARCH_QUERY_LENGTH = 100

# NUL and C0 control characters except tab, newline and carriage return, plus DEL
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_DEVICE_ID_RE = re.compile(r"^device_\d+_[a-z0-9]+$")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


_OK = ValidationResult(valid=True)


def _required_text(value: object, *, max_length: int, missing: str, too_long: str) -> ValidationResult:
    if not isinstance(value, str) or not value.strip():
        return ValidationResult(valid=False, error=missing)
    if len(value) > max_length:
        return ValidationResult(valid=False, error=too_long)
    return _OK


def validate_title(title: object) -> ValidationResult:
    return _required_text(
        title,
        max_length=MAX_TITLE_LENGTH,
        missing="Title is required",
        too_long=f"Title must be less than {MAX_TITLE_LENGTH} characters",
    )


def validate_content(content: object) -> ValidationResult:
    return _required_text(
        content,
        max_length=MAX_CONTENT_LENGTH,
        missing="Content is required",
        too_long=f"Content must be less than {MAX_CONTENT_LENGTH} characters",
    )


def validate_comment(content: object) -> ValidationResult:
    return _required_text(
        content,
        max_length=MAX_COMMENT_LENGTH,
        missing="Comment content is required",
        too_long=f"Comment must be less than {MAX_COMMENT_LENGTH} characters",
    )


def validate_category(category: object) -> ValidationResult:
    """Category is optional; only its length is bounded."""
    if category is None or category == "":
        return _OK
    if not isinstance(category, str):
        return ValidationResult(valid=False, error="Category must be a string")
    if len(category) > MAX_CATEGORY_LENGTH:
        return ValidationResult(valid=False, error=f"Category must be less than {MAX_CATEGORY_LENGTH} characters")
    return _OK


def validate_search_query(query: object) -> ValidationResult:
    if not isinstance(query, str):
        return ValidationResult(valid=False, error="Invalid search query")
    if len(query) > MAX_SEARCH_QUERY_LENGTH:
        return ValidationResult(
            valid=False, error=f"Search query too long (max {MAX_SEARCH_QUERY_LENGTH} characters)"
        )
    if not query.strip():
        return ValidationResult(valid=False, error="Search query cannot be empty")
    return _OK


def sanitize_input(value: object) -> str:
    """Strip NUL bytes and control characters (keeping newline, CR and tab), then trim."""
    if not isinstance(value, str):
        return ""
    return _CONTROL_CHARS_RE.sub("", value).strip()


def is_valid_device_id(device_id: object) -> bool:
    return isinstance(device_id, str) and _DEVICE_ID_RE.fullmatch(device_id) is not None
