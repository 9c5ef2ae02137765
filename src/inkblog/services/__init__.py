from inkblog.core.exceptions import ValidationError
from inkblog.core.validation import ValidationResult


def ensure_valid(result: ValidationResult) -> None:
    """Raise the domain ValidationError for a failed check."""
    if not result.valid:
        raise ValidationError(result.error or "Invalid input")
