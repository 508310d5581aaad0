"""Field checks shared by the stores and the CLI.

validate_email is a deliberately weak heuristic, NOT RFC 5322. Accept/reject
decisions must stay exactly as they are:

- trimmed value non-empty, exactly one "@"
- local and domain parts non-empty
- domain has a ".", does not start/end with "." and has no ".."
- no whitespace and no code point below 32 anywhere
"""

from __future__ import annotations

from minicrm.errors import ValidationError

# str.isspace() is True for these but they are not trimmed: they are rejected
# as control characters instead.
_NOT_TRIMMED = frozenset("\x1c\x1d\x1e\x1f")


def _is_trim_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_TRIMMED


def trim(value: str) -> str:
    start, end = 0, len(value)
    while start < end and _is_trim_space(value[start]):
        start += 1
    while end > start and _is_trim_space(value[end - 1]):
        end -= 1
    return value[start:end]


def require_non_empty(value: str | None, field: str) -> str:
    """Return the trimmed value; raise ValidationError when nothing is left."""
    s = trim(value or "")
    if not s:
        raise ValidationError(f"{field} must not be empty", field=field)
    return s


def validate_email(value: str) -> str:
    """Return the trimmed email or raise ValidationError."""
    s = trim(value or "")
    if not s or s.count("@") != 1:
        raise ValidationError("invalid email format", field="email")

    local, domain = s.split("@")
    if not local or not domain or ".." in domain or domain.startswith(".") or domain.endswith("."):
        raise ValidationError("invalid email format", field="email")
    if "." not in domain:
        raise ValidationError("invalid email domain", field="email")

    for ch in s:
        if ch.isspace() or ord(ch) < 32:
            raise ValidationError("invalid characters in email", field="email")
    return s
