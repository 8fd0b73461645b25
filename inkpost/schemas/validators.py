import re

PASSWORD_SPECIALS = "@$!%*?&"


def check_password_strength(v: str) -> str:
    """Require upper, lower, digit and special character, at least 8 long."""
    errors = []

    if len(v) < 8:
        errors.append("at least 8 characters")
    if not re.search(r'[A-Z]', v):
        errors.append("one uppercase letter")
    if not re.search(r'[a-z]', v):
        errors.append("one lowercase letter")
    if not re.search(r'\d', v):
        errors.append("one number")
    if not any(c in PASSWORD_SPECIALS for c in v):
        errors.append(f"one special character ({PASSWORD_SPECIALS})")

    if errors:
        raise ValueError(f"Password must contain: {', '.join(errors)}")

    return v


def reject_null(v):
    """Partial updates may omit a field, but may not clear a required one."""
    if v is None:
        raise ValueError("Field cannot be null")
    return v
