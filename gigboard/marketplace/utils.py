"""Shared field helpers for marketplace models."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Union

from gigboard.marketplace.errors import ValidationError


def utc_now() -> datetime:
    """Get current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """Parse an ISO timestamp as returned by PostgREST."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid timestamp: {value!r}") from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """Convert a money value to Decimal without passing through binary floats.

    Floats are converted via ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return result


def require_positive(value: Any, field_name: str) -> Decimal:
    """Convert to Decimal and reject zero or negative values."""
    amount = to_decimal(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} must be positive")
    return amount


def require_text(value: Optional[str], field_name: str, max_length: Optional[int] = None) -> str:
    """Reject missing or whitespace-only text fields."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name.replace('_', ' ').capitalize()} is required")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"{field_name.replace('_', ' ').capitalize()} too long (max {max_length} characters)"
        )
    return value


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Strip entries, drop blanks and duplicates, keep first-seen order."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = [skills]
    seen = set()
    result = []
    for skill in skills:
        name = str(skill).strip()
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result
