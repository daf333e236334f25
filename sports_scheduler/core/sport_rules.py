"""Sport name rules — trimming and length bounds shared by create and rename."""

from sports_scheduler.core.errors import ValidationError


SPORT_NAME_MIN_LENGTH: int = 2
SPORT_NAME_MAX_LENGTH: int = 50


def normalize_sport_name(name: str) -> str:
    """Trim and validate. Uniqueness is compared on the trimmed value."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Sport name cannot be empty", "name")
    if not SPORT_NAME_MIN_LENGTH <= len(name) <= SPORT_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Sport name must be between {SPORT_NAME_MIN_LENGTH} and "
            f"{SPORT_NAME_MAX_LENGTH} characters",
            "name",
        )
    return name
