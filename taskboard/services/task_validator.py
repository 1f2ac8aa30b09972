"""Task field validation for the create and edit forms."""
from collections.abc import Mapping, MutableMapping
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
import re

from taskboard.config import current_time
from taskboard.utils.dates import parse_due_date

VALID_PRIORITIES = ("Low", "Medium", "High")

# Fields accepted from the create form; anything else is rejected
CREATE_FIELDS = ("title", "description", "due_date", "priority")

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 1000
MAX_DAYS_AHEAD = 365

# Letters, numbers, whitespace and basic punctuation
TITLE_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_.,!?()\[\]{}:;'\"\\@#$%&*+=<>~`]+$")

# Not a sanitizer: rendering must still escape descriptions
SCRIPT_TAG_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)

# Keyword each field's messages contain, used to route messages to form fields
FIELD_KEYWORDS = {
    "title": "title",
    "due_date": "due date",
    "priority": "priority",
    "description": "description",
    "completed": "completed",
}


def normalize_completed(value: Any) -> Tuple[Any, Optional[str]]:
    """
    Coerce a loosely typed completion flag to a bool.

    Strings "true"/"1" and "false"/"0" (any case, surrounding whitespace
    ignored) and the numbers 1/0 are converted; other strings and numbers are
    returned unchanged together with a violation. Any other type goes through
    bool().

    Args:
        value: Raw completed value from the form

    Returns:
        Tuple of (normalized value, violation message or None)
    """
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True, None
        if lowered in ("false", "0"):
            return False, None
        return value, "Completed must be true, false, 1, or 0"

    if isinstance(value, bool):
        return value, None

    if isinstance(value, (int, float)):
        if value == 1:
            return True, None
        if value == 0:
            return False, None
        return value, "Completed must be 1 or 0 when provided as a number"

    return bool(value), None


def _validate_title(title: Any) -> List[str]:
    if not title or not isinstance(title, str) or not title.strip():
        return ["Title is required and must be a non-empty string"]

    errors = []
    trimmed = title.strip()
    if len(trimmed) < TITLE_MIN_LENGTH:
        errors.append(f"Title must be at least {TITLE_MIN_LENGTH} characters long")
    elif len(trimmed) > TITLE_MAX_LENGTH:
        errors.append(f"Title must be less than {TITLE_MAX_LENGTH} characters")

    if not TITLE_PATTERN.match(trimmed):
        errors.append("Title contains invalid characters")
    return errors


def _validate_due_date(raw: Any, now: datetime) -> List[str]:
    if not raw:
        return ["Due date is required"]

    due_date = parse_due_date(raw)
    if due_date is None:
        return ["Due date must be a valid date"]
    if due_date < now.date():
        return ["Due date cannot be in the past"]
    if due_date > (now + timedelta(days=MAX_DAYS_AHEAD)).date():
        return ["Due date cannot be more than 1 year in the future"]
    return []


def _validate_priority(priority: Any) -> List[str]:
    if not priority or not isinstance(priority, str):
        return ["Priority is required and must be a string"]
    if priority not in VALID_PRIORITIES:
        return ["Priority must be Low, Medium, or High"]
    return []


def _validate_description(description: Any) -> List[str]:
    if description is None:
        return []
    if not isinstance(description, str):
        return ["Description must be a string"]

    errors = []
    trimmed = description.strip()
    if 0 < len(trimmed) < DESCRIPTION_MIN_LENGTH:
        errors.append(
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long if provided"
        )
    elif len(trimmed) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters")

    if SCRIPT_TAG_PATTERN.search(trimmed):
        errors.append("Description contains invalid content")
    return errors


def validate_task_data(data: Any, is_update: bool = False, now: Optional[datetime] = None) -> List[str]:
    """
    Validate a task payload from the create or edit form.

    When is_update is set and the payload carries "completed", the value is
    normalized to a bool in place before its type is checked.

    Args:
        data: Mapping of field name to raw value
        is_update: True for the edit form, False for the create form
        now: Current moment; defaults to the configured timezone's clock

    Returns:
        Violation messages in field order; empty when the payload is acceptable
    """
    if not isinstance(data, Mapping):
        return ["Task data must be a valid object"]

    now = now or current_time()
    errors: List[str] = []

    errors.extend(_validate_title(data.get("title")))
    errors.extend(_validate_due_date(data.get("due_date"), now))
    errors.extend(_validate_priority(data.get("priority")))
    errors.extend(_validate_description(data.get("description")))

    if is_update and "completed" in data:
        completed, violation = normalize_completed(data["completed"])
        if isinstance(data, MutableMapping):
            data["completed"] = completed
        if violation:
            errors.append(violation)
        if not isinstance(completed, bool):
            errors.append("Completed must be a boolean value")

    if not is_update:
        extra_fields = [str(field) for field in data if field not in CREATE_FIELDS]
        if extra_fields:
            errors.append(f"Invalid fields provided: {', '.join(extra_fields)}")

    return errors


def get_field_error(errors: List[str], field_name: str) -> List[str]:
    """
    Pick the messages that belong to one form field.

    Matching is a case-insensitive keyword search, so a message may land on
    several fields or on none.
    """
    keyword = FIELD_KEYWORDS.get(field_name)
    if keyword is None:
        return []
    return [error for error in errors if keyword in error.lower()]


def group_field_errors(errors: List[str]) -> Dict[str, str]:
    """Map each form field to the last message that mentions it."""
    field_errors: Dict[str, str] = {}
    for error in errors:
        lowered = error.lower()
        for field_name, keyword in FIELD_KEYWORDS.items():
            if keyword in lowered:
                field_errors[field_name] = error
    return field_errors
