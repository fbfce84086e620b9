"""
screens/prompts.py
------------------
Validators and value filters shared by the screens.

inquirer validators receive (answers, current) and either return True or
raise ValidationError with the message shown under the prompt.
"""

from datetime import date
from typing import Callable, Optional

from inquirer.errors import ValidationError


def not_empty(reason: str) -> Callable:
    """Validator rejecting blank input with the given message."""
    def validate(_answers, current) -> bool:
        if (current or "").strip():
            return True
        raise ValidationError(current, reason=reason)

    return validate


def optional_date(_answers, current) -> bool:
    """Accept a blank value or a YYYY-MM-DD date."""
    if not (current or "").strip():
        return True
    try:
        date.fromisoformat(current.strip())
    except ValueError:
        raise ValidationError(current, reason="Use the YYYY-MM-DD format, or leave blank.")
    return True


def optional_number(_answers, current) -> bool:
    """Accept a blank value or a number."""
    if not (current or "").strip():
        return True
    try:
        float(current)
    except ValueError:
        raise ValidationError(current, reason="Should enter a number, or leave blank.")
    return True


def to_date(text: Optional[str]) -> Optional[date]:
    text = (text or "").strip()
    return date.fromisoformat(text) if text else None


def to_number(text: Optional[str]) -> Optional[float]:
    """Blank or zero input means "not provided"."""
    text = (text or "").strip()
    return (float(text) or None) if text else None


def to_page(text: Optional[str], current_page: int) -> int:
    """
    One-based page number typed by the user; blank or invalid input keeps
    the current (zero-based) page.
    """
    text = (text or "").strip()
    try:
        return int(text)
    except ValueError:
        return current_page + 1
