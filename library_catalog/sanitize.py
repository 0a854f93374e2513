"""Free-text field sanitizing.

A field is trimmed, checked against an ordered list of rules and escaped so
it can be echoed back into a page. Rules are plain functions taking
``(field, value)`` and returning a list of :class:`FieldError`; every rule runs
and their errors are collected, so an entity with several independent
constraints reports all of them at once.
"""
from dataclasses import dataclass, field as dataclass_field
from typing import Callable, List, Optional

from markupsafe import escape as _markup_escape


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    value: str = ""


Rule = Callable[[str, str], List[FieldError]]


@dataclass
class SanitizedField:
    value: str
    errors: List[FieldError] = dataclass_field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def min_length(minimum: int, message: str) -> Rule:
    def rule(field, value):
        if len(value) < minimum:
            return [FieldError(field, message, value)]
        return []
    return rule


def max_length(maximum: int, message: str) -> Rule:
    def rule(field, value):
        if len(value) > maximum:
            return [FieldError(field, message, value)]
        return []
    return rule


GENRE_NAME_MAX_LENGTH = 100

# Longest escape of a single character ("&amp;", "&#34;", "&#39;")
MAX_ESCAPE_WIDTH = 5

GENRE_NAME_RULES = [
    min_length(3, "Genre name must contain at least 3 characters"),
    max_length(GENRE_NAME_MAX_LENGTH, "Genre name must not exceed 100 characters"),
]


def escape(value: str) -> str:
    # Encodes & < > " ' and never drops characters, so escaping only lengthens a value
    return str(_markup_escape(value))


def sanitize(raw: Optional[str], rules: List[Rule], field: str = "name") -> SanitizedField:
    """Trim, validate and escape a single submitted value.

    The value is escaped whether or not it passes, since a rejected form
    still echoes it back to the user.
    """
    value = (raw or "").strip()
    errors = []
    for rule in rules:
        errors.extend(rule(field, value))
    return SanitizedField(value=escape(value), errors=errors)
