"""Category keys for purpose, result and status distributions."""

from enum import Enum
from typing import Union


class Unset(Enum):
    """Marker for a category field with no recorded value."""

    NOT_SET = "_none"

    def __repr__(self) -> str:
        return "NOT_SET"


NOT_SET = Unset.NOT_SET

# Wire code used for the unset bucket in query strings and JSON payloads.
NOT_SET_CODE = NOT_SET.value

CategoryKey = Union[str, Unset]


def normalize_category(value: object) -> CategoryKey:
    """Normalize a raw category value into a distribution key.

    Args:
        value: Raw field value (string, None, or anything str()-able).

    Returns:
        NOT_SET for missing, blank or "_none" values, otherwise the
        stripped code.
    """
    if value is None or value is NOT_SET:
        return NOT_SET
    text = str(value).strip()
    if not text or text == NOT_SET_CODE:
        return NOT_SET
    return text


def is_unset(key: object) -> bool:
    """True if key represents the "not set" bucket."""
    return key is NOT_SET or key is None or key == ""


def category_code(key: CategoryKey | None) -> str:
    """Serialize a category key for query strings and JSON."""
    if is_unset(key):
        return NOT_SET_CODE
    return str(key)


def parse_category_code(code: str | None) -> CategoryKey:
    """Inverse of category_code for values coming from requests or the CLI."""
    if code is None or code.strip() in ("", NOT_SET_CODE):
        return NOT_SET
    return code.strip()
