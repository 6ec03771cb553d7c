"""Markup-backed text fields, one per widget kind."""

from attributed_markup.fields.base import MarkupField
from attributed_markup.fields.label import LabelField
from attributed_markup.fields.text_view import TextViewField
from attributed_markup.fields.button import ButtonField

__all__ = [
    "MarkupField",
    "LabelField",
    "TextViewField",
    "ButtonField",
]

# Map widget kinds to field classes
FIELD_MAP: dict[str, type[MarkupField]] = {
    "label": LabelField,
    "text-view": TextViewField,
    "button": ButtonField,
}

SUPPORTED_KINDS = tuple(FIELD_MAP.keys())


def get_field(kind: str) -> type[MarkupField]:
    """Get the field class for a widget kind."""
    key = kind.lower()
    if key not in FIELD_MAP:
        raise ValueError(
            f"Unsupported field kind: {key}. "
            f"Supported kinds: {', '.join(SUPPORTED_KINDS)}"
        )
    return FIELD_MAP[key]
