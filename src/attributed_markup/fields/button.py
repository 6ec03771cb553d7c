"""Button title field."""

from attributed_markup.fields.base import MarkupField
from attributed_markup.formatting.ir import FontDescriptor

# System font size buttons fall back to
BUTTON_FONT_SIZE = 17.0


class ButtonField(MarkupField):
    """Button title; without an explicit font the 17pt system font is used."""

    @property
    def kind(self) -> str:
        return "button"

    def default_font(self) -> FontDescriptor:
        return FontDescriptor(size=BUTTON_FONT_SIZE)
