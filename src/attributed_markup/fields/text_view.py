"""Multi-line text view field."""

from attributed_markup.config import get_settings
from attributed_markup.fields.base import MarkupField
from attributed_markup.formatting.ir import FontDescriptor


class TextViewField(MarkupField):
    """Text view content; every assignment is parsed as markup."""

    @property
    def kind(self) -> str:
        return "text-view"

    def default_font(self) -> FontDescriptor:
        return FontDescriptor(size=get_settings().base_font_size)
