"""Single-line label field."""

from attributed_markup.config import get_settings
from attributed_markup.fields.base import MarkupField
from attributed_markup.formatting.ir import FontDescriptor, RunSequence, TextRun


class LabelField(MarkupField):
    """Label content; strings without any tag are taken verbatim."""

    @property
    def kind(self) -> str:
        return "label"

    def default_font(self) -> FontDescriptor:
        return FontDescriptor(size=get_settings().base_font_size)

    @MarkupField.html.setter
    def html(self, value: str) -> None:
        if "<" in value:
            self.runs = self.parser.parse(value, self.font)
        elif value:
            self.runs = RunSequence([TextRun(value)])
        else:
            self.runs = RunSequence()
