"""Abstract base class for markup-backed text fields."""

from abc import ABC, abstractmethod
from typing import Optional

from attributed_markup.formatting.ir import FontDescriptor, RunSequence
from attributed_markup.formatting.parser import MarkupParser
from attributed_markup.formatting.serializer import MarkupSerializer


class MarkupField(ABC):
    """A widget's rich-text content exposed as a markup string.

    Each field kind holds its own font and a RunSequence. Reading
    ``html`` serializes the runs; assigning it parses markup using the
    field's font as the base font.
    """

    def __init__(
        self,
        font: Optional[FontDescriptor] = None,
        parser: Optional[MarkupParser] = None,
        serializer: Optional[MarkupSerializer] = None,
    ) -> None:
        self.font = font or self.default_font()
        self.parser = parser or MarkupParser()
        self.serializer = serializer or MarkupSerializer()
        self.runs = RunSequence()

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the widget kind name (e.g., 'label')."""
        ...

    @abstractmethod
    def default_font(self) -> FontDescriptor:
        """Font used when none is given."""
        ...

    @property
    def html(self) -> str:
        """Serialize the field content.

        The base font recorded by the last parse wins over the field's
        current font, so relative sizes survive a font change.
        """
        if not self.runs:
            return ""
        return self.serializer.serialize(self.runs, self.runs.base_font or self.font)

    @html.setter
    def html(self, value: str) -> None:
        self.runs = self.parser.parse(value, self.font)

    @property
    def text(self) -> str:
        """Plain text content of the field."""
        return self.runs.text
