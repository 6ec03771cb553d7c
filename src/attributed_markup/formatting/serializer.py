"""Serializer for converting attributed runs to markup."""

from typing import Optional

from attributed_markup.config import get_settings
from attributed_markup.formatting.colors import encode_color
from attributed_markup.formatting.font_sizes import FontSizeTable
from attributed_markup.formatting.ir import (
    AttributeSet,
    FontDescriptor,
    ObjectRun,
    RunSequence,
)

# Order matters: "&" must be replaced first
TEXT_ESCAPES = (
    ("&", "&amp;"),
    ("\u00a0", "&nbsp;"),
    ('"', "&quot;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("\n", "<br/>"),
)


def escape_text(text: str) -> str:
    """Escape run text for markup output."""
    for old, new in TEXT_ESCAPES:
        text = text.replace(old, new)
    return text


def escape_attribute(value: str) -> str:
    """Escape a double-quoted attribute value."""
    return value.replace("&", "&amp;").replace('"', "&quot;")


def format_size(size: float) -> str:
    """Format a point size without a trailing ``.0``."""
    return str(int(size)) if size == int(size) else repr(size)


def close_tag(tag: str) -> str:
    """Closing markup for an open tag string such as ``font size="3"``."""
    return f"</{tag.split(' ', 1)[0]}>"


class MarkupSerializer:
    """Serialize a RunSequence into minimal, correctly nested markup.

    Tags are tracked on a stack. For each run, open tags the run no
    longer needs are closed from the top, then missing tags are opened
    in order. Tags shared with the previous run stay open.
    """

    def __init__(self, font_sizes: Optional[FontSizeTable] = None) -> None:
        self.font_sizes = font_sizes or FontSizeTable()

    def serialize(
        self, runs: RunSequence, base_font: Optional[FontDescriptor] = None
    ) -> str:
        """Convert runs to markup.

        Args:
            runs: The runs to serialize
            base_font: Font that relative sizes are measured against.
                Defaults to the base-font marker of the first run, then
                to the configured default base font.

        Returns:
            Markup string (empty for an empty sequence)
        """
        if base_font is None:
            base_font = runs.base_font or FontDescriptor(
                size=get_settings().base_font_size
            )

        stack: list[str] = []
        parts: list[str] = []

        for run in runs:
            if isinstance(run, ObjectRun):
                parts.append(f'<img src="{escape_attribute(run.src)}"/>')
                continue

            elements = self.elements_for(run.attributes, base_font)

            while stack and stack[-1] not in elements:
                parts.append(close_tag(stack.pop()))

            for tag in elements:
                if tag in stack:
                    continue
                parts.append(f"<{tag}>")
                stack.append(tag)

            parts.append(escape_text(run.text))

        while stack:
            parts.append(close_tag(stack.pop()))

        return "".join(parts)

    def elements_for(
        self, attributes: AttributeSet, base_font: FontDescriptor
    ) -> list[str]:
        """Ordered tag strings expressing ``attributes`` against ``base_font``."""
        elements: list[str] = []
        font_params: list[str] = []

        font = attributes.font
        if font is not None:
            if font.bold:
                elements.append("b")
            if font.italic:
                elements.append("i")
            if font.size != base_font.size:
                level = self.font_sizes.level_for(font.size, base_font.size)
                if level is not None:
                    font_params.append(f'size="{level}"')
                else:
                    font_params.append(f'point-size="{format_size(font.size)}"')

        if attributes.foreground is not None:
            font_params.append(f'color="{encode_color(attributes.foreground)}"')

        if font_params:
            elements.append("font " + " ".join(font_params))

        if attributes.link is not None:
            elements.append(f'a href="{escape_attribute(attributes.link)}"')

        if attributes.underline:
            elements.append("u")

        return elements


def serialize(runs: RunSequence, base_font: Optional[FontDescriptor] = None) -> str:
    """Serialize runs with a default-configured serializer."""
    return MarkupSerializer().serialize(runs, base_font)
