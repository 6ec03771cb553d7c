"""Formatting utilities for converting between markup and attributed runs."""

from attributed_markup.formatting.ir import (
    Alignment,
    AttributeSet,
    Color,
    FontDescriptor,
    ObjectRun,
    ParagraphStyle,
    Run,
    RunSequence,
    TextRun,
)
from attributed_markup.formatting.colors import (
    INVALID_COLOR,
    decode_color,
    encode_color,
)
from attributed_markup.formatting.font_sizes import FontSizeTable
from attributed_markup.formatting.styles import (
    StyleRegistry,
    get_registry,
    set_style,
    set_style_attributes,
)
from attributed_markup.formatting.serializer import MarkupSerializer, serialize
from attributed_markup.formatting.parser import MarkupParser, parse

__all__ = [
    "Alignment",
    "AttributeSet",
    "Color",
    "FontDescriptor",
    "ObjectRun",
    "ParagraphStyle",
    "Run",
    "RunSequence",
    "TextRun",
    "INVALID_COLOR",
    "decode_color",
    "encode_color",
    "FontSizeTable",
    "StyleRegistry",
    "get_registry",
    "set_style",
    "set_style_attributes",
    "MarkupSerializer",
    "serialize",
    "MarkupParser",
    "parse",
]
