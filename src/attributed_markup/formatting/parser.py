"""Markup parser for converting styled markup to attributed runs."""

import math
import re
import warnings
from dataclasses import replace
from typing import Callable, Optional
from urllib.parse import unquote

from bs4 import (
    BeautifulSoup,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)
from bs4.builder import ParserRejectedMarkup

from attributed_markup.config import get_settings
from attributed_markup.formatting.colors import decode_color
from attributed_markup.formatting.font_sizes import FontSizeTable
from attributed_markup.formatting.ir import (
    Alignment,
    AttributeSet,
    FontDescriptor,
    ObjectRun,
    ParagraphStyle,
    RunSequence,
    TextRun,
)
from attributed_markup.formatting.styles import StyleRegistry, get_registry
from attributed_markup.images import ImageResolver, NullImageResolver
from attributed_markup.logger import get_logger

logger = get_logger(__name__)

# Leading signed integer of a font size value ("+1", "-2", "4", "2px")
LEVEL_PATTERN = re.compile(r"\s*([+-]?)(\d+)")

# A "%" not followed by two hex digits makes the whole text undecodable
MALFORMED_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")

# String nodes that are markup, not content
SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

ALIGNMENTS = {
    "left": Alignment.LEFT,
    "center": Alignment.CENTER,
    "right": Alignment.RIGHT,
}


def percent_decode(text: str) -> str:
    """Decode percent escapes; malformed input decodes to an empty string."""
    if MALFORMED_ESCAPE_PATTERN.search(text):
        return ""
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        return ""


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a numeric parameter, returning None when it is not a finite number."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    rounded = int(abs(value) + 0.5)
    return float(rounded if value >= 0 else -rounded)


Handler = Callable[
    [dict[str, str], AttributeSet, FontDescriptor, RunSequence], AttributeSet
]


class MarkupParser:
    """Parse styled markup into a RunSequence.

    The markup is turned into a node tree by BeautifulSoup and walked
    depth-first. Each element may emit runs of its own and may change
    the attributes seen by its descendants; siblings and ancestors are
    never affected.

    Supported elements:
    - br, p: line breaks
    - font: size, point-size, point, color, background, line-height
    - b, i, u: bold, italic, underline
    - span, p: style, align, direction
    - a: href
    - img: src, width, height, x, y
    - icon: src, font
    """

    def __init__(
        self,
        font_sizes: Optional[FontSizeTable] = None,
        styles: Optional[StyleRegistry] = None,
        images: Optional[ImageResolver] = None,
        icon_font: Optional[str] = None,
        tree_builder: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self.font_sizes = font_sizes or FontSizeTable()
        self._styles = styles
        self.images = images or NullImageResolver()
        self.icon_font = icon_font or settings.icon_font
        self.tree_builder = tree_builder or settings.tree_builder
        self.cap_height_ratio = settings.cap_height_ratio

        self._handlers: dict[str, Handler] = {
            "br": self._handle_br,
            "font": self._handle_font,
            "b": self._handle_bold,
            "i": self._handle_italic,
            "u": self._handle_underline,
            "img": self._handle_img,
            "p": self._handle_paragraph,
            "span": self._handle_span,
            "a": self._handle_link,
            "icon": self._handle_icon,
        }

    @property
    def styles(self) -> StyleRegistry:
        """The injected registry, or the process-wide one."""
        return self._styles if self._styles is not None else get_registry()

    def parse(
        self, markup: str, base_font: Optional[FontDescriptor] = None
    ) -> RunSequence:
        """Convert markup to runs.

        Args:
            markup: The markup string
            base_font: Font that relative sizes are measured against;
                defaults to the configured base font

        Returns:
            RunSequence whose first run carries ``base_font`` as its
            base-font marker. Markup the tree builder rejects yields an
            empty sequence.
        """
        if base_font is None:
            base_font = FontDescriptor(size=get_settings().base_font_size)

        result = RunSequence()
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                soup = BeautifulSoup(
                    markup, self.tree_builder, multi_valued_attributes=None
                )
        except ParserRejectedMarkup as e:
            logger.debug("Markup rejected by tree builder: %s", e)
            return result

        self._walk(soup, AttributeSet(), base_font, result)

        self._trim_leading_newline(result)

        if result.runs:
            first = result.runs[0]
            result.runs[0] = first.with_attributes(
                first.attributes.evolve(base_font=base_font)
            )

        return result

    def _walk(
        self,
        root: Tag,
        attributes: AttributeSet,
        base_font: FontDescriptor,
        result: RunSequence,
    ) -> None:
        """Emit runs for the descendants of ``root`` in document order.

        Uses an explicit stack so deeply nested markup cannot exhaust
        the interpreter's recursion limit.
        """
        pending = [(child, attributes) for child in reversed(root.contents)]
        while pending:
            node, inherited = pending.pop()
            if isinstance(node, Tag):
                handler = self._handlers.get(node.name.lower())
                if handler is not None:
                    inherited = handler(
                        self._params(node), inherited, base_font, result
                    )
                pending.extend(
                    (child, inherited) for child in reversed(node.contents)
                )
            elif isinstance(node, NavigableString) and not isinstance(
                node, SKIPPED_STRINGS
            ):
                text = percent_decode(str(node))
                if text:
                    result.append(TextRun(text, inherited))

    @staticmethod
    def _params(node: Tag) -> dict[str, str]:
        """Lower-cased element parameters."""
        params: dict[str, str] = {}
        for key, value in node.attrs.items():
            key = key.lower()
            value = value or ""
            # Unquoted values swallow the "/" of a self-closing tag
            if value.endswith("/") and key != "href":
                value = value[:-1]
            params[key] = value
        return params

    @staticmethod
    def _trim_leading_newline(result: RunSequence) -> None:
        """Drop the newline a leading <p> or <br> leaves at the start."""
        if not result.text.startswith("\n"):
            return
        first = result.runs[0]
        if len(first.text) == 1:
            del result.runs[0]
        else:
            result.runs[0] = TextRun(first.text[1:], first.attributes)

    # -------------------------------------------------------------------------
    # Attribute helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _font(attributes: AttributeSet, base_font: FontDescriptor) -> FontDescriptor:
        return attributes.font or base_font

    def _with_size(
        self, attributes: AttributeSet, base_font: FontDescriptor, size: float
    ) -> AttributeSet:
        return attributes.evolve(font=self._font(attributes, base_font).with_size(size))

    @staticmethod
    def _with_paragraph(attributes: AttributeSet, **changes) -> AttributeSet:
        paragraph = attributes.paragraph or ParagraphStyle()
        return attributes.evolve(paragraph=replace(paragraph, **changes))

    def _level(
        self, value: str, attributes: AttributeSet, base_font: FontDescriptor
    ) -> int:
        """Resolve a ``size`` value to a level in the font-size table."""
        match = LEVEL_PATTERN.match(value)
        if not match:
            logger.debug("Malformed font size %r, using default level", value)
            return self.font_sizes.default_level

        sign, digits = match.groups()
        number = int(sign + digits)
        if sign:
            current = attributes.font.size if attributes.font else None
            return self.font_sizes.adjust(current, base_font.size, number)
        if not self.font_sizes.is_valid(number):
            logger.debug("Font size level %d out of range, using default", number)
            return self.font_sizes.default_level
        return number

    # -------------------------------------------------------------------------
    # Element handlers
    # -------------------------------------------------------------------------

    def _handle_br(self, params, attributes, base_font, result):
        result.append(TextRun("\n", attributes))
        return attributes

    def _handle_font(self, params, attributes, base_font, result):
        if "size" in params:
            level = self._level(params["size"], attributes, base_font)
            attributes = self._with_size(
                attributes,
                base_font,
                self.font_sizes.size_for(level, base_font.size),
            )

        for key in ("point-size", "point"):
            if key not in params:
                continue
            points = parse_number(params[key])
            if points is None or points <= 0:
                logger.debug("Ignoring %s=%r", key, params[key])
                continue
            attributes = self._with_size(attributes, base_font, points)

        if "color" in params:
            attributes = attributes.evolve(foreground=decode_color(params["color"]))
        if "background" in params:
            attributes = attributes.evolve(
                background=decode_color(params["background"])
            )

        if "line-height" in params:
            height = parse_number(params["line-height"])
            if height is None or height <= 0:
                logger.debug("Ignoring line-height=%r", params["line-height"])
            else:
                attributes = self._with_paragraph(
                    attributes, min_line_height=height, max_line_height=height
                )

        return attributes

    def _handle_bold(self, params, attributes, base_font, result):
        font = self._font(attributes, base_font)
        return attributes.evolve(font=font.with_traits(bold=True))

    def _handle_italic(self, params, attributes, base_font, result):
        font = self._font(attributes, base_font)
        return attributes.evolve(font=font.with_traits(italic=True))

    def _handle_underline(self, params, attributes, base_font, result):
        return attributes.evolve(underline=True)

    def _handle_img(self, params, attributes, base_font, result):
        src = params.get("src")
        if not src:
            return attributes

        natural = self.images.resolve(src)
        if natural is None:
            logger.debug("Unresolvable image %r dropped", src)
            return attributes

        width = parse_number(params.get("width"))
        height = parse_number(params.get("height"))
        x = parse_number(params.get("x"))
        y = parse_number(params.get("y"))
        cap_height = base_font.size * self.cap_height_ratio

        result.append(
            ObjectRun(
                src=src,
                width=natural.width if width is None else width,
                height=natural.height if height is None else height,
                x=0.0 if x is None else x,
                y=round_half_away((cap_height - natural.height) / 2) if y is None else y,
            )
        )
        return attributes

    def _handle_paragraph(self, params, attributes, base_font, result):
        result.append(TextRun("\n", attributes))
        return self._handle_span(params, attributes, base_font, result)

    def _handle_span(self, params, attributes, base_font, result):
        if "style" in params:
            attributes = self.styles.apply(params["style"], attributes)

        alignment = ALIGNMENTS.get(params.get("align", "").lower())
        if alignment is not None:
            attributes = self._with_paragraph(attributes, alignment=alignment)

        if params.get("direction", "").lower() == "vertical":
            attributes = self._with_paragraph(attributes, vertical=True)

        return attributes

    def _handle_link(self, params, attributes, base_font, result):
        if "href" in params:
            attributes = attributes.evolve(link=params["href"])
        return attributes

    def _handle_icon(self, params, attributes, base_font, result):
        src = params.get("src")
        if src:
            family = params.get("font") or self.icon_font
            font = self._font(attributes, base_font).with_family(family)
            result.append(TextRun(src, attributes.evolve(font=font)))
        return attributes


def parse(markup: str, base_font: Optional[FontDescriptor] = None) -> RunSequence:
    """Parse markup with a default-configured parser."""
    return MarkupParser().parse(markup, base_font)
