"""Intermediate Representation for attributed text.

This module defines the rich-text model shared by the markup parser and
serializer: runs of text (or inline object placeholders), each paired
with one closed set of style attributes.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, Optional, Union


# Character a placeholder run stands for in the concatenated text
OBJECT_REPLACEMENT_CHARACTER = "\ufffc"


class Alignment(Enum):
    """Paragraph alignment."""

    INHERIT = "inherit"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class FontDescriptor:
    """An opaque font description.

    Attributes:
        size: Point size (positive)
        family: Family name, or None for "same as enclosing" / system font
        bold: Bold trait
        italic: Italic trait
    """

    size: float
    family: Optional[str] = None
    bold: bool = False
    italic: bool = False

    def with_size(self, size: float) -> "FontDescriptor":
        """Return a copy with a different point size."""
        return replace(self, size=size)

    def with_family(self, family: Optional[str]) -> "FontDescriptor":
        """Return a copy with a different family."""
        return replace(self, family=family)

    def with_traits(
        self, bold: Optional[bool] = None, italic: Optional[bool] = None
    ) -> "FontDescriptor":
        """Return a copy with the given traits switched on or off."""
        return replace(
            self,
            bold=self.bold if bold is None else bold,
            italic=self.italic if italic is None else italic,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "family": self.family,
            "bold": self.bold,
            "italic": self.italic,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontDescriptor":
        return cls(
            size=float(data["size"]),
            family=data.get("family"),
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
        )


@dataclass(frozen=True)
class Color:
    """An RGB color with 8-bit channels and optional alpha."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def to_list(self) -> list[float]:
        return [self.red, self.green, self.blue, self.alpha]

    @classmethod
    def from_list(cls, values: list[float]) -> "Color":
        red, green, blue = (int(v) for v in values[:3])
        alpha = float(values[3]) if len(values) > 3 else 1.0
        return cls(red, green, blue, alpha)


@dataclass(frozen=True)
class ParagraphStyle:
    """Paragraph-level layout attributes.

    Attributes:
        alignment: Horizontal alignment
        min_line_height: Fixed minimum line height, if any
        max_line_height: Fixed maximum line height, if any
        vertical: Whether glyphs are laid out vertically
    """

    alignment: Alignment = Alignment.INHERIT
    min_line_height: Optional[float] = None
    max_line_height: Optional[float] = None
    vertical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "alignment": self.alignment.value,
            "min_line_height": self.min_line_height,
            "max_line_height": self.max_line_height,
            "vertical": self.vertical,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParagraphStyle":
        return cls(
            alignment=Alignment(data.get("alignment", "inherit")),
            min_line_height=data.get("min_line_height"),
            max_line_height=data.get("max_line_height"),
            vertical=bool(data.get("vertical", False)),
        )


@dataclass(frozen=True)
class AttributeSet:
    """The closed set of style attributes attached to one run.

    Each kind holds at most one value; ``None`` means "not set".
    ``base_font`` is a hidden marker recorded on the first run of a
    parse result and is never serialized.
    """

    font: Optional[FontDescriptor] = None
    foreground: Optional[Color] = None
    background: Optional[Color] = None
    paragraph: Optional[ParagraphStyle] = None
    link: Optional[str] = None
    underline: bool = False
    base_font: Optional[FontDescriptor] = None

    def merged(self, other: "AttributeSet") -> "AttributeSet":
        """Compose by override: kinds set in ``other`` replace ours."""
        return AttributeSet(
            font=other.font or self.font,
            foreground=other.foreground or self.foreground,
            background=other.background or self.background,
            paragraph=other.paragraph or self.paragraph,
            link=other.link if other.link is not None else self.link,
            underline=other.underline or self.underline,
            base_font=other.base_font or self.base_font,
        )

    def evolve(self, **changes: Any) -> "AttributeSet":
        """Return a copy with the given kinds replaced."""
        return replace(self, **changes)

    @property
    def alignment(self) -> Alignment:
        """Paragraph alignment, INHERIT when no paragraph style is set."""
        return self.paragraph.alignment if self.paragraph else Alignment.INHERIT

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.font:
            data["font"] = self.font.to_dict()
        if self.foreground:
            data["foreground"] = self.foreground.to_list()
        if self.background:
            data["background"] = self.background.to_list()
        if self.paragraph:
            data["paragraph"] = self.paragraph.to_dict()
        if self.link is not None:
            data["link"] = self.link
        if self.underline:
            data["underline"] = True
        if self.base_font:
            data["base_font"] = self.base_font.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttributeSet":
        def optional(key: str, factory):
            return factory(data[key]) if data.get(key) is not None else None

        return cls(
            font=optional("font", FontDescriptor.from_dict),
            foreground=optional("foreground", Color.from_list),
            background=optional("background", Color.from_list),
            paragraph=optional("paragraph", ParagraphStyle.from_dict),
            link=data.get("link"),
            underline=bool(data.get("underline", False)),
            base_font=optional("base_font", FontDescriptor.from_dict),
        )


@dataclass(frozen=True)
class TextRun:
    """A contiguous span of text with one attribute set.

    Attributes:
        text: The text content (may contain line-break newlines)
        attributes: Style attributes of the whole span
    """

    text: str
    attributes: AttributeSet = field(default_factory=AttributeSet)

    @property
    def bold(self) -> bool:
        """Check if this run is bold."""
        return bool(self.attributes.font and self.attributes.font.bold)

    @property
    def italic(self) -> bool:
        """Check if this run is italic."""
        return bool(self.attributes.font and self.attributes.font.italic)

    def with_attributes(self, attributes: AttributeSet) -> "TextRun":
        return replace(self, attributes=attributes)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ObjectRun:
    """An inline object placeholder (e.g. an image) occupying one character.

    Attributes:
        src: Opaque reference string, e.g. an image name
        width: Display width, if known
        height: Display height, if known
        x: Horizontal offset (best effort; renderers may ignore it)
        y: Vertical offset relative to the baseline
        attributes: Style attributes of the placeholder
    """

    src: str
    width: Optional[float] = None
    height: Optional[float] = None
    x: float = 0.0
    y: float = 0.0
    attributes: AttributeSet = field(default_factory=AttributeSet)

    @property
    def text(self) -> str:
        return OBJECT_REPLACEMENT_CHARACTER

    def with_attributes(self, attributes: AttributeSet) -> "ObjectRun":
        return replace(self, attributes=attributes)


Run = Union[TextRun, ObjectRun]


@dataclass
class RunSequence:
    """An ordered sequence of runs: one complete rich-text document."""

    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated text, one replacement character per object."""
        return "".join(run.text for run in self.runs)

    @property
    def base_font(self) -> Optional[FontDescriptor]:
        """The base-font marker recorded on the first run, if any."""
        if not self.runs:
            return None
        return self.runs[0].attributes.base_font

    def append(self, run: Run) -> None:
        """Add a run at the end of the sequence."""
        self.runs.append(run)

    def extend(self, runs: "RunSequence") -> None:
        self.runs.extend(runs.runs)

    def coalesced(self) -> "RunSequence":
        """Merge adjacent text runs whose attributes are equal."""
        merged: list[Run] = []
        for run in self.runs:
            prev = merged[-1] if merged else None
            if (
                isinstance(run, TextRun)
                and isinstance(prev, TextRun)
                and prev.attributes == run.attributes
            ):
                merged[-1] = TextRun(prev.text + run.text, prev.attributes)
            else:
                merged.append(run)
        return RunSequence(merged)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly form of the sequence."""
        runs: list[dict[str, Any]] = []
        for run in self.runs:
            if isinstance(run, ObjectRun):
                item: dict[str, Any] = {
                    "object": run.src,
                    "width": run.width,
                    "height": run.height,
                    "x": run.x,
                    "y": run.y,
                }
            else:
                item = {"text": run.text}
            attributes = run.attributes.to_dict()
            if attributes:
                item["attributes"] = attributes
            runs.append(item)
        return {"runs": runs}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunSequence":
        runs: list[Run] = []
        for item in data.get("runs", []):
            attributes = AttributeSet.from_dict(item.get("attributes", {}))
            if "object" in item:
                runs.append(
                    ObjectRun(
                        src=item["object"],
                        width=item.get("width"),
                        height=item.get("height"),
                        x=item.get("x") or 0.0,
                        y=item.get("y") or 0.0,
                        attributes=attributes,
                    )
                )
            else:
                runs.append(TextRun(item["text"], attributes))
        return cls(runs)

    def __iter__(self) -> Iterator[Run]:
        return iter(self.runs)

    def __len__(self) -> int:
        return len(self.runs)

    def __getitem__(self, index: int) -> Run:
        return self.runs[index]

    def __str__(self) -> str:
        return self.text
