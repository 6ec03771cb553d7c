"""Named style registry used by the ``style`` markup parameter."""

from typing import Optional

from attributed_markup.formatting.ir import AttributeSet, Color, FontDescriptor


def _preset_styles() -> dict[str, AttributeSet]:
    # Sizes follow the common system text styles
    return {
        "head": AttributeSet(font=FontDescriptor(size=17.0, bold=True)),
        "sub": AttributeSet(font=FontDescriptor(size=15.0)),
        "body": AttributeSet(font=FontDescriptor(size=17.0)),
        "foot": AttributeSet(font=FontDescriptor(size=13.0)),
        "caption1": AttributeSet(font=FontDescriptor(size=12.0)),
        "caption2": AttributeSet(font=FontDescriptor(size=11.0)),
    }


class StyleRegistry:
    """Mapping from style name to a fragment of default attributes.

    Writes are not synchronized; configure styles before parsing starts.
    """

    def __init__(self, styles: Optional[dict[str, AttributeSet]] = None) -> None:
        self._styles = dict(styles) if styles is not None else _preset_styles()

    def set_style(
        self,
        name: str,
        font: FontDescriptor,
        color: Optional[Color] = None,
        background: Optional[Color] = None,
    ) -> None:
        """Register a style from a font and optional colors."""
        self._styles[name] = AttributeSet(
            font=font, foreground=color, background=background
        )

    def set_style_attributes(self, name: str, attributes: AttributeSet) -> None:
        """Register a style from a raw attribute fragment."""
        self._styles[name] = attributes

    def get(self, name: str) -> Optional[AttributeSet]:
        return self._styles.get(name)

    def apply(self, name: str, attributes: AttributeSet) -> AttributeSet:
        """Merge the named style into ``attributes``; unknown names are a no-op."""
        style = self._styles.get(name)
        if style is None:
            return attributes
        return attributes.merged(style)

    def names(self) -> list[str]:
        return sorted(self._styles)

    def __contains__(self, name: object) -> bool:
        return name in self._styles


# Global registry instance
_registry: Optional[StyleRegistry] = None


def get_registry() -> StyleRegistry:
    """Get the process-wide registry, creating it with presets if needed."""
    global _registry
    if _registry is None:
        _registry = StyleRegistry()
    return _registry


def reset_registry() -> StyleRegistry:
    """Replace the process-wide registry with a fresh preset one."""
    global _registry
    _registry = StyleRegistry()
    return _registry


def set_style(
    name: str,
    font: FontDescriptor,
    color: Optional[Color] = None,
    background: Optional[Color] = None,
) -> None:
    """Register a style on the process-wide registry."""
    get_registry().set_style(name, font, color, background)


def set_style_attributes(name: str, attributes: AttributeSet) -> None:
    """Register a raw attribute fragment on the process-wide registry."""
    get_registry().set_style_attributes(name, attributes)
