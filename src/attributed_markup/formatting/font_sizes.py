"""Relative font-size levels.

A level is an index into a table of multipliers; the absolute size of a
level is ``base_size * table[level]``.
"""

from typing import Optional, Sequence

from attributed_markup.config import get_settings


class FontSizeTable:
    """Map font-size levels to absolute point sizes and back."""

    def __init__(
        self,
        multipliers: Optional[Sequence[float]] = None,
        default_level: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.multipliers = tuple(
            multipliers if multipliers is not None else settings.font_sizes
        )
        if not self.multipliers:
            raise ValueError("font size table must not be empty")
        level = settings.default_level if default_level is None else default_level
        # Fall back to the middle of the table when the default does not fit
        self.default_level = level if self.is_valid(level) else len(self.multipliers) // 2

    def __len__(self) -> int:
        return len(self.multipliers)

    def is_valid(self, level: int) -> bool:
        return 0 <= level < len(self.multipliers)

    def size_for(self, level: int, base_size: float) -> float:
        """Absolute size of a level; invalid levels use the default level."""
        if not self.is_valid(level):
            level = self.default_level
        return base_size * self.multipliers[level]

    def level_for(self, size: float, base_size: float) -> Optional[int]:
        """Exact reverse lookup: the level whose size equals ``size``."""
        for level, multiplier in enumerate(self.multipliers):
            if base_size * multiplier == size:
                return level
        return None

    def adjust(self, size: Optional[float], base_size: float, delta: int) -> int:
        """Level reached by moving ``delta`` steps from the level of ``size``.

        Sizes without an exact level count as the default level, and a
        result outside the table also resolves to the default level.
        """
        current = None if size is None else self.level_for(size, base_size)
        if current is None:
            current = self.default_level
        level = current + delta
        return level if self.is_valid(level) else self.default_level
