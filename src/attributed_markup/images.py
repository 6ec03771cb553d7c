"""Image-asset resolution for ``<img>`` elements.

The codec only stores image references; a resolver tells the parser
whether a reference exists and what its natural size is.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from PIL import Image, UnidentifiedImageError

from attributed_markup.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageSize:
    """Natural size of an image in points."""

    width: float
    height: float


class ImageResolver(Protocol):
    """Anything that can look up the natural size of an image reference."""

    def resolve(self, src: str) -> Optional[ImageSize]:
        """Return the image size, or None when the reference is unknown."""
        ...


class NullImageResolver:
    """Resolver that knows no images; every ``<img>`` is dropped."""

    def resolve(self, src: str) -> Optional[ImageSize]:
        return None


class MappingImageResolver:
    """Resolve references from an in-memory name -> size table."""

    def __init__(self, sizes: Optional[dict[str, ImageSize]] = None) -> None:
        self.sizes = dict(sizes or {})

    def add(self, src: str, width: float, height: float) -> None:
        self.sizes[src] = ImageSize(width, height)

    def resolve(self, src: str) -> Optional[ImageSize]:
        return self.sizes.get(src)


class DirectoryImageResolver:
    """Resolve references to image files in a directory using Pillow.

    A reference without an extension is tried against each of
    ``extensions`` in order.
    """

    def __init__(
        self,
        root: Path,
        extensions: Sequence[str] = (".png", ".jpg", ".jpeg", ".gif", ".bmp"),
    ) -> None:
        self.root = Path(root)
        self.extensions = tuple(extensions)

    def _candidates(self, src: str) -> list[Path]:
        path = self.root / src
        if path.suffix:
            return [path]
        return [path.with_suffix(ext) for ext in self.extensions]

    def resolve(self, src: str) -> Optional[ImageSize]:
        for path in self._candidates(src):
            if not path.is_file():
                continue
            try:
                with Image.open(path) as img:
                    width, height = img.size
            except (OSError, UnidentifiedImageError) as e:
                logger.debug("Unreadable image %s: %s", path, e)
                continue
            return ImageSize(float(width), float(height))
        return None
