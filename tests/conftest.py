"""Pytest fixtures for Attributed Markup tests."""

import pytest
from pathlib import Path

from PIL import Image

from attributed_markup import config
from attributed_markup.formatting.ir import FontDescriptor
from attributed_markup.formatting.styles import reset_registry
from attributed_markup.images import ImageSize, MappingImageResolver


@pytest.fixture(autouse=True)
def reset_globals():
    """Give every test fresh settings and a preset style registry."""
    config._settings = None
    reset_registry()
    yield
    config._settings = None
    reset_registry()


@pytest.fixture
def base_font() -> FontDescriptor:
    """Base font with a size that keeps level sizes exact."""
    return FontDescriptor(size=10.0)


@pytest.fixture
def image_resolver() -> MappingImageResolver:
    """Resolver that knows a single 30x21 image named 'star'."""
    return MappingImageResolver({"star": ImageSize(30.0, 21.0)})


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory with one readable and one corrupt image."""
    Image.new("RGB", (12, 8), "red").save(tmp_path / "dot.png")
    (tmp_path / "broken.png").write_bytes(b"not an image")
    return tmp_path


@pytest.fixture
def tmp_markup_file(tmp_path: Path) -> Path:
    """Create a temporary markup file for testing."""
    file_path = tmp_path / "title.html"
    file_path.write_text(
        '<p align="center"><b>Hello</b> <font color="#FF0000">world</font></p>',
        encoding="utf-8",
    )
    return file_path
