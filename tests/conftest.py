"""Pytest configuration and fixtures."""

import io
import logging
import pytest
import tempfile
from pathlib import Path
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def image_bytes():
    """
    Factory fixture rendering a small real image with Pillow.

    Returns a function mapping a Pillow format name ('PNG', 'GIF', 'JPEG',
    'WEBP', 'BMP') to the encoded bytes.
    """
    def _render(fmt: str) -> bytes:
        buffer = io.BytesIO()
        Image.new('RGB', (4, 4), color=(200, 30, 30)).save(buffer, format=fmt)
        return buffer.getvalue()

    return _render


@pytest.fixture
def make_image(image_bytes):
    """
    Factory fixture writing a real image under an arbitrary file name.

    Returns a function (directory, name, fmt) -> path.
    """
    def _make(target_dir: Path, name: str, fmt: str) -> Path:
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(image_bytes(fmt))
        return path

    return _make


@pytest.fixture
def make_raw_file():
    """
    Factory fixture writing raw bytes to a file.

    Returns a function (directory, name, data) -> path.
    """
    def _make(target_dir: Path, name: str, data: bytes) -> Path:
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop console handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger('fix-images')
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
