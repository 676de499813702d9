"""Content-based image format detection for PNG, GIF, JPEG, WebP and BMP files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional


logger = logging.getLogger('fix-images')

# Enough to cover every signature below and an early APNG acTL chunk
HEADER_SIZE = 32
MIN_HEADER_SIZE = 8

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'
GIF89A_MAGIC = b'GIF89a'
GIF87A_MAGIC = b'GIF87a'
JPEG_MAGIC = b'\xff\xd8\xff'
RIFF_MAGIC = b'RIFF'
WEBP_MAGIC = b'WEBP'
BMP_MAGIC = b'BM'
APNG_CHUNK = b'acTL'


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of classifying a single file header."""
    ext: Optional[str] = None
    label: Optional[str] = None
    debug_hex: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_recognized(self) -> bool:
        return self.ext is not None

    @property
    def is_read_error(self) -> bool:
        return self.error is not None

    @classmethod
    def recognized(cls, ext: str, label: str) -> 'DetectionResult':
        return cls(ext=ext, label=label)

    @classmethod
    def unrecognized(cls, debug_hex: Optional[str] = None) -> 'DetectionResult':
        return cls(debug_hex=debug_hex)

    @classmethod
    def read_error(cls, message: str) -> 'DetectionResult':
        return cls(error=message)


@dataclass(frozen=True)
class Signature:
    """A single entry of the ordered signature table."""
    name: str
    ext: str
    matches: Callable[[bytes], bool]
    label: Callable[[bytes], str]


def _png_label(header: bytes) -> str:
    # Best effort: acTL only shows up this early for small APNG headers
    if header.find(APNG_CHUNK, 8) != -1:
        return 'APNG (animated)'
    return 'PNG'


# Order matters: RIFF and BM are short prefixes and must not shadow the
# longer PNG/GIF/JPEG signatures.
SIGNATURES: tuple[Signature, ...] = (
    Signature(
        name='PNG',
        ext='png',
        matches=lambda h: h.startswith(PNG_MAGIC),
        label=_png_label,
    ),
    Signature(
        name='GIF',
        ext='gif',
        matches=lambda h: h.startswith(GIF89A_MAGIC) or h.startswith(GIF87A_MAGIC),
        label=lambda h: 'GIF',
    ),
    Signature(
        name='JPEG',
        ext='jpg',
        matches=lambda h: h.startswith(JPEG_MAGIC),
        label=lambda h: 'JPEG',
    ),
    Signature(
        name='WebP',
        ext='webp',
        matches=lambda h: h[0:4] == RIFF_MAGIC and h[8:12] == WEBP_MAGIC,
        label=lambda h: 'WebP',
    ),
    Signature(
        name='BMP',
        ext='bmp',
        matches=lambda h: h.startswith(BMP_MAGIC),
        label=lambda h: 'BMP',
    ),
)


def classify_header(header: bytes) -> DetectionResult:
    """
    Classify raw header bytes against the ordered signature table.

    Only the first HEADER_SIZE bytes are looked at, so anything past that
    offset never changes the result.

    Args:
        header: Leading bytes of a file

    Returns:
        A recognized result with extension and label, or an unrecognized
        result carrying the first 8 bytes as uppercase hex. Headers shorter
        than 8 bytes are unrecognized without debug info.
    """
    header = header[:HEADER_SIZE]

    if len(header) < MIN_HEADER_SIZE:
        return DetectionResult.unrecognized()

    for signature in SIGNATURES:
        if signature.matches(header):
            return DetectionResult.recognized(signature.ext, signature.label(header))

    return DetectionResult.unrecognized(header[:MIN_HEADER_SIZE].hex().upper())


def detect_image_format(file_path: str | Path) -> DetectionResult:
    """
    Detect image format based on content (magic bytes) rather than extension.

    Reads at most the first 32 bytes to identify PNG (including an APNG
    label), GIF, JPEG, WebP and BMP files.

    Args:
        file_path: Path to the file to detect

    Returns:
        DetectionResult for the header. Read failures never raise; they come
        back as a read-error result holding the OS message.
    """
    try:
        with open(file_path, 'rb') as f:
            header = f.read(HEADER_SIZE)
    except OSError as e:
        logger.warning(f'Failed to read file {file_path}: {e}')
        return DetectionResult.read_error(str(e))

    return classify_header(header)
