"""File previews for the result lists: inline images and text excerpts."""

from __future__ import annotations

import base64
import logging
from pathlib import Path

from diskscan.models.response import ObjectPayload, Response

log = logging.getLogger(__name__)

# Files larger than this are never sniffed for binary content.
_SNIFF_LIMIT = 1024 * 1024
_SNIFF_BYTES = 8000
MAX_TEXT_BYTES = 50_000
TRUNCATION_MARKER = "...\n\n[Content truncated - file too large]"

IMAGE_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
}

TEXT_EXTENSIONS = frozenset(
    {
        "txt", "md", "json", "xml", "html", "css", "js", "ts", "rs", "py",
        "java", "c", "cpp", "h", "hpp", "go", "rb", "php", "sh", "bash",
        "zsh", "yaml", "yml", "toml", "ini", "cfg", "log", "conf",
        "properties", "env", "gitignore", "dockerignore", "editorconfig",
    }
)


def _extension(path: Path) -> str:
    # Dotfiles like ".gitignore" have no suffix but are named by their extension.
    if not path.suffix and path.name.startswith("."):
        return path.name[1:].lower()
    return path.suffix[1:].lower()


def _is_plain_ascii(data: bytes) -> bool:
    return all(b == 0 or 32 <= b < 127 or b in (9, 10, 13) for b in data[:_SNIFF_BYTES])


def _looks_like_text(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return 0 not in data[:_SNIFF_BYTES]


def detect_type(path: Path) -> str:
    """Classify *path* as ``image``, ``text``, ``binary`` or ``unknown``."""
    ext = _extension(path)
    if ext in IMAGE_TYPES:
        return "image"

    try:
        size = path.stat().st_size
    except OSError:
        return "text" if ext in TEXT_EXTENSIONS else "unknown"

    if ext in TEXT_EXTENSIONS:
        if size >= _SNIFF_LIMIT:
            return "text"
        try:
            return "text" if _looks_like_text(path.read_bytes()) else "binary"
        except OSError:
            return "binary"

    if size >= _SNIFF_LIMIT:
        return "binary"
    try:
        return "text" if _is_plain_ascii(path.read_bytes()) else "binary"
    except OSError:
        return "binary"


def utf8_boundary(data: bytes, limit: int) -> int:
    """Largest cut position <= *limit* that does not split a UTF-8 sequence."""
    if limit >= len(data):
        return len(data)
    cut = limit
    # Step back over continuation bytes (10xxxxxx) to the start of the character.
    while cut > 0 and data[cut] & 0xC0 == 0x80:
        cut -= 1
    return cut


def read_text_excerpt(path: Path, limit: int = MAX_TEXT_BYTES) -> str:
    """Read at most *limit* bytes of *path* as text, cut on a character boundary."""
    with path.open("rb") as f:
        data = f.read(limit + 4)
    if len(data) <= limit:
        return data.decode("utf-8", errors="replace")
    cut = utf8_boundary(data, limit)
    return data[:cut].decode("utf-8", errors="replace") + TRUNCATION_MARKER


def preview_file(path: str | Path) -> Response:
    """Build a preview object for *path*: an image data URL or a text excerpt."""
    file_path = Path(path)
    if not file_path.exists():
        return Response.error("File not found")

    file_type = detect_type(file_path)
    fields: dict[str, str] = {"name": file_path.name or "unknown", "path": str(path), "type": file_type}

    try:
        if file_type == "image":
            mime = IMAGE_TYPES[_extension(file_path)]
            encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
            fields["imageUrl"] = f"data:{mime};base64,{encoded}"
        elif file_type == "text":
            fields["content"] = read_text_excerpt(file_path)
    except OSError as e:
        log.debug("Cannot read %s for preview: %s", file_path, e)
        return Response.error(f"Failed to read file: {e.strerror or e}")

    return Response.success("File preview retrieved", ObjectPayload(fields))
