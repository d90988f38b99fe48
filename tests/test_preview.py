"""Tests for file previews."""

from __future__ import annotations

import base64

from diskscan.core.preview import (
    MAX_TEXT_BYTES,
    TRUNCATION_MARKER,
    detect_type,
    preview_file,
    read_text_excerpt,
    utf8_boundary,
)
from diskscan.models.response import ResponseStatus

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


class TestDetectType:
    def test_image_by_extension(self, tmp_path):
        path = tmp_path / "photo.PNG"
        path.write_bytes(PNG_HEADER)
        assert detect_type(path) == "image"

    def test_text_extension(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# hello\n", encoding="utf-8")
        assert detect_type(path) == "text"

    def test_text_extension_with_nul_is_binary(self, tmp_path):
        path = tmp_path / "fake.txt"
        path.write_bytes(b"abc\x00def")
        assert detect_type(path) == "binary"

    def test_dotfile(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("*.pyc\n", encoding="utf-8")
        assert detect_type(path) == "text"

    def test_unknown_extension_ascii(self, tmp_path):
        path = tmp_path / "README"
        path.write_text("plain words\n", encoding="ascii")
        assert detect_type(path) == "text"

    def test_unknown_extension_binary(self, tmp_path):
        path = tmp_path / "blob.dat"
        path.write_bytes(bytes(range(256)))
        assert detect_type(path) == "binary"


class TestUtf8Boundary:
    def test_ascii(self):
        assert utf8_boundary(b"abcdef", 3) == 3

    def test_does_not_split_multibyte(self):
        data = "aé".encode("utf-8")  # 61 c3 a9
        assert utf8_boundary(data, 2) == 1

    def test_limit_past_end(self):
        assert utf8_boundary(b"ab", 10) == 2


class TestReadTextExcerpt:
    def test_short_file_is_whole(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("hello", encoding="utf-8")
        assert read_text_excerpt(path) == "hello"

    def test_long_file_is_truncated(self, tmp_path):
        path = tmp_path / "big.log"
        path.write_text("x" * (MAX_TEXT_BYTES + 100), encoding="utf-8")
        content = read_text_excerpt(path)
        assert content == "x" * MAX_TEXT_BYTES + TRUNCATION_MARKER

    def test_truncation_keeps_characters_whole(self, tmp_path):
        path = tmp_path / "multi.txt"
        path.write_text("é" * 10, encoding="utf-8")
        content = read_text_excerpt(path, limit=5)
        assert content == "éé" + TRUNCATION_MARKER


class TestPreviewFile:
    def test_missing(self, tmp_path):
        response = preview_file(tmp_path / "nope.txt")
        assert response.status is ResponseStatus.ERROR
        assert response.message == "File not found"

    def test_text(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("line 1\nline 2\n", encoding="utf-8")
        response = preview_file(path)
        assert response.message == "File preview retrieved"
        assert response.to_dict()["data"] == {
            "name": "app.log",
            "path": str(path),
            "type": "text",
            "content": "line 1\nline 2\n",
        }

    def test_image(self, tmp_path):
        path = tmp_path / "pic.png"
        path.write_bytes(PNG_HEADER)
        data = preview_file(str(path)).to_dict()["data"]
        assert data["type"] == "image"
        assert data["imageUrl"] == "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode("ascii")
        assert "content" not in data

    def test_binary_has_no_content(self, tmp_path):
        path = tmp_path / "core.bin"
        path.write_bytes(b"\x00\x01\x02\xff")
        data = preview_file(path).to_dict()["data"]
        assert data["type"] == "binary"
        assert set(data) == {"name", "path", "type"}
