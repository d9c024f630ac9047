"""Tests for attachment source resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from mimecraft.attachments import (
    ResolvedAttachment,
    fallback_filename,
    guess_content_type,
    resolve_attachment,
)
from mimecraft.exceptions import AttachmentLimitError
from mimecraft.models import BytesAttachment, FileAttachment


class TestGuessContentType:
    """Tests for guess_content_type."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("report.pdf", "application/pdf"),
            ("notes.txt", "text/plain"),
            ("photo.png", "image/png"),
            ("blob", "application/octet-stream"),
            ("archive.tar.gz", "application/octet-stream"),
        ],
    )
    def test_guesses_from_name(self, name: str, expected: str) -> None:
        """Known extensions map to their type, the rest to octet-stream."""
        assert guess_content_type(Path(name)) == expected


class TestResolveAttachment:
    """Tests for resolve_attachment."""

    def test_file_attachment(self, attachment_file: Path) -> None:
        """Existing files are read with their guessed type."""
        resolved = resolve_attachment(FileAttachment("data.txt", attachment_file), 0)

        assert resolved == ResolvedAttachment(filename="data.txt", maintype="text", subtype="plain", data=b"payload")
        assert resolved.content_type == "text/plain"

    def test_file_attachment_fallback_name(self, attachment_file: Path) -> None:
        """The fallback name uses the index, not the file name."""
        resolved = resolve_attachment(FileAttachment("", attachment_file), 3)

        assert resolved is not None
        assert resolved.filename == "file_3"

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        """Missing files resolve to None."""
        assert resolve_attachment(FileAttachment("x.txt", tmp_path / "nope.txt"), 0) is None

    def test_oversized_file_is_not_read(self, attachment_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A file above ``max_size`` is rejected from its size on disk."""
        reads: list[Path] = []
        monkeypatch.setattr(Path, "read_bytes", lambda self: reads.append(self) or b"")

        with pytest.raises(AttachmentLimitError, match="'data.txt' .* exceeds size limit of 4 B"):
            resolve_attachment(FileAttachment("data.txt", attachment_file), 0, max_size=4)

        assert not reads

    @pytest.mark.parametrize("max_size", [None, 7])
    def test_file_within_max_size_is_read(self, attachment_file: Path, max_size: int | None) -> None:
        """Files at or under ``max_size`` are read, and None disables the check."""
        resolved = resolve_attachment(FileAttachment("data.txt", attachment_file), 0, max_size=max_size)

        assert resolved is not None
        assert resolved.data == b"payload"

    def test_bytes_attachment(self) -> None:
        """Byte payloads keep their declared type."""
        resolved = resolve_attachment(BytesAttachment("img", b"\x89PNG", "Image/PNG"), 1)

        assert resolved is not None
        assert (resolved.maintype, resolved.subtype) == ("image", "png")
        assert resolved.data == b"\x89PNG"

    def test_bytearray_content_is_copied_to_bytes(self) -> None:
        """Mutable buffers are frozen into bytes."""
        resolved = resolve_attachment(BytesAttachment("buf", bytearray(b"abc")), 0)  # type: ignore[arg-type]

        assert resolved is not None
        assert isinstance(resolved.data, bytes)

    @pytest.mark.parametrize("content", [b"", None])
    def test_empty_bytes_return_none(self, content: bytes | None) -> None:
        """Empty byte payloads resolve to None."""
        assert resolve_attachment(BytesAttachment("x.bin", content), 0) is None

    @pytest.mark.parametrize("content_type", ["octet-stream", "application/", "/pdf", "a/b/c"])
    def test_malformed_content_type_raises(self, content_type: str) -> None:
        """Content types must be ``maintype/subtype``."""
        with pytest.raises(ValueError, match="Invalid attachment content type"):
            resolve_attachment(BytesAttachment("x.bin", b"x", content_type), 0)

    def test_unknown_attachment_type_raises(self) -> None:
        """Only file and bytes attachments are supported."""
        with pytest.raises(TypeError, match="Unsupported attachment type"):
            resolve_attachment("not-an-attachment", 0)  # type: ignore[arg-type]


def test_fallback_filename() -> None:
    """Fallback names are zero-based ``file_<index>``."""
    assert [fallback_filename(i) for i in range(3)] == ["file_0", "file_1", "file_2"]
