"""Content type detection from raw bytes.

Implements the signature table of the WHATWG MIME Sniffing standard, the
same table browsers use. Only the first 512 bytes are considered and the
result always has a value: unknown binary data is reported as
``application/octet-stream``.
"""

from dataclasses import dataclass

SNIFF_LEN = 512

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"
_BINARY_BYTES = frozenset([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])


@dataclass(frozen=True)
class _Signature:
    pattern: bytes
    content_type: str
    mask: bytes | None = None
    skip_whitespace: bool = False

    def match(self, data: bytes) -> bool:
        if self.skip_whitespace:
            data = data.lstrip(_WHITESPACE)
        if len(data) < len(self.pattern):
            return False
        if self.mask is None:
            return data.startswith(self.pattern)
        return all(
            data[i] & self.mask[i] == self.pattern[i] for i in range(len(self.pattern))
        )


@dataclass(frozen=True)
class _HTMLSignature:
    tag: bytes

    content_type = "text/html; charset=utf-8"

    def match(self, data: bytes) -> bool:
        data = data.lstrip(_WHITESPACE)
        if len(data) < len(self.tag) + 1:
            return False
        # Tags are matched case-insensitively and must be followed by a terminator
        if data[: len(self.tag)].upper() != self.tag:
            return False
        return data[len(self.tag)] in _TAG_TERMINATORS


class _MP4Signature:
    content_type = "video/mp4"

    def match(self, data: bytes) -> bool:
        if len(data) < 12:
            return False
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return False
        if data[4:8] != b"ftyp":
            return False
        for start in range(8, box_size, 4):
            if start == 12:
                # Bytes 12-15 hold the major brand version
                continue
            if data[start : start + 3] == b"mp4":
                return True
        return False


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES = [
    *(
        _HTMLSignature(tag)
        for tag in (
            b"<!DOCTYPE HTML",
            b"<HTML",
            b"<HEAD",
            b"<SCRIPT",
            b"<IFRAME",
            b"<H1",
            b"<DIV",
            b"<FONT",
            b"<TABLE",
            b"<A",
            b"<STYLE",
            b"<TITLE",
            b"<B",
            b"<BODY",
            b"<BR",
            b"<P",
            b"<!--",
        )
    ),
    _Signature(b"<?xml", "text/xml; charset=utf-8", skip_whitespace=True),
    _Signature(b"%PDF-", "application/pdf"),
    _Signature(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks need at least four bytes of input
    _Signature(b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be", mask=b"\xff\xff\x00\x00"),
    _Signature(b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le", mask=b"\xff\xff\x00\x00"),
    _Signature(b"\xef\xbb\xbf\x00", TEXT_PLAIN, mask=b"\xff\xff\xff\x00"),
    # Images
    _Signature(b"\x00\x00\x01\x00", "image/x-icon"),
    _Signature(b"\x00\x00\x02\x00", "image/x-icon"),
    _Signature(b"BM", "image/bmp"),
    _Signature(b"GIF87a", "image/gif"),
    _Signature(b"GIF89a", "image/gif"),
    _Signature(b"RIFF\x00\x00\x00\x00WEBPVP", "image/webp", mask=_RIFF_MASK + b"\xff\xff"),
    _Signature(b"\x89PNG\r\n\x1a\n", "image/png"),
    _Signature(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    _Signature(b"FORM\x00\x00\x00\x00AIFF", "audio/aiff", mask=_RIFF_MASK),
    _Signature(b"ID3", "audio/mpeg"),
    _Signature(b"OggS\x00", "application/ogg"),
    _Signature(b"MThd\x00\x00\x00\x06", "audio/midi"),
    _Signature(b"RIFF\x00\x00\x00\x00AVI ", "video/avi", mask=_RIFF_MASK),
    _Signature(b"RIFF\x00\x00\x00\x00WAVE", "audio/wave", mask=_RIFF_MASK),
    _MP4Signature(),
    _Signature(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    # Embedded OpenType: "LP" at offset 34
    _Signature(
        b"\x00" * 34 + b"LP",
        "application/vnd.ms-fontobject",
        mask=b"\x00" * 34 + b"\xff\xff",
    ),
    _Signature(b"\x00\x01\x00\x00", "font/ttf"),
    _Signature(b"OTTO", "font/otf"),
    _Signature(b"ttcf", "font/collection"),
    _Signature(b"wOFF", "font/woff"),
    _Signature(b"wOF2", "font/woff2"),
    # Archives
    _Signature(b"\x1f\x8b\x08", "application/x-gzip"),
    _Signature(b"PK\x03\x04", "application/zip"),
    _Signature(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _Signature(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _Signature(b"\x00asm", "application/wasm"),
]


def detect_content_type(data: bytes) -> str:
    """Return the MIME type of ``data`` based on its leading bytes."""
    head = data[:SNIFF_LEN]

    for signature in SIGNATURES:
        if signature.match(head):
            return signature.content_type

    if any(byte in _BINARY_BYTES for byte in head):
        return OCTET_STREAM
    return TEXT_PLAIN
