"""
PNG Text Chunk Reader

Walks a PNG byte buffer chunk by chunk and collects the text metadata that
image generators embed (A1111 "parameters", ComfyUI "prompt"/"workflow", ...).

- tEXt: keyword\\0text, both Latin-1
- iTXt: keyword\\0 flag method lang\\0 translated\\0 text (UTF-8)

Pixel data is never inspected and CRCs are not validated.
"""

import json
import logging
import struct
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
NO_TEXT_CHUNKS_MESSAGE = "No text chunks found in this PNG."

# length (4) + type (4) before the data, CRC (4) after it
CHUNK_HEADER_SIZE = 8
CHUNK_CRC_SIZE = 4
MAX_CHUNK_LENGTH = 2**31 - 1


class FormatError(ValueError):
    """Raised when the buffer is not a structurally valid PNG container."""


@dataclass(frozen=True)
class ChunkResult:
    """Outcome of decoding a single chunk: a keyword/text pair or a skip."""
    keyword: Optional[str] = None
    text: Optional[str] = None
    reason: str = ""

    @classmethod
    def ok(cls, keyword: str, text: str) -> "ChunkResult":
        return cls(keyword=keyword, text=text)

    @classmethod
    def skipped(cls, reason: str) -> "ChunkResult":
        return cls(reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.keyword is not None


def _decode_text(data: bytes) -> ChunkResult:
    nul = data.find(b"\x00")
    if nul == -1:
        return ChunkResult.skipped("tEXt chunk without keyword separator")
    keyword = data[:nul].decode("latin-1")
    text = data[nul + 1:].decode("latin-1")
    return ChunkResult.ok(keyword, text)


def _decode_itext(data: bytes) -> ChunkResult:
    nul = data.find(b"\x00")
    if nul == -1:
        return ChunkResult.skipped("iTXt chunk without keyword separator")
    keyword = data[:nul].decode("latin-1")

    # compression flag (1) + compression method (1)
    pos = nul + 3
    if pos > len(data):
        return ChunkResult.skipped(f"iTXt chunk '{keyword}' truncated before language tag")
    if data[nul + 1] == 1:
        logger.debug(f"iTXt chunk '{keyword}' is compressed, decoding raw bytes")

    # language tag, then translated keyword
    for field in ("language tag", "translated keyword"):
        end = data.find(b"\x00", pos)
        if end == -1:
            return ChunkResult.skipped(f"iTXt chunk '{keyword}' missing {field} terminator")
        pos = end + 1

    if pos >= len(data):
        return ChunkResult.skipped(f"iTXt chunk '{keyword}' has no text")
    text = data[pos:].decode("utf-8", errors="replace")
    return ChunkResult.ok(keyword, text)


_DECODERS = {
    b"tEXt": _decode_text,
    b"iTXt": _decode_itext,
}


def extract_png_metadata(buffer: bytes) -> Dict[str, str]:
    """Return a mapping of keyword -> text for every tEXt/iTXt chunk.

    Later chunks with the same keyword overwrite earlier ones. Malformed text
    chunks are skipped; structural corruption raises FormatError.
    """
    data = bytes(buffer)
    if data[:len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        raise FormatError("Not a valid PNG file")

    metadata: Dict[str, str] = {}
    offset = len(PNG_SIGNATURE)
    total = len(data)

    while offset < total:
        if offset + CHUNK_HEADER_SIZE > total:
            raise FormatError(f"Truncated chunk header at offset {offset}")
        length, chunk_type = struct.unpack(">I4s", data[offset:offset + CHUNK_HEADER_SIZE])
        if length > MAX_CHUNK_LENGTH:
            raise FormatError(f"Chunk length {length} at offset {offset} exceeds PNG maximum")

        data_start = offset + CHUNK_HEADER_SIZE
        data_end = data_start + length
        if data_end + CHUNK_CRC_SIZE > total:
            raise FormatError(
                f"Chunk {chunk_type!r} at offset {offset} declares {length} bytes "
                f"but only {total - data_start} remain"
            )

        decoder = _DECODERS.get(chunk_type)
        if decoder is not None:
            result = decoder(data[data_start:data_end])
            if result.is_ok:
                metadata[result.keyword] = result.text
            else:
                logger.debug(f"Skipping chunk at offset {offset}: {result.reason}")
        elif chunk_type == b"IEND":
            break

        offset += CHUNK_HEADER_SIZE + length + CHUNK_CRC_SIZE

    return metadata


def describe_metadata(metadata: Dict[str, str]) -> str:
    """Human-readable dump of a metadata mapping, or a placeholder when empty."""
    if not metadata:
        return NO_TEXT_CHUNKS_MESSAGE
    return json.dumps(metadata, indent=2, ensure_ascii=False)
