"""Pytest configuration and fixtures for png-prompt-diff tests."""

import struct
import zlib

import pytest

from png_prompt_diff.png_reader import PNG_SIGNATURE


def _chunk(chunk_type: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


# 1x1 RGB image, 8 bits per channel
IHDR = _chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))
IDAT = _chunk(b"IDAT", zlib.compress(b"\x00\xff\x00\x00"))
IEND = _chunk(b"IEND", b"")


@pytest.fixture
def make_chunk():
    """Build a raw PNG chunk (length, type, data, CRC)."""
    return _chunk


@pytest.fixture
def text_chunk():
    """Build a tEXt chunk from a keyword and a Latin-1 value."""
    def build(keyword: str, value: str) -> bytes:
        return _chunk(b"tEXt", keyword.encode("latin-1") + b"\x00" + value.encode("latin-1"))
    return build


@pytest.fixture
def itext_chunk():
    """Build an iTXt chunk with optional language tag and translated keyword."""
    def build(keyword: str, value, lang: str = "", translated: str = "", compressed: bool = False) -> bytes:
        body = value if isinstance(value, bytes) else value.encode("utf-8")
        data = (
            keyword.encode("latin-1") + b"\x00"
            + (b"\x01\x00" if compressed else b"\x00\x00")
            + lang.encode("ascii") + b"\x00"
            + translated.encode("utf-8") + b"\x00"
            + body
        )
        return _chunk(b"iTXt", data)
    return build


@pytest.fixture
def build_png():
    """Assemble a PNG buffer: signature, IHDR, the given chunks, IDAT and IEND."""
    def build(*chunks: bytes, end: bool = True) -> bytes:
        return PNG_SIGNATURE + IHDR + b"".join(chunks) + IDAT + (IEND if end else b"")
    return build


@pytest.fixture
def a1111_parameters():
    """A typical A1111 parameters block."""
    return (
        "masterpiece, best quality, 1girl, red hat\n"
        "Negative prompt: lowres, bad hands\n"
        "Steps: 20, Sampler: Euler, Seed: 12345, Size: 512x512"
    )


@pytest.fixture
def comfy_prompt_graph():
    """Minimal ComfyUI API-format graph as stored in the "prompt" chunk."""
    return {
        "3": {
            "class_type": "KSampler",
            "inputs": {
                "seed": 12345,
                "steps": 20,
                "cfg": 7.5,
                "sampler_name": "euler",
                "scheduler": "normal",
                "denoise": 1.0,
                "model": ["4", 0],
                "positive": ["6", 0],
                "negative": ["7", 0],
                "latent_image": ["5", 0],
            },
        },
        "4": {
            "class_type": "CheckpointLoaderSimple",
            "inputs": {"ckpt_name": "model.safetensors"},
        },
        "5": {
            "class_type": "EmptyLatentImage",
            "inputs": {"width": 512, "height": 768, "batch_size": 1},
        },
        "6": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": "a cat, wearing a hat", "clip": ["4", 1]},
        },
        "7": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": "blurry", "clip": ["4", 1]},
        },
    }
