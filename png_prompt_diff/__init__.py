__version__ = "0.1.0"

from .png_reader import FormatError, extract_png_metadata, describe_metadata
from .parameters import StableDiffusionParameters, parse_parameters
from .tokenizer import Token, TokenKind, tokenize
from .diff_engine import Segment, SegmentKind, highlight, format_breaks
from .render import render_html, render_text
from .report import ImageReport, ReportBuilder

__all__ = [
    "FormatError",
    "extract_png_metadata",
    "describe_metadata",
    "StableDiffusionParameters",
    "parse_parameters",
    "Token",
    "TokenKind",
    "tokenize",
    "Segment",
    "SegmentKind",
    "highlight",
    "format_breaks",
    "render_html",
    "render_text",
    "ImageReport",
    "ReportBuilder",
]
