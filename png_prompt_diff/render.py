"""Turn annotated segments into displayable strings."""

import html
from typing import Iterable, Optional

from .config import Settings
from .diff_engine import Segment, SegmentKind


def render_text(
    segments: Iterable[Segment],
    open_marker: Optional[str] = None,
    close_marker: Optional[str] = None,
    line_break: str = "\n",
) -> str:
    open_marker = Settings.TEXT_HIGHLIGHT_OPEN if open_marker is None else open_marker
    close_marker = Settings.TEXT_HIGHLIGHT_CLOSE if close_marker is None else close_marker
    parts = []
    for segment in segments:
        if segment.kind is SegmentKind.HIGHLIGHT:
            parts.append(f"{open_marker}{segment.text}{close_marker}")
        elif segment.kind is SegmentKind.LINE_BREAK:
            parts.append(line_break)
        else:
            parts.append(segment.text)
    return "".join(parts)


def render_html(segments: Iterable[Segment], css_class: Optional[str] = None) -> str:
    """Render segments as an HTML fragment; text is escaped, breaks become <br>."""
    css_class = css_class or Settings.HIGHLIGHT_CLASS
    parts = []
    for segment in segments:
        text = html.escape(segment.text, quote=False)
        if segment.kind is SegmentKind.HIGHLIGHT:
            parts.append(f'<span class="{html.escape(css_class)}">{text}</span>')
        elif segment.kind is SegmentKind.LINE_BREAK:
            parts.append("<br>")
        else:
            parts.append(text)
    return "".join(parts)

