import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import Settings
from .diff_engine import SegmentKind
from .png_reader import describe_metadata
from .render import render_html, render_text
from .report import ImageReport, ReportBuilder
from .utils import display_name, load_image_bytes

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="png-prompt-diff",
        description="Show the generation metadata of PNG images and highlight prompt differences between them",
    )
    parser.add_argument("images", nargs="+", help="PNG files to inspect")
    parser.add_argument(
        "--granularity",
        choices=Settings.GRANULARITIES,
        default=None,
        help="Compare whole comma/BREAK phrases or single words (default: PROMPT_DIFF_GRANULARITY)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=Settings.OUTPUT_FORMATS,
        default=None,
        help="Output format (default: PROMPT_DIFF_OUTPUT)",
    )
    parser.add_argument("--raw", action="store_true", help="Also print every text chunk")
    return parser.parse_args(argv)


def _render(report: ImageReport, output_format: str, raw: bool) -> str:
    lines = [f"=== {report.name} ==="]
    if not report.ok:
        lines.append(f"Error: {report.error}")
        return "\n".join(lines)
    if not report.has_parameters:
        lines.append("No generation parameters found.")
    else:
        render = render_html if output_format == "html" else render_text
        lines.append("Prompt:")
        lines.append(render(report.prompt_segments))
        if report.parameters.negative_prompt:
            lines.append("Negative prompt:")
            lines.append(render(report.negative_segments))
        for key, value in report.parameters.params.items():
            lines.append(f"{key}: {value}")
    if raw:
        lines.append("Raw metadata:")
        lines.append(describe_metadata(report.metadata))
    return "\n".join(lines)


def _to_json(report: ImageReport) -> dict:
    entry = {
        "name": report.name,
        "error": report.error,
        "metadata": report.metadata,
        "parameters": report.parameters.to_dict() if report.parameters else None,
    }
    if report.has_parameters:
        entry["prompt_html"] = render_html(report.prompt_segments)
        entry["negative_prompt_html"] = render_html(report.negative_segments)
        entry["prompt_differences"] = [
            s.text.strip() for s in report.prompt_segments if s.kind is SegmentKind.HIGHLIGHT
        ]
    return entry


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    Settings.validate()
    output_format = args.output_format or Settings.OUTPUT_FORMAT

    images = []
    failed = 0
    for index, source in enumerate(args.images):
        try:
            images.append((display_name(source, index), load_image_bytes(source)))
        except ValueError as e:
            logger.error(str(e))
            failed += 1

    reports = ReportBuilder(args.granularity).build_all(images)
    failed += sum(1 for r in reports if not r.ok)

    if output_format == "json":
        print(json.dumps([_to_json(r) for r in reports], indent=2, ensure_ascii=False))
    else:
        print("\n\n".join(_render(r, output_format, args.raw) for r in reports))

    logger.info(f"Processed {len(reports)} images, {failed} failed")
    return 1 if failed else 0


def configure_logging(debug: bool = False) -> None:
    root_logger = logging.getLogger()

    # Remove ALL existing handlers first
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def run() -> None:
    configure_logging(Settings.DEBUG)
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting gracefully.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
