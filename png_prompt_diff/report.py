import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .comfy_prompt import parameters_from_metadata
from .diff_engine import Segment, highlight
from .parameters import StableDiffusionParameters
from .png_reader import FormatError, extract_png_metadata

logger = logging.getLogger(__name__)


@dataclass
class ImageReport:
    """Everything shown for one image card."""
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)
    parameters: Optional[StableDiffusionParameters] = None
    error: Optional[str] = None
    prompt_segments: List[Segment] = field(default_factory=list)
    negative_segments: List[Segment] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_parameters(self) -> bool:
        return self.parameters is not None and not self.parameters.is_empty()


class ReportBuilder:
    def __init__(self, granularity: Optional[str] = None):
        self.granularity = granularity

    def build(self, name: str, buffer: bytes) -> ImageReport:
        try:
            metadata = extract_png_metadata(buffer)
        except FormatError as e:
            logger.error(f"Failed to read {name}: {e}")
            return ImageReport(name=name, error=str(e))

        parameters = parameters_from_metadata(metadata)
        if parameters is None:
            logger.info(f"{name}: no generation parameters found ({len(metadata)} text chunks)")
        return ImageReport(name=name, metadata=metadata, parameters=parameters)

    def build_all(self, images: Iterable[Tuple[str, bytes]]) -> List[ImageReport]:
        reports = [self.build(name, buffer) for name, buffer in images]
        self.compare(reports)
        return reports

    def compare(self, reports: List[ImageReport]) -> None:
        """Fill in highlighted segments, comparing each report against all the others."""
        comparable = [r for r in reports if r.ok and r.parameters is not None]
        for report in comparable:
            others = [r.parameters for r in comparable if r is not report]
            report.prompt_segments = highlight(
                report.parameters.prompt,
                [p.prompt for p in others],
                self.granularity,
            )
            report.negative_segments = highlight(
                report.parameters.negative_prompt,
                [p.negative_prompt for p in others],
                self.granularity,
            )
