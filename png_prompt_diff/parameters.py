"""Parser for the A1111-style "parameters" text block."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

NEGATIVE_PROMPT_PREFIX = "Negative prompt:"
PARAMS_LINE_PREFIX = "Steps:"

# Split on a comma only when the next thing is a "Key:" token, so values
# such as "Styles: cinematic, moody" keep their inner commas.
_PARAM_SPLIT = re.compile(r",\s*(?=\w+:)")


@dataclass
class StableDiffusionParameters:
    prompt: str = ""
    negative_prompt: str = ""
    params: Dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.prompt or self.negative_prompt or self.params)

    def to_dict(self) -> Dict[str, object]:
        return {
            "prompt": self.prompt,
            "negative_prompt": self.negative_prompt,
            "params": dict(self.params),
        }


def parse_param_line(line: str) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for part in _PARAM_SPLIT.split(line):
        key, sep, value = part.partition(":")
        if key and sep:
            params[key.strip()] = value.strip()
    return params


def parse_parameters(text: Optional[str]) -> Optional[StableDiffusionParameters]:
    """
    Parse a generation "parameters" value into prompt, negative prompt and params.

    Lines before "Negative prompt:" form the prompt, lines after it the
    negative prompt, and the "Steps: ..." line the key/value params. Text
    after the params line is ignored. Returns None for empty input.
    """
    if not text:
        return None

    result = StableDiffusionParameters()
    is_negative = False
    params_started = False

    for line in text.split("\n"):
        if line.startswith(NEGATIVE_PROMPT_PREFIX):
            is_negative = True
            result.negative_prompt += line[len(NEGATIVE_PROMPT_PREFIX):].strip()
        elif line.startswith(PARAMS_LINE_PREFIX):
            params_started = True
            result.params.update(parse_param_line(line))
        elif params_started:
            logger.debug(f"Ignoring text after params line: {line[:40]!r}")
        elif is_negative:
            result.negative_prompt += "\n" + line
        else:
            result.prompt += ("\n" if result.prompt else "") + line

    return result
