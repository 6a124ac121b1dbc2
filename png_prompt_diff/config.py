"""
png-prompt-diff Configuration

Defaults for how prompts are tokenized and how highlights are rendered.
Values come from the environment (or a local .env file).
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    # "phrase" splits on commas and BREAK, "word" also splits on whitespace
    DIFF_GRANULARITY = os.getenv("PROMPT_DIFF_GRANULARITY", "phrase").strip().lower()
    HIGHLIGHT_CLASS = os.getenv("PROMPT_DIFF_HIGHLIGHT_CLASS", "diff-highlight")
    TEXT_HIGHLIGHT_OPEN = os.getenv("PROMPT_DIFF_TEXT_OPEN", "[")
    TEXT_HIGHLIGHT_CLOSE = os.getenv("PROMPT_DIFF_TEXT_CLOSE", "]")
    OUTPUT_FORMAT = os.getenv("PROMPT_DIFF_OUTPUT", "text").strip().lower()

    GRANULARITIES = ("phrase", "word")
    OUTPUT_FORMATS = ("text", "html", "json")

    @classmethod
    def validate(cls):
        if cls.DIFF_GRANULARITY not in cls.GRANULARITIES:
            raise RuntimeError(
                f"PROMPT_DIFF_GRANULARITY must be one of {cls.GRANULARITIES}, got '{cls.DIFF_GRANULARITY}'"
            )
        if cls.OUTPUT_FORMAT not in cls.OUTPUT_FORMATS:
            raise RuntimeError(
                f"PROMPT_DIFF_OUTPUT must be one of {cls.OUTPUT_FORMATS}, got '{cls.OUTPUT_FORMAT}'"
            )
