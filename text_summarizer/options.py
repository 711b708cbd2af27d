from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from text_summarizer.errors import InvalidParamsError
from text_summarizer.summarizer import DEFAULT_MAX_SENTENCES

logger = logging.getLogger("text_summarizer.options")

MIN_SENTENCES = 1
MAX_SENTENCES = 10


def clamp_sentences(value: float) -> int:
    """Clamp to [MIN_SENTENCES, MAX_SENTENCES] and drop any fractional part."""
    return int(min(max(MIN_SENTENCES, value), MAX_SENTENCES))


def default_max_sentences() -> int:
    raw = os.getenv("TEXTSUM_DEFAULT_MAX_SENTENCES", "").strip()
    if not raw:
        return DEFAULT_MAX_SENTENCES
    try:
        return clamp_sentences(int(raw))
    except ValueError:
        logger.warning(
            "Ignoring invalid TEXTSUM_DEFAULT_MAX_SENTENCES",
            extra={"extra": {"value": raw}},
        )
        return DEFAULT_MAX_SENTENCES


@dataclass(frozen=True)
class SummarizeOptions:
    """Validated arguments for one summarize_text call.

    ``max_sentences`` defaults to 3 (or TEXTSUM_DEFAULT_MAX_SENTENCES) and is
    always clamped to the inclusive range 1-10.
    """

    text: str
    max_sentences: int = DEFAULT_MAX_SENTENCES

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "SummarizeOptions":
        if not isinstance(arguments, Mapping):
            raise InvalidParamsError("Invalid arguments: expected an object")

        text = arguments.get("text")
        if not isinstance(text, str):
            raise InvalidParamsError("Invalid arguments: text parameter is required and must be a string")

        raw_max = arguments.get("max_sentences")
        if raw_max is None:
            return cls(text=text, max_sentences=default_max_sentences())

        # bool is an int subclass but never a sentence count
        if isinstance(raw_max, bool) or not isinstance(raw_max, (int, float)):
            raise InvalidParamsError("Invalid arguments: max_sentences must be a number")
        if isinstance(raw_max, float) and not math.isfinite(raw_max):
            raise InvalidParamsError("Invalid arguments: max_sentences must be finite")

        return cls(text=text, max_sentences=clamp_sentences(raw_max))
