from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from text_summarizer.observability import annotate_span
from text_summarizer.options import MAX_SENTENCES, MIN_SENTENCES, SummarizeOptions
from text_summarizer.summarizer import summarize
from text_summarizer.tool_registry import ToolSpec

TOOL_NAME = "summarize_text"

INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "text": {
            "type": "string",
            "description": "Text to summarize",
        },
        "max_sentences": {
            "type": "number",
            "description": "Maximum number of sentences in the summary (default: 3)",
            "minimum": MIN_SENTENCES,
            "maximum": MAX_SENTENCES,
        },
    },
    "required": ["text"],
}


def summarize_text(arguments: Optional[Mapping[str, Any]]) -> str:
    """Validate boundary arguments and run the extractive summarizer."""
    options = SummarizeOptions.from_arguments(arguments)
    summary = summarize(options.text, options.max_sentences)
    annotate_span(
        {
            "summarize.input_chars": len(options.text),
            "summarize.max_sentences": options.max_sentences,
            "summarize.summary_chars": len(summary),
        }
    )
    return summary


def summarize_text_spec() -> ToolSpec:
    return ToolSpec(
        name=TOOL_NAME,
        description="Summarize text by extracting its most important sentences (no LLM)",
        handler=summarize_text,
        input_schema=INPUT_SCHEMA,
        error_label="Error summarizing text",
    )
