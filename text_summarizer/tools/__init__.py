from __future__ import annotations

from text_summarizer.tool_registry import ToolRegistry
from text_summarizer.tools.summarize_text import summarize_text_spec


def build_registry(call_counter=None) -> ToolRegistry:
    registry = ToolRegistry(call_counter=call_counter)
    registry.register(summarize_text_spec())
    return registry
