from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from text_summarizer.errors import MethodNotFoundError, ToolError
from text_summarizer.observability import tool_span

logger = logging.getLogger("text_summarizer.tools")


def _empty_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[[Mapping[str, Any]], Any]
    input_schema: Dict[str, Any] = field(default_factory=_empty_schema)
    error_label: str = "Error running tool"

    def descriptor(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def text_result(text: str, is_error: bool = False) -> Dict[str, Any]:
    result: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


class ToolRegistry:
    """Maps tool names to handlers and turns handler output into result payloads.

    Argument errors (``ToolError``) propagate to the caller. Any other
    exception raised by a handler is reported as an ``isError`` result.
    """

    def __init__(self, call_counter=None) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._call_counter = call_counter

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def list_tools(self) -> List[ToolSpec]:
        return list(self._tools.values())

    def describe(self) -> List[Dict[str, Any]]:
        return [tool.descriptor() for tool in self._tools.values()]

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def call(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        tool = self.get(name)
        if not tool:
            self._count(name, "not_found")
            raise MethodNotFoundError(f"Unknown tool: {name}")

        started = time.perf_counter()
        with tool_span(name, request_id) as span:
            try:
                output = tool.handler(arguments)
            except ToolError:
                span.set_attribute("tool.outcome", "invalid")
                self._count(name, "invalid")
                raise
            except Exception as exc:
                logger.exception(
                    "tool_failed",
                    extra={"extra": {"tool": name, "request_id": request_id}},
                )
                span.set_attribute("tool.outcome", "error")
                self._count(name, "error")
                return text_result(f"{tool.error_label}: {exc}", is_error=True)
            span.set_attribute("tool.outcome", "ok")

        self._count(name, "ok")
        logger.info(
            "tool_call",
            extra={
                "extra": {
                    "tool": name,
                    "request_id": request_id,
                    "latency_ms": int((time.perf_counter() - started) * 1000),
                }
            },
        )
        return text_result(output if isinstance(output, str) else str(output))

    def _count(self, name: str, outcome: str) -> None:
        if self._call_counter is not None:
            self._call_counter.labels(name, outcome).inc()
