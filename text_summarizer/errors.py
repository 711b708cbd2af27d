"""Errors raised at the tool boundary.

Codes follow JSON-RPC numbering so a transport can pass them through as-is.
"""
from __future__ import annotations


class ToolError(Exception):
    code: int = -32603
    error_type: str = "InternalError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message, "type": self.error_type, "code": self.code}


class InvalidParamsError(ToolError):
    """Tool arguments are missing or have the wrong type."""

    code = -32602
    error_type = "InvalidParams"


class MethodNotFoundError(ToolError):
    """No tool is registered under the requested name."""

    code = -32601
    error_type = "MethodNotFound"
