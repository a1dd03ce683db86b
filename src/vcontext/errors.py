from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    CORPUS_NOT_FOUND = "CORPUS_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    MODULE_NOT_FOUND = "MODULE_NOT_FOUND"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    READ_FAILED = "READ_FAILED"
    PATTERN_INVALID = "PATTERN_INVALID"


class VContextError(Exception):
    """Raised by the engines and tool handlers for all expected failure conditions.

    Caught by server.py and serialised into the MCP error response. Multi-file
    walks absorb per-file READ_FAILED / PATTERN_INVALID errors; everything else
    propagates so the agent receives a structured error with a suggestion.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
