"""Errors raised by the CWF compiler.

Library code only raises; the CLI driver decides how to report them.
"""

from __future__ import annotations

from typing import Optional


class CompileError(Exception):
    """Base class for every error the compiler reports."""


class ParseError(CompileError):
    """Raised when the source does not match the grammar."""

    def __init__(self, message: str, line: int, col: int, source_name: str = ""):
        self.message = message
        self.line = line
        self.col = col
        self.source_name = source_name
        super().__init__(message)

    def __str__(self) -> str:
        location = f"{self.line}:{self.col}"
        if self.source_name:
            location = f"{self.source_name}:{location}"
        return f"{location}: {self.message}"


class LexError(ParseError):
    """Raised for characters or comments the tokenizer cannot scan."""


class ModelError(CompileError):
    """Raised when a parsed declaration violates a model invariant."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        col: Optional[int] = None,
        source_name: str = "",
    ):
        self.message = message
        self.line = line
        self.col = col
        self.source_name = source_name
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        location = f"{self.line}:{self.col}"
        if self.source_name:
            location = f"{self.source_name}:{location}"
        return f"{location}: {self.message}"


class EmitError(CompileError):
    """Raised when a generated artifact cannot be written."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"creating file:{path}: {cause}")


class MarshalError(CompileError):
    """Raised when a record cannot be packed or unpacked."""
