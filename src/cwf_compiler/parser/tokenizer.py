"""Tokenizer for CWF record description (.cwf) files."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List

from cwf_compiler.errors import LexError


class TokenType(Enum):
    # Keywords
    OPERATION = auto()
    MESSAGE = auto()
    IN = auto()
    OUT = auto()
    INT = auto()
    DECIMAL = auto()
    STRING = auto()

    # Delimiters
    LBRACE = auto()
    RBRACE = auto()
    LPAREN = auto()
    RPAREN = auto()
    COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()

    # Literals
    IDENT = auto()
    NUMBER = auto()

    # Special
    EOF = auto()

    @property
    def display(self) -> str:
        """Human-readable text for diagnostics."""
        return _DISPLAY[self]


_DISPLAY: Dict[TokenType, str] = {
    TokenType.OPERATION: "'operation'",
    TokenType.MESSAGE: "'message'",
    TokenType.IN: "'in'",
    TokenType.OUT: "'out'",
    TokenType.INT: "'int'",
    TokenType.DECIMAL: "'decimal'",
    TokenType.STRING: "'string'",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.COLON: "':'",
    TokenType.SEMICOLON: "';'",
    TokenType.COMMA: "','",
    TokenType.IDENT: "identifier",
    TokenType.NUMBER: "integer",
    TokenType.EOF: "end of input",
}

_KEYWORDS = {
    "operation": TokenType.OPERATION,
    "message": TokenType.MESSAGE,
    "in": TokenType.IN,
    "out": TokenType.OUT,
    "int": TokenType.INT,
    "decimal": TokenType.DECIMAL,
    "string": TokenType.STRING,
}

_DIGITS = frozenset(string.digits)
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | _DIGITS

_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    col: int

    def describe(self) -> str:
        if self.type in (TokenType.IDENT, TokenType.NUMBER):
            return f"{self.type.display} {self.value!r}"
        return self.type.display


class Lexer:
    """Scans source text one token at a time."""

    def __init__(self, text: str, source_name: str = ""):
        self._text = text
        self._source_name = source_name
        self._i = 0
        self._line = 1
        self._col = 1

    def next_token(self) -> Token:
        """Return the next token, skipping whitespace and comments."""
        text = self._text
        n = len(text)

        while self._i < n:
            ch = text[self._i]

            # Whitespace
            if ch in (" ", "\t", "\r"):
                self._bump()
                continue

            if ch == "\n":
                self._i += 1
                self._line += 1
                self._col = 1
                continue

            # Single-line comment
            if ch == "/" and self._peek_char(1) == "/":
                while self._i < n and text[self._i] != "\n":
                    self._bump()
                continue

            # Multi-line comment
            if ch == "/" and self._peek_char(1) == "*":
                self._skip_block_comment()
                continue

            line, col = self._line, self._col

            if ch in _PUNCTUATION:
                self._bump()
                return Token(_PUNCTUATION[ch], ch, line, col)

            # Number
            if ch in _DIGITS:
                start = self._i
                while self._i < n and text[self._i] in _DIGITS:
                    self._bump()
                return Token(TokenType.NUMBER, text[start:self._i], line, col)

            # Identifier / keyword
            if ch in _IDENT_START:
                start = self._i
                while self._i < n and text[self._i] in _IDENT_CHARS:
                    self._bump()
                word = text[start:self._i]
                return Token(_KEYWORDS.get(word, TokenType.IDENT), word, line, col)

            raise LexError(f"unexpected character {ch!r}", line, col, self._source_name)

        return Token(TokenType.EOF, "", self._line, self._col)

    def _skip_block_comment(self) -> None:
        line, col = self._line, self._col
        self._bump()
        self._bump()
        while self._i < len(self._text):
            if self._text[self._i] == "*" and self._peek_char(1) == "/":
                self._bump()
                self._bump()
                return
            if self._text[self._i] == "\n":
                self._i += 1
                self._line += 1
                self._col = 1
            else:
                self._bump()
        raise LexError("comment not terminated", line, col, self._source_name)

    def _peek_char(self, offset: int) -> str:
        j = self._i + offset
        return self._text[j] if j < len(self._text) else ""

    def _bump(self) -> None:
        self._i += 1
        self._col += 1


def tokenize(text: str, source_name: str = "") -> List[Token]:
    """Tokenize a CWF source string into a list of tokens ending with EOF."""
    lexer = Lexer(text, source_name)
    tokens: List[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
