"""Predictive recursive descent parser for CWF record descriptions.

Pulls tokens from the Lexer one at a time with a single token of lookahead
and builds the semantic model directly; field offsets are assigned while the
fields are parsed.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, Union

from cwf_compiler.errors import ModelError, ParseError
from cwf_compiler.models import Field, Message, Operation, TypeTag, check_field

from .tokenizer import Lexer, Token, TokenType

MessageHook = Callable[[Message], None]
OperationHook = Callable[[Operation], None]

_FIELD_TYPES = {
    TokenType.INT: TypeTag.INT,
    TokenType.DECIMAL: TypeTag.DECIMAL,
    TokenType.STRING: TypeTag.STRING,
}


class CwfParser:
    """Parser for one compilation unit: an operation or a bare message.

    ``on_message`` is called once for every message as soon as its closing
    brace is consumed, ``on_operation`` once the operation is complete.
    """

    def __init__(
        self,
        text: str,
        source_name: str = "",
        on_message: Optional[MessageHook] = None,
        on_operation: Optional[OperationHook] = None,
    ):
        self._source_name = source_name
        self._lexer = Lexer(text, source_name)
        self._on_message = on_message
        self._on_operation = on_operation
        self._lookahead = self._lexer.next_token()

    @property
    def lookahead(self) -> Token:
        return self._lookahead

    # -- public API --

    def parse(self) -> Union[Operation, Message]:
        """Parse: Operation EOF | MESSAGE Message EOF"""
        if self._lookahead.type == TokenType.MESSAGE:
            result: Union[Operation, Message] = self.parse_message_unit()
        elif self._lookahead.type == TokenType.OPERATION:
            result = self.parse_operation()
        else:
            raise self._error(
                f"expected {TokenType.OPERATION.display} or {TokenType.MESSAGE.display}, "
                f"found {self._lookahead.describe()}"
            )
        self.match(TokenType.EOF)
        return result

    def parse_operation(self) -> Operation:
        """Parse: OPERATION IDENT LBRACE IN COLON Message OUT COLON Message RBRACE"""
        self.match(TokenType.OPERATION)
        name = self.match(TokenType.IDENT)
        self.match(TokenType.LBRACE)
        self.match(TokenType.IN)
        self.match(TokenType.COLON)
        input_message = self.parse_message()
        self.match(TokenType.OUT)
        self.match(TokenType.COLON)
        output_message = self.parse_message()
        self.match(TokenType.RBRACE)

        operation = Operation(name=name, input=input_message, output=output_message)
        if self._on_operation is not None:
            self._on_operation(operation)
        return operation

    def parse_message_unit(self) -> Message:
        """Parse: MESSAGE Message"""
        self.match(TokenType.MESSAGE)
        return self.parse_message()

    def parse_message(self) -> Message:
        """Parse: IDENT LBRACE FieldDecl+ RBRACE"""
        name = self.match(TokenType.IDENT)
        self.match(TokenType.LBRACE)
        fields = self._parse_field_list()
        self.match(TokenType.RBRACE)

        message = Message(name=name, fields=tuple(fields))
        if self._on_message is not None:
            self._on_message(message)
        return message

    # -- field parsing --

    def _parse_field_list(self) -> List[Field]:
        fields: List[Field] = []
        position = 0
        while True:
            f = self._parse_field(position)
            fields.append(f)
            position = f.end
            if self._lookahead.type == TokenType.RBRACE:
                return fields

    def _parse_field(self, position: int) -> Field:
        """Parse: IDENT FieldType"""
        name_tok = self._lookahead
        name = self.match(TokenType.IDENT)
        type_tag, width, decimal_digits = self._parse_field_type()

        f = Field(
            name=name,
            type=type_tag,
            position=position,
            width=width,
            decimal_digits=decimal_digits,
        )
        try:
            check_field(f)
        except ModelError as e:
            raise ModelError(e.message, name_tok.line, name_tok.col, self._source_name) from None
        return f

    def _parse_field_type(self) -> Tuple[TypeTag, int, int]:
        """Parse: (INT | STRING) LPAREN NUMBER RPAREN SEMICOLON
        | DECIMAL LPAREN NUMBER COMMA NUMBER RPAREN SEMICOLON
        """
        tt = self._lookahead.type
        if tt not in _FIELD_TYPES:
            raise self._error(f"expected field type, found {self._lookahead.describe()}")

        self.match(tt)
        self.match(TokenType.LPAREN)
        width = int(self.match(TokenType.NUMBER))
        decimal_digits = 0
        if tt == TokenType.DECIMAL:
            self.match(TokenType.COMMA)
            decimal_digits = int(self.match(TokenType.NUMBER))
        self.match(TokenType.RPAREN)
        self.match(TokenType.SEMICOLON)
        return _FIELD_TYPES[tt], width, decimal_digits

    # -- token helpers --

    def match(self, expected: TokenType) -> str:
        """Consume the lookahead if it is ``expected`` and return its lexeme."""
        tok = self._lookahead
        if tok.type != expected:
            raise self._error(f"expected {expected.display}, found {tok.describe()}")
        if tok.type != TokenType.EOF:
            self._lookahead = self._lexer.next_token()
        return tok.value

    def _error(self, message: str) -> ParseError:
        tok = self._lookahead
        return ParseError(message, tok.line, tok.col, self._source_name)
