"""A token-driven parser that builds an :class:`XmlTree` from simple XML."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable

from hydrakit.xml_tree import NodeType, XmlTree


class TokenType(enum.Enum):
    """The kinds of token the parser understands."""

    CARET_OPEN = "<"
    CARET_CLOSE = ">"
    BACKSLASH = "/"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Token:
    """One lexical token with its position in the input."""

    type: TokenType
    string: str
    line: int = 0
    column: int = 0
    line_text: str = ""


class XmlParseError(Exception):
    """Raised when the token stream does not form a valid document."""


class _State(enum.Enum):
    BEGIN_CARET_OPEN = enum.auto()
    BEGIN_IDENTIFIER = enum.auto()
    BEGIN_CARET_CLOSE = enum.auto()
    OPEN_OR_IDENTIFIER = enum.auto()
    OPEN_THEN_IDENTIFIER_OR_BACKSLASH = enum.auto()
    OPEN_THEN_IDENTIFIER_THEN_CLOSE = enum.auto()
    OPEN_THEN_BACKSLASH_THEN_IDENTIFIER = enum.auto()
    OPEN_THEN_BACKSLASH_THEN_IDENTIFIER_THEN_CLOSE = enum.auto()
    CARET_OPEN = enum.auto()


class XmlParser:
    """Consume tokens one at a time and grow :attr:`tree`."""

    def __init__(self, file_name: str = "") -> None:
        self.file_name = file_name
        self.tree = XmlTree()
        self._cursor = self.tree.begin()
        self._cursor.node.identifier = file_name
        self._tags: list[str] = []
        self._state = _State.BEGIN_CARET_OPEN
        self._handlers: dict[_State, Callable[[Token], None]] = {
            _State.BEGIN_CARET_OPEN: self._begin_caret_open,
            _State.BEGIN_IDENTIFIER: self._begin_identifier,
            _State.BEGIN_CARET_CLOSE: self._begin_caret_close,
            _State.OPEN_OR_IDENTIFIER: self._open_or_identifier,
            _State.OPEN_THEN_IDENTIFIER_OR_BACKSLASH: self._identifier_or_backslash,
            _State.OPEN_THEN_IDENTIFIER_THEN_CLOSE: self._open_tag_close,
            _State.OPEN_THEN_BACKSLASH_THEN_IDENTIFIER: self._closing_identifier,
            _State.OPEN_THEN_BACKSLASH_THEN_IDENTIFIER_THEN_CLOSE: self._closing_tag_close,
            _State.CARET_OPEN: self._caret_open,
        }

    def feed(self, token: Token) -> None:
        """Advance the parser by one token."""
        self._handlers[self._state](token)

    def _error(self, token: Token, message: str) -> XmlParseError:
        return XmlParseError(
            f"{self.file_name}( {token.line}, {token.column} ) : {message}"
            f"\nThe line was:\n\t{token.line_text}"
        )

    def _expect(self, token: Token, expected: str, *types: TokenType) -> None:
        if token.type not in types:
            raise self._error(
                token, f"Expecting {expected}, but got '{token.string}' instead."
            )

    def _insert(self, token: Token, node_type: NodeType):
        try:
            return self.tree.insert(token.string, self._cursor, node_type)
        except ValueError as exc:
            raise self._error(token, str(exc)) from exc

    def _begin_caret_open(self, token: Token) -> None:
        self._expect(token, "'<'", TokenType.CARET_OPEN)
        self._state = _State.BEGIN_IDENTIFIER

    def _begin_identifier(self, token: Token) -> None:
        self._expect(token, "IDENTIFIER", TokenType.IDENTIFIER)
        self._cursor = self._insert(token, NodeType.INTERMEDIATE)
        self._tags.append(token.string)
        self._state = _State.BEGIN_CARET_CLOSE

    def _begin_caret_close(self, token: Token) -> None:
        self._expect(token, "'>'", TokenType.CARET_CLOSE)
        self._state = _State.OPEN_OR_IDENTIFIER

    def _open_or_identifier(self, token: Token) -> None:
        self._expect(
            token, "'<' or IDENTFIER", TokenType.CARET_OPEN, TokenType.IDENTIFIER
        )
        if token.type is TokenType.CARET_OPEN:
            self._state = _State.OPEN_THEN_IDENTIFIER_OR_BACKSLASH
        else:
            self._insert(token, NodeType.LEAF)
            self._state = _State.CARET_OPEN

    def _identifier_or_backslash(self, token: Token) -> None:
        self._expect(
            token, "'/' or IDENTFIER", TokenType.BACKSLASH, TokenType.IDENTIFIER
        )
        if token.type is TokenType.BACKSLASH:
            self._state = _State.OPEN_THEN_BACKSLASH_THEN_IDENTIFIER
        else:
            self._cursor = self._insert(token, NodeType.INTERMEDIATE)
            self._tags.append(token.string)
            self._state = _State.OPEN_THEN_IDENTIFIER_THEN_CLOSE

    def _open_tag_close(self, token: Token) -> None:
        self._expect(token, "'>'", TokenType.CARET_CLOSE)
        self._state = _State.OPEN_OR_IDENTIFIER

    def _closing_identifier(self, token: Token) -> None:
        self._expect(token, "IDENTIFIER", TokenType.IDENTIFIER)
        if not self._tags or token.string != self._tags[-1]:
            original = self._tags[-1] if self._tags else ""
            raise self._error(
                token,
                f"Tag mismatch - original was '{original}'.\n"
                f" It did not match : {token.string}.",
            )
        self._cursor.ascend()
        self._tags.pop()
        self._state = _State.OPEN_THEN_BACKSLASH_THEN_IDENTIFIER_THEN_CLOSE

    def _closing_tag_close(self, token: Token) -> None:
        self._expect(token, "'>'", TokenType.CARET_CLOSE)
        self._state = (
            _State.OPEN_OR_IDENTIFIER if self._tags else _State.BEGIN_CARET_OPEN
        )

    def _caret_open(self, token: Token) -> None:
        self._expect(token, "'<'", TokenType.CARET_OPEN)
        self._state = _State.OPEN_THEN_IDENTIFIER_OR_BACKSLASH


def parse_tokens(tokens: Iterable[Token], file_name: str = "") -> XmlTree:
    """Parse a whole token stream and return the resulting tree."""
    parser = XmlParser(file_name)
    for token in tokens:
        parser.feed(token)
    return parser.tree