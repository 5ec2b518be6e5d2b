"""
Tokenizer for xplot expressions.

Converts an expression string into a lazy sequence of typed tokens.
Invalid lexemes are not rejected here: they come out as OTHER tokens so the
parser can report them in context.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    IDENT = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()
    WHITESPACE = auto()

    # End of input
    EOF = auto()

    # Unrecognized lexeme, e.g. "1." or ","
    OTHER = auto()


# Longer operators first
OPERATORS: tuple[str, ...] = ("**", "+", "-", "*", "/")

PRECEDENCE: dict[str, int] = {
    "+": 10,
    "-": 10,
    "*": 20,
    "/": 20,
    "**": 30,
}


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str | float, pos: int) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Token is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"

    @property
    def precedence(self) -> int | None:
        """Binding strength of an operator token, None for anything else."""
        if self.kind != TokenKind.OPERATOR:
            return None
        return PRECEDENCE[str(self.value)]

    def is_whitespace(self) -> bool:
        return self.kind == TokenKind.WHITESPACE

    def is_eof(self) -> bool:
        return self.kind == TokenKind.EOF

    def is_operator(self, symbol: str | None = None) -> bool:
        if self.kind != TokenKind.OPERATOR:
            return False
        return symbol is None or self.value == symbol

    def is_comma(self) -> bool:
        return self.kind == TokenKind.OTHER and self.value == ","

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.NUMBER:
            return f"number {self.value:g}"
        return f"{self.kind} {self.value!r}"


class Lexer:
    """Scans an expression one token at a time.

    The cursor only moves forward. Once it reaches the end of the source,
    every further call to next_token() returns an EOF token.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.i = 0

    def __repr__(self) -> str:
        return f"Lexer(expression={self.source!r}, position={self.i})"

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.is_eof():
                return

    def next_token(self) -> Token:
        tok, self.i = self._scan(self.i)
        return tok

    def _scan(self, i: int) -> tuple[Token, int]:
        """Read the token starting at i, returning it with the next cursor."""
        source = self.source
        n = len(source)

        if i >= n:
            return Token(TokenKind.EOF, "", n), n

        c = source[i]

        if c.isspace():
            return Token(TokenKind.WHITESPACE, c, i), i + 1

        if _is_digit(c):
            j = i + 1
            while j < n and _is_digit(source[j]):
                j += 1
            if j < n and source[j] == ".":
                j += 1
                if j >= n or not _is_digit(source[j]):
                    # Dangling dot
                    return Token(TokenKind.OTHER, source[i:j], i), j
                while j < n and _is_digit(source[j]):
                    j += 1
            return Token(TokenKind.NUMBER, float(source[i:j]), i), j

        if _is_letter(c):
            j = i + 1
            while j < n and _is_letter(source[j]):
                j += 1
            return Token(TokenKind.IDENT, source[i:j], i), j

        for op in OPERATORS:
            if source.startswith(op, i):
                return Token(TokenKind.OPERATOR, op, i), i + len(op)

        if c == "(":
            return Token(TokenKind.LPAREN, c, i), i + 1
        if c == ")":
            return Token(TokenKind.RPAREN, c, i), i + 1

        return Token(TokenKind.OTHER, c, i), i + 1


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_letter(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z"


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with EOF."""
    return list(Lexer(source))
