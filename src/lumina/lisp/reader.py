"""S-expression reader for presentation files.

Turns source text into :mod:`lumina.lisp.values` trees.  The grammar is the
small elisp-flavoured subset presentation files are written in::

    (slide (image :source "~/pics/frodo.jpg" :fit crop)
           (text "This is frodo" :font-size 70))

    ; comments run to the end of the line
    (song :title "Death Was Arrested" :verse-order (i1 v1 c1)
          (v1 "Alone in my sorrow\\nAnd dead in my sin"))

Reading is pure: the same text always yields the same tree.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..exceptions import LispSyntaxError
from .values import Cons, Keyword, Symbol, Value

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")

# Characters that end a bare atom.
_DELIMITERS = frozenset(" \t\r\n()\";'")

# Lists and quotes nested deeper than this are rejected.
MAX_DEPTH = 128

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


class TokenType(Enum):
    LPAREN = "("
    RPAREN = ")"
    QUOTE = "'"
    DOT = "."
    STRING = "string"
    ATOM = "atom"  # symbol, keyword, number, boolean or nil


@dataclass
class Token:
    type: TokenType
    text: str
    line: int
    col: int


class Tokenizer:
    """Split s-expression source into tokens, tracking line and column."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _peek(self) -> str:
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _advance(self) -> str:
        ch = self._peek()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _skip_whitespace_and_comments(self) -> None:
        while self.pos < len(self.source):
            ch = self._peek()
            if ch.isspace():
                self._advance()
            elif ch == ";":
                while self._peek() and self._peek() != "\n":
                    self._advance()
            else:
                break

    def _read_string(self, line: int, col: int) -> str:
        self._advance()  # opening quote
        parts: list[str] = []
        while True:
            ch = self._peek()
            if not ch:
                raise LispSyntaxError("unterminated string", line, col)
            if ch == '"':
                self._advance()
                return "".join(parts)
            if ch == "\\":
                self._advance()
                escape = self._advance()
                if not escape:
                    raise LispSyntaxError("unterminated string", line, col)
                parts.append(_ESCAPES.get(escape, escape))
            else:
                parts.append(self._advance())

    def _read_atom(self) -> str:
        start = self.pos
        while self._peek() and self._peek() not in _DELIMITERS:
            self._advance()
        return self.source[start : self.pos]

    def tokenize(self) -> Iterator[Token]:
        while True:
            self._skip_whitespace_and_comments()
            if self.pos >= len(self.source):
                return

            line, col = self.line, self.col
            ch = self._peek()

            if ch == "(":
                self._advance()
                yield Token(TokenType.LPAREN, ch, line, col)
            elif ch == ")":
                self._advance()
                yield Token(TokenType.RPAREN, ch, line, col)
            elif ch == "'":
                self._advance()
                yield Token(TokenType.QUOTE, ch, line, col)
            elif ch == '"':
                yield Token(TokenType.STRING, self._read_string(line, col), line, col)
            else:
                text = self._read_atom()
                kind = TokenType.DOT if text == "." else TokenType.ATOM
                yield Token(kind, text, line, col)


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


def parse_atom(token: Token) -> Value:
    """Classify a bare atom token into a value."""
    text = token.text
    lowered = text.lower()
    if text.startswith(":"):
        if len(text) == 1:
            raise LispSyntaxError("expected a name after ':'", token.line, token.col)
        return Keyword(text[1:])
    if lowered in ("#t", "#true"):
        return True
    if lowered in ("#f", "#false"):
        return False
    if lowered == "nil":
        return None
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return Symbol(text)


class Reader:
    """Recursive-descent reader over a token stream."""

    def __init__(self, source: str):
        self._tokens = list(Tokenizer(source).tokenize())
        self._index = 0
        self._depth = 0

    def _next(self) -> Token | None:
        if self._index >= len(self._tokens):
            return None
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _peek(self) -> Token | None:
        if self._index >= len(self._tokens):
            return None
        return self._tokens[self._index]

    def forms(self) -> Iterator[Value]:
        """Yield each top-level form in order."""
        while self._peek() is not None:
            yield self._read_form()

    def _read_form(self) -> Value:
        token = self._next()
        if token is None:
            last = self._tokens[-1] if self._tokens else None
            line, col = (last.line, last.col) if last else (1, 1)
            raise LispSyntaxError("unexpected end of input", line, col)

        if token.type in (TokenType.LPAREN, TokenType.QUOTE):
            return self._read_nested(token)
        if token.type == TokenType.RPAREN:
            raise LispSyntaxError("unexpected ')'", token.line, token.col)
        if token.type == TokenType.DOT:
            raise LispSyntaxError("unexpected '.'", token.line, token.col)
        if token.type == TokenType.STRING:
            return token.text
        return parse_atom(token)

    def _read_nested(self, token: Token) -> Value:
        self._depth += 1
        try:
            if self._depth > MAX_DEPTH:
                raise LispSyntaxError("nesting too deep", token.line, token.col)
            if token.type == TokenType.LPAREN:
                return self._read_list(token)
            return (Symbol("quote"), self._read_form())
        finally:
            self._depth -= 1

    def _read_list(self, opener: Token) -> Value:
        items: list[Value] = []
        while True:
            token = self._peek()
            if token is None:
                raise LispSyntaxError("unclosed '('", opener.line, opener.col)
            if token.type == TokenType.RPAREN:
                self._next()
                return tuple(items)
            if token.type == TokenType.DOT:
                self._next()
                return self._finish_dotted(items, token, opener)
            items.append(self._read_form())

    def _finish_dotted(self, items: list[Value], dot: Token, opener: Token) -> Value:
        if not items:
            raise LispSyntaxError("dotted pair without a head", dot.line, dot.col)
        if self._peek() is None:
            raise LispSyntaxError("unclosed '('", opener.line, opener.col)
        tail = self._read_form()
        closer = self._next()
        if closer is None:
            raise LispSyntaxError("unclosed '('", opener.line, opener.col)
        if closer.type != TokenType.RPAREN:
            raise LispSyntaxError("expected ')' after dotted tail", closer.line, closer.col)
        for item in reversed(items):
            tail = Cons(item, tail)
        return tail


def read_all(source: str) -> list[Value]:
    """Read every top-level form in *source*.

    Raises:
        LispSyntaxError: if the text is not well-formed.
    """
    return list(Reader(source).forms())


def read(source: str) -> Value:
    """Read exactly one form from *source*."""
    forms = read_all(source)
    if len(forms) != 1:
        raise LispSyntaxError(f"expected one form, found {len(forms)}", 1, 1)
    return forms[0]
