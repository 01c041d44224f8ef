"""Path parser: turns "manufacturer.phones[0].number" into expression nodes.

Grammar:
    path      := WS expr (expr)* WS
    expr      := attrExpr | indexExpr
    attrExpr  := ("." )? identifier     ; "." required except for the first expr
    identifier:= [A-Za-z_][A-Za-z_0-9]*
    indexExpr := "[" integer "]"        ; no whitespace inside the brackets
    integer   := [0-9]+

Whitespace is only tolerated around the whole path. The first fault
aborts parsing with a PathSyntaxError carrying its 0-based position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

from modelpath.errors import PathSyntaxError

_END = ""


@dataclass(frozen=True)
class AttributeAccess:
    name: str
    source_text: str


@dataclass(frozen=True)
class CollectionItemAccess:
    index: int
    source_text: str


ExpressionNode = AttributeAccess | CollectionItemAccess


def _is_name_start(ch: str) -> bool:
    return ch == "_" or ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def _is_name_char(ch: str) -> bool:
    return _is_name_start(ch) or _is_digit(ch)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_space(ch: str) -> bool:
    return ch != _END and ch.isspace()


class _Parser:
    """Single-use recursive descent parser over one path string."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.pos = 0

    @property
    def current(self) -> str:
        return self.path[self.pos] if self.pos < len(self.path) else _END

    def advance(self) -> str:
        """Consume the current character and return it."""
        previous = self.current
        self.pos += 1
        return previous

    def expect(self, expected: str) -> str:
        if self.current != expected:
            found = f"'{self.current}'" if self.current else "end of path"
            self.error(f"Expected '{expected}' instead of {found}")
        return self.advance()

    def error(self, description: str, position: int | None = None) -> NoReturn:
        raise PathSyntaxError(
            self.path, self.pos if position is None else position, description
        )

    def skip_whitespace(self) -> int:
        """Consume whitespace, returning the number of characters skipped."""
        start = self.pos
        while _is_space(self.current):
            self.advance()
        return self.pos - start

    # --- Grammar rules ---

    def parse(self) -> tuple[ExpressionNode, ...]:
        nodes: list[ExpressionNode] = []
        self.skip_whitespace()
        while self.current != _END:
            nodes.append(self.expression(first=not nodes))
            gap_start = self.pos
            if self.skip_whitespace() and self.current != _END:
                self.error("Unexpected whitespace in middle of path", gap_start)
        return tuple(nodes)

    def expression(self, first: bool) -> ExpressionNode:
        if self.current == "[":
            return self.collection_item_access()
        return self.attribute_access(first)

    def collection_item_access(self) -> CollectionItemAccess:
        start = self.pos
        self.expect("[")
        index = self.integer()
        self.expect("]")
        return CollectionItemAccess(index, self.path[start:self.pos])

    def integer(self) -> int:
        start = self.pos
        while _is_digit(self.current):
            self.advance()
        if self.pos == start:
            self.error("Expected a non-negative integer index")
        return int(self.path[start:self.pos])

    def attribute_access(self, first: bool) -> AttributeAccess:
        start = self.pos
        if not first:
            self.expect(".")
        name = self.name()
        return AttributeAccess(name, self.path[start:self.pos])

    def name(self) -> str:
        start = self.pos
        if not _is_name_start(self.current):
            self.error(
                "Names used to access an attribute must start with a letter or underscore"
            )
        self.advance()
        while _is_name_char(self.current):
            self.advance()
        return self.path[start:self.pos]


def parse(path: str) -> tuple[ExpressionNode, ...]:
    """Parse a path into expression nodes, left to right.

    An empty or all-whitespace path yields no nodes (the root itself).

    Usage:
        parse("reviews[1].title")
        # (AttributeAccess("reviews", "reviews"),
        #  CollectionItemAccess(1, "[1]"),
        #  AttributeAccess("title", ".title"))
    """
    if not isinstance(path, str):
        raise TypeError(f"Path must be a string, not {type(path).__name__}")
    return _Parser(path).parse()


def check_path(path: str) -> PathSyntaxError | None:
    """Validate a path without raising. Returns the syntax error, or None."""
    try:
        parse(path)
    except PathSyntaxError as exc:
        return exc
    return None
