"""Route table parser for ``route_config.dart``.

Locates the ``routesConfig = [...]`` assignment in a Dart source file and
reads its rows of ``[group, path, page, hasParams]``.  A small tokenizer
feeds a recursive-descent parser over that fixed grammar.  Strings may use
either quote style, commas between row elements are optional, and rows
may sit inside nested lists.

Only the page naming rule is fatal.  A missing table or a malformed row is
reported as a warning and parsing carries on with what it could read.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path

from routegen.naming import PAGE_SUFFIX

from .models import RouteEntry, RouteTable


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TABLE_NAME = "routesConfig"

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<lbracket>\[)
    | (?P<rbracket>\])
    | (?P<comma>,)
    | (?P<string>'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*")
    | (?P<bool>\b(?:true|false)\b)
    | (?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)
_SKIPPED_KINDS = frozenset({"ws", "line_comment", "block_comment"})
_ESCAPE_PATTERN = re.compile(r"\\(.)")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RouteNamingError(ValueError):
    """Raised when a page identifier breaks the ``...Page`` naming rule."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'Page class name must end with "{PAGE_SUFFIX}": {identifier!r}')


class _MalformedRow(Exception):
    """Internal signal: the current row does not match the tuple grammar."""


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    offset: int


def _tokenize(text: str, start: int) -> list[_Token]:
    """Tokenize *text* from *start*, dropping whitespace and comments."""
    tokens: list[_Token] = []
    for match in _TOKEN_PATTERN.finditer(text, start):
        kind = match.lastgroup or "other"
        if kind in _SKIPPED_KINDS:
            continue
        tokens.append(_Token(kind, match.group(), match.start()))
    return tokens


def _unquote(literal: str) -> str:
    return _ESCAPE_PATTERN.sub(r"\1", literal[1:-1])


# ---------------------------------------------------------------------------
# Recursive-descent parser
# ---------------------------------------------------------------------------


class _TableParser:
    """Parses ``[ row, [row, ...], ... ]`` where ``row`` is a 4-tuple literal."""

    def __init__(self, tokens: list[_Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.warnings: list[str] = []

    # -- Token helpers -----------------------------------------------------

    def _peek(self) -> _Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _advance(self) -> _Token | None:
        token = self._peek()
        if token is not None:
            self.pos += 1
        return token

    def _expect(self, kind: str) -> _Token:
        token = self._peek()
        if token is None or token.kind != kind:
            raise _MalformedRow(kind)
        self.pos += 1
        return token

    def _line_of(self, token: _Token) -> int:
        return self.source.count("\n", 0, token.offset) + 1

    # -- Grammar -----------------------------------------------------------

    def _is_nested_list(self) -> bool:
        token = self._peek()
        following = self.tokens[self.pos + 1] if self.pos + 1 < len(self.tokens) else None
        return (
            token is not None
            and token.kind == "lbracket"
            and following is not None
            and following.kind == "lbracket"
        )

    def _skip_commas(self) -> None:
        token = self._peek()
        while token is not None and token.kind == "comma":
            self._advance()
            token = self._peek()

    def parse_table(self) -> list[RouteEntry] | None:
        """Parse the outer list.  Returns ``None`` if it is never closed."""
        return self._parse_list()

    def _parse_list(self) -> list[RouteEntry] | None:
        """list := '[' (row | list | ',')* ']'

        Nested lists are descended so rows grouped as ``[[...], [...]]``
        inside the table are still read.
        """
        self._expect("lbracket")
        routes: list[RouteEntry] = []

        while True:
            token = self._peek()
            if token is None:
                return None
            if token.kind == "rbracket":
                self._advance()
                return routes
            if token.kind == "comma":
                self._advance()
                continue

            if self._is_nested_list():
                nested = self._parse_list()
                if nested is None:
                    return None
                routes.extend(nested)
                continue

            start = self.pos
            try:
                routes.append(self._parse_row())
            except _MalformedRow:
                self.pos = start
                if not self._skip_element():
                    return None
                self.warnings.append(
                    f"Skipped malformed route row at line {self._line_of(token)}"
                )

    def _parse_row(self) -> RouteEntry:
        """row := '[' STRING ','* STRING ','* STRING ','* BOOL ','? ']'"""
        self._expect("lbracket")
        group = _unquote(self._expect("string").value)
        self._skip_commas()
        path = _unquote(self._expect("string").value)
        self._skip_commas()
        page = _unquote(self._expect("string").value)
        self._skip_commas()
        has_params = self._expect("bool").value == "true"
        token = self._peek()
        if token is not None and token.kind == "comma":
            self._advance()
        self._expect("rbracket")

        validate_page_name(page)
        return RouteEntry(group=group, path=path, page=page, has_params=has_params)

    def _skip_element(self) -> bool:
        """Skip one list element.  Returns ``False`` on end of input."""
        depth = 0
        while True:
            token = self._peek()
            if token is None:
                return False
            if token.kind == "lbracket":
                depth += 1
            elif token.kind == "rbracket":
                if depth == 0:
                    # Closing bracket of the enclosing list; leave it for the caller.
                    return True
                depth -= 1
            elif token.kind == "comma" and depth == 0:
                return True
            self._advance()
            if depth == 0 and token.kind == "rbracket":
                return True


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_page_name(page: str) -> None:
    """Raise ``RouteNamingError`` unless *page* is non-empty and ends with ``Page``."""
    if not page or not page.endswith(PAGE_SUFFIX):
        raise RouteNamingError(page)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_route_table(text: str, table_name: str = DEFAULT_TABLE_NAME) -> RouteTable:
    """Parse the route table assignment out of a Dart source string.

    Args:
        text: Full contents of the route configuration file.
        table_name: Name of the variable holding the table.

    Returns:
        A ``RouteTable`` with the entries in source order.  When the table
        cannot be located the result is empty, ``found`` is ``False`` and a
        warning explains why.

    Raises:
        RouteNamingError: If any row's page identifier is empty or does not
            end with ``Page``.
    """
    assignment = re.search(
        rf"\b{re.escape(table_name)}\s*=\s*(?=\[)", text
    )
    if assignment is None:
        return RouteTable(found=False, warnings=[f"Could not find {table_name} in file"])

    parser = _TableParser(_tokenize(text, assignment.end()), text)
    routes = parser.parse_table()
    if routes is None:
        return RouteTable(
            found=False,
            warnings=[*parser.warnings, f"Unterminated {table_name} list"],
        )
    return RouteTable(routes=routes, found=True, warnings=parser.warnings)


async def load_route_table(
    path: str | Path, table_name: str = DEFAULT_TABLE_NAME
) -> RouteTable:
    """Read *path* and parse its route table.

    Raises:
        FileNotFoundError: If the route configuration file does not exist.
        OSError, UnicodeDecodeError: If the file cannot be read as UTF-8.
        RouteNamingError: See :func:`parse_route_table`.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Route configuration not found: {file_path}")
    text = await asyncio.to_thread(file_path.read_text, "utf-8")
    return parse_route_table(text, table_name)
