"""Cadence program sources: import discovery, import rewriting and contract naming."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class ParseError(ValueError):
    """Raised when Cadence source cannot be parsed."""


class _Kind(Enum):
    IDENT = "ident"
    STRING = "string"
    NUMBER = "number"
    PUNCT = "punct"


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    text: str
    line: int


class CompositeKind(Enum):
    CONTRACT = "contract"
    RESOURCE = "resource"
    STRUCT = "struct"
    EVENT = "event"
    ENUM = "enum"
    ATTACHMENT = "attachment"


class LocationKind(Enum):
    STRING = "string"
    ADDRESS = "address"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class _ImportDeclaration:
    identifiers: tuple[str, ...]
    location: str
    kind: LocationKind


@dataclass(frozen=True)
class _Declaration:
    kind: CompositeKind
    name: str


@dataclass
class _ParsedProgram:
    imports: list[_ImportDeclaration] = field(default_factory=list)
    composites: list[_Declaration] = field(default_factory=list)
    interfaces: list[_Declaration] = field(default_factory=list)


_TOKEN_RE = re.compile(
    "|".join(
        [
            r"(?P<newline>\n)",
            r"(?P<space>[ \t\r\f\v]+)",
            r"(?P<comment>//[^\n]*)",
            r'(?P<string>"(?:[^"\\\n]|\\.)*")',
            r"(?P<number>0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|\d[\d_]*(?:\.\d[\d_]*)?)",
            r"(?P<ident>[A-Za-z_][A-Za-z0-9_]*)",
            r"(?P<punct>.)",
        ]
    )
)
_COMMENT_DELIMITER = re.compile(r"/\*|\*/")
_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|.)")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", '"': '"', "'": "'", "\\": "\\"}

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_PAIRS.values())
_ACCESS_MODIFIERS = frozenset({"pub", "priv", "access", "view", "static", "native"})
_COMPOSITE_KEYWORDS = {kind.value: kind for kind in CompositeKind}


def _block_comment_end(source: str, start: int, line: int) -> int:
    depth = 0
    for match in _COMMENT_DELIMITER.finditer(source, start):
        depth += 1 if match.group() == "/*" else -1
        if depth == 0:
            return match.end()
    raise ParseError(f"unterminated block comment at line {line}")


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos, line = 0, 1
    while pos < len(source):
        if source.startswith("/*", pos):
            end = _block_comment_end(source, pos, line)
            line += source.count("\n", pos, end)
            pos = end
            continue
        match = _TOKEN_RE.match(source, pos)
        group, text = match.lastgroup, match.group()
        if group == "newline":
            line += 1
        elif group == "punct" and text == '"':
            raise ParseError(f"unterminated string literal at line {line}")
        elif group not in ("space", "comment"):
            tokens.append(_Token(_Kind(group), text, line))
        pos = match.end()
    return tokens


def _unquote(literal: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape.startswith("u{"):
            return chr(int(escape[2:-1], 16))
        if escape in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape]
        raise ParseError(f"invalid escape sequence \\{escape}")

    return _ESCAPE.sub(replace, literal[1:-1])


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise ParseError("unexpected end of program")
        self._pos += 1
        return token

    def _check(self, kind: _Kind, text: str | None = None) -> bool:
        token = self._peek()
        return token is not None and token.kind is kind and (text is None or token.text == text)

    def _expect(self, kind: _Kind, what: str) -> _Token:
        token = self._next()
        if token.kind is not kind:
            raise ParseError(f"expected {what}, got '{token.text}' at line {token.line}")
        return token

    def parse(self) -> _ParsedProgram:
        result = _ParsedProgram()
        while (token := self._peek()) is not None:
            if token.kind is _Kind.PUNCT and token.text == ";":
                self._pos += 1
            elif token.kind is _Kind.IDENT and token.text == "import":
                result.imports.append(self._import())
            elif token.kind is _Kind.PUNCT and token.text == "#":
                self._skip_statement()
            else:
                self._declaration(result)
        return result

    def _location(self) -> tuple[str, LocationKind]:
        token = self._next()
        if token.kind is _Kind.STRING:
            return _unquote(token.text), LocationKind.STRING
        if token.kind is _Kind.NUMBER and token.text[:2].lower() == "0x":
            return token.text, LocationKind.ADDRESS
        if token.kind is _Kind.IDENT:
            return token.text, LocationKind.IDENTIFIER
        raise ParseError(f"expected import location, got '{token.text}' at line {token.line}")

    def _import(self) -> _ImportDeclaration:
        self._next()
        if not self._check(_Kind.IDENT):
            location, kind = self._location()
            return _ImportDeclaration((), location, kind)

        first = self._next()
        identifiers = [first.text]
        while self._check(_Kind.PUNCT, ","):
            self._next()
            identifiers.append(self._expect(_Kind.IDENT, "imported identifier").text)
        if self._check(_Kind.IDENT, "from"):
            self._next()
            location, kind = self._location()
            return _ImportDeclaration(tuple(identifiers), location, kind)
        if len(identifiers) == 1:
            return _ImportDeclaration((), first.text, LocationKind.IDENTIFIER)
        raise ParseError(f"expected 'from' in import at line {first.line}")

    def _skip_access(self) -> None:
        while self._check(_Kind.IDENT) and self._peek().text in _ACCESS_MODIFIERS:
            self._next()
            if self._check(_Kind.PUNCT, "("):
                self._consume_group()

    def _declaration(self, result: _ParsedProgram) -> None:
        self._skip_access()
        token = self._next()
        if token.kind is _Kind.IDENT and token.text in _COMPOSITE_KEYWORDS:
            kind = _COMPOSITE_KEYWORDS[token.text]
            is_interface = self._check(_Kind.IDENT, "interface")
            if is_interface:
                self._next()
            name = self._expect(_Kind.IDENT, "declaration name").text
            if kind is CompositeKind.EVENT and not is_interface:
                if not self._check(_Kind.PUNCT, "("):
                    raise ParseError(f"expected event parameters at line {token.line}")
                self._consume_group()
            else:
                self._skip_to_body()
            target = result.interfaces if is_interface else result.composites
            target.append(_Declaration(kind, name))
        elif token.kind is _Kind.IDENT and token.text in ("fun", "transaction"):
            self._skip_to_body()
            while self._check(_Kind.PUNCT, "{"):
                self._consume_group()
        elif token.kind is _Kind.IDENT and token.text in ("let", "var"):
            self._pos -= 1
            self._skip_statement()
        else:
            raise ParseError(f"unexpected token '{token.text}' at line {token.line}")

    def _consume_group(self) -> _Token:
        opener = self._next()
        expected = [_PAIRS[opener.text]]
        token = opener
        while expected:
            token = self._peek()
            if token is None:
                raise ParseError(f"unclosed '{opener.text}' opened at line {opener.line}")
            self._pos += 1
            if token.kind is not _Kind.PUNCT:
                continue
            if token.text in _PAIRS:
                expected.append(_PAIRS[token.text])
            elif token.text in _CLOSERS and token.text != expected.pop():
                raise ParseError(f"unexpected '{token.text}' at line {token.line}")
        return token

    def _skip_to_body(self) -> None:
        while True:
            token = self._peek()
            if token is None:
                raise ParseError("expected declaration body")
            if token.kind is _Kind.PUNCT and token.text == "{":
                self._consume_group()
                return
            if token.kind is _Kind.PUNCT and token.text in _PAIRS:
                self._consume_group()
            elif token.kind is _Kind.PUNCT and token.text in _CLOSERS:
                raise ParseError(f"unexpected '{token.text}' at line {token.line}")
            else:
                self._pos += 1

    def _skip_statement(self) -> None:
        last = self._next()
        while (token := self._peek()) is not None:
            if token.kind is _Kind.PUNCT and token.text == ";":
                return
            continuation = last.kind is _Kind.PUNCT and last.text not in _CLOSERS
            if token.line != last.line and not continuation:
                return
            if token.kind is _Kind.PUNCT and token.text in _PAIRS:
                last = self._consume_group()
            elif token.kind is _Kind.PUNCT and token.text in _CLOSERS:
                raise ParseError(f"unexpected '{token.text}' at line {token.line}")
            else:
                last = self._next()


def _parse(code: bytes) -> _ParsedProgram:
    try:
        source = code.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"program is not valid UTF-8: {exc}") from exc
    return _Parser(_tokenize(source)).parse()


class Program:
    """Parsed Cadence source code with optional arguments and file location."""

    def __init__(self, code: bytes | None, args: Iterable[Any] | None = None, location: str = "") -> None:
        self._code = bytes(code or b"")
        self.args = list(args) if args is not None else []
        self.location = location
        self._ast = _parse(self._code)

    @property
    def code(self) -> bytes:
        return self._code

    def imports(self) -> list[str]:
        """Locations of all string imports, such as `import X from "./X.cdc"` or `import "X"`."""
        return [decl.location for decl in self._ast.imports if decl.kind is LocationKind.STRING]

    def has_imports(self) -> bool:
        return bool(self.imports())

    def replace_import(self, source: str, target: str) -> Program:
        """Rewrite imports of `source` to import from address `target`; returns self."""
        code = self._code.decode("utf-8")
        quoted = re.escape(source)
        path_regex = re.compile(rf'import\s+(\w+)\s+from\s+"{quoted}"')
        identifier_regex = re.compile(rf'import\s+"({quoted})"')

        def replacement(match: re.Match[str]) -> str:
            return f"import {match.group(1)} from 0x{target}"

        code = path_regex.sub(replacement, code)
        code = identifier_regex.sub(replacement, code)
        self._code = code.encode("utf-8")
        self._reload()
        return self

    def name(self) -> str:
        """The name of the single contract or contract interface the code declares."""
        composites, interfaces = self._ast.composites, self._ast.interfaces
        if len(composites) > 1 or len(interfaces) > 1 or len(composites) + len(interfaces) > 1:
            raise ValueError("the code must declare exactly one contract or contract interface")
        for declaration in (*composites, *interfaces):
            if declaration.kind is CompositeKind.CONTRACT:
                return declaration.name
        raise ValueError("unable to determine contract name")

    def _reload(self) -> None:
        try:
            self._ast = _parse(self._code)
        except ParseError:
            pass