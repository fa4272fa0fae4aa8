"""Stylesheet tokenizer for CSS, SCSS and LESS.

One tokenizer walks the component-value tree produced by tinycss2 and is
parameterized by a small StylesheetDialect descriptor (variable sigil,
line comments, interpolation, keyframes handling).

Token declarations are marked with a sentinel comment:

    /* @tokens Colors
     * @presenter Color */
    :root {
      --color-primary: #ff0000; /* Brand red */
    }

A sentinel directly before a rule marks that rule's block; a sentinel
inside a block (or at the top level, for SCSS/LESS variables) marks the
declarations that follow it until the block ends or ``@tokens-end``.
Design-relevant literals outside marked blocks are reported as hard-coded
values, and keyframes rules are collected verbatim.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any

import tinycss2

from ..classifier import classify, is_hard_coded
from ..errors import StylesheetSyntaxError
from ..merge import KEYFRAMES_SEPARATOR
from ..models import (
    ExtractorResult,
    HardCodedValue,
    SourceLocation,
    Token,
    TokenFile,
    TokenGroup,
    TokenSourceType,
)
from ..token_logging import get_logger
from .base import TokenParser

logger = get_logger()

SENTINEL = "@tokens"
SENTINEL_END = "@tokens-end"

_SENTINEL_LINE = re.compile(r"^@tokens(?![\w-])[ \t]*(?P<label>[^@\n]*)")
_PRESENTER = re.compile(r"@presenter[ \t]+(?P<presenter>[\w-]+)")
_KEYFRAMES = re.compile(r"^(-[a-z]+-)?keyframes$")


@dataclass(frozen=True)
class StylesheetDialect:
    """Syntax differences between the supported stylesheet dialects."""

    source_type: TokenSourceType
    extensions: tuple[str, ...]
    sigils: tuple[str, ...] = ("--",)  # Stripped from token names
    variable_prefix: str | None = None  # "$" (SCSS) or "@" (LESS)
    line_comments: bool = False  # "//" comments
    interpolation: str | None = None  # "#" for "#{...}", "@" for "@{...}"
    collects_keyframes: bool = True


CSS_DIALECT = StylesheetDialect(
    source_type=TokenSourceType.CSS,
    extensions=(".css",),
)

SCSS_DIALECT = StylesheetDialect(
    source_type=TokenSourceType.SCSS,
    extensions=(".scss",),
    sigils=("$", "--"),
    variable_prefix="$",
    line_comments=True,
    interpolation="#",
)

LESS_DIALECT = StylesheetDialect(
    source_type=TokenSourceType.LESS,
    extensions=(".less",),
    sigils=("@", "--"),
    variable_prefix="@",
    line_comments=True,
    interpolation="@",
    collects_keyframes=False,
)

DIALECTS = {
    dialect.source_type: dialect
    for dialect in (CSS_DIALECT, SCSS_DIALECT, LESS_DIALECT)
}


@dataclass(frozen=True)
class TokenScope:
    """Annotations of the sentinel comment that opened a token scope."""

    category: str | None = None
    presenter: str | None = None


@dataclass
class _Comment:
    text: str
    line: int


@dataclass
class _Declaration:
    name: str
    value_nodes: list[Any]
    line: int
    column: int
    end_line: int

    @property
    def value(self) -> str:
        return tinycss2.serialize(
            [n for n in self.value_nodes if n.type != "comment"]
        ).strip()


@dataclass
class _Rule:
    prelude: list[Any]
    block: Any

    @property
    def selector(self) -> str:
        return " ".join(
            tinycss2.serialize(
                [n for n in self.prelude if n.type != "comment"]
            ).split()
        )


@dataclass
class _FileOutput:
    """Accumulates everything extracted from one file."""

    tokens: list[Token] = field(default_factory=list)
    hard_coded_values: list[HardCodedValue] = field(default_factory=list)
    keyframes: list[str] = field(default_factory=list)


def read_marker(comment_text: str) -> TokenScope | str | None:
    """Interpret a comment as a token marker.

    Returns:
        A TokenScope for a sentinel comment, SENTINEL_END for an end
        marker, or None for an ordinary comment.
    """
    lines = [line.strip().lstrip("*").strip() for line in comment_text.splitlines()]
    text = "\n".join(line for line in lines if line)

    if SENTINEL_END in text:
        return SENTINEL_END

    for line in text.splitlines():
        match = _SENTINEL_LINE.match(line)
        if match:
            label = match.group("label").strip() or None
            presenter_match = _PRESENTER.search(text)
            presenter = presenter_match.group("presenter") if presenter_match else None
            return TokenScope(category=label, presenter=presenter)
    return None


def convert_line_comments(text: str) -> str:
    """Rewrite ``// ...`` line comments as ``/* ... */`` block comments.

    Line numbers are preserved. ``//`` inside strings, block comments and
    URLs (``http://``, ``url(//cdn...)``) is left alone.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    quote: str | None = None

    while i < length:
        char = text[i]

        if quote:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == quote or char == "\n":
                quote = None
            i += 1
            continue

        if char in "\"'":
            quote = char
            out.append(char)
            i += 1
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            out.append(text[i:end])
            i = end
            continue

        if text.startswith("//", i) and (i == 0 or text[i - 1] in " \t\r\n;{},"):
            end = text.find("\n", i)
            end = length if end == -1 else end
            body = text[i + 2 : end].replace("*/", "* /")
            out.append(f"/*{body}*/")
            i = end
            continue

        out.append(char)
        i += 1

    return "".join(out)


class StylesheetTokenizer(TokenParser):
    """Extracts tokens, hard-coded values and keyframes from stylesheets."""

    def __init__(self, dialect: StylesheetDialect = CSS_DIALECT):
        self.dialect = dialect

    @property
    def source_type(self) -> TokenSourceType:
        return self.dialect.source_type

    @property
    def supported_extensions(self) -> list[str]:
        return list(self.dialect.extensions)

    def parse_file(self, token_file: TokenFile) -> ExtractorResult:
        """Parse one stylesheet.

        Raises:
            StylesheetSyntaxError: On undecodable content or syntax errors.
        """
        try:
            text = token_file.text()
        except UnicodeDecodeError as e:
            raise StylesheetSyntaxError(token_file.filename, f"not valid UTF-8: {e}") from e

        if self.dialect.line_comments:
            text = convert_line_comments(text)

        nodes = tinycss2.parse_component_value_list(text, skip_comments=False)
        self._check_syntax(nodes, token_file.filename)

        if SENTINEL not in text:
            logger.debug(
                f"{token_file.filename}: no {SENTINEL} marker, "
                "scanning for hard-coded values and keyframes only"
            )

        output = _FileOutput()
        self._walk(
            self._split_statements(nodes),
            scope=None,
            selector="",
            filename=token_file.filename,
            output=output,
        )

        token_groups = []
        if output.tokens:
            unique: dict[str, Token] = {}
            for token in output.tokens:
                unique[token.name] = token
            token_groups.append(
                TokenGroup(type=self.source_type, tokens=list(unique.values()))
            )

        logger.debug(
            f"Parsed {token_file.filename}: {len(output.tokens)} tokens, "
            f"{len(output.hard_coded_values)} hard-coded values, "
            f"{len(output.keyframes)} keyframes"
        )

        return ExtractorResult(
            token_groups=token_groups,
            hard_coded_values=output.hard_coded_values,
            keyframes=KEYFRAMES_SEPARATOR.join(output.keyframes),
            source_type=self.source_type,
        )

    def _check_syntax(self, nodes: list[Any], filename: str) -> None:
        """Raise on the first parse error anywhere in the tree."""
        for node in nodes:
            if node.type == "error":
                raise StylesheetSyntaxError(
                    filename, node.message, node.source_line, node.source_column
                )
            children = getattr(node, "content", None)
            if children is None:
                children = getattr(node, "arguments", None)
            if isinstance(children, list):
                self._check_syntax(children, filename)

    def _split_statements(self, nodes: list[Any]) -> list[Any]:
        """Group a block's component values into comments, declarations and rules."""
        statements: list[Any] = []
        current: list[Any] = []

        for node in nodes:
            if node.type == "comment" and not _has_content(current):
                statements.append(_Comment(text=node.value, line=node.source_line))
                continue

            if node.type == "literal" and node.value == ";":
                declaration = self._build_declaration(current, end_line=node.source_line)
                if declaration is not None:
                    statements.append(declaration)
                current = []
                continue

            if node.type == "{} block" and not self._is_interpolation(current):
                statements.append(_Rule(prelude=current, block=node))
                current = []
                continue

            current.append(node)

        if _has_content(current):
            declaration = self._build_declaration(current, end_line=current[-1].source_line)
            if declaration is not None:
                statements.append(declaration)

        return statements

    def _is_interpolation(self, current: list[Any]) -> bool:
        """Check for ``#{...}`` or ``@{...}`` where the block belongs to the prelude."""
        return (
            self.dialect.interpolation is not None
            and bool(current)
            and current[-1].type == "literal"
            and current[-1].value == self.dialect.interpolation
        )

    def _build_declaration(
        self, nodes: list[Any], end_line: int
    ) -> _Declaration | None:
        """Build a declaration from ``name: value`` nodes, or None if not one."""
        significant = [n for n in nodes if n.type not in ("whitespace", "comment")]
        if len(significant) < 2:
            return None

        first = significant[0]
        prefix = self.dialect.variable_prefix
        if first.type == "ident":
            name, rest = first.value, significant[1:]
        elif (
            prefix == "$"
            and first.type == "literal"
            and first.value == "$"
            and significant[1].type == "ident"
        ):
            name, rest = f"${significant[1].value}", significant[2:]
        elif prefix == "@" and first.type == "at-keyword":
            name, rest = f"@{first.value}", significant[1:]
        else:
            return None

        if not rest or rest[0].type != "literal" or rest[0].value != ":":
            return None

        colon_index = next(i for i, n in enumerate(nodes) if n is rest[0])
        value_nodes = nodes[colon_index + 1 :]
        anchor = next(
            (n for n in value_nodes if n.type not in ("whitespace", "comment")), first
        )
        return _Declaration(
            name=name,
            value_nodes=value_nodes,
            line=anchor.source_line,
            column=anchor.source_column,
            end_line=end_line,
        )

    def _walk(
        self,
        statements: list[Any],
        scope: TokenScope | None,
        selector: str,
        filename: str,
        output: _FileOutput,
    ) -> None:
        """Walk one block's statements.

        ``scope`` is the token scope the block was entered with. The active
        scope for declarations and the pending sentinel for the next rule are
        local to this block, so they reset at every block boundary.
        """
        active = scope
        pending: TokenScope | None = None
        previous: tuple[Token, int] | None = None

        for statement in statements:
            if isinstance(statement, _Comment):
                marker = read_marker(statement.text)
                if marker == SENTINEL_END:
                    active, pending = None, None
                elif isinstance(marker, TokenScope):
                    active, pending = marker, marker
                elif pending is not None and _PRESENTER.search(statement.text):
                    # "// @presenter X" continuing a "// @tokens" line
                    presenter = _PRESENTER.search(statement.text).group("presenter")
                    active = pending = replace(pending, presenter=presenter)
                elif previous is not None and previous[1] == statement.line:
                    previous[0].description = " ".join(statement.text.strip(" *").split())
                continue

            if isinstance(statement, _Declaration):
                token = self._handle_declaration(
                    statement, active, selector, filename, output
                )
                previous = (token, statement.end_line) if token is not None else None
                pending = None
                continue

            child_scope = pending or (active if scope is not None else None)
            pending, previous = None, None

            if self._is_keyframes(statement):
                if self.dialect.collects_keyframes:
                    verbatim = tinycss2.serialize(statement.prelude) + statement.block.serialize()
                    output.keyframes.append(verbatim.strip())
                continue

            self._walk(
                self._split_statements(statement.block.content),
                scope=child_scope,
                selector=statement.selector,
                filename=filename,
                output=output,
            )

    def _handle_declaration(
        self,
        declaration: _Declaration,
        scope: TokenScope | None,
        selector: str,
        filename: str,
        output: _FileOutput,
    ) -> Token | None:
        """Record a declaration as a token or as a hard-coded value."""
        raw_value = declaration.value
        if not raw_value:
            return None

        if scope is None:
            classified = classify(raw_value, declaration.name)
            if is_hard_coded(classified):
                output.hard_coded_values.append(
                    HardCodedValue(
                        value=raw_value,
                        kind=classified.kind,
                        location=SourceLocation(
                            filename, declaration.line, declaration.column
                        ),
                        property_name=declaration.name,
                        selector=selector,
                    )
                )
            return None

        name = self._strip_sigil(declaration.name)
        kind, value = classify(raw_value, name)
        alias_of = self._alias_target(declaration.value_nodes)
        token = Token(
            name=name,
            value=value,
            original_value=raw_value,
            kind=kind,
            category=scope.category,
            presenter=scope.presenter,
            is_alias=alias_of is not None,
            alias_of=alias_of,
            source_file=filename,
        )
        output.tokens.append(token)
        return token

    def _strip_sigil(self, name: str) -> str:
        for sigil in self.dialect.sigils:
            if name.startswith(sigil):
                return name[len(sigil) :]
        return name

    def _alias_target(self, value_nodes: list[Any]) -> str | None:
        """Return the referenced variable name if the value is a bare reference."""
        significant = [n for n in value_nodes if n.type not in ("whitespace", "comment")]

        if len(significant) == 1 and significant[0].type == "function":
            function = significant[0]
            arguments = [
                n for n in function.arguments if n.type not in ("whitespace", "comment")
            ]
            if (
                function.lower_name == "var"
                and arguments
                and arguments[0].type == "ident"
                and arguments[0].value.startswith("--")
            ):
                return arguments[0].value[2:]

        prefix = self.dialect.variable_prefix
        if (
            prefix == "$"
            and len(significant) == 2
            and significant[0].type == "literal"
            and significant[0].value == "$"
            and significant[1].type == "ident"
        ):
            return significant[1].value
        if prefix == "@" and len(significant) == 1 and significant[0].type == "at-keyword":
            return significant[0].value
        return None

    def _is_keyframes(self, rule: _Rule) -> bool:
        first = next(
            (n for n in rule.prelude if n.type not in ("whitespace", "comment")), None
        )
        return (
            first is not None
            and first.type == "at-keyword"
            and bool(_KEYFRAMES.match(first.lower_value))
        )


def _has_content(nodes: list[Any]) -> bool:
    return any(n.type not in ("whitespace", "comment") for n in nodes)


def parse_stylesheets(
    files: list[TokenFile], source_type: TokenSourceType
) -> ExtractorResult:
    """Parse stylesheet files of one dialect.

    Args:
        files: Files to parse; files with other extensions are ignored.
        source_type: CSS, SCSS or LESS.

    Returns:
        Merged ExtractorResult for the dialect.
    """
    if source_type not in DIALECTS:
        raise ValueError(f"Not a stylesheet dialect: {source_type.value}")
    return StylesheetTokenizer(DIALECTS[source_type]).parse(files)
