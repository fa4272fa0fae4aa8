"""Unit tests for the CSS / SCSS / LESS stylesheet tokenizer."""

import pytest

from design_tokens.errors import StylesheetSyntaxError
from design_tokens.models import TokenFile, TokenSourceType, ValueKind
from design_tokens.parsers.stylesheet import (
    CSS_DIALECT,
    LESS_DIALECT,
    SCSS_DIALECT,
    SENTINEL_END,
    StylesheetTokenizer,
    TokenScope,
    convert_line_comments,
    parse_stylesheets,
    read_marker,
)


def parse_css(text: str, filename: str = "test.css"):
    return StylesheetTokenizer(CSS_DIALECT).parse([TokenFile(filename, text)])


def parse_scss(text: str, filename: str = "test.scss"):
    return StylesheetTokenizer(SCSS_DIALECT).parse([TokenFile(filename, text)])


def parse_less(text: str, filename: str = "test.less"):
    return StylesheetTokenizer(LESS_DIALECT).parse([TokenFile(filename, text)])


class TestSentinelScoping:
    """Tests for @tokens-marked blocks."""

    def test_marked_block_yields_token(self) -> None:
        """A custom property under @tokens becomes a normalized token."""
        result = parse_css("/* @tokens */\n:root {\n  --color-primary: #FF0000;\n}\n")

        group = result.get_group(TokenSourceType.CSS)
        assert group is not None
        token = group.get("color-primary")
        assert token is not None
        assert token.value == "#ff0000"
        assert token.original_value == "#FF0000"
        assert token.kind == ValueKind.COLOR
        assert result.hard_coded_values == []

    def test_unmarked_block_yields_hard_coded_value(self) -> None:
        """The same declaration without a marker is reported, not extracted."""
        result = parse_css(":root {\n  --color-primary: #FF0000;\n}\n")

        assert result.token_groups == []
        assert len(result.hard_coded_values) == 1
        finding = result.hard_coded_values[0]
        assert finding.kind == ValueKind.COLOR
        assert finding.value == "#FF0000"
        assert finding.location.filename == "test.css"
        assert finding.location.line == 2
        assert finding.location.column == 20
        assert finding.property_name == "--color-primary"
        assert finding.selector == ":root"

    def test_current_color_not_reported(self) -> None:
        """Icon rules filled with currentColor produce no findings."""
        result = parse_css(".icon { fill: currentColor; stroke: CURRENTCOLOR; color: #333; }\n")

        assert [(h.value, h.kind) for h in result.hard_coded_values] == [
            ("#333", ValueKind.COLOR)
        ]

    def test_numeric_value_under_color_name(self) -> None:
        """Digit-only values are neither normalized to hex nor reported."""
        result = parse_css(
            ":root { --color-scale-step: 100; }\n"
            "/* @tokens */\n"
            ":root { --color-weight: 100; }\n"
        )

        assert result.hard_coded_values == []
        token = result.get_group(TokenSourceType.CSS).get("color-weight")
        assert (token.kind, token.value) == (ValueKind.OTHER, "100")

    def test_marker_applies_to_next_rule_only(self) -> None:
        """Detection and extraction are exclusive per occurrence."""
        result = parse_css(
            "/* @tokens */\n"
            ":root { --brand: #123456; }\n"
            ".card { border-color: #123456; }\n"
        )

        assert result.token_groups[0].names() == ["brand"]
        assert [h.value for h in result.hard_coded_values] == ["#123456"]
        assert result.hard_coded_values[0].selector == ".card"

    def test_sentinel_inside_block(self) -> None:
        """A sentinel inside a block marks the declarations after it."""
        result = parse_css(
            ":root {\n"
            "  --before: #111111;\n"
            "  /* @tokens */\n"
            "  --after: #222222;\n"
            "}\n"
        )

        assert result.token_groups[0].names() == ["after"]
        assert [h.value for h in result.hard_coded_values] == ["#111111"]

    def test_tokens_end_closes_scope(self) -> None:
        result = parse_css(
            ":root {\n"
            "  /* @tokens */\n"
            "  --a: #fff;\n"
            "  /* @tokens-end */\n"
            "  --b: #000;\n"
            "}\n"
        )

        assert result.token_groups[0].names() == ["a"]
        assert [h.value for h in result.hard_coded_values] == ["#000"]

    def test_nested_rules_inherit_scope(self) -> None:
        result = parse_css(
            "/* @tokens */\n"
            ".theme {\n"
            "  --a: #111;\n"
            "  .nested { --b: #222; }\n"
            "}\n"
        )

        assert result.token_groups[0].names() == ["a", "b"]
        assert result.hard_coded_values == []

    def test_scope_does_not_leak_to_sibling_rules(self) -> None:
        result = parse_css(
            ".a {\n  /* @tokens */\n  --x: 4px;\n}\n.b {\n  --y: #000;\n}\n"
        )

        assert result.token_groups[0].names() == ["x"]
        assert [h.property_name for h in result.hard_coded_values] == ["--y"]

    def test_non_design_values_are_not_reported(self) -> None:
        result = parse_css(".a { display: block; padding: 8px; border: 1px solid red; }")
        assert result.hard_coded_values == []

    def test_duplicate_names_keep_first_position(self) -> None:
        result = parse_css("/* @tokens */\n:root { --a: #111; --b: #222; --a: #333; }")

        group = result.token_groups[0]
        assert group.names() == ["a", "b"]
        assert group.get("a").value == "#333333"


class TestTokenAnnotations:
    """Tests for categories, presenters, descriptions and aliases."""

    def test_category_and_presenter(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        token = result.token_groups[0].get("color-primary")
        assert token.category == "Colors"
        assert token.presenter == "Color"
        assert token.source_file == "styles/tokens.css"

    def test_same_line_comment_is_description(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        group = result.token_groups[0]
        assert group.get("color-primary").description == "Brand red"
        assert group.get("color-overlay").description is None

    def test_translucent_token(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        token = result.token_groups[0].get("color-overlay")
        assert token.kind == ValueKind.COLOR
        assert token.value == "rgba(0, 0, 0, 0.5)"

    def test_var_alias(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        token = result.token_groups[0].get("color-link")
        assert token.is_alias is True
        assert token.alias_of == "color-primary"
        assert token.value == "var(--color-primary)"

    def test_non_alias(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        token = result.token_groups[0].get("color-primary")
        assert token.is_alias is False
        assert token.alias_of is None


class TestKeyframes:
    """Tests for keyframes extraction."""

    def test_css_keyframes_verbatim(self, css_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([css_file])

        assert result.keyframes.startswith("@keyframes spin {")
        assert "to { transform: rotate(360deg); }" in result.keyframes
        assert result.keyframes.endswith("}")

    def test_multiple_blocks_separated_by_blank_line(self) -> None:
        result = parse_css(
            "@keyframes a { from { opacity: 0; } }\n"
            "@-webkit-keyframes b { to { opacity: 1; } }\n"
        )

        assert result.keyframes == (
            "@keyframes a { from { opacity: 0; } }\n\n"
            "@-webkit-keyframes b { to { opacity: 1; } }"
        )

    def test_keyframes_without_sentinel(self) -> None:
        """Files without the marker still contribute keyframes."""
        result = parse_scss("@keyframes pulse { 0% { opacity: 0; } 100% { opacity: 1; } }")
        assert "@keyframes pulse" in result.keyframes
        assert result.token_groups == []

    def test_keyframe_colors_are_not_hard_coded(self) -> None:
        result = parse_css("@keyframes flash { from { color: #f00; } to { color: #00f; } }")
        assert result.hard_coded_values == []

    def test_less_does_not_contribute_keyframes(self, less_file: TokenFile) -> None:
        result = StylesheetTokenizer(LESS_DIALECT).parse([less_file])
        assert result.keyframes == ""


class TestScssDialect:
    """Tests for SCSS variables and syntax."""

    def test_line_comment_sentinel_and_presenter(self, scss_file: TokenFile) -> None:
        result = StylesheetTokenizer(SCSS_DIALECT).parse([scss_file])

        group = result.get_group(TokenSourceType.SCSS)
        assert group.names() == ["font-family-base", "font-size-body", "font-family-alias"]
        for token in group.tokens:
            assert token.category == "Typography"
            assert token.presenter == "FontFamily"

    def test_variable_kinds(self, scss_file: TokenFile) -> None:
        group = StylesheetTokenizer(SCSS_DIALECT).parse([scss_file]).token_groups[0]

        family = group.get("font-family-base")
        assert family.kind == ValueKind.FONT_FAMILY
        assert family.value == '"Inter", sans-serif'

        size = group.get("font-size-body")
        assert size.kind == ValueKind.FONT_SIZE
        assert size.value == "16px"
        assert size.original_value == "16px !default"

    def test_dollar_alias(self, scss_file: TokenFile) -> None:
        group = StylesheetTokenizer(SCSS_DIALECT).parse([scss_file]).token_groups[0]

        alias = group.get("font-family-alias")
        assert alias.is_alias is True
        assert alias.alias_of == "font-family-base"
        assert alias.kind == ValueKind.OTHER

    def test_hard_coded_shadow_in_rule(self, scss_file: TokenFile) -> None:
        result = StylesheetTokenizer(SCSS_DIALECT).parse([scss_file])

        assert len(result.hard_coded_values) == 1
        shadow = result.hard_coded_values[0]
        assert shadow.kind == ValueKind.SHADOW
        assert shadow.value == "0 1px 2px rgba(0, 0, 0, 0.2)"
        assert (shadow.location.line, shadow.location.column) == (9, 15)
        assert shadow.selector == ".card"

    def test_line_comment_description(self) -> None:
        result = parse_scss("// @tokens\n$space-sm: 4px; // Small gap\n")
        assert result.token_groups[0].get("space-sm").description == "Small gap"

    def test_unmarked_variable_is_hard_coded(self) -> None:
        result = parse_scss("$brand: #336699;\n")

        assert result.token_groups == []
        assert result.hard_coded_values[0].property_name == "$brand"

    def test_interpolated_selector(self) -> None:
        result = parse_scss(".icon-#{$name} {\n  color: #abc;\n}\n")

        assert result.hard_coded_values[0].selector == ".icon-#{$name}"

    def test_nested_variable_in_marked_block(self) -> None:
        result = parse_scss("/* @tokens */\n.theme {\n  $inner: 2rem;\n}\n")
        assert result.token_groups[0].get("inner").kind == ValueKind.SPACING


class TestLessDialect:
    """Tests for LESS variables and syntax."""

    def test_at_variables(self, less_file: TokenFile) -> None:
        group = StylesheetTokenizer(LESS_DIALECT).parse([less_file]).token_groups[0]

        assert group.type == TokenSourceType.LESS
        assert group.names() == ["spacing-sm", "spacing-md"]
        assert group.get("spacing-sm").value == "4px"
        assert group.get("spacing-sm").category == "Spacing"

    def test_at_alias(self, less_file: TokenFile) -> None:
        group = StylesheetTokenizer(LESS_DIALECT).parse([less_file]).token_groups[0]

        alias = group.get("spacing-md")
        assert alias.is_alias is True
        assert alias.alias_of == "spacing-sm"

    def test_at_rules_are_not_variables(self) -> None:
        result = parse_less('// @tokens\n@import "base.less";\n@radius: 4px;\n')
        assert result.token_groups[0].names() == ["radius"]

    def test_interpolated_selector(self) -> None:
        result = parse_less(".@{prefix}-button { color: red; }")

        assert result.hard_coded_values[0].selector == ".@{prefix}-button"
        assert result.hard_coded_values[0].value == "red"


class TestFailureIsolation:
    """Tests for per-file error handling."""

    def test_malformed_file_raises_in_parse_file(self) -> None:
        tokenizer = StylesheetTokenizer(CSS_DIALECT)
        with pytest.raises(StylesheetSyntaxError) as exc_info:
            tokenizer.parse_file(TokenFile("broken.css", ".a { color: red; }}"))
        assert exc_info.value.filename == "broken.css"
        assert exc_info.value.line == 1

    def test_malformed_file_does_not_abort_batch(self) -> None:
        files = [
            TokenFile("a.css", ".a { color: red; }}"),
            TokenFile("b.css", "/* @tokens */\n:root { --ok: 1px; }"),
        ]
        result = StylesheetTokenizer(CSS_DIALECT).parse(files)

        assert result.token_groups[0].names() == ["ok"]
        assert result.hard_coded_values == []

    def test_undecodable_bytes_are_skipped(self) -> None:
        files = [TokenFile("bad.css", b"\xff\xfe\xfa"), TokenFile("good.css", "a { color: red; }")]
        result = StylesheetTokenizer(CSS_DIALECT).parse(files)

        assert [h.location.filename for h in result.hard_coded_values] == ["good.css"]

    def test_safe_parse_file_returns_empty(self) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).safe_parse_file(
            TokenFile("broken.css", "a { content: 'unterminated\n }")
        )
        assert result.token_groups == []
        assert result.source_type == TokenSourceType.CSS


class TestBatchBehavior:
    """Tests for multi-file parsing."""

    def test_empty_input(self) -> None:
        for source_type in (TokenSourceType.CSS, TokenSourceType.SCSS, TokenSourceType.LESS):
            result = parse_stylesheets([], source_type)
            assert result.token_groups == []
            assert result.hard_coded_values == []
            assert result.keyframes == ""
            assert result.source_type == source_type

    def test_other_extensions_ignored(self, scss_file: TokenFile) -> None:
        result = StylesheetTokenizer(CSS_DIALECT).parse([scss_file])
        assert result.token_groups == []

    def test_later_file_overwrites_token(self) -> None:
        files = [
            TokenFile("a.css", "/* @tokens */\n:root { --brand: #111111; --a: 1px; }"),
            TokenFile("b.css", "/* @tokens */\n:root { --brand: #222222; }"),
        ]
        group = StylesheetTokenizer(CSS_DIALECT).parse(files).token_groups[0]

        assert group.names() == ["brand", "a"]
        assert group.get("brand").value == "#222222"
        assert group.get("brand").source_file == "b.css"

    def test_reparse_is_identical(self, css_file: TokenFile) -> None:
        tokenizer = StylesheetTokenizer(CSS_DIALECT)
        assert tokenizer.parse([css_file]).to_dict() == tokenizer.parse([css_file]).to_dict()

    def test_parse_stylesheets_rejects_non_stylesheet_type(self) -> None:
        with pytest.raises(ValueError):
            parse_stylesheets([], TokenSourceType.SVG)


class TestHelpers:
    """Tests for marker and comment helpers."""

    def test_read_marker_plain_sentinel(self) -> None:
        assert read_marker(" @tokens ") == TokenScope()

    def test_read_marker_with_annotations(self) -> None:
        scope = read_marker(" @tokens Colors\n * @presenter Color ")
        assert scope == TokenScope(category="Colors", presenter="Color")

    def test_read_marker_end(self) -> None:
        assert read_marker(" @tokens-end ") == SENTINEL_END

    def test_read_marker_ordinary_comments(self) -> None:
        assert read_marker(" Brand red ") is None
        assert read_marker(" @tokensfoo ") is None

    def test_convert_line_comments(self) -> None:
        assert convert_line_comments("a: b; // note\n") == "a: b; /* note*/\n"

    def test_convert_keeps_urls_and_strings(self) -> None:
        source = 'a { background: url(//cdn/x.png); content: "//no"; b: url(http://x/y); }'
        assert convert_line_comments(source) == source

    def test_convert_preserves_line_count(self) -> None:
        source = "// one\n// two */\n$a: 1px;\n"
        converted = convert_line_comments(source)
        assert converted.count("\n") == source.count("\n")
        assert "*/*/" not in converted
