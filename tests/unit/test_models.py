"""Unit tests for the data models."""

import json

from design_tokens.models import (
    Catalog,
    ExtractorResult,
    HardCodedValue,
    SourceLocation,
    Token,
    TokenFile,
    TokenGroup,
    TokenSourceType,
    ValueKind,
)


class TestTokenFile:
    """Tests for TokenFile."""

    def test_extension_is_lowercased(self) -> None:
        assert TokenFile("styles/Theme.CSS", "").extension == ".css"

    def test_basename_handles_backslashes(self) -> None:
        assert TokenFile("assets\\img\\logo.png", b"").basename == "logo.png"

    def test_text_strips_bom(self) -> None:
        assert TokenFile("a.css", b"\xef\xbb\xbfa{}").text() == "a{}"

    def test_data_encodes_text(self) -> None:
        assert TokenFile("a.svg", "<svg/>").data() == b"<svg/>"


class TestTokenSerialization:
    """Tests for camelCase JSON serialization."""

    def test_optional_fields_omitted(self) -> None:
        data = Token(name="gap", value="4px", original_value="4px", kind=ValueKind.SPACING).to_dict()
        assert data == {
            "name": "gap",
            "value": "4px",
            "originalValue": "4px",
            "kind": "spacing",
            "isAlias": False,
        }

    def test_alias_fields(self) -> None:
        token = Token(
            name="link",
            value="var(--brand)",
            original_value="var(--brand)",
            is_alias=True,
            alias_of="brand",
            category="Colors",
        )
        data = token.to_dict()
        assert data["aliasOf"] == "brand"
        assert data["isAlias"] is True
        assert Token.from_dict(data) == token

    def test_from_dict_defaults(self) -> None:
        token = Token.from_dict({"name": "x", "value": "1"})
        assert token.original_value == "1"
        assert token.kind == ValueKind.OTHER
        assert token.metadata == {}

    def test_hard_coded_value_uses_property_key(self) -> None:
        finding = HardCodedValue(
            value="#fff",
            kind=ValueKind.COLOR,
            location=SourceLocation("a.css", 3, 9),
            property_name="color",
            selector=".a",
        )
        data = finding.to_dict()
        assert data["property"] == "color"
        assert data["location"] == {"filename": "a.css", "line": 3, "column": 9}
        assert HardCodedValue.from_dict(data) == finding

    def test_source_location_str(self) -> None:
        assert str(SourceLocation("a.css", 3, 9)) == "a.css:3:9"


class TestCatalog:
    """Tests for Catalog and ExtractorResult."""

    def make_catalog(self) -> Catalog:
        return Catalog(
            token_groups=[
                TokenGroup(
                    type=TokenSourceType.SVG,
                    tokens=[Token(name="arrow", value="<svg/>", original_value="<svg/>", kind=ValueKind.ICON)],
                ),
                TokenGroup(
                    type=TokenSourceType.IMAGE,
                    tokens=[
                        Token(
                            name="logo.png",
                            value="data:image/png;base64,AA==",
                            original_value="data:image/png;base64,AA==",
                            kind=ValueKind.IMAGE,
                            metadata={"width": 1, "height": 1},
                        )
                    ],
                ),
            ],
            keyframes="@keyframes a {}",
        )

    def test_json_round_trip(self) -> None:
        catalog = self.make_catalog()
        restored = Catalog.from_dict(json.loads(json.dumps(catalog.to_dict())))
        assert restored == catalog

    def test_total_tokens(self) -> None:
        assert self.make_catalog().total_tokens == 2

    def test_get_group_missing(self) -> None:
        assert self.make_catalog().get_group(TokenSourceType.CSS) is None

    def test_extractor_result_empty(self) -> None:
        result = ExtractorResult.empty(TokenSourceType.LESS)
        assert result.to_dict() == {
            "tokenGroups": [],
            "hardCodedValues": [],
            "keyframes": "",
            "sourceType": "less",
        }

    def test_extractor_result_source_type_from_data(self) -> None:
        result = ExtractorResult.from_dict({"sourceType": "svg"})
        assert result.source_type == TokenSourceType.SVG

    def test_extractor_result_explicit_source_type_wins(self) -> None:
        result = ExtractorResult.from_dict({"sourceType": "svg"}, TokenSourceType.IMAGE)
        assert result.source_type == TokenSourceType.IMAGE

    def test_source_type_sort_index(self) -> None:
        assert [t.sort_index for t in TokenSourceType] == [0, 1, 2, 3, 4]
