"""Value classifier for design token values.

Determines the semantic kind of a raw token value (color, gradient, shadow,
font family, font size, spacing) from its lexical shape and produces a
normalized representation. Rules are applied in a fixed priority order and
the first match wins:

1. Color     - hex, rgb()/rgba()/hsl()/hsla(), named color keywords
2. Gradient  - *-gradient() with at least two color stops
3. Shadow    - offset pair, optional blur/spread, color; comma lists allowed
4. Font family - identifier/string lists with a family hint or generic keyword
5. Font size / Spacing - lengths in px, rem, em, %, pt (unitless zero too)
6. Other     - anything else, passed through unchanged

Classification never raises; unrecognized values degrade to Other.
"""

import re
from typing import Any, NamedTuple

import tinycss2
from tinycss2 import color3

from .models import ValueKind

# Kinds that are reported as hard-coded when used outside a token block
HARD_CODED_KINDS = frozenset({ValueKind.COLOR, ValueKind.GRADIENT, ValueKind.SHADOW})

# Units accepted for font size / spacing values (percentages are separate tokens)
LENGTH_UNITS = frozenset({"px", "rem", "em", "pt"})

# Units accepted for shadow offsets, blur and spread
SHADOW_UNITS = frozenset(
    {"px", "rem", "em", "pt", "pc", "ex", "ch", "vh", "vw", "vmin", "vmax", "cm", "mm", "in"}
)

GRADIENT_FUNCTIONS = frozenset(
    {
        "linear-gradient",
        "radial-gradient",
        "conic-gradient",
        "repeating-linear-gradient",
        "repeating-radial-gradient",
        "repeating-conic-gradient",
    }
)

GENERIC_FONT_FAMILIES = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-serif",
        "ui-sans-serif",
        "ui-monospace",
        "ui-rounded",
        "emoji",
        "math",
        "fangsong",
    }
)

_HEX_PATTERN = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
# At least one a-f letter, so plain numbers like "100" stay numbers
_BARE_HEX_PATTERN = re.compile(
    r"^(?=[0-9]*[a-f])([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE
)
_FLAG_PATTERN = re.compile(r"\s*!\s*(important|default|global)\s*$", re.IGNORECASE)
_FONT_FAMILY_HINT = re.compile(r"famil|typeface")
_FONT_SIZE_HINT = re.compile(r"size|font")
_COLOR_HINT = re.compile(r"colou?r")


class ClassifiedValue(NamedTuple):
    """Result of classifying a raw value: its kind and normalized form.

    Unpacks like a tuple: ``kind, value = classify("#fff")``.
    """

    kind: ValueKind
    value: str


def classify(raw_value: str, declared_name: str | None = None) -> ClassifiedValue:
    """Classify a raw token value.

    Args:
        raw_value: The literal right-hand side of a declaration.
        declared_name: Optional declaration or variable name used as a
            secondary hint (font-family, font-size and bare hex colors).

    Returns:
        ClassifiedValue with the detected kind and the normalized value.
    """
    text = raw_value.strip()
    candidate = strip_flags(text)
    name = (declared_name or "").lower()

    if not candidate:
        return ClassifiedValue(ValueKind.OTHER, text)

    color = normalize_color(candidate, name)
    if color is not None:
        return ClassifiedValue(ValueKind.COLOR, color)

    nodes = tinycss2.parse_component_value_list(candidate, skip_comments=True)

    if _is_gradient(nodes):
        return ClassifiedValue(ValueKind.GRADIENT, collapse_whitespace(candidate))

    if _is_shadow(nodes):
        return ClassifiedValue(ValueKind.SHADOW, collapse_whitespace(candidate))

    families = _font_family_parts(nodes, name)
    if families is not None:
        return ClassifiedValue(ValueKind.FONT_FAMILY, ", ".join(families))

    length = _classify_length(nodes, name)
    if length is not None:
        return length

    return ClassifiedValue(ValueKind.OTHER, text)


def is_hard_coded(classified: ClassifiedValue) -> bool:
    """Whether a classified literal outside a token scope is worth reporting.

    ``currentColor`` refers to the inherited text color, so it never counts.
    """
    return classified.kind in HARD_CODED_KINDS and classified.value != "currentcolor"


def strip_flags(value: str) -> str:
    """Remove trailing !important / !default / !global flags."""
    previous = None
    while previous != value:
        previous = value
        value = _FLAG_PATTERN.sub("", value)
    return value.strip()


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return re.sub(r"\s+", " ", value).strip()


def parse_rgba(value: str) -> tuple[float, float, float, float] | None:
    """Parse a color literal into (red, green, blue, alpha) floats in 0..1.

    Returns None for anything that is not a concrete color (including
    ``currentColor``).
    """
    value = value.strip()
    hex_match = _HEX_PATTERN.match(value)
    if hex_match:
        return _hex_to_rgba(hex_match.group(1))

    parsed = color3.parse_color(value)
    if parsed is None or isinstance(parsed, str):
        return None
    return (parsed.red, parsed.green, parsed.blue, parsed.alpha)


def normalize_color(value: str, declared_name: str = "") -> str | None:
    """Normalize a color value, or return None if it is not a color.

    Opaque colors become lowercase ``#rrggbb``. Hex colors with partial
    alpha become ``#rrggbbaa``. Functional and keyword colors with partial
    alpha keep their notation (whitespace collapsed).
    """
    hex_match = _HEX_PATTERN.match(value)
    if hex_match is None and _COLOR_HINT.search(declared_name):
        # "fff" under a color-named declaration reads as a hex color
        bare_match = _BARE_HEX_PATTERN.match(value)
        if bare_match:
            hex_match = _HEX_PATTERN.match(f"#{bare_match.group(1)}")

    if hex_match:
        red, green, blue, alpha = _hex_to_rgba(hex_match.group(1))
        if alpha >= 1.0:
            return _rgb_to_hex(red, green, blue)
        return _rgb_to_hex(red, green, blue) + f"{round(alpha * 255):02x}"

    parsed = color3.parse_color(value)
    if parsed is None:
        return None
    if isinstance(parsed, str):
        # currentColor
        return parsed.lower()
    if parsed.alpha >= 1.0:
        return _rgb_to_hex(parsed.red, parsed.green, parsed.blue)
    if re.match(r"^[a-z]+$", value, re.IGNORECASE):
        return value.lower()
    return collapse_whitespace(value)


def _hex_to_rgba(digits: str) -> tuple[float, float, float, float]:
    """Convert 3/4/6/8 hex digits to RGBA floats."""
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(1.0)
    return (channels[0], channels[1], channels[2], channels[3])


def _rgb_to_hex(red: float, green: float, blue: float) -> str:
    return "#" + "".join(f"{round(c * 255):02x}" for c in (red, green, blue))


def _significant(nodes: list[Any]) -> list[Any]:
    """Drop whitespace and comment nodes."""
    return [n for n in nodes if n.type not in ("whitespace", "comment")]


def _split_commas(nodes: list[Any]) -> list[list[Any]]:
    """Split a component value list on top-level commas."""
    parts: list[list[Any]] = [[]]
    for node in nodes:
        if node.type == "literal" and node.value == ",":
            parts.append([])
        else:
            parts[-1].append(node)
    return parts


def _is_color_node(node: Any) -> bool:
    """Check whether a single component value is a color."""
    if node.type == "hash":
        return bool(_HEX_PATTERN.match(f"#{node.value}"))
    if node.type in ("ident", "function"):
        return color3.parse_color(node) is not None
    return False


def _is_gradient(nodes: list[Any]) -> bool:
    for node in _significant(nodes):
        if node.type != "function" or node.lower_name not in GRADIENT_FUNCTIONS:
            continue
        stops = 0
        for part in _split_commas(node.arguments):
            if any(_is_color_node(n) for n in _significant(part)):
                stops += 1
        if stops >= 2:
            return True
    return False


def _is_shadow_length(node: Any) -> bool:
    if node.type == "dimension":
        return node.lower_unit in SHADOW_UNITS
    return node.type == "number" and node.value == 0


def _is_shadow(nodes: list[Any]) -> bool:
    """Check for one or more comma-separated shadow layers."""
    for part in _split_commas(nodes):
        layer = _significant(part)
        layer = [
            n for n in layer if not (n.type == "ident" and n.lower_value == "inset")
        ]
        if not layer:
            return False
        if _is_color_node(layer[-1]):
            lengths = layer[:-1]
        elif _is_color_node(layer[0]):
            lengths = layer[1:]
        else:
            return False
        if not 2 <= len(lengths) <= 4:
            return False
        if not all(_is_shadow_length(n) for n in lengths):
            return False
    return True


def _font_family_parts(nodes: list[Any], name: str) -> list[str] | None:
    """Return the normalized family list, or None if not a font family."""
    families: list[str] = []
    last_is_generic = False
    for part in _split_commas(nodes):
        family = _significant(part)
        if not family:
            return None
        if len(family) == 1 and family[0].type == "string":
            families.append(family[0].serialize())
            last_is_generic = False
        elif all(n.type == "ident" for n in family):
            families.append(" ".join(n.value for n in family))
            last_is_generic = len(family) == 1 and family[0].lower_value in GENERIC_FONT_FAMILIES
        else:
            return None

    if _FONT_FAMILY_HINT.search(name) or last_is_generic:
        return families
    return None


def _is_length(node: Any) -> bool:
    if node.type == "dimension":
        return node.lower_unit in LENGTH_UNITS
    return node.type == "percentage" or (node.type == "number" and node.value == 0)


def _classify_length(nodes: list[Any], name: str) -> ClassifiedValue | None:
    """Classify one to four lengths as font size or spacing."""
    values = _significant(nodes)
    if not 1 <= len(values) <= 4 or not all(_is_length(n) for n in values):
        return None

    normalized = " ".join(n.serialize().lower() for n in values)
    if len(values) == 1 and values[0].type == "number":
        # Unitless zero
        return ClassifiedValue(ValueKind.SPACING, normalized)
    if len(values) == 1 and _FONT_SIZE_HINT.search(name):
        return ClassifiedValue(ValueKind.FONT_SIZE, normalized)
    return ClassifiedValue(ValueKind.SPACING, normalized)
