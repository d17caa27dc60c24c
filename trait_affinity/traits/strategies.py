"""
Per-collection trait extraction strategies.

A strategy takes the flattened metadata record of one asset (display fields
merged with raw traits, see ``Asset.metadata_record``) and returns a mapping
of attribute name -> value.  Strategies are deliberately heterogeneous:

  frens    : keyword scan of the display name ("red hat", "blue eyes", ...)
  capsule  : explicit ``rarity`` / ``color`` / ``shape`` field extraction
  default  : one attribute per primitive metadata field

Strategies must never raise on missing or oddly-typed metadata; they simply
emit fewer attributes.
"""

from __future__ import annotations

import re
from typing import Any, Callable

TraitStrategy = Callable[[dict[str, Any]], dict[str, str]]

_WHITESPACE_RE = re.compile(r"\s+")

# Phrase in the display name -> attribute emitted with value "true"
_FRENS_NAME_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("red hat",    "hat_red"),
    ("blue hat",   "hat_blue"),
    ("green hat",  "hat_green"),
    ("blue eyes",  "eyes_blue"),
    ("green eyes", "eyes_green"),
    ("brown eyes", "eyes_brown"),
)


def stringify_value(value: Any) -> str:
    """Render a primitive metadata value as a lower-case string.

    Booleans become ``"true"`` / ``"false"`` and integral floats drop their
    fractional part, so ``1.0`` and ``1`` produce the same tag.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).lower()


def normalize_key(key: str) -> str:
    return _WHITESPACE_RE.sub("_", key.lower())


def parse_default_traits(data: dict[str, Any]) -> dict[str, str]:
    """Emit one attribute per primitive (str / int / float / bool) field."""
    traits: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, (str, int, float, bool)):
            traits[normalize_key(str(key))] = stringify_value(value)
    return traits


def parse_frens_traits(data: dict[str, Any]) -> dict[str, str]:
    """Frens: the name carries the traits ("Fren with red hat and blue eyes")."""
    traits: dict[str, str] = {}

    raw_name = data.get("name")
    if raw_name:
        traits["name"] = str(raw_name).lower()

    name = str(raw_name or "").lower()
    for phrase, attribute in _FRENS_NAME_KEYWORDS:
        if phrase in name:
            traits[attribute] = "true"

    return traits


def parse_capsule_traits(data: dict[str, Any]) -> dict[str, str]:
    """Capsules: explicit rarity, color and shape fields."""
    traits: dict[str, str] = {}

    if data.get("rarity"):
        traits["rarity"] = stringify_value(data["rarity"])
    if data.get("color"):
        traits[f"color_{stringify_value(data['color'])}"] = "true"
    if data.get("shape"):
        traits[f"shape_{stringify_value(data['shape'])}"] = "true"

    return traits


# Evaluated in order; the first matcher that is a substring of the
# lower-cased collection id wins.
BUILTIN_STRATEGIES: tuple[tuple[str, TraitStrategy], ...] = (
    ("frens",   parse_frens_traits),
    ("capsule", parse_capsule_traits),
)
