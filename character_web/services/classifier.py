"""Relationship classification: descriptive labels and strength-graded colours.

Labels depend on the relationship category, the clamped strength and the
*direction* of the pairing (a character championing an organisation reads
differently from an organisation protecting a character).  Colours depend on
the relationship type and strength only.

Which raw type strings exist, which label table each one uses and how each one
is coloured is decided by a :class:`RelationshipVocabulary`.  Two ship with
the service: the three-type ``SIMPLIFIED`` vocabulary the web client writes
today, and the older ``LEGACY`` one still found in imported campaigns.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from character_web.models.entities import EntityType, Relationship
from character_web.models.graph import LegendEntry, RelationshipDescription

logger = logging.getLogger(__name__)

MIN_STRENGTH = 1
MAX_STRENGTH = 5

UNKNOWN_LABEL = "Unknown"
DEFAULT_COLOR = "#94a3b8"


class RelationshipCategory(StrEnum):
    """Label family a relationship type reads as."""

    friendly = "friendly"
    hostile = "hostile"
    neutral = "neutral"


class PairKind(StrEnum):
    """Directed combination of source and target entity kinds."""

    character_character = "character-character"
    organisation_organisation = "organisation-organisation"
    character_organisation = "character-organisation"
    organisation_character = "organisation-character"

    @classmethod
    def of(cls, source_type: EntityType | str, target_type: EntityType | str) -> PairKind:
        return cls(f"{EntityType(source_type)}-{EntityType(target_type)}")


# ---------------------------------------------------------------------------
# Label table: (category, pair kind) -> labels for strength 1..5
# ---------------------------------------------------------------------------

_LABELS: dict[PairKind, dict[RelationshipCategory, tuple[str, str, str, str, str]]] = {
    PairKind.character_character: {
        RelationshipCategory.friendly: (
            "Acquaintance", "Colleague", "Friend", "Close Friend", "Soulmate",
        ),
        RelationshipCategory.hostile: (
            "Annoyed by", "Dislikes", "Enemy", "Bitter Rival", "Sworn Enemy",
        ),
        RelationshipCategory.neutral: (
            "Heard of", "Aware of", "Knows of", "Familiar with", "Well Acquainted",
        ),
    },
    PairKind.organisation_organisation: {
        RelationshipCategory.friendly: (
            "Trading Partners", "Allies", "Close Allies", "Strategic Partners", "United Alliance",
        ),
        RelationshipCategory.hostile: (
            "Competitors", "Rivals", "Adversaries", "Bitter Enemies", "At War",
        ),
        RelationshipCategory.neutral: (
            "Aware of", "Coexist", "Neutral", "Distant Relations", "Arms Length",
        ),
    },
    PairKind.character_organisation: {
        RelationshipCategory.friendly: (
            "Sympathizer", "Supporter", "Ally", "Devoted", "Champion",
        ),
        RelationshipCategory.hostile: (
            "Distrusts", "Opposes", "Enemy", "Hunts", "Sworn to Destroy",
        ),
        RelationshipCategory.neutral: (
            "Heard of", "Aware of", "Knows of", "Familiar with", "Well Informed",
        ),
    },
    PairKind.organisation_character: {
        RelationshipCategory.friendly: (
            "Tolerates", "Welcomes", "Ally", "Favored", "Protects",
        ),
        RelationshipCategory.hostile: (
            "Suspicious of", "Opposes", "Target", "Hunts", "Seeks to Destroy",
        ),
        RelationshipCategory.neutral: (
            "Unaware of", "Aware of", "Knows of", "Monitors", "Watches Closely",
        ),
    },
}

LABELS: Mapping[PairKind, Mapping[RelationshipCategory, tuple[str, ...]]] = MappingProxyType(
    {pair: MappingProxyType(rows) for pair, rows in _LABELS.items()}
)


# ---------------------------------------------------------------------------
# Colour palettes
# ---------------------------------------------------------------------------

# Light to dark: intensity grows with strength.
FRIENDLY_PALETTE = ("#cfe6b8", "#9fcd7a", "#5fbf6a", "#2f9e5f", "#1f6f3f")
HOSTILE_PALETTE = ("#f4d35e", "#f6a04d", "#e76f51", "#d62828", "#7f1d1d")
NEUTRAL_PALETTE = ("#6b7280",)


@dataclass(frozen=True)
class RelationshipVocabulary:
    """A closed set of relationship types plus how to label and colour them.

    *categories* maps every known type to the label family it reads as.
    *palettes* maps a type to either five colours (one per strength level) or
    a single colour used regardless of strength.  Types missing from
    *palettes* fall back to *default_color*.
    """

    name: str
    categories: Mapping[str, RelationshipCategory]
    palettes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    default_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        for type_, palette in self.palettes.items():
            if len(palette) not in (1, MAX_STRENGTH):
                raise ValueError(
                    f"Palette for {type_!r} in vocabulary {self.name!r} must hold "
                    f"1 or {MAX_STRENGTH} colours, got {len(palette)}"
                )

    @property
    def types(self) -> list[str]:
        return list(self.categories)

    def category_of(self, type_: str) -> RelationshipCategory | None:
        return self.categories.get(type_)

    def is_graded(self, type_: str) -> bool:
        return len(self.palettes.get(type_, ())) == MAX_STRENGTH


SIMPLIFIED = RelationshipVocabulary(
    name="simplified",
    categories={
        "friendly": RelationshipCategory.friendly,
        "hostile": RelationshipCategory.hostile,
        "neutral": RelationshipCategory.neutral,
    },
    palettes={
        "friendly": FRIENDLY_PALETTE,
        "hostile": HOSTILE_PALETTE,
        "neutral": NEUTRAL_PALETTE,
    },
)

LEGACY = RelationshipVocabulary(
    name="legacy",
    categories={
        "friend": RelationshipCategory.friendly,
        "ally": RelationshipCategory.friendly,
        "family": RelationshipCategory.friendly,
        "colleague": RelationshipCategory.friendly,
        "mentor": RelationshipCategory.friendly,
        "member": RelationshipCategory.friendly,
        "enemy": RelationshipCategory.hostile,
        "rival": RelationshipCategory.hostile,
        "business": RelationshipCategory.neutral,
        "servant": RelationshipCategory.neutral,
    },
    palettes={
        "friend": ("#22c55e",),
        "ally": ("#22c55e",),
        "family": ("#3b82f6",),
        "colleague": ("#64748b",),
        "mentor": ("#14b8a6",),
        "member": ("#8b5cf6",),
        "enemy": ("#ef4444",),
        "rival": ("#f97316",),
        "business": ("#eab308",),
        "servant": ("#a16207",),
    },
)

VOCABULARIES: dict[str, RelationshipVocabulary] = {
    SIMPLIFIED.name: SIMPLIFIED,
    LEGACY.name: LEGACY,
}


def get_vocabulary(name: str) -> RelationshipVocabulary:
    """Look up a registered vocabulary by name (case-insensitive)."""
    try:
        return VOCABULARIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown relationship vocabulary {name!r}; "
            f"expected one of {sorted(VOCABULARIES)}"
        ) from None


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def clamp_strength(strength: float) -> int:
    """Clamp *strength* into 1..5.

    NaN and negative infinity count as the lower bound, positive infinity as
    the upper bound.  Fractional values are rounded half up first.
    """
    if isinstance(strength, bool) or not isinstance(strength, (int, float)):
        raise TypeError(f"strength must be a number, got {type(strength).__name__}")
    if math.isnan(strength):
        return MIN_STRENGTH
    if math.isinf(strength):
        return MAX_STRENGTH if strength > 0 else MIN_STRENGTH
    return max(MIN_STRENGTH, min(MAX_STRENGTH, math.floor(strength + 0.5)))


def describe_relationship(
    type_: str,
    strength: float,
    source_type: EntityType | str,
    target_type: EntityType | str,
    vocabulary: RelationshipVocabulary = SIMPLIFIED,
) -> str:
    """Return the in-fiction label for a relationship, e.g. ``"Sworn Enemy"``.

    Unknown types fall back to the raw type string (``"Unknown"`` when empty).
    """
    level = clamp_strength(strength)
    category = vocabulary.category_of(type_)
    if category is None:
        logger.debug("No label table for relationship type %r in %s", type_, vocabulary.name)
        return type_ or UNKNOWN_LABEL

    pair = PairKind.of(source_type, target_type)
    return LABELS[pair][category][level - 1]


def color_for(
    type_: str,
    strength: float,
    vocabulary: RelationshipVocabulary = SIMPLIFIED,
) -> str:
    """Return the ``#rrggbb`` colour of a relationship type at a strength."""
    level = clamp_strength(strength)
    palette = vocabulary.palettes.get(type_)
    if not palette:
        return vocabulary.default_color
    if len(palette) == 1:
        return palette[0]
    return palette[level - 1]


def classify(
    relationship: Relationship,
    vocabulary: RelationshipVocabulary = SIMPLIFIED,
) -> RelationshipDescription:
    """Label, colour and clamped strength for a single relationship record."""
    category = vocabulary.category_of(relationship.type)
    return RelationshipDescription(
        label=describe_relationship(
            relationship.type,
            relationship.strength,
            relationship.source_entity_type,
            relationship.target_entity_type,
            vocabulary,
        ),
        color=color_for(relationship.type, relationship.strength, vocabulary),
        strength=clamp_strength(relationship.strength),
        category=category.value if category else None,
    )


def legend(vocabulary: RelationshipVocabulary = SIMPLIFIED) -> list[LegendEntry]:
    """One entry per type, coloured at mid strength."""
    mid = (MIN_STRENGTH + MAX_STRENGTH) // 2
    return [
        LegendEntry(
            type=type_,
            color=color_for(type_, mid, vocabulary),
            graded=vocabulary.is_graded(type_),
        )
        for type_ in vocabulary.types
    ]
