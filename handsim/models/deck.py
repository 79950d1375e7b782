"""Deck entries and their expansion into a flat list of physical cards.

Entries arrive already resolved against the card database: each one pairs
the deck-list line (count, name, optional code, annotations) with the
ArkhamDB record it matched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from handsim.models.card import Card, extract_traits, normalize_cost, parse_slots

WEAKNESS_SUBTYPES = frozenset({"weakness", "basicweakness"})


class CardAnnotations(BaseModel):
    """Deck-list annotations attached to an entry.

    Bonus fields accept anything number-like; missing or unparseable values
    become 0. Keywords toggle the boolean flags of the same name.
    """

    weapon: bool = False
    permanent: bool = False
    weakness: bool = False
    resources: float = 0
    draw: float = 0
    resources_per_turn: float = 0
    draw_per_turn: float = 0
    keywords: list[str] = Field(default_factory=list)

    @field_validator("resources", "draw", "resources_per_turn", "draw_per_turn", mode="before")
    @classmethod
    def _coerce_bonus(cls, value: Any) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0
        return number if number == number else 0  # NaN

    @field_validator("keywords", mode="before")
    @classmethod
    def _lower_keywords(cls, value: Any) -> list[str]:
        if not value:
            return []
        return [str(k).strip().lower() for k in value]

    @property
    def is_weapon(self) -> bool:
        return self.weapon or "weapon" in self.keywords

    @property
    def is_permanent(self) -> bool:
        return self.permanent or "permanent" in self.keywords

    @property
    def is_weakness(self) -> bool:
        return self.weakness or bool(WEAKNESS_SUBTYPES.intersection(self.keywords))


class DeckEntry(BaseModel):
    """One resolved deck-list line."""

    count: int = Field(gt=0, description="Number of physical copies")
    name: str = Field(description="Card name as written in the deck list")
    code: str | None = Field(default=None, description="ArkhamDB code, if given")
    annotations: CardAnnotations = Field(default_factory=CardAnnotations)
    record: dict[str, Any] = Field(
        default_factory=dict,
        description="Matched ArkhamDB card record (cost, traits, slot, subtype_code)",
    )


class DeckSummary(BaseModel):
    """Card counts the validators and odds calculator need."""

    deck_size: int
    weakness_count: int
    non_weakness_count: int


def is_record_weakness(record: dict[str, Any]) -> bool:
    subtype = str(record.get("subtype_code") or "").strip().lower()
    return subtype in WEAKNESS_SUBTYPES


def build_card(entry: DeckEntry) -> Card:
    """Build the immutable card shared by every copy of ``entry``."""
    notes = entry.annotations
    record = entry.record
    return Card(
        name=entry.name,
        code=entry.code or record.get("code"),
        weapon=notes.is_weapon,
        weakness=notes.is_weakness or is_record_weakness(record),
        resources=notes.resources,
        draw=notes.draw,
        resources_per_turn=notes.resources_per_turn,
        draw_per_turn=notes.draw_per_turn,
        cost=normalize_cost(record.get("cost")),
        traits=frozenset(extract_traits(record.get("traits"))),
        slots=parse_slots(record.get("slot")),
    )


def expand_deck(entries: list[DeckEntry]) -> list[Card]:
    """Expand deck entries into one ``Card`` per physical copy.

    Permanents start in play and never enter the draw deck, so they are
    dropped here.
    """
    cards: list[Card] = []
    for entry in entries:
        if entry.annotations.is_permanent:
            continue
        card = build_card(entry)
        cards.extend([card] * entry.count)
    return cards


def summarize_deck(deck: list[Card]) -> DeckSummary:
    weaknesses = sum(1 for card in deck if card.weakness)
    return DeckSummary(
        deck_size=len(deck),
        weakness_count=weaknesses,
        non_weakness_count=len(deck) - weaknesses,
    )
